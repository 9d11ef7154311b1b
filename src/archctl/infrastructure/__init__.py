"""Infrastructure layer — workspace file I/O, lineage graph, built-in feeds.

May import from domain. Must never import from services, commands, or output.
"""
