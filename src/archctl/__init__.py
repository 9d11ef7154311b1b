"""archctl — Architecture arrangement control.

Versioned arrangements of services, declarative rules, and the engine
that evaluates one against the other.
"""

__version__ = "0.1.0"
