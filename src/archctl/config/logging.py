"""structlog setup for archctl.

archctl logs from two kinds of loggers, and both end up on stderr through
one handler:

- ``structlog.get_logger`` in the version and telemetry services, which
  emit named events (``arrangement.forked``, ``status.cycled``, ...)
  with key/value context.
- Plain ``logging.getLogger(__name__)`` in the feed, workspace and init
  modules, rendered through the same formatter via ``foreign_pre_chain``.

stdout is reserved for command output, so ``--json`` results stay
parseable while logs are on.
"""

from __future__ import annotations

import logging
import sys

import structlog

ARCHCTL_LOGGER = "archctl"

# Renders both structlog events and stdlib records.
_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Route archctl's log events to stderr.

    Safe to call more than once; each call replaces the root handler.

    Args:
        verbose: Let archctl's own DEBUG and INFO events through (the
            mutation events are INFO). Otherwise only WARNING and above.
        log_json: One JSON object per line instead of the console format.
    """
    structlog.configure(
        processors=[
            *_SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_SHARED_PROCESSORS,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    # Third-party libraries stay at WARNING even with --verbose.
    root.setLevel(logging.WARNING)

    logging.getLogger(ARCHCTL_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
