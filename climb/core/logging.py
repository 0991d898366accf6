"""structlog configuration for the climb CLI.

Standard output carries the discovery report and nothing else, so every
log line (structlog and the stdlib bridge alike) goes to standard error.

Renderer selection:
  debug=True: `ConsoleRenderer` for interactive troubleshooting.
  debug=False: `JSONRenderer` so agents consuming stderr can parse it.
"""

from __future__ import annotations

import logging
import sys

import structlog


def configure_structlog(debug: bool = False, level: str = "WARNING") -> None:
    """Configure structlog and the stdlib root logger.

    Calling multiple times is safe; the last call wins.
    """
    numeric_level = logging.getLevelNamesMapping().get(level.upper(), logging.WARNING)

    shared_processors: list = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if debug:
        renderer = structlog.dev.ConsoleRenderer(colors=False)
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        level=numeric_level,
        force=True,
    )
