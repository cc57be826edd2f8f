"""Structured logging for the CLI: structlog rendered through a stderr handler."""

from __future__ import annotations

import logging
import logging.config
import os

import structlog

LOG_FORMATS = ("console", "json")

# Third-party loggers that are chatty at INFO
_QUIET_LOGGERS = ("httpx", "LiteLLM", "LiteLLM Router", "LiteLLM Proxy")


def setup_logging(verbose: bool = False, log_format: str | None = None) -> None:
    """Configure structlog for one CLI invocation.

    *verbose* selects DEBUG; ``AGENTSEED_LOG_LEVEL`` overrides either way.
    *log_format* comes from ``--log-format``, falling back to
    ``AGENTSEED_LOG_FORMAT`` and then ``console``.
    """
    level = os.environ.get("AGENTSEED_LOG_LEVEL", "DEBUG" if verbose else "INFO").upper()
    fmt = (log_format or os.environ.get("AGENTSEED_LOG_FORMAT") or "console").lower()

    pre_chain: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
    ]
    if fmt == "json":
        pre_chain.append(structlog.processors.TimeStamper(fmt="iso", utc=True))
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    # stderr only; stdout carries command output
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "structlog": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": pre_chain,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        renderer,
                    ],
                },
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "formatter": "structlog",
                },
            },
            "root": {"handlers": ["stderr"], "level": "WARNING"},
            "loggers": {
                "agentseed": {"level": level},
                **{name: {"level": "WARNING"} for name in _QUIET_LOGGERS},
            },
        }
    )
