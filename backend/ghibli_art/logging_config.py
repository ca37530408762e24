"""structlog configuration module."""

import logging
import sys

import structlog

from ghibli_art.constants import SERVICE_NAME

# stdlib loggers of HTTP/SDK clients. At DEBUG they dump multipart request
# bodies, i.e. the caller's uploaded photo.
NOISY_LOGGERS = ("httpx", "httpcore", "openai", "stripe", "hpack")


def _add_service_context(environment: str):
    def processor(_logger, _method_name: str, event_dict: dict) -> dict:
        event_dict.setdefault("service", SERVICE_NAME)
        event_dict.setdefault("environment", environment)
        return event_dict

    return processor


def setup_logging(debug: bool = False, environment: str = "development") -> None:
    """
    Configure structlog and stdlib logging.

    In debug mode: colored, human-readable console output.
    Otherwise: JSON lines tagged with service and environment.
    SDK loggers listed in NOISY_LOGGERS are held at WARNING in both modes.
    """
    level = logging.DEBUG if debug else logging.INFO

    processors: list = [
        structlog.contextvars.merge_contextvars,  # request_id, method, path (from middleware)
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if debug:
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors += [
            _add_service_context(environment),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
