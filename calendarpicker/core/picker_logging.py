"""
Central logging configuration for calendarpicker.

Keeps calendarpicker's own loggers at INFO (DEBUG on request) while quieting
aiohttp access logs, and stamps every record with the request correlation id.
"""

import logging
import os
from typing import Optional


class CorrelationIdFilter(logging.Filter):
    """Add correlation ID to all log records for request tracing."""

    def filter(self, record: logging.LogRecord) -> bool:
        # Imported lazily; the middleware package imports aiohttp
        from calendarpicker.api.middleware.correlation_id import get_request_id

        record.request_id = get_request_id()
        return True


def configure_picker_logging(
    debug_mode: bool = False,
    force_debug: Optional[bool] = None,
    log_level: Optional[str] = None,
) -> None:
    """
    Configure logging levels for calendarpicker.

    Args:
        debug_mode: Whether to enable debug logging for calendarpicker modules
        force_debug: Override debug mode setting (None to use env var detection)
        log_level: Root level name from config; CALENDARPICKER_LOG_LEVEL wins over it

    Environment Variables:
        CALENDARPICKER_DEBUG: Set to '1', 'true', 'yes' to force debug logging
        CALENDARPICKER_LOG_LEVEL: Override root log level (DEBUG, INFO, WARNING, ERROR)
    """
    env_debug = os.getenv("CALENDARPICKER_DEBUG", "").lower() in ("1", "true", "yes")
    env_log_level = (os.getenv("CALENDARPICKER_LOG_LEVEL") or log_level or "").upper()

    if force_debug is not None:
        final_debug = force_debug
    elif env_debug:
        final_debug = True
    else:
        final_debug = debug_mode

    root_level = logging.DEBUG if final_debug else logging.INFO
    if env_log_level in ("DEBUG", "INFO", "WARNING", "ERROR"):
        root_level = getattr(logging, env_log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(root_level)

    correlation_filter = CorrelationIdFilter()

    # Preserve the colorized handler installed by calendarpicker._init_logging
    if not root_logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(root_level)
        formatter = logging.Formatter(
            "[%(asctime)s] [%(request_id)s] %(levelname)s - %(name)s - %(message)s"
        )
        handler.setFormatter(formatter)
        handler.addFilter(correlation_filter)
        root_logger.addHandler(handler)
    else:
        for existing_handler in root_logger.handlers:
            if not any(isinstance(f, CorrelationIdFilter) for f in existing_handler.filters):
                existing_handler.addFilter(correlation_filter)

    logger_config: dict[str, int] = {
        "aiohttp.access": logging.WARNING,
        "aiohttp.server": logging.WARNING,
        "aiohttp.web": logging.INFO,
        "asyncio": logging.WARNING,
        "calendarpicker": logging.DEBUG if final_debug else logging.INFO,
    }

    for logger_name, level in logger_config.items():
        logging.getLogger(logger_name).setLevel(level)

    if final_debug:
        root_logger.info("Debug logging enabled for calendarpicker modules")
    else:
        root_logger.debug("Production logging configuration applied")


def get_logging_status() -> dict[str, str]:
    """
    Get current logging configuration status.

    Returns:
        Dictionary mapping logger names to their current levels
    """
    status = {"root": logging.getLevelName(logging.getLogger().level)}

    for logger_name in ("calendarpicker", "aiohttp.access", "aiohttp.server", "asyncio"):
        status[logger_name] = logging.getLevelName(logging.getLogger(logger_name).level)

    return status
