"""calendarpicker - calendar selection API for chat-bot inline keyboards.

Renders month grids, emits inline-keyboard payloads and tracks each user's
in-progress date or date-range selection. Imports here stay light so the
package can be inspected without starting the server.
"""

__version__ = "1.0.0"

from typing import Optional


def _init_logging(level_name: Optional[str]) -> None:
    """Initialize root logging to stream to console.

    Honors the CALENDARPICKER_DEBUG environment variable (truthy values: "1",
    "true", "yes", "on"), which forces DEBUG verbosity.
    """
    import logging
    import os
    import sys

    debug_env = os.environ.get("CALENDARPICKER_DEBUG", "")
    if debug_env.strip().lower() in ("1", "true", "yes", "on"):
        level_name = "DEBUG"

    root = logging.getLogger()
    # Only configure basic handler if no handlers are present to avoid duplicate output.
    if not root.handlers:
        handler = logging.StreamHandler(stream=sys.stderr)
        try:
            from colorlog import ColoredFormatter

            # HH:MM:SS  LEVEL   logger.name: message
            fmt = "%(asctime)s %(log_color)s%(levelname)-7s%(reset)s %(name)s: %(message)s"
            log_colors = {
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "bold_red",
            }
            formatter: logging.Formatter = ColoredFormatter(
                fmt, datefmt="%H:%M:%S", log_colors=log_colors
            )
        except ImportError:
            fmt = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
            formatter = logging.Formatter(fmt, datefmt="%H:%M:%S")

        handler.setFormatter(formatter)
        root.addHandler(handler)

    level = logging.INFO
    if isinstance(level_name, str):
        level = getattr(logging, level_name.upper(), logging.INFO)
    root.setLevel(level)
    logging.getLogger(__name__).debug(
        "Logging initialized at level %s", logging.getLevelName(level)
    )


def run_server(args: Optional[object] = None) -> None:
    """Load configuration, apply CLI overrides and start the server.

    Args:
        args: Optional argparse namespace with ``port``, ``host`` and ``debug``
    """
    from calendarpicker.core.config_manager import ConfigManager

    config = ConfigManager().load_full_config()

    port = getattr(args, "port", None)
    if port is not None:
        config.server_port = int(port)
    host = getattr(args, "host", None)
    if host:
        config.server_bind = host
    if getattr(args, "debug", False):
        config.debug_logging = True

    _init_logging("DEBUG" if config.debug_logging else config.log_level)

    from calendarpicker.api.server import start_server

    start_server(config)
