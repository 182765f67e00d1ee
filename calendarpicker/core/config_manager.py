"""Configuration management for the calendarpicker server."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

DEFAULT_SERVER_BIND = "0.0.0.0"  # nosec: B104 - default bind for containers; override via env
DEFAULT_SERVER_PORT = 3000
DEFAULT_USER_ID = "guest"

_TRUTHY = ("1", "true", "yes", "on")


def parse_env_file(path: Path) -> dict[str, str]:
    """Parse a .env file and return key-value pairs.

    Args:
        path: Path to .env file

    Returns:
        Dictionary of key-value pairs from the .env file.
        Empty dict if file doesn't exist or cannot be read.

    Note:
        - Skips empty lines and comments (lines starting with #)
        - Strips quotes (both single and double) from values
        - Handles KEY=VALUE format with optional whitespace
    """
    if not path.exists():
        return {}

    result: dict[str, str] = {}

    try:
        content = path.read_text(encoding="utf-8")
    except OSError:
        logger.debug("Failed to read .env file (continuing): %s", str(path), exc_info=True)
        return {}

    for raw_line in content.splitlines():
        line = raw_line.strip()

        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, val = line.split("=", 1)
        key = key.strip()
        val = val.strip().strip('"').strip("'")

        if key:
            result[key] = val

    return result


@dataclass
class PickerConfig:
    """Typed configuration for calendarpicker.

    Fields:
        server_bind: host to bind the HTTP server to
        server_port: port for the HTTP server
        api_token: token required on /api routes; None disables auth
        cors_origins: origins allowed by CORS ("*" allows any)
        default_user_id: user id rendered into keyboards when none is given
        debug_logging: enable DEBUG logs for calendarpicker modules
        log_level: root logging level name
    """

    server_bind: str = DEFAULT_SERVER_BIND
    server_port: int = DEFAULT_SERVER_PORT
    api_token: Optional[str] = None
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    default_user_id: str = DEFAULT_USER_ID
    debug_logging: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> PickerConfig:
        """Create PickerConfig from a plain mapping, applying defaults.

        Numeric-like values are coerced to int; invalid values fall back to
        defaults with a warning.
        """
        if data is None:
            data = {}

        raw_port = data.get("server_port", DEFAULT_SERVER_PORT)
        try:
            server_port = int(raw_port)
        except (TypeError, ValueError):
            logger.warning(
                "Config server_port=%r is not an int; using default %d",
                raw_port,
                DEFAULT_SERVER_PORT,
            )
            server_port = DEFAULT_SERVER_PORT

        origins_raw = data.get("cors_origins", ["*"])
        if isinstance(origins_raw, str):
            origins = [o.strip() for o in origins_raw.split(",") if o.strip()]
        else:
            origins = [str(o) for o in origins_raw or []]

        debug = data.get("debug_logging", False)
        if isinstance(debug, str):
            debug = debug.strip().lower() in _TRUTHY

        api_token = data.get("api_token")

        return cls(
            server_bind=str(data.get("server_bind") or DEFAULT_SERVER_BIND),
            server_port=server_port,
            api_token=str(api_token) if api_token else None,
            cors_origins=origins or ["*"],
            default_user_id=str(data.get("default_user_id") or DEFAULT_USER_ID),
            debug_logging=bool(debug),
            log_level=str(data.get("log_level") or "INFO").upper(),
        )


class ConfigManager:
    """Manages application configuration from environment variables and .env files."""

    def __init__(self, env_file_path: Path | None = None):
        """Initialize configuration manager.

        Args:
            env_file_path: Optional path to .env file (defaults to .env in current directory)
        """
        self.env_file_path = env_file_path or Path.cwd() / ".env"

    def load_env_file(self) -> list[str]:
        """Load .env file and set environment variables.

        Only sets variables that are not already in the environment.

        Returns:
            List of environment variable keys that were loaded from .env file
        """
        if not self.env_file_path.exists():
            logger.debug("No .env file found at %s", self.env_file_path)
            return []

        parsed = parse_env_file(self.env_file_path)

        set_keys = []
        for key, val in parsed.items():
            if key not in os.environ:
                os.environ[key] = val
                set_keys.append(key)

        if set_keys:
            logger.debug("Loaded .env defaults for keys: %s", ", ".join(set_keys))

        return set_keys

    def build_config_from_env(self) -> dict[str, Any]:
        """Build configuration dictionary from environment variables.

        Recognizes:
        - CALENDARPICKER_WEB_HOST or CALENDARPICKER_SERVER_BIND -> 'server_bind'
        - CALENDARPICKER_WEB_PORT or CALENDARPICKER_SERVER_PORT or PORT -> 'server_port' (int)
        - CALENDARPICKER_API_TOKEN or API_TOKEN -> 'api_token'
        - CALENDARPICKER_CORS_ORIGINS -> 'cors_origins' (comma separated)
        - CALENDARPICKER_DEFAULT_USER_ID -> 'default_user_id'
        - CALENDARPICKER_DEBUG -> 'debug_logging'
        - CALENDARPICKER_LOG_LEVEL -> 'log_level'

        Returns:
            Configuration dictionary accepted by PickerConfig.from_dict
        """
        cfg: dict[str, Any] = {}

        host = os.environ.get("CALENDARPICKER_WEB_HOST") or os.environ.get(
            "CALENDARPICKER_SERVER_BIND"
        )
        if host:
            cfg["server_bind"] = host

        port = (
            os.environ.get("CALENDARPICKER_WEB_PORT")
            or os.environ.get("CALENDARPICKER_SERVER_PORT")
            or os.environ.get("PORT")
        )
        if port:
            try:
                cfg["server_port"] = int(port)
            except ValueError:
                logger.warning("Invalid CALENDARPICKER_WEB_PORT=%r; ignoring", port)

        token = os.environ.get("CALENDARPICKER_API_TOKEN") or os.environ.get("API_TOKEN")
        if token:
            cfg["api_token"] = token

        origins = os.environ.get("CALENDARPICKER_CORS_ORIGINS")
        if origins:
            cfg["cors_origins"] = origins

        default_user = os.environ.get("CALENDARPICKER_DEFAULT_USER_ID")
        if default_user:
            cfg["default_user_id"] = default_user

        debug = os.environ.get("CALENDARPICKER_DEBUG", "")
        if debug.strip().lower() in _TRUTHY:
            cfg["debug_logging"] = True

        log_level = os.environ.get("CALENDARPICKER_LOG_LEVEL")
        if log_level:
            cfg["log_level"] = log_level

        return cfg

    def load_full_config(self) -> PickerConfig:
        """Load .env file and build configuration from environment.

        Returns:
            PickerConfig instance
        """
        self.load_env_file()
        return PickerConfig.from_dict(self.build_config_from_env())
