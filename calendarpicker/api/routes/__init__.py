"""Route modules for the calendarpicker server."""

from .calendar_routes import register_calendar_routes
from .info_routes import register_info_routes
from .selection_routes import register_selection_routes

__all__ = [
    "register_calendar_routes",
    "register_info_routes",
    "register_selection_routes",
]
