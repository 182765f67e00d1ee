"""Dependency injection container for the calendarpicker server."""

from __future__ import annotations

import datetime
from collections.abc import Callable
from dataclasses import dataclass

from calendarpicker.core.config_manager import PickerConfig
from calendarpicker.core.health_tracker import HealthTracker
from calendarpicker.domain.picker_service import CalendarPickerService
from calendarpicker.domain.selection_store import SelectionStore


@dataclass
class AppDependencies:
    """Container for the shared objects the routes depend on.

    The selection store is owned here and handed to the service; nothing else
    keeps a reference to user selections.
    """

    config: PickerConfig
    store: SelectionStore
    service: CalendarPickerService
    health_tracker: HealthTracker
    today_provider: Callable[[], datetime.date]


class DependencyContainer:
    """Factory for building application dependencies."""

    @staticmethod
    def build_dependencies(
        config: PickerConfig,
        store: SelectionStore | None = None,
        today_provider: Callable[[], datetime.date] | None = None,
    ) -> AppDependencies:
        """Build all application dependencies.

        Args:
            config: Application configuration
            store: Optional pre-built selection store (tests inject one)
            today_provider: Optional callable returning today's date

        Returns:
            AppDependencies container with all dependencies initialized
        """
        from calendarpicker.core.time_utils import today

        store = store if store is not None else SelectionStore()
        today_provider = today_provider or today

        service = CalendarPickerService(
            store=store,
            today_provider=today_provider,
            default_user_id=config.default_user_id,
        )

        return AppDependencies(
            config=config,
            store=store,
            service=service,
            health_tracker=HealthTracker(),
            today_provider=today_provider,
        )
