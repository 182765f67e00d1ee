"""Current-date provider for calendarpicker."""

from __future__ import annotations

import datetime
import logging
import os

from dateutil import parser as date_parser

logger = logging.getLogger(__name__)

TEST_DATE_ENV = "CALENDARPICKER_TEST_DATE"


def today() -> datetime.date:
    """Return today's local calendar date.

    Can be overridden for testing via the CALENDARPICKER_TEST_DATE environment
    variable (ISO 8601 date or datetime, e.g. "2024-11-15").
    """
    test_date = os.environ.get(TEST_DATE_ENV)
    if test_date:
        try:
            return date_parser.isoparse(test_date).date()
        except (ValueError, OverflowError) as e:
            logger.warning("Failed to parse %s=%r: %s", TEST_DATE_ENV, test_date, e)

    return datetime.date.today()


def now_iso() -> str:
    """Return the current UTC time as an ISO 8601 string with 'Z' suffix."""
    now = datetime.datetime.now(datetime.timezone.utc).replace(microsecond=0)
    return now.isoformat().replace("+00:00", "Z")
