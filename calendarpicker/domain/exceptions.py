"""Exception hierarchy for calendar picker core errors.

Every error raised by the core carries a stable ``kind`` string so the
transport layer can report it to clients without inspecting messages. All of
them describe caller-input problems; none is transient.
"""


class PickerError(Exception):
    """Base exception for all calendar picker core errors."""

    kind = "PickerError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        """Return the error as a JSON-serializable mapping."""
        return {"kind": self.kind, "error": self.message}


class InvalidDateError(PickerError):
    """Date components do not form a real calendar date.

    Raised when:
    - The day does not exist in the month (e.g. February 30)
    - The year is outside the supported calendar range
    """

    kind = "InvalidDate"


class InvalidMonthError(PickerError):
    """Month number is outside 1..12."""

    kind = "InvalidMonth"


class MissingUserIdError(PickerError):
    """A mutating operation was requested without a user identifier."""

    kind = "MissingUserId"


class MalformedActionIdError(PickerError):
    """A callback action id could not be parsed.

    Raised when:
    - The leading token does not name a known action
    - The token count does not match the action layout
    - Year, month or day tokens are not integers
    """

    kind = "MalformedActionId"
