"""Errors raised by the routine planner."""


class RoutineError(Exception):
    """Base class for routine planner errors."""


class InvalidSlotError(RoutineError, ValueError):
    """A slot could not be built from the given input."""


class EmptySubjectCatalogError(RoutineError, ValueError):
    """No subjects are available to build a day from."""


class SlotNotFoundError(RoutineError, KeyError):
    """No slot with the given id exists in the day's list."""

    def __str__(self) -> str:
        # KeyError quotes its argument otherwise
        return str(self.args[0]) if self.args else ""


class RemoteSyncError(RoutineError):
    """Pushing the user profile to the remote store failed."""
