"""Exception types raised by the scheduler core."""

from __future__ import annotations


class SchedulerError(Exception):
    """Base class for scheduler errors."""


class StoreUnavailableError(SchedulerError):
    """The productivity store could not be read or written."""


class TaskNotAuthorizedError(SchedulerError):
    """A task operation was attempted by a user who does not own the task."""


class InvalidTaskStateError(SchedulerError, ValueError):
    pass


class ConfigError(SchedulerError, ValueError):
    pass
