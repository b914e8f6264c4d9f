"""Exceptions raised by the service manager."""

from typing import Optional


class ServiceManagerError(Exception):
    """Base class for all service manager errors."""


class ProviderError(ServiceManagerError):
    """An init system command failed."""


class HookVetoError(ServiceManagerError):
    """A before/after hook handler reported failure."""


class ConfigurationError(ServiceManagerError, ValueError):
    """Invalid input given to the service manager API."""


class ProviderResolutionError(ServiceManagerError):
    """No service provider could be loaded for an init system."""


class OperationError(ServiceManagerError):
    """A lifecycle operation did not complete."""

    def __init__(self, operation: str, service: str, cause: str):
        self.operation = operation
        self.service = service
        self.cause = cause
        super().__init__(f"Couldn't {operation} the `{service}' service: {cause}")


class DelayedActionError(OperationError):
    """A delayed action failed while draining the queue.

    ``applied`` holds the entries that ran before the failure and
    ``pending`` the ones that were never reached.
    """

    def __init__(self, operation: str, service: str, cause: str,
                 applied: Optional[list] = None, pending: Optional[list] = None):
        super().__init__(operation, service, cause)
        self.applied = applied or []
        self.pending = pending or []
