"""High-level interface for service providers."""

import logging
from typing import Callable, Optional, Union

from .config import ServiceConfig
from .delayed import ActionSpec, DelayedActionRegistry, PendingAction
from .errors import ConfigurationError, HookVetoError, OperationError, ProviderError, ProviderResolutionError
from .hooks import EventManager
from .init_system import InitSystem, detect_init_system
from .provider import ServiceProvider
from .provider_loader import load_provider
from .upstart_provider import JOB_FILE_KINDS

logger = logging.getLogger(__name__)

UNKNOWN_ERROR = "Unknown error"

# Unit types an upstart-era service may have left under systemd
LEFTOVER_UNIT_SUFFIXES = ("service", "socket")


class ServiceCoordinator:
    """Runs lifecycle operations through the provider of the active init system.

    Every mutating operation fires ``before_<operation>_service`` and
    ``after_<operation>_service`` hooks with the service name; a handler
    returning nonzero aborts the operation. Failures raise OperationError.

    The init system is detected once, at construction. Start, reload and
    restart requests can also be delayed with ``register_delayed_action()``;
    the owner of the coordinator must call ``drain()`` once, as the last
    thing it does before exiting, for those to run.
    """

    def __init__(self, config: Optional[ServiceConfig] = None,
                 hooks: Optional[EventManager] = None,
                 init_system: Union[InitSystem, str, None] = None,
                 provider_loader: Callable[..., ServiceProvider] = load_provider):
        self.config = config or ServiceConfig()
        self.hooks = hooks if hooks is not None else EventManager()
        self._provider_loader = provider_loader
        self._providers: dict[InitSystem, ServiceProvider] = {}
        self._delayed = DelayedActionRegistry()

        if init_system is None:
            init_system = detect_init_system(self.config)
        self._init = self._to_init_system(init_system)
        self.provider = self.get_provider()

    @staticmethod
    def _to_init_system(init_system: Union[InitSystem, str]) -> InitSystem:
        if isinstance(init_system, InitSystem):
            return init_system
        try:
            return InitSystem.from_name(str(init_system))
        except ValueError:
            raise ProviderResolutionError(
                f"Couldn't load the `{init_system}' service provider: unknown init system"
            ) from None

    @staticmethod
    def _check_service(service: str) -> None:
        if not isinstance(service, str) or not service:
            raise ConfigurationError("Missing service name")

    @property
    def init_system(self) -> InitSystem:
        return self._init

    def is_systemd(self) -> bool:
        return self._init is InitSystem.SYSTEMD

    def is_upstart(self) -> bool:
        return self._init is InitSystem.UPSTART

    def is_sysvinit(self) -> bool:
        return self._init is InitSystem.SYSVINIT

    def get_provider(self, init_system: Union[InitSystem, str, None] = None) -> ServiceProvider:
        """Get the provider for an init system, defaulting to the active one.

        Providers are created on first use and cached.
        """
        init_system = self._init if init_system is None else self._to_init_system(init_system)
        provider = self._providers.get(init_system)
        if provider is None:
            provider = self._provider_loader(init_system, self.config)
            self._providers[init_system] = provider
        return provider

    def _last_hook_error(self) -> str:
        pop_last_error = getattr(self.hooks, "pop_last_error", None)
        return (pop_last_error() if pop_last_error else None) or UNKNOWN_ERROR

    def _trigger(self, event: str, service: str) -> None:
        if self.hooks.trigger(event, service) != 0:
            raise HookVetoError(self._last_hook_error())

    def _run_operation(self, operation: str, service: str) -> bool:
        self._check_service(service)
        try:
            self._trigger(f"before_{operation}_service", service)
            if not getattr(self.provider, operation)(service):
                raise ProviderError(UNKNOWN_ERROR)
            self._trigger(f"after_{operation}_service", service)
        except (HookVetoError, ProviderError, OSError) as e:
            raise OperationError(operation, service, str(e) or UNKNOWN_ERROR) from e
        logger.debug("%s: %s done", service, operation)
        return True

    def enable(self, service: str) -> bool:
        """Enable the given service."""
        return self._run_operation("enable", service)

    def disable(self, service: str) -> bool:
        """Disable the given service."""
        return self._run_operation("disable", service)

    def start(self, service: str) -> bool:
        """Start the given service."""
        return self._run_operation("start", service)

    def stop(self, service: str) -> bool:
        """Stop the given service."""
        return self._run_operation("stop", service)

    def restart(self, service: str) -> bool:
        """Restart the given service."""
        return self._run_operation("restart", service)

    def reload(self, service: str) -> bool:
        """Reload the given service."""
        return self._run_operation("reload", service)

    def remove(self, service: str) -> bool:
        """Remove the given service.

        On systemd and upstart hosts the definition files the other of the
        two would have used are deleted as well, so a service does not
        survive a switch of init system.
        """
        self._check_service(service)
        try:
            self._trigger("before_remove_service", service)
            if not self.provider.remove(service):
                raise ProviderError(UNKNOWN_ERROR)
            if self._init is not InitSystem.SYSVINIT:
                self._remove_leftovers(service)
            self._trigger("after_remove_service", service)
        except (HookVetoError, ProviderError, OSError) as e:
            raise OperationError("remove", service, str(e) or UNKNOWN_ERROR) from e
        return True

    def _remove_leftovers(self, service: str) -> None:
        if self._init is InitSystem.UPSTART:
            provider = self.get_provider(InitSystem.SYSTEMD)
            paths = [provider.get_unit_file_path(f"{service}.{suffix}")
                     for suffix in LEFTOVER_UNIT_SUFFIXES]
        else:
            provider = self.get_provider(InitSystem.UPSTART)
            paths = [provider.get_job_file_path(service, kind) for kind in JOB_FILE_KINDS]

        for path in paths:
            if path is not None:
                path.unlink(missing_ok=True)
                logger.debug("Deleted leftover %s", path)

    def is_enabled(self, service: str) -> bool:
        """Check if the given service is enabled."""
        self._check_service(service)
        return self.provider.is_enabled(service)

    def is_running(self, service: str) -> bool:
        """Check if the given service is running.

        Provider errors, such as an unknown service, read as not running.
        """
        self._check_service(service)
        try:
            return bool(self.provider.is_running(service))
        except ProviderError as e:
            logger.debug("Couldn't get status of %s: %s", service, e)
            return False

    def has_service(self, service: str) -> bool:
        """Check if the given service exists."""
        self._check_service(service)
        return self.provider.has_service(service)

    @property
    def delayed_actions(self) -> DelayedActionRegistry:
        return self._delayed

    def register_delayed_action(self, service: str, action: ActionSpec, priority: int = 0) -> None:
        """Delay a start, reload or restart of the service until ``drain()``."""
        self._delayed.register(service, action, priority)

    def drain(self) -> list[PendingAction]:
        """Run the delayed actions. Must be called once, at the very end."""
        return self._delayed.drain(self)
