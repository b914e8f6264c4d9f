"""Delayed service actions, coalesced per service and run once at the end."""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from .actions import ACTION_STRENGTH, LifecycleAction, to_deferrable_action
from .errors import ConfigurationError, DelayedActionError

logger = logging.getLogger(__name__)

ActionSpec = Union[LifecycleAction, str, tuple]


@dataclass
class PendingAction:
    """Action waiting to be run for a service."""
    service: str
    action: LifecycleAction  # start, reload or restart
    priority: int = 0
    callback: Optional[Callable[[], Any]] = None  # Replaces the plain lifecycle call

    def same_action(self, other: "PendingAction") -> bool:
        return self.action == other.action and self.callback is other.callback


def _parse_action(action: ActionSpec) -> tuple[LifecycleAction, Optional[Callable[[], Any]]]:
    if isinstance(action, tuple):
        if len(action) != 2:
            raise ConfigurationError(
                "When given as a tuple, action must hold both the action name and its callable"
            )
        kind, callback = action
        if not callable(callback):
            raise ConfigurationError("Unexpected action callable")
        return to_deferrable_action(kind), callback
    return to_deferrable_action(action), None


def _validate_priority(priority: Any) -> int:
    if isinstance(priority, bool) or not isinstance(priority, int) or priority < 0:
        raise ConfigurationError(f"Invalid priority: {priority!r}")
    return priority


class DelayedActionRegistry:
    """Start, reload and restart requests deferred until the end of the run.

    Only one action is kept per service. A newer request replaces the stored
    one unless it is weaker (restart > reload > start), so the action that
    finally runs is the strongest that was asked for. ``drain()`` must be
    called exactly once, after all other work.
    """

    def __init__(self):
        self._actions: dict[str, PendingAction] = {}
        self._lock = threading.RLock()
        self._drained = False

    def __len__(self) -> int:
        return len(self._actions)

    def __contains__(self, service: str) -> bool:
        return service in self._actions

    def get(self, service: str) -> Optional[PendingAction]:
        return self._actions.get(service)

    def pending(self) -> list[PendingAction]:
        """Snapshot of the stored actions, in registration order."""
        with self._lock:
            return list(self._actions.values())

    @property
    def drained(self) -> bool:
        return self._drained

    def register(self, service: str, action: ActionSpec, priority: int = 0) -> None:
        """Register an action for a service.

        ``action`` is ``start``, ``reload`` or ``restart`` (name or
        LifecycleAction), or a ``(kind, callable)`` pair where the callable
        does the actual work and kind ranks it against other requests.
        """
        if not isinstance(service, str) or not service:
            raise ConfigurationError("Missing service name")
        kind, callback = _parse_action(action)
        incoming = PendingAction(service, kind, _validate_priority(priority), callback)

        with self._lock:
            if self._drained:
                raise ConfigurationError(
                    f"Delayed actions were already executed, can't register {kind.value} for {service}"
                )

            current = self._actions.get(service)
            if current is None:
                self._actions[service] = incoming
                return

            if current.same_action(incoming):
                return

            # reload can only be replaced by reload or restart,
            # restart only by restart
            if ACTION_STRENGTH[incoming.action] < ACTION_STRENGTH[current.action]:
                logger.debug(
                    "Ignoring delayed %s for %s: %s already scheduled",
                    incoming.action.value, service, current.action.value
                )
                return

            self._actions[service] = incoming

    def drain(self, executor: Any) -> list[PendingAction]:
        """Run the stored actions, highest priority first.

        Plain actions are dispatched to ``executor.start``, ``.reload`` or
        ``.restart``. The first failure stops the run and raises
        DelayedActionError; entries after it are not executed. Returns the
        applied entries.
        """
        with self._lock:
            if self._drained:
                logger.warning("Delayed actions were already executed")
                return []
            self._drained = True

            if not self._actions:
                return []

            # sorted() is stable: equal priorities keep registration order
            ordered = sorted(self._actions.values(), key=lambda p: p.priority, reverse=True)
            applied = []

            for index, pending in enumerate(ordered):
                del self._actions[pending.service]
                try:
                    if pending.callback is not None:
                        pending.callback()
                    elif getattr(executor, pending.action.value)(pending.service) is False:
                        raise DelayedActionError(pending.action.value, pending.service, "Unknown error")
                except Exception as e:
                    cause = getattr(e, "cause", None) or str(e) or "Unknown error"
                    logger.error(
                        "Delayed %s of %s failed: %s", pending.action.value, pending.service, cause
                    )
                    raise DelayedActionError(
                        pending.action.value,
                        pending.service,
                        cause,
                        applied=applied,
                        pending=ordered[index + 1:],
                    ) from e
                applied.append(pending)
                logger.debug("Delayed %s of %s done", pending.action.value, pending.service)

            return applied
