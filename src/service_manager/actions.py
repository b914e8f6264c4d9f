"""Service lifecycle actions."""

from enum import Enum
from typing import Union

from .errors import ConfigurationError


class LifecycleAction(Enum):
    """Operations the coordinator can perform on a service."""
    ENABLE = "enable"
    DISABLE = "disable"
    START = "start"
    STOP = "stop"
    RESTART = "restart"
    RELOAD = "reload"
    REMOVE = "remove"
    IS_ENABLED = "is_enabled"
    IS_RUNNING = "is_running"
    HAS_SERVICE = "has_service"


# Actions that can be delayed until the end of the run, weakest first
ACTION_STRENGTH = {
    LifecycleAction.START: 0,
    LifecycleAction.RELOAD: 1,
    LifecycleAction.RESTART: 2,
}
DEFERRABLE_ACTIONS = frozenset(ACTION_STRENGTH)


def to_deferrable_action(action: Union[LifecycleAction, str]) -> LifecycleAction:
    """Convert an action name into a deferrable LifecycleAction."""
    if isinstance(action, str):
        try:
            action = LifecycleAction(action.strip().lower())
        except ValueError:
            raise ConfigurationError(f"Unknown action: {action}") from None
    if not isinstance(action, LifecycleAction) or action not in DEFERRABLE_ACTIONS:
        raise ConfigurationError(
            "Unexpected action. Only start, restart and reload actions can be delayed"
        )
    return action
