"""Init system detection."""

import logging
from enum import Enum
from typing import Optional

from .commands import run_command, which
from .config import ServiceConfig

logger = logging.getLogger(__name__)


class InitSystem(Enum):
    """Init systems a host can run."""
    SYSTEMD = "systemd"
    UPSTART = "upstart"
    SYSVINIT = "sysvinit"

    @classmethod
    def from_name(cls, name: str) -> "InitSystem":
        """Look up an init system by name, case insensitive."""
        return cls(name.strip().lower())


def _is_upstart(config: ServiceConfig) -> bool:
    """Check for the upstart control tool and ask it what it is."""
    if not which(config.initctl):
        return False
    success, output = run_command([config.initctl, "version"], timeout=config.command_timeout)
    return success and "upstart" in output.lower()


def detect_init_system(config: Optional[ServiceConfig] = None) -> InitSystem:
    """Detect the init system in use.

    Systemd wins whenever its control directory exists, whatever else is
    installed. Anything that is neither systemd nor upstart is sysvinit.
    """
    config = config or ServiceConfig()

    if config.systemd_run_dir.is_dir():
        logger.debug("Systemd init system has been detected")
        return InitSystem.SYSTEMD

    if _is_upstart(config):
        logger.debug("Upstart init system has been detected")
        return InitSystem.UPSTART

    logger.debug("SysVinit init system has been detected")
    return InitSystem.SYSVINIT
