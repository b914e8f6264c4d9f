"""Service provider contract shared by all init systems."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from .commands import run_command
from .config import ServiceConfig
from .errors import ProviderError

logger = logging.getLogger(__name__)


class ServiceProvider(ABC):
    """Executes primitive lifecycle operations for one init system.

    Mutating operations return True on success and raise ProviderError on
    failure. Queries return a bool.
    """

    init_name = ""

    def __init__(self, config: Optional[ServiceConfig] = None):
        self.config = config or ServiceConfig()

    def _run_command(self, cmd: list[str], needs_root: bool = False) -> tuple[bool, str]:
        """Run a command, optionally with pkexec for root access."""
        if needs_root and self.config.use_pkexec:
            cmd = ["pkexec"] + cmd
        return run_command(cmd, timeout=self.config.command_timeout)

    def _run_or_raise(self, cmd: list[str], action: str, service: str) -> bool:
        """Run a mutating command and raise ProviderError if it fails."""
        success, output = self._run_command(cmd, needs_root=True)
        if not success:
            logger.warning("Failed to %s %s: %s", action, service, output.strip())
            raise ProviderError(
                f"{self.init_name}: couldn't {action} {service}: {output.strip() or 'no output'}"
            )
        return True

    @abstractmethod
    def is_enabled(self, service: str) -> bool:
        """Check if a service is enabled to start at boot."""

    @abstractmethod
    def enable(self, service: str) -> bool:
        """Enable a service to start at boot."""

    @abstractmethod
    def disable(self, service: str) -> bool:
        """Disable a service from starting at boot."""

    @abstractmethod
    def remove(self, service: str) -> bool:
        """Stop, disable and delete the service definition."""

    @abstractmethod
    def start(self, service: str) -> bool:
        """Start a service."""

    @abstractmethod
    def stop(self, service: str) -> bool:
        """Stop a service."""

    @abstractmethod
    def restart(self, service: str) -> bool:
        """Restart a service, starting it if it is not running."""

    @abstractmethod
    def reload(self, service: str) -> bool:
        """Reload a service, starting it if it is not running."""

    @abstractmethod
    def is_running(self, service: str) -> bool:
        """Check if a service is currently running."""

    @abstractmethod
    def has_service(self, service: str) -> bool:
        """Check if a service definition exists."""

    def get_unit_file_path(self, unit: str) -> Optional[Path]:
        """Path of a systemd unit file, or None when there is none."""
        return None

    def get_job_file_path(self, job: str, kind: str = "conf") -> Optional[Path]:
        """Path of an upstart job file (conf or override), or None."""
        return None
