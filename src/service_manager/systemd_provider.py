"""Systemd service management using systemctl."""

import logging
from pathlib import Path
from typing import Optional

from .provider import ServiceProvider

logger = logging.getLogger(__name__)

UNIT_SUFFIXES = (".service", ".socket", ".target", ".timer", ".path", ".mount")


def unit_name(service: str) -> str:
    """Append the .service suffix unless the name already carries a unit type."""
    if service.endswith(UNIT_SUFFIXES):
        return service
    return f"{service}.service"


class SystemdProvider(ServiceProvider):
    """Provider for managing systemd services via systemctl."""

    init_name = "systemd"

    def _run_systemctl(self, *args: str, needs_root: bool = False) -> tuple[bool, str]:
        """Run systemctl command, optionally with pkexec for root access."""
        return self._run_command([self.config.systemctl, *args], needs_root=needs_root)

    def _systemctl_or_raise(self, action: str, service: str, *args: str) -> bool:
        return self._run_or_raise(
            [self.config.systemctl, *args, unit_name(service)], action, service
        )

    def is_running(self, service: str) -> bool:
        success, output = self._run_systemctl("is-active", unit_name(service))
        return output.strip().lower() == "active"

    def is_enabled(self, service: str) -> bool:
        success, output = self._run_systemctl("is-enabled", unit_name(service))
        return output.strip().lower() == "enabled"

    def has_service(self, service: str) -> bool:
        success, output = self._run_systemctl("cat", unit_name(service))
        return success

    def enable(self, service: str) -> bool:
        return self._systemctl_or_raise("enable", service, "--quiet", "enable")

    def disable(self, service: str) -> bool:
        return self._systemctl_or_raise("disable", service, "--quiet", "disable")

    def start(self, service: str) -> bool:
        return self._systemctl_or_raise("start", service, "start")

    def stop(self, service: str) -> bool:
        if not self.is_running(service):
            return True
        return self._systemctl_or_raise("stop", service, "stop")

    def restart(self, service: str) -> bool:
        if self.is_running(service):
            return self._systemctl_or_raise("restart", service, "restart")
        return self.start(service)

    def reload(self, service: str) -> bool:
        if self.is_running(service):
            return self._systemctl_or_raise("reload", service, "reload-or-restart")
        return self.start(service)

    def daemon_reload(self) -> bool:
        """Make systemd pick up changed unit files."""
        return self._run_or_raise([self.config.systemctl, "daemon-reload"], "reload", "systemd manager")

    def remove(self, service: str) -> bool:
        """Stop and disable the unit, then delete its local unit file."""
        self.stop(service)
        if self.is_enabled(service):
            self.disable(service)

        # Only the local unit directory is ours to clean up; vendor units
        # belong to the package manager.
        local_unit = self.config.systemd_unit_dirs[0] / unit_name(service)
        if local_unit.exists():
            local_unit.unlink()
            logger.debug("Deleted %s", local_unit)
            return self.daemon_reload()
        return True

    def get_unit_file_path(self, unit: str) -> Optional[Path]:
        for unit_dir in self.config.systemd_unit_dirs:
            path = unit_dir / unit
            if path.is_file():
                return path
        return None
