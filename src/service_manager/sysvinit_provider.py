"""SysVinit script management."""

import logging
from pathlib import Path

from .errors import ProviderError
from .provider import ServiceProvider

logger = logging.getLogger(__name__)

# Multi-user runlevels checked when deciding whether a script is enabled
RUNLEVELS = ("2", "3", "4", "5")


class SysvinitProvider(ServiceProvider):
    """Provider for init scripts, using chkconfig for boot links."""

    init_name = "sysvinit"

    def _script(self, service: str) -> Path:
        return self.config.init_script_dir / service

    def _script_or_raise(self, service: str) -> Path:
        script = self._script(service)
        if not script.is_file():
            raise ProviderError(f"sysvinit: no init script for {service}")
        return script

    def _run_script(self, service: str, action: str) -> bool:
        script = self._script_or_raise(service)
        return self._run_or_raise([str(script), action], action, service)

    def has_service(self, service: str) -> bool:
        return self._script(service).is_file()

    def is_enabled(self, service: str) -> bool:
        for level in RUNLEVELS:
            rc_dir = self.config.rc_dir_root / f"rc{level}.d"
            if any(rc_dir.glob(f"S[0-9][0-9]{service}")):
                return True
        return False

    def is_running(self, service: str) -> bool:
        script = self._script_or_raise(service)
        success, output = self._run_command([str(script), "status"])
        return success

    def enable(self, service: str) -> bool:
        return self._run_or_raise(["chkconfig", service, "on"], "enable", service)

    def disable(self, service: str) -> bool:
        return self._run_or_raise(["chkconfig", service, "off"], "disable", service)

    def _remove_links(self, service: str) -> bool:
        return self._run_or_raise(["chkconfig", "--del", service], "remove", service)

    def start(self, service: str) -> bool:
        if self.is_running(service):
            return True
        return self._run_script(service, "start")

    def stop(self, service: str) -> bool:
        if not self.is_running(service):
            return True
        return self._run_script(service, "stop")

    def restart(self, service: str) -> bool:
        if self.is_running(service):
            return self._run_script(service, "restart")
        return self._run_script(service, "start")

    def reload(self, service: str) -> bool:
        if self.is_running(service):
            return self._run_script(service, "reload")
        return self._run_script(service, "start")

    def remove(self, service: str) -> bool:
        """Stop the service, drop its boot links and delete the script."""
        script = self._script(service)
        if not script.is_file():
            return True
        self.stop(service)
        self._remove_links(service)
        script.unlink()
        logger.debug("Deleted %s", script)
        return True
