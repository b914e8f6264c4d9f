"""Debian family providers (Debian, Ubuntu, Devuan)."""

import logging

from .systemd_provider import SystemdProvider
from .sysvinit_provider import SysvinitProvider

logger = logging.getLogger(__name__)


class DebianSysvinitProvider(SysvinitProvider):
    """SysVinit on Debian, where boot links are managed by update-rc.d."""

    def enable(self, service: str) -> bool:
        self._run_or_raise(["update-rc.d", service, "defaults"], "enable", service)
        return self._run_or_raise(["update-rc.d", service, "enable"], "enable", service)

    def disable(self, service: str) -> bool:
        return self._run_or_raise(["update-rc.d", service, "disable"], "disable", service)

    def _remove_links(self, service: str) -> bool:
        return self._run_or_raise(["update-rc.d", "-f", service, "remove"], "remove", service)


class DebianSystemdProvider(SystemdProvider):
    """Systemd on Debian.

    Debian keeps sysvinit scripts working under systemd through generated
    units, so removing a service also has to drop the script and its links.
    """

    def __init__(self, config=None):
        super().__init__(config)
        self._sysvinit = DebianSysvinitProvider(self.config)

    def has_service(self, service: str) -> bool:
        return super().has_service(service) or self._sysvinit.has_service(service)

    def remove(self, service: str) -> bool:
        super().remove(service)
        if self._sysvinit.has_service(service):
            logger.debug("Removing sysvinit script left behind for %s", service)
            self._sysvinit._remove_links(service)
            self._sysvinit._script(service).unlink(missing_ok=True)
            return self.daemon_reload()
        return True
