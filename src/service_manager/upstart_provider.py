"""Upstart job management using initctl."""

import logging
import re
from pathlib import Path
from typing import Optional

from .errors import ProviderError
from .provider import ServiceProvider

logger = logging.getLogger(__name__)

JOB_FILE_KINDS = ("conf", "override")

# "manual" stanza on a line of its own, possibly indented
_MANUAL_RE = re.compile(r"^\s*manual\s*$", re.MULTILINE)


class UpstartProvider(ServiceProvider):
    """Provider for upstart jobs.

    Boot-time activation is controlled through the ``manual`` stanza in the
    job's override file, which is how upstart expects administrators to
    disable a job without touching the packaged job file.
    """

    init_name = "upstart"

    def _initctl(self, *args: str) -> tuple[bool, str]:
        return self._run_command([self.config.initctl, *args])

    def _job_path(self, job: str, kind: str) -> Path:
        if kind not in JOB_FILE_KINDS:
            raise ProviderError(f"upstart: unknown job file type: {kind}")
        return self.config.upstart_job_dir / f"{job}.{kind}"

    def get_job_file_path(self, job: str, kind: str = "conf") -> Optional[Path]:
        path = self._job_path(job, kind)
        return path if path.is_file() else None

    def has_service(self, service: str) -> bool:
        return self.get_job_file_path(service, "conf") is not None

    def is_enabled(self, service: str) -> bool:
        if not self.has_service(service):
            return False
        override = self.get_job_file_path(service, "override")
        if override is None:
            return True
        return _MANUAL_RE.search(override.read_text()) is None

    def is_running(self, service: str) -> bool:
        success, output = self._initctl("status", service)
        if not success:
            raise ProviderError(f"upstart: unknown job: {service}")
        return "start/" in output

    def enable(self, service: str) -> bool:
        override = self._job_path(service, "override")
        if not override.exists():
            return True
        content = _MANUAL_RE.sub("", override.read_text()).strip()
        if content:
            override.write_text(content + "\n")
        else:
            override.unlink()
        return True

    def disable(self, service: str) -> bool:
        override = self._job_path(service, "override")
        content = override.read_text() if override.exists() else ""
        if _MANUAL_RE.search(content):
            return True
        if content and not content.endswith("\n"):
            content += "\n"
        override.write_text(content + "manual\n")
        return True

    def start(self, service: str) -> bool:
        return self._run_or_raise([self.config.initctl, "start", service], "start", service)

    def stop(self, service: str) -> bool:
        if not self.is_running(service):
            return True
        return self._run_or_raise([self.config.initctl, "stop", service], "stop", service)

    def restart(self, service: str) -> bool:
        # initctl restart refuses to act on a stopped job
        if self.is_running(service):
            return self._run_or_raise([self.config.initctl, "restart", service], "restart", service)
        return self.start(service)

    def reload(self, service: str) -> bool:
        if self.is_running(service):
            return self._run_or_raise([self.config.initctl, "reload", service], "reload", service)
        return self.start(service)

    def remove(self, service: str) -> bool:
        """Stop the job and delete its job files."""
        if self.has_service(service) and self.is_running(service):
            self.stop(service)
        for kind in JOB_FILE_KINDS:
            self._job_path(service, kind).unlink(missing_ok=True)
        logger.debug("Deleted upstart job files for %s", service)
        return True
