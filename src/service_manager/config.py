"""Configuration for init system detection and service providers."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .commands import DEFAULT_TIMEOUT
from .errors import ConfigurationError


# --- Init system detection ---
SYSTEMD_RUN_DIR = Path("/run/systemd/system")
INITCTL = "initctl"

# --- Systemd ---
SYSTEMCTL = "systemctl"
# Local unit directory first: that is where units created by us live
SYSTEMD_UNIT_DIRS = [
    Path("/etc/systemd/system"),
    Path("/lib/systemd/system"),
    Path("/usr/lib/systemd/system"),
]

# --- Upstart ---
UPSTART_JOB_DIR = Path("/etc/init")

# --- SysVinit ---
INIT_SCRIPT_DIR = Path("/etc/init.d")
RC_DIR_ROOT = Path("/etc")

# --- Distribution detection ---
OS_RELEASE_FILE = Path("/etc/os-release")

ENV_PREFIX = "SERVICE_MANAGER_"


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class ServiceConfig:
    """Paths and switches used by the detector and the providers."""
    systemd_run_dir: Path = SYSTEMD_RUN_DIR
    initctl: str = INITCTL
    systemctl: str = SYSTEMCTL
    systemd_unit_dirs: list[Path] = field(default_factory=lambda: list(SYSTEMD_UNIT_DIRS))
    upstart_job_dir: Path = UPSTART_JOB_DIR
    init_script_dir: Path = INIT_SCRIPT_DIR
    rc_dir_root: Path = RC_DIR_ROOT
    os_release_file: Path = OS_RELEASE_FILE
    command_timeout: int = DEFAULT_TIMEOUT
    use_pkexec: bool = False  # Prefix mutating commands with pkexec
    distribution: Optional[str] = None  # Overrides /etc/os-release detection

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "ServiceConfig":
        """Build a configuration from SERVICE_MANAGER_* environment variables."""
        env = os.environ if environ is None else environ
        config = cls()

        if f"{ENV_PREFIX}SYSTEMD_RUN_DIR" in env:
            config.systemd_run_dir = Path(env[f"{ENV_PREFIX}SYSTEMD_RUN_DIR"])
        if f"{ENV_PREFIX}UPSTART_JOB_DIR" in env:
            config.upstart_job_dir = Path(env[f"{ENV_PREFIX}UPSTART_JOB_DIR"])
        if f"{ENV_PREFIX}INIT_SCRIPT_DIR" in env:
            config.init_script_dir = Path(env[f"{ENV_PREFIX}INIT_SCRIPT_DIR"])
        if f"{ENV_PREFIX}UNIT_DIRS" in env:
            config.systemd_unit_dirs = [
                Path(p) for p in env[f"{ENV_PREFIX}UNIT_DIRS"].split(os.pathsep) if p
            ]
        if f"{ENV_PREFIX}TIMEOUT" in env:
            value = env[f"{ENV_PREFIX}TIMEOUT"]
            try:
                config.command_timeout = int(value)
            except ValueError:
                raise ConfigurationError(f"Invalid {ENV_PREFIX}TIMEOUT: {value!r}") from None
        if f"{ENV_PREFIX}USE_PKEXEC" in env:
            config.use_pkexec = _env_bool(env[f"{ENV_PREFIX}USE_PKEXEC"])
        if env.get(f"{ENV_PREFIX}DISTRIBUTION"):
            config.distribution = env[f"{ENV_PREFIX}DISTRIBUTION"]

        return config
