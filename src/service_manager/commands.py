"""Host command execution."""

import logging
import os
import shutil
import subprocess
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


def is_flatpak() -> bool:
    """Check if running inside a Flatpak sandbox."""
    return os.path.exists("/.flatpak-info")


def which(program: str) -> Optional[str]:
    """Locate a program on the search path."""
    return shutil.which(program)


def run_command(cmd: list[str], timeout: int = DEFAULT_TIMEOUT) -> tuple[bool, str]:
    """Run a command, using flatpak-spawn if in Flatpak sandbox.

    Returns a ``(success, output)`` pair where output is stdout followed by
    stderr. Failures to spawn the process are reported the same way as a
    non-zero exit status.
    """
    if is_flatpak():
        cmd = ["flatpak-spawn", "--host"] + cmd
    logger.debug("Running: %s", " ".join(cmd))
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout
        )
        return result.returncode == 0, result.stdout + result.stderr
    except subprocess.TimeoutExpired:
        return False, "Command timed out"
    except OSError as e:
        return False, str(e)
