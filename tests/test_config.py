"""Tests for config.py and commands.py modules."""

import os
import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from service_manager import commands
from service_manager.config import SYSTEMD_RUN_DIR, SYSTEMD_UNIT_DIRS, ServiceConfig
from service_manager.errors import ConfigurationError


class TestServiceConfig:
    """Tests for ServiceConfig."""

    def test_defaults(self):
        config = ServiceConfig()

        assert config.systemd_run_dir == SYSTEMD_RUN_DIR
        assert config.systemd_unit_dirs == SYSTEMD_UNIT_DIRS
        assert config.systemd_unit_dirs is not SYSTEMD_UNIT_DIRS
        assert config.use_pkexec is False
        assert config.distribution is None

    def test_from_empty_env(self):
        assert ServiceConfig.from_env({}) == ServiceConfig()

    def test_from_env(self):
        env = {
            "SERVICE_MANAGER_SYSTEMD_RUN_DIR": "/tmp/run/systemd",
            "SERVICE_MANAGER_UPSTART_JOB_DIR": "/tmp/init",
            "SERVICE_MANAGER_INIT_SCRIPT_DIR": "/tmp/init.d",
            "SERVICE_MANAGER_UNIT_DIRS": os.pathsep.join(["/tmp/a", "/tmp/b"]),
            "SERVICE_MANAGER_TIMEOUT": "60",
            "SERVICE_MANAGER_USE_PKEXEC": "yes",
            "SERVICE_MANAGER_DISTRIBUTION": "ubuntu",
        }

        config = ServiceConfig.from_env(env)

        assert config.systemd_run_dir == Path("/tmp/run/systemd")
        assert config.upstart_job_dir == Path("/tmp/init")
        assert config.init_script_dir == Path("/tmp/init.d")
        assert config.systemd_unit_dirs == [Path("/tmp/a"), Path("/tmp/b")]
        assert config.command_timeout == 60
        assert config.use_pkexec is True
        assert config.distribution == "ubuntu"

    def test_pkexec_off(self):
        assert ServiceConfig.from_env({"SERVICE_MANAGER_USE_PKEXEC": "0"}).use_pkexec is False

    def test_invalid_timeout(self):
        with pytest.raises(ConfigurationError, match="SERVICE_MANAGER_TIMEOUT"):
            ServiceConfig.from_env({"SERVICE_MANAGER_TIMEOUT": "abc"})


class TestRunCommand:
    """Tests for run_command function."""

    def test_success(self):
        result = MagicMock(returncode=0, stdout="active\n", stderr="")
        with patch.object(commands, "is_flatpak", return_value=False), \
             patch.object(commands.subprocess, "run", return_value=result) as run:
            assert commands.run_command(["systemctl", "is-active", "nginx.service"]) == (True, "active\n")
        assert run.call_args.args[0] == ["systemctl", "is-active", "nginx.service"]
        assert run.call_args.kwargs["timeout"] == commands.DEFAULT_TIMEOUT

    def test_failure_output(self):
        result = MagicMock(returncode=1, stdout="", stderr="Unit not found.\n")
        with patch.object(commands, "is_flatpak", return_value=False), \
             patch.object(commands.subprocess, "run", return_value=result):
            assert commands.run_command(["systemctl", "start", "x"]) == (False, "Unit not found.\n")

    def test_flatpak_spawn(self):
        result = MagicMock(returncode=0, stdout="", stderr="")
        with patch.object(commands, "is_flatpak", return_value=True), \
             patch.object(commands.subprocess, "run", return_value=result) as run:
            commands.run_command(["initctl", "version"], timeout=3)
        assert run.call_args.args[0] == ["flatpak-spawn", "--host", "initctl", "version"]
        assert run.call_args.kwargs["timeout"] == 3

    def test_timeout(self):
        with patch.object(commands, "is_flatpak", return_value=False), \
             patch.object(commands.subprocess, "run",
                          side_effect=subprocess.TimeoutExpired(["x"], 1)):
            assert commands.run_command(["x"]) == (False, "Command timed out")

    def test_missing_binary(self):
        with patch.object(commands, "is_flatpak", return_value=False), \
             patch.object(commands.subprocess, "run",
                          side_effect=FileNotFoundError("No such file: 'initctl'")):
            success, output = commands.run_command(["initctl", "version"])
        assert success is False
        assert "initctl" in output
