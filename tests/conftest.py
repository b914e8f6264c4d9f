"""Pytest configuration and fixtures."""

import pytest
from pathlib import Path
from unittest.mock import MagicMock
import tempfile
import shutil

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from service_manager.config import ServiceConfig
from service_manager.coordinator import ServiceCoordinator
from service_manager.hooks import EventManager
from service_manager.init_system import InitSystem
from service_manager.provider import ServiceProvider


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmp = tempfile.mkdtemp()
    yield Path(tmp)
    shutil.rmtree(tmp)


@pytest.fixture
def config(temp_dir):
    """Configuration pointing every path into the temporary directory."""
    unit_dir = temp_dir / "systemd" / "system"
    job_dir = temp_dir / "init"
    script_dir = temp_dir / "init.d"
    for path in (unit_dir, job_dir, script_dir):
        path.mkdir(parents=True)
    return ServiceConfig(
        systemd_run_dir=temp_dir / "run" / "systemd" / "system",
        systemd_unit_dirs=[unit_dir],
        upstart_job_dir=job_dir,
        init_script_dir=script_dir,
        rc_dir_root=temp_dir,
        os_release_file=temp_dir / "os-release",
        command_timeout=5,
    )


def make_fake_provider():
    """Provider double whose operations all succeed."""
    provider = MagicMock(spec=ServiceProvider)
    for name in ("enable", "disable", "remove", "start", "stop", "restart", "reload",
                 "is_enabled", "is_running", "has_service"):
        getattr(provider, name).return_value = True
    provider.get_unit_file_path.return_value = None
    provider.get_job_file_path.return_value = None
    return provider


@pytest.fixture
def providers():
    """One fake provider per init system."""
    return {init: make_fake_provider() for init in InitSystem}


@pytest.fixture
def hooks():
    return EventManager()


@pytest.fixture
def make_coordinator(config, hooks, providers):
    """Build a coordinator for a given init system backed by fake providers."""
    def _make(init_system=InitSystem.SYSTEMD):
        return ServiceCoordinator(
            config=config,
            hooks=hooks,
            init_system=init_system,
            provider_loader=lambda init, cfg: providers[init],
        )
    return _make


@pytest.fixture
def coordinator(make_coordinator):
    return make_coordinator()
