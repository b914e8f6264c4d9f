"""Selection of the service provider for an init system and distribution."""

import logging
import re
from typing import Optional, Union

from .config import ServiceConfig
from .debian_providers import DebianSystemdProvider, DebianSysvinitProvider
from .errors import ProviderResolutionError
from .init_system import InitSystem
from .provider import ServiceProvider
from .systemd_provider import SystemdProvider
from .sysvinit_provider import SysvinitProvider
from .upstart_provider import UpstartProvider

logger = logging.getLogger(__name__)

# Distributions sharing a provider implementation
DISTRIBUTION_ALIASES = {
    "devuan": "debian",
    "ubuntu": "debian",
}

# Distribution specific providers, looked up first
DISTRIBUTION_PROVIDERS = {
    ("debian", InitSystem.SYSTEMD): DebianSystemdProvider,
    ("debian", InitSystem.SYSVINIT): DebianSysvinitProvider,
}

# Fallback providers for any distribution
GENERIC_PROVIDERS = {
    InitSystem.SYSTEMD: SystemdProvider,
    InitSystem.UPSTART: UpstartProvider,
    InitSystem.SYSVINIT: SysvinitProvider,
}


def get_distribution_id(config: Optional[ServiceConfig] = None) -> Optional[str]:
    """Get the lowercase distribution ID, folded onto its provider family."""
    config = config or ServiceConfig()
    dist_id = config.distribution

    if not dist_id:
        try:
            content = config.os_release_file.read_text()
        except OSError:
            return None
        match = re.search(r'^ID=["\']?([^"\'\n]+)', content, re.MULTILINE)
        if not match:
            return None
        dist_id = match.group(1)

    dist_id = dist_id.strip().lower()
    return DISTRIBUTION_ALIASES.get(dist_id, dist_id)


def resolve_provider_class(init_system: InitSystem, distribution: Optional[str]) -> type:
    """Get the most specific provider class available."""
    provider_class = DISTRIBUTION_PROVIDERS.get((distribution, init_system))
    if provider_class is None:
        provider_class = GENERIC_PROVIDERS.get(init_system)
    if provider_class is None:
        raise ProviderResolutionError(f"Couldn't load the `{init_system.value}' service provider")
    return provider_class


def load_provider(init_system: Union[InitSystem, str],
                  config: Optional[ServiceConfig] = None) -> ServiceProvider:
    """Instantiate the provider for an init system."""
    config = config or ServiceConfig()

    if not isinstance(init_system, InitSystem):
        try:
            init_system = InitSystem.from_name(str(init_system))
        except ValueError:
            raise ProviderResolutionError(
                f"Couldn't load the `{init_system}' service provider: unknown init system"
            ) from None

    provider_class = resolve_provider_class(init_system, get_distribution_id(config))
    logger.debug("Using %s for %s", provider_class.__name__, init_system.value)
    return provider_class(config)
