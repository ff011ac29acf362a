"""Registry joining module-contributed API specs with their mount configs.

Modules call register_spec() while they initialize, possibly from several
threads; the startup code calls configure_api() or mount_api() once it knows
where each API lives. Formatters only ever see a snapshot().
"""

import logging
import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from api_doc_registrar.errors import ApiPathConflictError, UnknownApiError
from api_doc_registrar.model.base import ApiConfig, ApiSpec, ApiSpecFactory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegistrySnapshot:
    """Point-in-time, read-only view of the registry."""

    specs: Mapping[str, ApiSpec]
    configs: Mapping[str, ApiConfig]

    @classmethod
    def of(cls, specs: dict[str, ApiSpec], configs: dict[str, ApiConfig]) -> "RegistrySnapshot":
        return cls(MappingProxyType(dict(specs)), MappingProxyType(dict(configs)))


class ApiRegistry:
    """Thread-safe store of API specs and configs keyed by API id.

    Both maps share one lock since they are always read together. Later
    registrations under the same id overwrite earlier ones; registering each
    id once is the caller's responsibility.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._specs: dict[str, ApiSpec] = {}
        self._configs: dict[str, ApiConfig] = {}

    def register_spec(self, api_id: str, spec: ApiSpec | ApiSpecFactory | None) -> None:
        """Register a spec, or a factory returning one. None is ignored."""
        if spec is None:
            return
        if not isinstance(spec, ApiSpec):
            spec = spec()
        with self._lock:
            replaced = api_id in self._specs
            self._specs[api_id] = spec
        if replaced:
            logger.info("API spec %s replaced", api_id, extra={"api_id": api_id})
        else:
            logger.debug("API spec %s registered with %d endpoints", api_id, len(spec.endpoints))

    def configure_api(self, api_id: str, config: ApiConfig | None) -> None:
        """Set the config for an API, overwriting any previous one."""
        if config is None:
            return
        with self._lock:
            self._configs[api_id] = config
        logger.debug("API %s configured at %s (enabled=%s)", api_id, config.path, config.enabled)

    def mount_api(self, api_id: str, config: ApiConfig) -> None:
        """Configure an already-registered API, refusing to move it to another path."""
        with self._lock:
            if api_id not in self._specs:
                raise UnknownApiError(api_id)
            existing = self._configs.get(api_id)
            if existing is not None and existing.path != config.path:
                raise ApiPathConflictError(api_id, existing.path, config.path)
            self._configs[api_id] = config
        logger.debug("API %s mounted at %s", api_id, config.path, extra={"api_id": api_id})

    def snapshot(self) -> RegistrySnapshot:
        with self._lock:
            return RegistrySnapshot.of(self._specs, self._configs)

    def get_spec(self, api_id: str) -> ApiSpec | None:
        with self._lock:
            return self._specs.get(api_id)

    def get_config(self, api_id: str) -> ApiConfig | None:
        with self._lock:
            return self._configs.get(api_id)

    def is_spec_registered(self, api_id: str) -> bool:
        with self._lock:
            return api_id in self._specs

    def is_configured(self, api_id: str) -> bool:
        """True when the API has a config and it is enabled."""
        with self._lock:
            config = self._configs.get(api_id)
        return config is not None and config.enabled

    def reset(self) -> None:
        with self._lock:
            self._specs = {}
            self._configs = {}
