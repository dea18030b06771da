"""
Registry mapping purl types to their policies.

External policies take precedence over the built-in table for the same type.
The registry seals itself on the first lookup: registering afterwards raises
RegistryError, so every identifier in a process is normalized by the same
rules.
"""

from __future__ import annotations

import importlib
import logging
import threading
from typing import Dict, Iterable, Mapping, Optional

from purl_core.config import get_config
from purl_core.errors import PurlError, RegistryError

from .base import TypePolicy
from .builtin import BUILTIN_POLICIES

logger = logging.getLogger(__name__)

DEFAULT_POLICY = TypePolicy()


class PolicyRegistry:
    """
    Resolve type names to policies.

    Usage:
        registry = PolicyRegistry()
        registry.register("acme", AcmePolicy())
        policy = registry.resolve("acme")  # seals the registry
    """

    def __init__(self, builtin: Optional[Mapping[str, TypePolicy]] = None):
        """
        Create a registry.

        Args:
            builtin: Fallback policies keyed by type (defaults to the built-in table)
        """
        self._builtin: Dict[str, TypePolicy] = dict(
            BUILTIN_POLICIES if builtin is None else builtin
        )
        self._external: Dict[str, TypePolicy] = {}
        self._sealed = False
        self._lock = threading.Lock()

    @property
    def is_sealed(self) -> bool:
        return self._sealed

    def register(self, type_name: str, policy: TypePolicy) -> None:
        """
        Register a policy for a type, overriding any built-in one.

        Args:
            type_name: purl type the policy applies to (case-insensitive)
            policy: Policy instance

        Raises:
            RegistryError: If the registry is sealed, the type name is invalid,
                the policy is not a TypePolicy, or the type is already registered
        """
        if not isinstance(policy, TypePolicy):
            raise RegistryError(
                f"Policy for '{type_name}' must be a TypePolicy, got {type(policy).__name__}"
            )

        from purl_core.normalization.rules import validate_type

        try:
            key = validate_type(type_name)
        except PurlError as e:
            raise RegistryError(f"Invalid package type for policy: {e}") from e

        with self._lock:
            if self._sealed:
                raise RegistryError(
                    f"Cannot register policy for '{key}': registry is sealed after first use"
                )
            if key in self._external:
                raise RegistryError(f"A policy for '{key}' is already registered")
            self._external[key] = policy

        logger.debug("Registered policy %s for type '%s'", type(policy).__name__, key)

    def resolve(self, type_name: str) -> TypePolicy:
        """
        Return the policy for a (lower-case) type, or the pass-through default.

        The first call seals the registry.
        """
        if not self._sealed:
            self.seal()
        policy = self._external.get(type_name)
        if policy is None:
            policy = self._builtin.get(type_name, DEFAULT_POLICY)
        return policy

    def seal(self) -> None:
        """Disallow further registrations."""
        with self._lock:
            if not self._sealed:
                self._sealed = True
                logger.debug(
                    "Policy registry sealed with %d external policies",
                    len(self._external),
                )

    def registered_types(self) -> list[str]:
        """Return every type with a specific policy, sorted."""
        return sorted(set(self._builtin) | set(self._external))


def load_policy_modules(registry: PolicyRegistry, modules: Iterable[str]) -> None:
    """
    Import each module and let it register its policies.

    Args:
        registry: Registry to populate
        modules: Dotted module paths exposing register_policies(registry)

    Raises:
        RegistryError: If a module has no register_policies hook
    """
    for module_name in modules:
        module = importlib.import_module(module_name)
        hook = getattr(module, "register_policies", None)
        if not callable(hook):
            raise RegistryError(
                f"Policy module '{module_name}' does not define register_policies(registry)"
            )
        hook(registry)
        logger.debug("Loaded type policies from %s", module_name)


# Global registry instance
_registry: Optional[PolicyRegistry] = None
_registry_lock = threading.Lock()


def _create_registry() -> PolicyRegistry:
    registry = PolicyRegistry()
    load_policy_modules(registry, get_config().policy.modules)
    return registry


def get_registry() -> PolicyRegistry:
    """Get or create the process-wide registry (configured policy modules included)."""
    global _registry
    if _registry is None:
        with _registry_lock:
            if _registry is None:
                _registry = _create_registry()
    return _registry


def register_policy(type_name: str, policy: TypePolicy) -> None:
    """Register a policy with the process-wide registry."""
    get_registry().register(type_name, policy)


def reset_registry() -> None:
    """Reset the process-wide registry (for testing)."""
    global _registry
    with _registry_lock:
        _registry = None
