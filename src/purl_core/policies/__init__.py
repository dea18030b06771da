"""
Per-type policies.

Maps purl types to the structural and casing rules of their ecosystem.
"""

from .base import Components, Presence, RulePolicy, TypePolicy
from .builtin import BUILTIN_POLICIES, MlflowPolicy, StandardTypes
from .registry import (
    PolicyRegistry,
    get_registry,
    load_policy_modules,
    register_policy,
    reset_registry,
)

__all__ = [
    "Components",
    "Presence",
    "RulePolicy",
    "TypePolicy",
    "BUILTIN_POLICIES",
    "MlflowPolicy",
    "StandardTypes",
    "PolicyRegistry",
    "get_registry",
    "load_policy_modules",
    "register_policy",
    "reset_registry",
]
