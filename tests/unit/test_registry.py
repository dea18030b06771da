"""
Unit tests for the type policy registry.
"""

import logging
import textwrap
from concurrent.futures import ThreadPoolExecutor

import pytest

from purl_core.config import reset_config
from purl_core.errors import MalformedInputError, RegistryError
from purl_core.normalization import from_components, parse
from purl_core.policies import (
    BUILTIN_POLICIES,
    PolicyRegistry,
    RulePolicy,
    TypePolicy,
    get_registry,
    load_policy_modules,
    register_policy,
    reset_registry,
)
from purl_core.policies.registry import DEFAULT_POLICY


@pytest.fixture
def registry():
    """Create a fresh registry with the built-in table."""
    return PolicyRegistry()


@pytest.fixture
def global_registry(monkeypatch):
    """Reset the process-wide registry and config around a test."""
    monkeypatch.delenv("PURL_POLICY_MODULES", raising=False)
    reset_config()
    reset_registry()
    yield
    reset_registry()
    reset_config()


class TestPolicyRegistry:
    """Test suite for PolicyRegistry."""

    def test_resolves_builtin(self, registry):
        assert registry.resolve("maven") is BUILTIN_POLICIES["maven"]

    def test_unknown_type_passes_through(self, registry):
        assert registry.resolve("unknown") is DEFAULT_POLICY

    def test_external_overrides_builtin(self, registry):
        """Test a registered policy wins over the built-in rule for the same type."""
        registry.register("maven", TypePolicy())

        identifier = from_components("maven", name="io", registry=registry)
        assert identifier.namespace is None

        with pytest.raises(MalformedInputError):
            from_components("maven", name="io")

    def test_type_name_folded(self, registry):
        policy = RulePolicy(lowercase_name=True)
        registry.register("WidgetCo", policy)

        assert registry.resolve("widgetco") is policy
        assert parse("pkg:widgetco/Gadget", registry=registry).name == "gadget"

    def test_seals_on_first_resolve(self, registry):
        assert not registry.is_sealed
        registry.resolve("generic")
        assert registry.is_sealed

        with pytest.raises(RegistryError, match="sealed"):
            registry.register("widgetco", TypePolicy())

    def test_seal_via_parse(self, registry):
        parse("pkg:generic/name", registry=registry)
        with pytest.raises(RegistryError):
            registry.register("widgetco", TypePolicy())

    def test_duplicate_registration(self, registry):
        registry.register("widgetco", TypePolicy())
        with pytest.raises(RegistryError, match="already registered"):
            registry.register("WIDGETCO", TypePolicy())

    @pytest.mark.parametrize("type_name", ["", "0bad", "bad type", "bad_type"])
    def test_invalid_type_name(self, registry, type_name):
        with pytest.raises(RegistryError):
            registry.register(type_name, TypePolicy())

    def test_policy_must_be_type_policy(self, registry):
        with pytest.raises(RegistryError, match="TypePolicy"):
            registry.register("widgetco", object())

    def test_registry_error_is_runtime_error(self, registry):
        registry.seal()
        with pytest.raises(RuntimeError):
            registry.register("widgetco", TypePolicy())

    def test_registered_types(self, registry):
        registry.register("widgetco", TypePolicy())
        types = registry.registered_types()

        assert "widgetco" in types
        assert "maven" in types
        assert types == sorted(types)

    def test_custom_builtin_table(self):
        registry = PolicyRegistry(builtin={})
        assert registry.resolve("maven") is DEFAULT_POLICY
        assert from_components("maven", name="io", registry=registry).canonical == "pkg:maven/io"


class TestGlobalRegistry:
    """Test the process-wide registry."""

    def test_singleton(self, global_registry):
        assert get_registry() is get_registry()

    def test_reset(self, global_registry):
        first = get_registry()
        reset_registry()
        assert get_registry() is not first

    def test_register_policy(self, global_registry):
        register_policy("widgetco", RulePolicy(lowercase_name=True))
        assert parse("pkg:widgetco/Gadget").name == "gadget"

    def test_sealed_after_parse(self, global_registry):
        parse("pkg:generic/name")
        with pytest.raises(RegistryError):
            register_policy("widgetco", TypePolicy())

    def test_concurrent_initialization(self, global_registry):
        """Test concurrent first access creates a single registry."""
        with ThreadPoolExecutor(max_workers=8) as executor:
            registries = list(executor.map(lambda _: get_registry(), range(32)))

        assert len({id(r) for r in registries}) == 1

    def test_concurrent_parsing(self, global_registry):
        purls = [f"pkg:pypi/Package_{i}@1.0" for i in range(50)]
        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(lambda p: parse(p).canonical, purls))

        assert results == [f"pkg:pypi/package-{i}@1.0" for i in range(50)]


class TestPolicyModules:
    """Test loading policy modules named in configuration."""

    def test_load_from_config(self, global_registry, tmp_path, monkeypatch):
        module = tmp_path / "purl_test_widget_policies.py"
        module.write_text(
            textwrap.dedent(
                """
                from purl_core.policies import RulePolicy

                def register_policies(registry):
                    registry.register("widgetco", RulePolicy(lowercase_name=True))
                """
            )
        )
        monkeypatch.syspath_prepend(str(tmp_path))
        monkeypatch.setenv("PURL_POLICY_MODULES", '["purl_test_widget_policies"]')
        reset_config()

        assert "widgetco" in get_registry().registered_types()
        assert parse("pkg:widgetco/Gadget").name == "gadget"

    def test_loading_logged_at_debug(self, registry, tmp_path, monkeypatch, caplog):
        module = tmp_path / "purl_test_logged_policies.py"
        module.write_text("def register_policies(registry):\n    pass\n")
        monkeypatch.syspath_prepend(str(tmp_path))

        with caplog.at_level(logging.DEBUG, logger="purl_core.policies.registry"):
            load_policy_modules(registry, ["purl_test_logged_policies"])

        records = [r for r in caplog.records if "purl_test_logged_policies" in r.getMessage()]
        assert records
        assert all(r.levelno == logging.DEBUG for r in records)

    def test_missing_hook(self, registry, tmp_path, monkeypatch):
        module = tmp_path / "purl_test_empty_policies.py"
        module.write_text("VALUE = 1\n")
        monkeypatch.syspath_prepend(str(tmp_path))

        with pytest.raises(RegistryError, match="register_policies"):
            load_policy_modules(registry, ["purl_test_empty_policies"])

    def test_missing_module(self, registry):
        with pytest.raises(ImportError):
            load_policy_modules(registry, ["purl_test_does_not_exist"])
