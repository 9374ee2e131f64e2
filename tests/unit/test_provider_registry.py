import pytest

from relay.core.provider.provider_registry import ProviderRegistry, normalize_provider_name
from tests.fixtures.fake_providers import make_entry, make_registry


@pytest.mark.unit
class TestNormalizeProviderName:
    def test_strips_case_and_punctuation(self):
        assert normalize_provider_name("Open-Router!") == "openrouter"
        assert normalize_provider_name(" Groq ") == "groq"

    def test_keeps_digits(self):
        assert normalize_provider_name("Model_2.5") == "model25"

    def test_only_punctuation_normalizes_to_empty(self):
        assert normalize_provider_name("--!!") == ""


@pytest.mark.unit
class TestProviderRegistry:
    def test_resolves_id_and_display_name_aliases(self):
        registry = make_registry()

        for identifier in ("openrouter", "Open-Router!", "OPENROUTER", "OpenRouter (Auto-Fallback)"):
            resolved = registry.resolve(identifier)
            assert resolved is not None, identifier
            entry, index = resolved
            assert entry.id == "openrouter"
            assert index == 2

    def test_resolve_returns_first_catalog_position(self):
        registry = make_registry()
        entry, index = registry.resolve("cerebras")
        assert entry.display_name == "Cerebras"
        assert index == 1

    def test_unknown_and_empty_identifiers_do_not_resolve(self):
        registry = make_registry()
        assert registry.resolve("anthropic") is None
        assert registry.resolve("") is None
        assert registry.resolve("!!!") is None

    def test_names_follow_catalog_order(self):
        registry = make_registry()
        assert registry.names() == ["Groq", "Cerebras", "OpenRouter (Auto-Fallback)"]
        assert len(registry) == 3
        assert [entry.id for entry in registry] == ["groq", "cerebras", "openrouter"]

    def test_empty_catalog_is_rejected(self):
        with pytest.raises(ValueError, match="No providers configured"):
            ProviderRegistry([])

    def test_duplicate_ids_are_rejected(self):
        with pytest.raises(ValueError, match="Duplicate provider ids"):
            ProviderRegistry([make_entry("groq"), make_entry("groq", "Groq Again")])
