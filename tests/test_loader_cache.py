import pytest

from pycongestiontax.rules import loader as loader_module


def test_load_packaged_rule_sets_uses_cache(monkeypatch: pytest.MonkeyPatch) -> None:
    loader_module.clear_rule_cache()
    calls = {"count": 0}
    original = loader_module.iter_rule_files

    def wrapped():
        calls["count"] += 1
        return original()

    monkeypatch.setattr(loader_module, "iter_rule_files", wrapped)

    first = loader_module.load_packaged_rule_sets()
    second = loader_module.load_packaged_rule_sets()

    assert calls["count"] == 1
    assert first == second


def test_clear_rule_cache_forces_reload(monkeypatch: pytest.MonkeyPatch) -> None:
    loader_module.clear_rule_cache()
    calls = {"count": 0}
    original = loader_module.iter_rule_files

    def wrapped():
        calls["count"] += 1
        return original()

    monkeypatch.setattr(loader_module, "iter_rule_files", wrapped)

    loader_module.load_packaged_rule_sets()
    loader_module.clear_rule_cache()
    loader_module.load_packaged_rule_sets()

    assert calls["count"] == 2


def test_registries_from_package_do_not_share_state(rules) -> None:
    first = loader_module.RuleRegistry.from_package()
    second = loader_module.RuleRegistry.from_package()
    first.register(rules)

    assert "testville" in first
    assert "testville" not in second
    assert first.get("gothenburg") is second.get("gothenburg")
