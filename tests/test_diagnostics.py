from modplan.core.modules.diagnostics import diagnose

from conftest import make_registry, mod


def _codes(findings):
    return [(f.code, f.data.get("dependency")) for f in findings]


def test_disabled_dependencies_reported():
    reg = make_registry(mod("A", disabled=["Niagara", "Ghost"]), mod("Niagara"))
    findings = diagnose(reg.lookup("A"), reg)
    assert ("module.disabled_available", "Niagara") in _codes(findings)
    assert ("module.disabled_unknown", "Ghost") in _codes(findings)


def test_redundant_dependency_via_public_closure():
    reg = make_registry(
        mod("Game", public=["Core", "Engine"]),
        mod("Engine", public=["CoreUObject"]),
        mod("CoreUObject", public=["Core"]),
        mod("Core"),
    )
    findings = diagnose(reg.lookup("Game"), reg)
    redundant = [f for f in findings if f.code == "module.redundant_dependency"]
    assert len(redundant) == 1
    assert redundant[0].data["dependency"] == "Core"
    assert redundant[0].data["via"] == ["Engine"]


def test_private_dependency_does_not_make_redundant():
    reg = make_registry(
        mod("Game", public=["Core", "Engine"]),
        mod("Engine", private=["Core"]),
        mod("Core"),
    )
    assert diagnose(reg.lookup("Game"), reg) == []


def test_diagnose_tolerates_cycles_and_missing_modules():
    reg = make_registry(
        mod("Game", public=["A", "Missing"]),
        mod("A", public=["B"]),
        mod("B", public=["A"]),
    )
    findings = diagnose(reg.lookup("Game"), reg)
    assert all(f.code != "module.disabled_unknown" for f in findings)
