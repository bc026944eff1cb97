import pytest

from modplan.core.errors import (
    ConfigError,
    DuplicateDependency,
    InvalidModuleName,
    SelfDependency,
    UnrecognizedOption,
)
from modplan.core.modules.models import ModuleDescriptor, ModuleRecord
from modplan.core.modules.validator import validate, validate_record


def test_public_and_private_overlap_is_duplicate():
    d = ModuleDescriptor(name="A", public_dependencies=("X",), private_dependencies=("X",))
    with pytest.raises(DuplicateDependency) as ei:
        validate(d)
    assert ei.value.name == "X"
    assert ei.value.module == "A"


def test_duplicate_within_disabled_and_public():
    d = ModuleDescriptor(name="A", public_dependencies=("X",), disabled_dependencies=("X",))
    with pytest.raises(DuplicateDependency):
        validate(d)


def test_duplicates_compared_after_trimming():
    d = ModuleDescriptor(name="A", public_dependencies=("X", " X "))
    with pytest.raises(DuplicateDependency):
        validate(d)


@pytest.mark.parametrize("field", ["public_dependencies", "private_dependencies", "disabled_dependencies"])
def test_self_dependency_in_any_set(field):
    d = ModuleDescriptor(name="A", **{field: ("B", "A")})
    with pytest.raises(SelfDependency) as ei:
        validate(d)
    assert ei.value.name == "A"


def test_unrecognized_language_standard():
    d = ModuleDescriptor(name="A", language_standard="cpp98")
    with pytest.raises(UnrecognizedOption) as ei:
        validate(d)
    assert ei.value.option == "language_standard"
    assert ei.value.value == "cpp98"


def test_unrecognized_pch_mode():
    d = ModuleDescriptor(name="A", pch_mode="sometimes")
    with pytest.raises(UnrecognizedOption) as ei:
        validate(d)
    assert ei.value.option == "pch_mode"


def test_empty_name_rejected():
    with pytest.raises(InvalidModuleName):
        validate(ModuleDescriptor(name="   "))


def test_engine_spellings_are_normalized():
    d = ModuleDescriptor(
        name="A",
        language_standard="CppStandardVersion.Cpp20",
        pch_mode="PCHUsageMode.UseExplicitOrSharedPCHs",
    )
    v = validate(d)
    assert v.language_standard == "cpp20"
    assert v.pch_mode == "explicit_or_shared"

    assert validate(ModuleDescriptor(name="B", pch_mode="NoPCHs")).pch_mode == "disabled"
    assert validate(ModuleDescriptor(name="C", pch_mode="explicitOrShared")).pch_mode == "explicit_or_shared"
    assert validate(ModuleDescriptor(name="D", language_standard="C++17")).language_standard == "cpp17"


def test_normalizes_names_and_drops_blanks_preserving_order():
    d = ModuleDescriptor(
        name=" A ",
        public_dependencies=(" Core", "", "Engine "),
        private_dependencies=("Slate",),
        disabled_dependencies=("  ", "Niagara"),
    )
    v = validate(d)
    assert v.name == "A"
    assert v.public_dependencies == ("Core", "Engine")
    assert v.private_dependencies == ("Slate",)
    assert v.disabled_dependencies == ("Niagara",)


def test_validate_is_idempotent():
    d = ModuleDescriptor(
        name="A",
        language_standard="Cpp20",
        pch_mode="UseSharedPCHs",
        public_dependencies=(" B", "C"),
        private_dependencies=("D ",),
        disabled_dependencies=("E",),
    )
    once = validate(d)
    assert validate(once) == once


def test_validate_does_not_modify_input():
    d = ModuleDescriptor(name=" A", public_dependencies=(" B",))
    validate(d)
    assert d.name == " A"
    assert d.public_dependencies == (" B",)


def test_validate_record_accepts_mapping_with_groups():
    v = validate_record({
        "name": "Game",
        "public_dependencies": [{"group": "Engine", "modules": ["Core", "Engine"]}, "SML"],
    })
    assert v.public_dependencies == ("Core", "Engine", "SML")


def test_validate_record_schema_error_is_config_error():
    with pytest.raises(ConfigError):
        validate_record({"name": "A", "public_dependencies": "Core"})


def test_validate_record_accepts_model():
    v = validate_record(ModuleRecord(name="A", private_dependencies=["B"]))
    assert v.private_dependencies == ("B",)


def test_error_to_dict_carries_context():
    with pytest.raises(DuplicateDependency) as ei:
        validate(ModuleDescriptor(name="A", public_dependencies=("X", "X")))
    out = ei.value.to_dict()
    assert out["error"] == "config.duplicate_dependency"
    assert out["name"] == "X"
    assert out["module"] == "A"
