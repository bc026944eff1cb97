"""
Module descriptor file loader.

A descriptor file is YAML or JSON and holds either one module mapping or a
list under "modules":

    name: Th3WwiseBrowser
    language_standard: Cpp20
    pch_mode: UseExplicitOrSharedPCHs
    public_dependencies:
      - group: Engine
        modules: [Core, CoreUObject, Engine]
      - SML
    disabled_dependencies: [OnlineSubsystem, Niagara]

Every *.yaml / *.yml / *.json file in the modules directory is loaded in
sorted order. Bad files and rejected modules are reported as warnings and
skipped; the remaining modules are still registered.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml
from pydantic import ValidationError

from modplan.core.errors import DescriptorFileError

from .models import ModuleRecord
from .registry import ModuleRegistry

_log = logging.getLogger("modplan.loader")

DESCRIPTOR_SUFFIXES = (".yaml", ".yml", ".json")


def _parse_text(path: Path, raw_text: str) -> Any:
    # JSON first, YAML otherwise
    try:
        return json.loads(raw_text)
    except json.JSONDecodeError:
        pass
    try:
        return yaml.safe_load(raw_text)
    except yaml.YAMLError as exc:
        raise DescriptorFileError(str(path), f"not valid JSON or YAML ({exc.__class__.__name__})") from exc


def load_module_records(path: Path) -> List[ModuleRecord]:
    path = Path(path)
    try:
        raw_text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise DescriptorFileError(str(path), f"not valid UTF-8 (byte {exc.start})") from exc
    except OSError as exc:
        raise DescriptorFileError(str(path), f"unreadable ({exc})") from exc

    data = _parse_text(path, raw_text)

    if isinstance(data, dict) and "modules" in data:
        entries = data["modules"]
        if not isinstance(entries, list):
            raise DescriptorFileError(str(path), "'modules' must be a list")
    elif isinstance(data, dict):
        entries = [data]
    else:
        raise DescriptorFileError(str(path), f"expected a mapping, got {type(data).__name__}")

    records: List[ModuleRecord] = []
    for i, entry in enumerate(entries):
        try:
            records.append(ModuleRecord.model_validate(entry))
        except ValidationError as exc:
            raise DescriptorFileError(str(path), f"entry {i}: {exc.error_count()} schema error(s)") from exc
    return records


def descriptor_files(modules_dir: Path) -> List[Path]:
    return sorted(p for p in Path(modules_dir).iterdir() if p.is_file() and p.suffix.lower() in DESCRIPTOR_SUFFIXES)


def load_registry(modules_dir: Path) -> Tuple[ModuleRegistry, List[Dict[str, Any]]]:
    """
    Returns (frozen_registry, warnings). Never raises for a single bad file
    or module; those are skipped with a warning.
    """
    modules_dir = Path(modules_dir)
    registry = ModuleRegistry()
    warnings: List[Dict[str, Any]] = []

    if not modules_dir.is_dir():
        _log.warning("Modules directory %s not found; registry is empty", modules_dir)
        warnings.append({
            "code": "modules.dir_missing",
            "severity": "warn",
            "message": f"No modules directory found at {modules_dir}",
            "data": {"path": str(modules_dir)},
        })
        registry.freeze()
        return registry, warnings

    for path in descriptor_files(modules_dir):
        try:
            records = load_module_records(path)
        except DescriptorFileError as exc:
            _log.warning("Skipping descriptor file %s: %s", path, exc.reason)
            warnings.append({
                "code": "modules.file_invalid",
                "severity": "warn",
                "message": str(exc),
                "data": {"path": str(path)},
            })
            continue

        for _name, err in registry.register_all(r.to_descriptor() for r in records):
            warnings.append({
                "code": "modules.rejected",
                "severity": "warn",
                "message": str(err),
                "data": {"path": str(path), **err.to_dict()},
            })

    registry.freeze()
    _log.info("Loaded %d modules from %s (%d warnings)", len(registry), modules_dir, len(warnings))
    return registry, warnings
