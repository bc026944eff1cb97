from pathlib import Path
from typing import Iterable

import pytest
from fastapi.testclient import TestClient

from modplan.api.main import app
from modplan.core.modules.models import ModuleDescriptor
from modplan.core.modules.registry import ModuleRegistry

REPO_ROOT = Path(__file__).resolve().parents[1]


def make_registry(*descriptors: ModuleDescriptor) -> ModuleRegistry:
    return ModuleRegistry.from_descriptors(descriptors)


def mod(name: str, public: Iterable[str] = (), private: Iterable[str] = (), disabled: Iterable[str] = ()) -> ModuleDescriptor:
    return ModuleDescriptor(
        name=name,
        public_dependencies=tuple(public),
        private_dependencies=tuple(private),
        disabled_dependencies=tuple(disabled),
    )


@pytest.fixture()
def client():
    return TestClient(app)


@pytest.fixture()
def modules_dir(tmp_path: Path, monkeypatch):
    """
    Empty descriptor directory wired in through MODPLAN_MODULES_DIR.
    """
    d = tmp_path / "modules"
    d.mkdir()
    monkeypatch.setenv("MODPLAN_MODULES_DIR", str(d))
    return d


@pytest.fixture()
def shipped_modules_dir(monkeypatch):
    d = REPO_ROOT / "modules"
    monkeypatch.setenv("MODPLAN_MODULES_DIR", str(d))
    return d
