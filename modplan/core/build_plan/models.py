from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Set, Tuple

Edge = Tuple[str, str]  # (dependent, dependency)


@dataclass(frozen=True)
class ModuleSettings:
    language_standard: str
    pch_mode: str


@dataclass(frozen=True)
class BuildPlan:
    root: str
    order: Tuple[str, ...]
    public_edges: Tuple[Edge, ...] = ()
    private_edges: Tuple[Edge, ...] = ()
    settings: Dict[str, ModuleSettings] = field(default_factory=dict)
    registry_fingerprint: str = ""

    def dependencies_of(self, name: str) -> List[str]:
        """Direct dependencies of a planned module, public first."""
        pub = [dep for src, dep in self.public_edges if src == name]
        priv = [dep for src, dep in self.private_edges if src == name]
        return pub + priv

    def visible_modules(self, name: str) -> List[str]:
        """Modules whose interface `name` sees.

        Direct dependencies (public and private) plus, transitively, the
        public dependencies of anything visible. Ordered as first reached.
        """
        public: Dict[str, List[str]] = {}
        for src, dep in self.public_edges:
            public.setdefault(src, []).append(dep)

        out: List[str] = []
        seen: Set[str] = set()
        queue = self.dependencies_of(name)
        while queue:
            current = queue.pop(0)
            if current in seen:
                continue
            seen.add(current)
            out.append(current)
            queue.extend(public.get(current, []))
        return out

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root": self.root,
            "order": list(self.order),
            "public_edges": [list(e) for e in self.public_edges],
            "private_edges": [list(e) for e in self.private_edges],
            "settings": {
                name: {"language_standard": s.language_standard, "pch_mode": s.pch_mode}
                for name, s in self.settings.items()
            },
            "registry_fingerprint": self.registry_fingerprint,
        }

    def compute_plan_id(self) -> str:
        payload = self.to_dict()
        return hashlib.sha256(json.dumps(payload, sort_keys=True).encode("utf-8")).hexdigest()
