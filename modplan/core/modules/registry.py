from __future__ import annotations

import hashlib
import json
import logging
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

from modplan.core.errors import ConfigError, DuplicateModule, RegistryFrozen, ResolveError

from .models import ModuleDescriptor
from .validator import validate

log = logging.getLogger("modplan.registry")

Rejection = Tuple[str, Union[ConfigError, ResolveError]]


class ModuleRegistry:
    """Name -> validated ModuleDescriptor.

    Populated once, then frozen. Reads never mutate, so a frozen registry can
    be shared by concurrent resolutions without locking.
    """

    def __init__(self):
        self._modules: Dict[str, ModuleDescriptor] = {}
        self._frozen = False
        self._fingerprint: Optional[str] = None

    @classmethod
    def from_descriptors(cls, descriptors: Iterable[ModuleDescriptor]) -> "ModuleRegistry":
        reg = cls()
        for d in descriptors:
            reg.register(d)
        reg.freeze()
        return reg

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def fingerprint(self) -> str:
        if self._fingerprint is None or not self._frozen:
            self._fingerprint = self._compute_fingerprint()
        return self._fingerprint

    def freeze(self) -> None:
        self._frozen = True
        self._fingerprint = None

    def register(self, descriptor: ModuleDescriptor) -> ModuleDescriptor:
        """Validate and insert a descriptor; returns the stored (normalized) copy."""
        if self._frozen:
            raise RegistryFrozen(str(descriptor.name))
        valid = validate(descriptor)
        if valid.name in self._modules:
            raise DuplicateModule(valid.name)
        self._modules[valid.name] = valid
        return valid

    def register_all(self, descriptors: Iterable[ModuleDescriptor]) -> List[Rejection]:
        """Register each descriptor independently; returns the rejected ones."""
        rejected: List[Rejection] = []
        for d in descriptors:
            try:
                self.register(d)
            except (ConfigError, ResolveError) as e:
                log.warning("Rejected module %r: %s", d.name, e)
                rejected.append((str(d.name), e))
        return rejected

    def lookup(self, name: str) -> Optional[ModuleDescriptor]:
        return self._modules.get(name)

    def names(self) -> List[str]:
        return sorted(self._modules.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._modules

    def __len__(self) -> int:
        return len(self._modules)

    def __iter__(self) -> Iterator[ModuleDescriptor]:
        for name in self.names():
            yield self._modules[name]

    def _compute_fingerprint(self) -> str:
        h = hashlib.sha256()
        for d in self:
            h.update(json.dumps(d.to_dict(), sort_keys=True).encode("utf-8"))
            h.update(b"\0")
        return h.hexdigest()[:16]
