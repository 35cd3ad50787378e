"""Module Registry - immutable key -> ComputeModule mapping built at startup.

Invariants:
    - Contents fixed at construction; no mutation API (MappingProxyType)
    - Duplicate keys rejected at construction (DuplicateModuleError)
    - get() returns None for unknown keys; require() raises UnknownModuleError
    - Any number of registries may coexist (tests build their own)

Design Decisions:
    - Explicit imports from each define_*_modules.py: no auto-discovery
"""

from collections.abc import Iterable, Iterator
from types import MappingProxyType

from formula_engine.core.errors import (
    DuplicateModuleError,
    ErrorContext,
    UnknownModuleError,
)
from formula_engine.services.compute_module import ComputeModule
from formula_engine.services.define_filter_modules import FILTER_MODULES
from formula_engine.services.define_generator_modules import GENERATOR_MODULES
from formula_engine.services.define_pipeline_modules import PIPELINE_MODULES
from formula_engine.services.define_static_modules import STATIC_MODULES


class ModuleRegistry:
    """Read-only lookup of compute modules by key."""

    def __init__(self, modules: Iterable[ComputeModule]):
        table: dict[str, ComputeModule] = {}
        for module in modules:
            if module.key in table:
                raise DuplicateModuleError(module.key)
            table[module.key] = module
        self._modules = MappingProxyType(table)

    def get(self, key: str) -> ComputeModule | None:
        return self._modules.get(key)

    def require(self, key: str, context: ErrorContext | None = None) -> ComputeModule:
        module = self._modules.get(key)
        if module is None:
            raise UnknownModuleError(key, context)
        return module

    def keys(self) -> list[str]:
        return list(self._modules)

    def list_modules(self) -> list[ComputeModule]:
        return list(self._modules.values())

    def __contains__(self, key: object) -> bool:
        return key in self._modules

    def __iter__(self) -> Iterator[str]:
        return iter(self._modules)

    def __len__(self) -> int:
        return len(self._modules)


def build_default_registry() -> ModuleRegistry:
    """Registry holding every built-in module."""
    return ModuleRegistry([
        *GENERATOR_MODULES,     # digits-group, z-master-universal-v1, permutation-2d
        *STATIC_MODULES,        # static-group
        *FILTER_MODULES,        # filter-exclude
        *PIPELINE_MODULES,      # pipeline-runner
    ])
