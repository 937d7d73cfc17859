"""Process-wide record of loaded trait files and trait applications.

The registry uses atomic dict replacement so readers always see a
consistent snapshot while classes are being declared.
"""

from __future__ import annotations

import time
import types
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Optional

import structlog

logger = structlog.get_logger()


@dataclass
class TraitApplication:
    """One successful application of a trait to a class.

    Attributes:
        trait_name: Trait name as passed to ``does``
        target: The class that received the members
        holder_name: Dotted name of the directive holder
        source_path: Trait file the holder was loaded from
        members: Names of the members committed to the target
        args: Positional arguments forwarded to the directive
        kwargs: Keyword arguments forwarded to the directive
        timestamp: Unix timestamp of the application
    """

    trait_name: str
    target: type
    holder_name: str
    source_path: str
    members: list[str] = field(default_factory=list)
    args: tuple[Any, ...] = ()
    kwargs: dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)


class TraitRegistry:
    """Registry of trait modules loaded from disk and of applied traits."""

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._modules: dict[str, types.ModuleType] = {}
        self._applications: list[TraitApplication] = []
        self._usage_counter: Counter[str] = Counter()
        # Monotonically increasing; increments on every change.
        self._version: int = 0

    @property
    def version(self) -> int:
        """Registry mutation counter — use this to detect any change."""
        return self._version

    def record_load(self, path: str, module: types.ModuleType) -> None:
        """Remember that ``path`` was executed as ``module``."""
        new_modules = self._modules.copy()
        new_modules[path] = module
        self._modules = new_modules
        self._version += 1
        logger.debug("trait_module_recorded", path=path, module=module.__name__)

    def forget_load(self, path: str) -> bool:
        """Drop a loaded module so the next load re-executes the file.

        Returns:
            True if the path was known, False otherwise.
        """
        if path not in self._modules:
            return False
        new_modules = self._modules.copy()
        del new_modules[path]
        self._modules = new_modules
        self._version += 1
        logger.info("trait_module_forgotten", path=path)
        return True

    def get_module(self, path: str) -> Optional[types.ModuleType]:
        return self._modules.get(path)

    def is_loaded(self, path: str) -> bool:
        return path in self._modules

    def loaded_paths(self) -> list[str]:
        """Paths of all trait files loaded so far, in load order."""
        return list(self._modules)

    def record_application(self, application: TraitApplication) -> None:
        """Record a committed trait application."""
        self._applications = [*self._applications, application]
        self._usage_counter[application.trait_name] += 1
        self._version += 1

    def applications_for(self, target: type) -> list[TraitApplication]:
        """All applications recorded for ``target``, oldest first."""
        return [app for app in self._applications if app.target is target]

    def usage_stats(self) -> dict[str, int]:
        """Mapping of trait name to the number of times it was applied."""
        return dict(self._usage_counter)

    def most_common_trait(self) -> Optional[str]:
        """Name of the most frequently applied trait, or None."""
        if not self._usage_counter:
            return None
        return self._usage_counter.most_common(1)[0][0]

    def clear(self) -> None:
        """Forget every load and application."""
        self._modules = {}
        self._applications = []
        self._usage_counter.clear()
        self._version += 1
        logger.info("trait_registry_cleared")


default_registry = TraitRegistry()
