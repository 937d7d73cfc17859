"""Trait loader: load a trait file once, resolve its holder, apply its directive."""

from __future__ import annotations

import hashlib
import importlib.util
import sys
import threading
import types
from pathlib import Path
from typing import Any, Optional

import structlog

from modularity.config import Settings, get_settings
from modularity.core.builder import TraitBuilder
from modularity.core.directive import TraitDirective, get_directive
from modularity.core.errors import MissingDirectiveError, NameResolutionError, TraitLoadError
from modularity.core.inflector import resolve_dotted
from modularity.core.registry import TraitApplication, TraitRegistry, default_registry
from modularity.loader import locator

logger = structlog.get_logger()


def module_name_for(path: Path, registry: TraitRegistry) -> str:
    """Stable module name for a trait file path, scoped to one registry.

    Loaders sharing a registry share the module; loaders with separate
    registries never overwrite each other's ``sys.modules`` entry.
    """
    digest = hashlib.sha1(f"{id(registry)}:{path}".encode("utf-8")).hexdigest()[:10]
    return f"modularity_trait_{path.stem}_{digest}"


class TraitLoader:
    """Loads trait files and applies their directives to classes.

    Each trait file is executed at most once per registry. Holder resolution
    and directive application run on every call, so applying a trait twice
    redefines its members.
    """

    def __init__(
        self,
        registry: Optional[TraitRegistry] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        """Initialize the loader.

        Args:
            registry: TraitRegistry recording loads and applications.
            settings: Naming and lookup settings; defaults to get_settings().
        """
        self._registry = registry if registry is not None else default_registry
        self._settings = settings
        # Reentrant: a trait file may declare classes with @does while it loads
        self._lock = threading.RLock()
        self._loading: dict[str, types.ModuleType] = {}

    @property
    def registry(self) -> TraitRegistry:
        return self._registry

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    def load(self, path: Path, trait_name: str = "") -> types.ModuleType:
        """Execute a trait file as a module, or return it if already loaded.

        A file that loads itself again while executing gets the module being
        built, as ``import`` does for circular imports.

        Raises:
            TraitLoadError: The file does not exist or raised while executing.
        """
        key = str(path.resolve())
        with self._lock:
            module = self._registry.get_module(key) or self._loading.get(key)
            if module is not None:
                logger.debug("trait_module_cached", trait_name=trait_name, path=key)
                return module

            if not path.is_file():
                logger.error("trait_file_not_found", trait_name=trait_name, path=key)
                raise TraitLoadError(f"Cannot load trait {trait_name}: {key} not found", trait_name, key)

            module_name = module_name_for(Path(key), self._registry)
            spec = importlib.util.spec_from_file_location(module_name, key)
            if not spec or not spec.loader:
                logger.error("trait_module_spec_failed", trait_name=trait_name, path=key)
                raise TraitLoadError(f"Cannot create module spec for {key}", trait_name, key)

            module = importlib.util.module_from_spec(spec)
            sys.modules[module_name] = module
            self._loading[key] = module
            try:
                spec.loader.exec_module(module)
            except Exception as exc:
                # Never cache a half-executed module
                sys.modules.pop(module_name, None)
                logger.error(
                    "trait_module_load_failed",
                    trait_name=trait_name,
                    path=key,
                    error=str(exc),
                    error_type=type(exc).__name__,
                )
                raise TraitLoadError(f"Error while loading trait {trait_name} from {key}: {exc}",
                                     trait_name, key) from exc
            finally:
                self._loading.pop(key, None)

            self._registry.record_load(key, module)
            logger.info("trait_module_loaded", trait_name=trait_name, path=key, module=module_name)
            return module

    def forget(self, path: Path) -> bool:
        """Drop a loaded trait file so the next application re-executes it."""
        key = str(path.resolve())
        with self._lock:
            module = self._registry.get_module(key)
            if module is not None:
                sys.modules.pop(module.__name__, None)
            return self._registry.forget_load(key)

    def loaded_paths(self) -> list[str]:
        return self._registry.loaded_paths()

    def resolve(self, target: type, trait_name: str, module: types.ModuleType) -> type:
        """Find the holder type for ``trait_name`` on ``target``.

        Looks in the trait module first, then in the target's own module.

        Raises:
            NameResolutionError: Neither namespace declares the holder.
        """
        name = locator.holder_name(target, trait_name, self.settings)
        holder = resolve_dotted(module, name)
        if holder is None:
            target_module = sys.modules.get(target.__module__)
            if target_module is not None:
                holder = resolve_dotted(target_module, name)

        if not isinstance(holder, type):
            logger.error(
                "trait_holder_unresolved",
                trait_name=trait_name,
                holder_name=name,
                trait_module=module.__name__,
            )
            raise NameResolutionError(name, trait_name)
        return holder

    def directive_for(self, holder: type, trait_name: str) -> TraitDirective:
        """Return the holder's directive.

        Raises:
            MissingDirectiveError: The holder never declared one.
        """
        directive = get_directive(holder)
        if directive is None:
            logger.error("trait_directive_missing", trait_name=trait_name, holder=holder.__qualname__)
            raise MissingDirectiveError(trait_name)
        return directive

    def apply(
        self,
        target: type,
        trait_name: str,
        *args: Any,
        directory: Optional[str | Path] = None,
        caller_dir: Optional[Path] = None,
        **kwargs: Any,
    ) -> TraitApplication:
        """Load, resolve and apply ``trait_name`` to ``target``.

        Nested includes are staged with it; if any directive or include
        fails, nothing is committed to ``target``.

        Args:
            target: Class receiving the trait's members.
            trait_name: snake_case trait name.
            *args: Forwarded to the directive after the builder.
            directory: Explicit directory holding the trait file.
            caller_dir: Directory of the declaring file, used when no
                explicit or configured directory applies.
            **kwargs: Forwarded to the directive.

        Returns:
            The recorded TraitApplication.
        """
        staged = self._stage(target, trait_name, args, kwargs, directory, caller_dir)

        # Every directive, nested includes too, ran without error: commit them all
        applications = []
        for builder, path, staged_args, staged_kwargs in staged:
            members = builder.commit()
            application = TraitApplication(
                trait_name=builder.trait_name,
                target=target,
                holder_name=locator.holder_name(target, builder.trait_name, self.settings),
                source_path=str(path),
                members=members,
                args=staged_args,
                kwargs=dict(staged_kwargs),
            )
            self._registry.record_application(application)
            applied = vars(target).get("__traits__", ())
            if builder.trait_name not in applied:
                target.__traits__ = (*applied, builder.trait_name)
            applications.append(application)

            logger.info(
                "trait_applied",
                trait_name=builder.trait_name,
                target=target.__qualname__,
                members=members,
            )

        return applications[0]

    def _stage(
        self,
        target: type,
        trait_name: str,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
        directory: Optional[str | Path],
        caller_dir: Optional[Path],
    ) -> list[tuple[TraitBuilder, Path, tuple[Any, ...], dict[str, Any]]]:
        """Run a directive and its nested includes into uncommitted builders."""
        locator.validate_trait_name(trait_name)
        directories = locator.search_directories(directory, caller_dir, self.settings)
        path = locator.locate_trait_file(trait_name, directories, self.settings)

        module = self.load(path, trait_name)
        holder = self.resolve(target, trait_name, module)
        directive = self.directive_for(holder, trait_name)

        builder = TraitBuilder(target, trait_name)
        directive(builder, *args, **kwargs)

        staged = [(builder, path, args, kwargs)]
        # Traits included from inside the directive share its directory
        for nested_name, nested_args, nested_kwargs in builder.includes:
            staged.extend(self._stage(target, nested_name, nested_args, nested_kwargs, path.parent, None))
        return staged


default_loader = TraitLoader()
