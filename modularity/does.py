"""Declarative trait inclusion for classes.

    @does("comparable", "weight")
    class Box:
        weight = 0

loads ``comparable_trait.py`` from the directory of the declaring file,
resolves ``BoxTraits.ComparableTrait`` and applies its directive to ``Box``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

from modularity.core.registry import TraitApplication
from modularity.loader import locator
from modularity.loader.trait_loader import TraitLoader, default_loader

T = TypeVar("T", bound=type)


def does(
    trait_name: str,
    *args: Any,
    search_path: Optional[str | Path] = None,
    loader: Optional[TraitLoader] = None,
    **kwargs: Any,
) -> Callable[[T], T]:
    """Class decorator including ``trait_name`` into the decorated class.

    The declaring file's directory is captured here, at the call site, and
    used when neither ``search_path`` nor configured search paths apply.

    ``search_path`` and ``loader`` are consumed here and never reach the
    directive, so directives cannot take keyword parameters with those names.
    """
    locator.validate_trait_name(trait_name)
    caller_dir = locator.caller_directory()
    trait_loader = loader or default_loader

    def decorator(cls: T) -> T:
        trait_loader.apply(cls, trait_name, *args, directory=search_path, caller_dir=caller_dir, **kwargs)
        return cls

    return decorator


def apply_trait(
    target: type,
    trait_name: str,
    *args: Any,
    search_path: Optional[str | Path] = None,
    loader: Optional[TraitLoader] = None,
    **kwargs: Any,
) -> TraitApplication:
    """Include ``trait_name`` into an existing class.

    Like ``does``, ``search_path`` and ``loader`` are not forwarded to the directive.
    """
    caller_dir = locator.caller_directory()
    trait_loader = loader or default_loader
    return trait_loader.apply(target, trait_name, *args, directory=search_path, caller_dir=caller_dir, **kwargs)


class Does:
    """Mixin giving classes a ``does`` classmethod."""

    @classmethod
    def does(
        cls,
        trait_name: str,
        *args: Any,
        search_path: Optional[str | Path] = None,
        loader: Optional[TraitLoader] = None,
        **kwargs: Any,
    ) -> TraitApplication:
        """Include ``trait_name`` into this class; see ``apply_trait``."""
        caller_dir = locator.caller_directory()
        trait_loader = loader or default_loader
        return trait_loader.apply(cls, trait_name, *args, directory=search_path, caller_dir=caller_dir, **kwargs)
