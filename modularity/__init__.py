"""modularity — declarative trait inclusion for Python classes."""

from modularity.core.builder import TraitBuilder
from modularity.core.directive import TraitDirective, as_trait, get_directive
from modularity.core.errors import (
    DuplicateDirectiveError,
    InvalidTraitNameError,
    MissingDirectiveError,
    ModularityError,
    NameResolutionError,
    TraitLoadError,
)
from modularity.core.registry import TraitApplication, TraitRegistry
from modularity.does import Does, apply_trait, does
from modularity.loader.trait_loader import TraitLoader

__all__ = [
    "Does",
    "DuplicateDirectiveError",
    "InvalidTraitNameError",
    "MissingDirectiveError",
    "ModularityError",
    "NameResolutionError",
    "TraitApplication",
    "TraitBuilder",
    "TraitDirective",
    "TraitLoadError",
    "TraitLoader",
    "TraitRegistry",
    "apply_trait",
    "as_trait",
    "does",
    "get_directive",
]
