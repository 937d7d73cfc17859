"""Core trait model — directives, builder, registry, naming."""

from modularity.core.builder import TraitBuilder
from modularity.core.directive import TraitDirective, as_trait, get_directive
from modularity.core.registry import TraitApplication, TraitRegistry

__all__ = ["TraitBuilder", "TraitDirective", "TraitApplication", "TraitRegistry", "as_trait", "get_directive"]
