"""Exceptions raised while declaring and applying traits."""

from __future__ import annotations

from typing import Optional


class ModularityError(Exception):
    """Base class for every error raised by modularity."""


class InvalidTraitNameError(ModularityError, ValueError):
    """The trait name is empty or not a usable identifier."""


class TraitLoadError(ModularityError, ImportError):
    """The trait source file is missing or failed while executing."""

    def __init__(self, message: str, trait_name: str, path: Optional[str] = None) -> None:
        super().__init__(message, name=trait_name, path=path)
        self.trait_name = trait_name


class NameResolutionError(ModularityError, NameError):
    """The conventional holder name does not resolve to a declared type."""

    def __init__(self, holder_name: str, trait_name: str) -> None:
        super().__init__(f"Unresolved trait holder {holder_name} for trait {trait_name}")
        self.holder_name = holder_name
        self.trait_name = trait_name


class MissingDirectiveError(ModularityError):
    """The holder type exists but never declared a directive."""

    def __init__(self, trait_name: str) -> None:
        super().__init__(f"Missing trait directive in {trait_name}")
        self.trait_name = trait_name


class DuplicateDirectiveError(ModularityError):
    """A holder type tried to declare a second directive."""

    def __init__(self, holder_name: str) -> None:
        super().__init__(f"Trait holder {holder_name} already declares a directive")
        self.holder_name = holder_name
