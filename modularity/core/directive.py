"""Composition directives and the ``as_trait`` registration helper.

A trait file declares a holder class named by convention and stores one
directive on it:

    class BoxTraits:
        class ComparableTrait:
            @as_trait
            def directive(trait, field):
                @trait.define
                def compare_to(self, other):
                    ...
"""

from __future__ import annotations

import functools
from typing import Any, Callable, Optional

import structlog

from modularity.core.errors import DuplicateDirectiveError

logger = structlog.get_logger()

DIRECTIVE_SLOT = "__trait_directive__"


class TraitDirective:
    """A stored, deferred unit of behavior applied to a target class.

    The wrapped callable receives a TraitBuilder followed by the arguments
    passed to ``does``.
    """

    def __init__(self, func: Callable[..., Any]) -> None:
        self.func = func
        self.owner: Optional[type] = None
        functools.update_wrapper(self, func)

    def __set_name__(self, owner: type, name: str) -> None:
        if DIRECTIVE_SLOT in owner.__dict__ and owner.__dict__[DIRECTIVE_SLOT] is not self:
            raise DuplicateDirectiveError(owner.__qualname__)
        self.owner = owner
        setattr(owner, DIRECTIVE_SLOT, self)
        logger.debug(
            "trait_directive_registered",
            holder=owner.__qualname__,
            attribute=name,
            directive=self.func.__name__,
        )

    def __call__(self, builder: Any, *args: Any, **kwargs: Any) -> Any:
        return self.func(builder, *args, **kwargs)

    def __repr__(self) -> str:
        holder = self.owner.__qualname__ if self.owner else "unbound"
        return f"<TraitDirective {self.func.__name__} of {holder}>"


def as_trait(func: Callable[..., Any]) -> TraitDirective:
    """Declare ``func`` as the composition directive of the enclosing holder class."""
    if isinstance(func, TraitDirective):
        return func
    return TraitDirective(func)


def get_directive(holder: type) -> Optional[TraitDirective]:
    """Return the directive declared directly on ``holder``, or None.

    Inherited directives are ignored: each holder must declare its own.
    """
    directive = vars(holder).get(DIRECTIVE_SLOT)
    if isinstance(directive, TraitDirective):
        return directive
    return None
