"""Builder that collects a trait's members before committing them to a class."""

from __future__ import annotations

import types
from typing import Any, Callable, Optional

import structlog

logger = structlog.get_logger()


class TraitBuilder:
    """Mutable descriptor of a target class.

    A directive appends definitions here; nothing touches the target until
    ``commit()`` runs, so a directive that raises leaves the class as it was.
    """

    def __init__(self, target: type, trait_name: str = "") -> None:
        """Initialize the builder.

        Args:
            target: The class receiving the trait's members.
            trait_name: Name of the trait being applied, for logging.
        """
        self.target = target
        self.trait_name = trait_name
        self.members: dict[str, Any] = {}
        self.includes: list[tuple[str, tuple[Any, ...], dict[str, Any]]] = []

    def define(self, name_or_value: Any, value: Any = None) -> Any:
        """Queue a member definition.

        Accepts ``define("name", value)`` or ``define(func)``, which also
        makes it usable as a decorator. Returns the defined value.
        """
        if isinstance(name_or_value, str):
            self.members[name_or_value] = value
            return value
        name = getattr(name_or_value, "__name__", None)
        if name is None:
            # classmethod, staticmethod and property wrap the function
            inner = getattr(name_or_value, "__func__", None) or getattr(name_or_value, "fget", None)
            name = getattr(inner, "__name__", None)
        if not name:
            raise TypeError(f"Cannot infer a member name from {name_or_value!r}")
        self.members[name] = name_or_value
        return name_or_value

    def define_classmethod(self, func: Callable[..., Any]) -> Callable[..., Any]:
        self.members[func.__name__] = classmethod(func)
        return func

    def define_staticmethod(self, func: Callable[..., Any]) -> Callable[..., Any]:
        self.members[func.__name__] = staticmethod(func)
        return func

    def define_property(self, fget: Callable[..., Any],
                        fset: Optional[Callable[..., Any]] = None) -> property:
        prop = property(fget, fset)
        self.members[fget.__name__] = prop
        return prop

    def attribute(self, name: str, default: Any = None) -> None:
        """Queue a plain class attribute."""
        self.members[name] = default

    def does(self, trait_name: str, *args: Any, **kwargs: Any) -> None:
        """Include another trait once this one has been committed."""
        self.includes.append((trait_name, args, kwargs))

    def commit(self) -> list[str]:
        """Set every queued member on the target class.

        Plain functions are copied and the copy renamed into the target's
        namespace, so a function shared between targets keeps its name. Other
        descriptors get ``__set_name__`` called, as class creation would.

        Returns:
            Names of the committed members, in definition order.
        """
        for name, value in self.members.items():
            if isinstance(value, types.FunctionType):
                value = _copy_function(value, f"{self.target.__qualname__}.{name}", self.target.__module__)
            setattr(self.target, name, value)
            set_name = getattr(type(value), "__set_name__", None)
            if set_name is not None:
                set_name(value, self.target, name)

        committed = list(self.members)
        logger.debug(
            "trait_members_committed",
            trait_name=self.trait_name,
            target=self.target.__qualname__,
            members=committed,
        )
        return committed


def _copy_function(func: types.FunctionType, qualname: str, module: str) -> types.FunctionType:
    """Copy ``func`` under a new qualified name, leaving the original untouched."""
    copy = types.FunctionType(func.__code__, func.__globals__, func.__name__, func.__defaults__, func.__closure__)
    copy.__kwdefaults__ = func.__kwdefaults__
    copy.__dict__.update(func.__dict__)
    copy.__doc__ = func.__doc__
    copy.__annotations__ = dict(func.__annotations__)
    copy.__qualname__ = qualname
    copy.__module__ = module
    return copy
