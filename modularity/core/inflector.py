"""String inflections used by the trait naming convention."""

from __future__ import annotations

from typing import Any, Optional

_MISSING = object()


def camelize(name: str) -> str:
    """Convert a snake_case trait name to CamelCase.

    Path separators become dots so nested names stay addressable.

    Examples:
        comparable       → Comparable
        soft_deletable   → SoftDeletable
        admin/user_role  → Admin.UserRole
    """
    parts = []
    for segment in name.split("/"):
        words = [w for w in segment.split("_") if w]
        parts.append("".join(w[:1].upper() + w[1:] for w in words))
    return ".".join(parts)


def resolve_dotted(root: Any, dotted: str) -> Optional[Any]:
    """Walk a dotted attribute path starting at ``root``.

    ``root`` may be a module, a class or a plain namespace dict. Returns
    None when any segment is missing.
    """
    current = root
    for index, segment in enumerate(dotted.split(".")):
        if index == 0 and isinstance(current, dict):
            current = current.get(segment, _MISSING)
        else:
            current = getattr(current, segment, _MISSING)
        if current is _MISSING:
            return None
    return current
