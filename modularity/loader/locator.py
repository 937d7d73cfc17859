"""Where a trait lives: source file paths and holder names.

The naming convention:

    trait ``t`` on class ``C`` → file ``<dir>/<t>_trait.py``
                               → holder ``<C>Traits.<Camelize(t)>Trait``
"""

from __future__ import annotations

import inspect
import keyword
from pathlib import Path
from typing import Optional

import structlog

from modularity.config import Settings, get_settings
from modularity.core.errors import InvalidTraitNameError, TraitLoadError
from modularity.core.inflector import camelize

logger = structlog.get_logger()

_LOCALS_MARKER = "<locals>."


def validate_trait_name(trait_name: str) -> str:
    """Return ``trait_name`` if every path segment is a valid identifier."""
    if not isinstance(trait_name, str) or not trait_name:
        raise InvalidTraitNameError(f"Trait name must be a non-empty string, got {trait_name!r}")
    for segment in trait_name.split("/"):
        if not segment.isidentifier() or keyword.iskeyword(segment):
            raise InvalidTraitNameError(f"Invalid trait name {trait_name!r}")
    return trait_name


def caller_directory(depth: int = 1) -> Optional[Path]:
    """Directory of the source file ``depth`` frames above the caller.

    Returns None when the frame has no backing file (REPL, exec).
    """
    frame = inspect.currentframe()
    try:
        target = frame.f_back if frame else None
        for _ in range(depth):
            target = target.f_back if target else None
        if target is None:
            return None
        filename = target.f_code.co_filename
    finally:
        del frame
    if not filename or filename.startswith("<"):
        return None
    return Path(filename).resolve().parent


def search_directories(
    explicit: Optional[str | Path],
    caller_dir: Optional[Path],
    settings: Optional[Settings] = None,
) -> list[Path]:
    """Directories to look in, in priority order.

    An explicit path wins; otherwise configured search paths; otherwise the
    caller's directory if introspection is enabled.
    """
    settings = settings or get_settings()
    if explicit is not None:
        return [Path(explicit)]
    configured = [Path(p) for p in settings.search_path_list]
    if configured:
        return configured
    if settings.caller_introspection and caller_dir is not None:
        return [caller_dir]
    return []


def trait_file_name(trait_name: str, settings: Optional[Settings] = None) -> str:
    settings = settings or get_settings()
    return f"{trait_name}{settings.trait_file_suffix}.py"


def locate_trait_file(
    trait_name: str,
    directories: list[Path],
    settings: Optional[Settings] = None,
) -> Path:
    """Find the trait's source file in the first directory that has it.

    Raises:
        TraitLoadError: No directory holds the file.
    """
    file_name = trait_file_name(trait_name, settings)
    for directory in directories:
        candidate = (directory / file_name).resolve()
        if candidate.is_file():
            return candidate

    searched = [str(d) for d in directories]
    logger.error("trait_file_not_found", trait_name=trait_name, file_name=file_name, searched=searched)
    if not directories:
        raise TraitLoadError(
            f"No search path for trait {trait_name}: pass search_path or enable caller introspection",
            trait_name,
        )
    raise TraitLoadError(
        f"Cannot load trait {trait_name}: {file_name} not found in {', '.join(searched)}",
        trait_name,
        str(directories[0] / file_name),
    )


def target_name(target: type) -> str:
    """Qualified name of ``target`` with any function-scope prefix removed."""
    qualname = target.__qualname__
    if _LOCALS_MARKER in qualname:
        qualname = qualname.rsplit(_LOCALS_MARKER, 1)[1]
    return qualname


def holder_name(target: type, trait_name: str, settings: Optional[Settings] = None) -> str:
    """Dotted name of the type expected to hold the trait's directive."""
    settings = settings or get_settings()
    return f"{target_name(target)}{settings.namespace_suffix}.{camelize(trait_name)}{settings.holder_suffix}"
