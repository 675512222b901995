from __future__ import annotations

from dataclasses import fields, replace
from typing import Any, Dict, TypeVar

T = TypeVar("T")


def changes(patch: Any) -> Dict[str, Any]:
    """Fields the caller actually supplied (``None`` means "leave unchanged")."""
    return {f.name: getattr(patch, f.name) for f in fields(patch) if getattr(patch, f.name) is not None}


def apply_patch(entity: T, patch: Any, **extra: Any) -> T:
    """Return a copy of ``entity`` with only the present patch fields applied."""
    values = changes(patch)
    values.update(extra)
    return replace(entity, **values)
