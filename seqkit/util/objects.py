from __future__ import annotations

from collections.abc import Collection, Mapping
from types import ModuleType
from typing import Any

from seqkit.errors import ArgumentError

_MISSING = object()


def object_copy(obj: Any, include_properties: Collection[str] | None = None) -> Any:
    """Shallow copy of an object, or of every object in a list or tuple.

    An object is a mapping or anything carrying instance attributes (a
    dataclass, a ``SimpleNamespace``); the copy is always a new ``dict``.
    Only keys listed in ``include_properties`` are copied, in source order;
    values are shared with the source. Without ``include_properties`` the
    copies are empty. Anything else, ``None`` included, is returned as is.
    """
    allowed = _allowed_keys(include_properties)

    if isinstance(obj, (list, tuple)):
        return [_copy_one(item, allowed) for item in obj]
    if _is_object(obj):
        return _copy_one(obj, allowed)
    return obj


def _is_object(item: Any) -> bool:
    if isinstance(item, Mapping):
        return True
    if isinstance(item, (type, ModuleType)) or callable(item):
        return False
    return hasattr(item, "__dict__")


def _allowed_keys(include_properties: Any) -> frozenset[str]:
    if include_properties is None:
        return frozenset()

    if not isinstance(include_properties, Collection) or isinstance(
        include_properties, (str, bytes, Mapping)
    ):
        raise ArgumentError(
            f"argument 'include_properties' must be a collection of strings, got {type(include_properties)}"
        )

    for key in include_properties:
        if not isinstance(key, str):
            raise ArgumentError(f"property name must be a string, got {type(key)}")

    return frozenset(include_properties)


def _copy_one(item: Any, allowed: frozenset[str]) -> dict[str, Any]:
    if not _is_object(item):
        return {}
    source = item if isinstance(item, Mapping) else vars(item)
    return {key: value for key, value in source.items() if key in allowed}


def get_path_value(obj: Any, path: str) -> Any:
    """Value at dotted ``path`` under ``obj``, or ``None``.

    ``None`` is returned when ``obj`` is falsy or any segment before the last
    is missing or ``None``. The last segment's value is returned as found.
    """
    if not obj:
        return None

    if not isinstance(path, str):
        raise ArgumentError(f"argument 'path' must be a string, got {type(path)}")

    *parents, last = path.split(".")
    for segment in parents:
        obj = _lookup(obj, segment)
        if obj is _MISSING or obj is None:
            return None

    value = _lookup(obj, last)
    return None if value is _MISSING else value


def _lookup(obj: Any, key: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(key, _MISSING)
    return getattr(obj, key, _MISSING)
