"""Unit type registry.

Concrete UnitType subclasses are collected here by ``type_id``.  Agents
look up their stat profile once at creation; nothing reads the registry
during a tick.
"""

from __future__ import annotations

from freeze.units.base import Role, UnitType
from freeze.units.inmates import FastInmate, RegularInmate, SneakyInmate, StrongInmate
from freeze.units.police import PatrolOfficer

_REGISTRY: dict[str, type[UnitType]] = {
    cls.type_id: cls
    for cls in (RegularInmate, FastInmate, StrongInmate, SneakyInmate, PatrolOfficer)
}


def get_type(type_id: str) -> type[UnitType] | None:
    """Return the UnitType class for *type_id*, or None if unknown."""
    return _REGISTRY.get(type_id)


def require_type(type_id: str, role: Role | None = None) -> type[UnitType]:
    """Like get_type() but raises KeyError for unknown ids or a role mismatch."""
    utype = _REGISTRY.get(type_id)
    if utype is None:
        raise KeyError(f"Unknown unit type: {type_id!r}")
    if role is not None and utype.role is not role:
        raise KeyError(f"Unit type {type_id!r} is not a {role.value} type")
    return utype


def all_types(role: Role | None = None) -> list[type[UnitType]]:
    """All registered types, optionally filtered by role."""
    return [t for t in _REGISTRY.values() if role is None or t.role is role]


__all__ = [
    "FastInmate",
    "PatrolOfficer",
    "RegularInmate",
    "Role",
    "SneakyInmate",
    "StrongInmate",
    "UnitType",
    "all_types",
    "get_type",
    "require_type",
]
