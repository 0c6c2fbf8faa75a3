"""
Routentabelle des Frontends.

Eine Route-Einheit ist entweder ein Blueprint oder eine Funktion ohne Argumente,
die einen Blueprint liefert. Die Tabelle wird in dieser Reihenfolge registriert.
"""

from typing import Callable, Iterable, List, Union

from flask import Blueprint

from .auth import create_auth_blueprint
from .pages import pages_bp

RouteFactory = Callable[[], Blueprint]
RouteUnit = Union[Blueprint, RouteFactory]

ROUTES: List[RouteUnit] = [
    create_auth_blueprint,
    pages_bp,
]


def resolve_route_unit(unit: RouteUnit) -> Blueprint:
    """
    Löst eine Route-Einheit in einen Blueprint auf.

    Raises:
        TypeError: Wenn weder ein Blueprint noch eine Blueprint-Factory übergeben wurde
    """
    if isinstance(unit, Blueprint):
        return unit
    if callable(unit):
        blueprint = unit()
        if isinstance(blueprint, Blueprint):
            return blueprint
        raise TypeError(f"Route-Factory {unit!r} lieferte {type(blueprint).__name__} statt Blueprint")
    raise TypeError(f"Ungültige Route-Einheit: {unit!r}")


def resolve_route_units(units: Iterable[RouteUnit]) -> List[Blueprint]:
    return [resolve_route_unit(unit) for unit in units]


__all__ = ['ROUTES', 'RouteUnit', 'RouteFactory', 'resolve_route_unit', 'resolve_route_units']
