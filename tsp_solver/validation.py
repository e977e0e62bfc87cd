"""Checks applied to cities and routes coming from outside (files, CLI, callers)."""
from __future__ import annotations
import csv
import json
import math
from numbers import Integral, Real
from typing import List

from .tsp import City
from .solver_base import InvalidInputError


def _is_number(v) -> bool:
    return isinstance(v, Real) and not isinstance(v, bool) and math.isfinite(v)


def parse_cities(raw, require_names: bool = False, min_cities: int = 2) -> List[City]:
    """
    Turn a list of {"x", "y"[, "name"]} mappings or (x, y) pairs into Cities.

    Raises InvalidInputError naming the first offending index.
    """
    if not isinstance(raw, (list, tuple)):
        raise InvalidInputError("Cities must be provided as an array")
    cities = []
    for idx, item in enumerate(raw):
        if isinstance(item, dict):
            x, y, name = item.get("x"), item.get("y"), item.get("name")
        elif isinstance(item, (list, tuple)) and len(item) in (2, 3):
            x, y = item[0], item[1]
            name = item[2] if len(item) == 3 else None
        else:
            raise InvalidInputError(f"City at index {idx} must be an object with x and y")
        if not (_is_number(x) and _is_number(y)):
            raise InvalidInputError(f"City at index {idx} must have numeric x and y coordinates")
        if name is not None and not isinstance(name, str):
            raise InvalidInputError(f"City at index {idx} has a non-string name")
        if require_names and name is None:
            raise InvalidInputError(f"City at index {idx} must have a name")
        cities.append(City(float(x), float(y), idx, name))
    if len(cities) < min_cities:
        raise InvalidInputError(f"At least {min_cities} cities are required to solve TSP")
    return cities


def parse_route(raw, n_cities: int) -> List[int]:
    if not isinstance(raw, (list, tuple)):
        raise InvalidInputError("Route must be provided as an array of city indices")
    if not raw:
        raise InvalidInputError("Route must contain at least one city index")
    route = []
    for pos, idx in enumerate(raw):
        if isinstance(idx, bool) or not isinstance(idx, Integral):
            raise InvalidInputError(f"Route entry {pos} is not an integer: {idx!r}")
        if idx < 0 or idx >= n_cities:
            raise InvalidInputError(f"Invalid city index {idx} in route")
        route.append(int(idx))
    return route


def load_cities(path: str, require_names: bool = False) -> List[City]:
    """Read cities from JSON (list of objects) or CSV (`x,y[,name]` per line)."""
    if path.endswith(".json"):
        with open(path, "r") as f:
            raw = json.load(f)
        if isinstance(raw, dict):
            raw = raw.get("cities")
        return parse_cities(raw, require_names=require_names)

    raw = []
    with open(path, "r", newline="") as f:
        for lineno, row in enumerate(csv.reader(f), start=1):
            if not row or not "".join(row).strip():
                continue
            try:
                x, y = float(row[0]), float(row[1])
            except (ValueError, IndexError):
                if lineno == 1:
                    continue  # header
                raise InvalidInputError(f"{path}:{lineno}: expected x,y[,name]")
            raw.append({"x": x, "y": y, "name": row[2].strip() if len(row) > 2 else None})
    return parse_cities(raw, require_names=require_names)
