"""Catalogue records as they arrive from the repository workflows."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Mapping
from uuid import UUID

_NIL_UUID = UUID(int=0)


def _lookup(data: Mapping[str, Any], key: str) -> Any:
    """Fetch ``key`` exactly, else by a case-insensitive match, else None."""
    if key in data:
        return data[key]
    lowered = key.lower()
    return next(
        (value for name, value in data.items() if isinstance(name, str) and name.lower() == lowered),
        None,
    )


def _as_uuid(value: Any) -> UUID:
    if value is None:
        return _NIL_UUID
    if isinstance(value, UUID):
        return value
    if isinstance(value, str):
        return UUID(value)
    raise TypeError(f"expected a UUID string, got {type(value).__name__}")


def _as_optional_str(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    raise TypeError(f"expected a string, got {type(value).__name__}")


def _as_str(value: Any) -> str:
    return _as_optional_str(value) or ""


def _as_optional_int(value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected an integer, got {type(value).__name__}")
    return value


def _as_int(value: Any) -> int:
    result = _as_optional_int(value)
    return 0 if result is None else result


def _as_optional_float(value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected a number, got {type(value).__name__}")
    return float(value)


def _as_duration(value: Any) -> timedelta:
    """Read a duration given as whole nanoseconds (or a timedelta)."""
    if value is None:
        return timedelta(0)
    if isinstance(value, timedelta):
        return value
    nanoseconds = _as_int(value)
    return timedelta(microseconds=nanoseconds // 1000)


@dataclass(frozen=True)
class Product:
    """A product as listed in a category."""

    product_id: UUID = field(default=_NIL_UUID)
    name: str = ""
    brand: str | None = None
    category: str | None = None
    price: int = 0
    rating: float | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Product:
        return cls(
            product_id=_as_uuid(_lookup(data, "ProductID")),
            name=_as_str(_lookup(data, "Name")),
            brand=_as_optional_str(_lookup(data, "Brand")),
            category=_as_optional_str(_lookup(data, "Category")),
            price=_as_int(_lookup(data, "Price")),
            rating=_as_optional_float(_lookup(data, "Rating")),
        )


@dataclass(frozen=True)
class Category:
    """A product category with its display label."""

    name: str = ""
    label: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Category:
        return cls(
            name=_as_str(_lookup(data, "Name")),
            label=_as_optional_str(_lookup(data, "Label")),
        )


@dataclass(frozen=True)
class ProductCharacteristic:
    """Detailed characteristics of a single product."""

    product_id: UUID = field(default=_NIL_UUID)
    description: str | None = None
    weight: int | None = None
    quantity_in_package: int | None = None
    shelf_life: timedelta = field(default=timedelta(0))
    storage_conditions: str | None = None
    nutrition: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ProductCharacteristic:
        return cls(
            product_id=_as_uuid(_lookup(data, "ProductID")),
            description=_as_optional_str(_lookup(data, "Description")),
            weight=_as_optional_int(_lookup(data, "Weight")),
            quantity_in_package=_as_optional_int(_lookup(data, "QuantityInPackage")),
            shelf_life=_as_duration(_lookup(data, "ShelfLife")),
            storage_conditions=_as_optional_str(_lookup(data, "StorageConditions")),
            nutrition=_as_optional_str(_lookup(data, "Nutrition")),
        )