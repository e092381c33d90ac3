"""Product tiles: a grid of product cards for one category."""

from __future__ import annotations

import struct
from typing import Iterable

from .domain import Product
from .markup import escape


def _as_float32(value: float) -> float:
    """Round ``value`` to single precision, as ratings are stored."""
    return struct.unpack("f", struct.pack("f", value))[0]


def _image(category: str, product_id: str) -> str:
    return (
        '<img id="'
        + escape(product_id + "-image")
        + '" src="'
        + escape("/images/" + category + "/" + product_id)
        + '" class="w-full h-full object-cover absolute inset-0">'
    )


def _name(product_name: str, brand: str | None) -> str:
    parts = [
        '<div class="p-2"><div class="font-medium truncate text-sm">',
        escape(product_name),
        "</div>",
    ]
    if brand is not None:
        parts += ['<div class="text-xs text-gray-500 truncate">', escape(brand), "</div>"]
    parts.append("</div>")
    return "".join(parts)


def _price(amount: int) -> str:
    return (
        '<div class="px-2 pb-1 text-sm font-bold">₽'
        + escape(f"{amount / 10000:.2f}")
        + "</div>"
    )


def _rating(score: float | None) -> str:
    if score is None:
        body = '<div class="text-xs text-gray-400">No ratings</div>'
    else:
        body = (
            '<div class="text-yellow-400 text-sm">★</div><div class="text-xs">'
            + escape(f"{_as_float32(score):.1f}")
            + "</div>"
        )
    return '<div class="px-2 pb-2 flex items-center gap-1">' + body + "</div>"


def _product(p: Product) -> str:
    if p.category is None:
        raise ValueError(f"product {p.product_id} has no category")
    product_id = str(p.product_id)
    return (
        '<div class="aspect-[1/1] w-full bg-white rounded-lg overflow-hidden shadow-sm '
        'hover:shadow-md transition-shadow flex flex-col" id="'
        + escape(product_id)
        + '" hx-get="'
        + escape("/catalogue/product/" + product_id)
        + '" hx-target="#content" hx-replace-url="true">'
        '<div class="relative h-3/5 flex-none overflow-hidden">'
        + _image(p.category, product_id)
        + '</div><div class="flex-1 flex flex-col justify-between">'
        + _name(p.name, p.brand)
        + "<div>"
        + _price(p.price)
        + _rating(p.rating)
        + "</div></div></div>"
    )


def grid(products: Iterable[Product]) -> str:
    """Render a grid with one card per product, in the order given.

    Raises ValueError if a product has no category.
    """
    cards = "".join(_product(p) for p in products)
    return (
        '<div class="grid grid-cols-2 sm:grid-cols-3 md:grid-cols-4 gap-3 p-3">'
        + cards
        + "</div>"
    )