"""Category tiles: a grid of cards that link to each category's products."""

from __future__ import annotations

from typing import Iterable

from .domain import Category
from .markup import escape


def _image(name: str) -> str:
    return (
        '<img id="'
        + escape(name + "-image")
        + '" class="w-full h-[calc(100%-3rem)] object-cover" src="'
        + escape("/images/" + name + "/" + name)
        + '" alt="'
        + escape("Image for " + name)
        + '">'
    )


def _name(label: str) -> str:
    return (
        '<div class="h-12 p-2 text-center font-medium flex items-center justify-center">'
        + escape(label)
        + "</div>"
    )


def _category(category: Category) -> str:
    if category.label is None:
        raise ValueError(f"category {category.name!r} has no label")
    return (
        '<div class="aspect-square bg-white rounded-lg overflow-hidden shadow-sm '
        'hover:shadow-md transition-shadow" hx-get="'
        + escape("/catalogue/" + category.name)
        + '" hx-target="#content" hx-replace-url="true">'
        + _image(category.name)
        + _name(category.label)
        + "</div>"
    )


def grid(categories: Iterable[Category]) -> str:
    """Render a grid with one card per category, in the order given.

    Raises ValueError if a category has no label.
    """
    cards = "".join(_category(category) for category in categories)
    return (
        '<div class="grid grid-cols-2 sm:grid-cols-3 md:grid-cols-4 gap-4 p-4">'
        + cards
        + "</div>"
    )