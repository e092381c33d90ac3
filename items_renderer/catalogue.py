"""Catalogue tiles: a grid of category cards and single item cards."""

from __future__ import annotations

from typing import Iterable

from .markup import escape


def _image(item_id: str) -> str:
    return (
        '<div class="row-span-2 col-span-2 flex p-1"><div id="'
        + escape(f"{item_id}-image")
        + '" class="w-full aspect-square rounded-lg bg-gray-300 overflow-hidden"></div></div>'
    )


def _name(text: str) -> str:
    return (
        '<div class="row-span-2 col-span-2 flex flex-col p-1 overflow-hidden">'
        '<h3 class="truncate font-medium text-gray-900 text-lg">'
        + escape(text)
        + "</h3></div>"
    )


def _button() -> str:
    return (
        '<button class="row-start-3 col-span-4 flex items-center justify-center gap-2 \n'
        '              w-full h-full rounded-b-xl bg-violet-300 hover:bg-violet-400 overflow-hidden">'
        '<svg role="img" class="w-5 h-5 text-gray-700"><use href="#shopping-bag-icon"></use></svg>'
        ' <span class="text-sm">Add to Cart</span></button>'
    )


def _category(category_id: str) -> str:
    return (
        '<div id="'
        + escape(category_id)
        + '" hx-get="'
        + escape(f"/catalogue/{category_id}")
        + '" hx-target="#content" hx-trigger="click" class="aspect-[1/1] rounded-xl bg-gray-100 '
        'hover:bg-violet-300 shadow-sm overflow-hidden relative">'
        '<div class="grid h-full grid-rows-[1fr_auto] p-3 gap-2"><div class="relative w-full h-full">'
        + _image(category_id)
        + '</div><div class="z-10 relative text-center">'
        + _name(category_id)
        + "</div></div></div>"
    )


def item(item_id: str) -> str:
    """Render the card for one catalogue item."""
    return (
        '<div class="aspect-[4/3] rounded-xl bg-gray-100 shadow-sm overflow-hidden">'
        '<div class="grid h-full grid-rows-[repeat(3,minmax(0,1fr))] grid-cols-4 p-3 gap-2">'
        + _image(item_id)
        + _name(item_id)
        + _button()
        + "</div></div>"
    )


def category_grid(categories: Iterable[str]) -> str:
    """Render a grid with one clickable card per category, in order."""
    cards = "".join(_category(category) for category in categories)
    return (
        '<div class="grid grid-cols-[repeat(auto-fit,minmax(320px,1fr))] gap-4">'
        + cards
        + "</div>"
    )