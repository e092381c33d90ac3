"""Product page: the full card for a single product with its characteristics."""

from __future__ import annotations

import struct
from datetime import timedelta

from .domain import Product, ProductCharacteristic
from .markup import escape

_STAR_PATH = (
    "M9.049 2.927c.3-.921 1.603-.921 1.902 0l1.07 3.292a1 1 0 00.95.69h3.462c.969 0 "
    "1.371 1.24.588 1.81l-2.8 2.034a1 1 0 00-.364 1.118l1.07 3.292c.3.921-.755 "
    "1.688-1.54 1.118l-2.8-2.034a1 1 0 00-1.175 0l-2.8 2.034c-.784.57-1.838-.197-1.539"
    "-1.118l1.07-3.292a1 1 0 00-.364-1.118L2.98 8.72c-.783-.57-.38-1.81.588-1.81h3.461a1 "
    "1 0 00.951-.69l1.07-3.292z"
)

_ROW_OPEN = '<div class="flex items-center justify-between p-3 bg-gray-50 rounded-lg">'
_NUTRIENT_OPEN = '<div class="flex items-center justify-between p-3 bg-white rounded-lg">'
_NUTRIENT_VALUE = '<span class="font-medium text-emerald-800">'


def _as_float32(value: float) -> float:
    """Round ``value`` to single precision, as ratings are stored."""
    return struct.unpack("f", struct.pack("f", value))[0]


def format_number(n: float) -> str:
    """Format ``n`` with two decimals and a decimal comma."""
    return f"{n:.2f}".replace(".", ",")


def format_price(price: int) -> str:
    """Format a price given in ten-thousandths of a rouble."""
    return f"{format_number(price / 10000)} ₽"


def format_shelf_life(duration: timedelta) -> str:
    """Format a shelf life as a whole number of days."""
    days = int(duration.total_seconds() / 3600 / 24)
    return f"{days} дней"


def _header(p: Product) -> str:
    parts = [
        '<div class="max-w-4xl mx-auto bg-white rounded-xl shadow-md overflow-hidden">'
        '<!-- Product Header --><div class="p-8 border-b border-gray-200">'
        '<div class="flex items-center justify-between"><div>'
        '<h1 class="text-3xl font-bold text-gray-900 mb-2">',
        escape(p.name),
        '</h1><div class="flex items-center space-x-4 text-gray-600">',
    ]
    if p.brand is not None:
        parts += [
            '<span class="bg-blue-100 text-blue-800 px-3 py-1 rounded-full text-sm">Бренд: ',
            escape(p.brand),
            "</span> ",
        ]
    if p.category is not None:
        parts += [
            '<span class="bg-green-100 text-green-800 px-3 py-1 rounded-full text-sm">Категория: ',
            escape(p.category),
            "</span>",
        ]
    parts.append("</div></div>")
    if p.rating is not None:
        parts += [
            '<div class="flex items-center bg-yellow-100 px-4 py-2 rounded-lg">'
            '<span class="text-yellow-600 font-bold text-xl">',
            escape(f"{_as_float32(p.rating):.1f}"),
            '</span> <svg class="w-6 h-6 text-yellow-500 ml-1" fill="currentColor" '
            'viewBox="0 0 20 20"><path d="' + _STAR_PATH + '"></path></svg></div>',
        ]
    parts.append("</div></div>")
    return "".join(parts)


def _left_column(p: Product, pc: ProductCharacteristic, category: str) -> str:
    parts = [
        '<!-- Product Details --><div class="grid md:grid-cols-2 gap-8 p-8">'
        '<!-- Left Column --><div class="space-y-8"><!-- Image Section -->'
        '<div class="bg-gray-100 rounded-lg overflow-hidden aspect-[4/3]"><img src="',
        escape(f"/images/{category}/{p.product_id}"),
        '" class="w-full h-full object-cover" alt="',
        escape("Изображение продукта: " + p.name),
        '"></div><!-- Description moved under image -->',
    ]
    if pc.description is not None:
        parts += [
            '<div class="p-6 bg-gray-50 rounded-lg">'
            '<h3 class="text-xl font-semibold mb-4">Описание продукта</h3>'
            '<p class="text-gray-600 leading-relaxed">',
            escape(pc.description),
            "</p></div>",
        ]
    parts.append("</div>")
    return "".join(parts)


def _row(label: str, value: str) -> str:
    return (
        _ROW_OPEN
        + '<span class="text-gray-600">'
        + label
        + '</span> <span class="font-medium">'
        + value
        + "</span></div>"
    )


def _nutrition(nutrition: str) -> str:
    parts = nutrition.strip("()").split(",")
    if len(parts) != 4:
        return ""
    proteins, fats, carbs, calories = (part.strip() for part in parts)
    return (
        '<div class="p-6 bg-gray-50 rounded-lg">'
        '<h3 class="text-xl font-semibold mb-4">Пищевая ценность (на 100 грамм)</h3>'
        '<div class="grid grid-cols-2 gap-4">'
        + _NUTRIENT_OPEN
        + '<span class="text-gray-600">Белки</span> '
        + _NUTRIENT_VALUE
        + escape(proteins)
        + " г</span></div>"
        + _NUTRIENT_OPEN
        + '<span class="text-gray-600">Жиры</span> '
        + _NUTRIENT_VALUE
        + escape(fats)
        + " г</span></div>"
        + _NUTRIENT_OPEN
        + '<span class="text-gray-600">Углеводы</span> '
        + _NUTRIENT_VALUE
        + escape(carbs)
        + " г</span></div>"
        + _NUTRIENT_OPEN
        + '<span class="text-gray-600">Калории</span> '
        + _NUTRIENT_VALUE
        + escape(calories)
        + " ккал</span></div></div></div>"
    )


def _right_column(p: Product, pc: ProductCharacteristic) -> str:
    parts = [
        '<!-- Right Column --><div class="space-y-6"><!-- Price Block -->'
        '<div class="bg-emerald-50 p-6 rounded-xl"><div class="text-2xl font-bold text-emerald-800">',
        escape(format_price(p.price)),
        "</div>",
    ]
    if pc.weight is not None:
        parts += [
            '<p class="text-sm text-gray-600 mt-2">Цена за ',
            escape(str(pc.weight)),
            "г</p>",
        ]
    parts.append(
        '</div><!-- Characteristics --><div class="space-y-4"><div class="grid grid-cols-2 gap-4">'
    )
    if pc.weight is not None:
        parts.append(_row("Вес:", escape(str(pc.weight)) + "г"))
    if pc.quantity_in_package is not None:
        parts.append(_row("Количество в упаковке:", escape(str(pc.quantity_in_package))))
    if pc.shelf_life > timedelta(0):
        parts.append(_row("Срок годности:", escape(format_shelf_life(pc.shelf_life))))
    if pc.storage_conditions is not None:
        parts.append(_row("Условия хранения:", escape(pc.storage_conditions)))
    parts.append("</div><!-- Nutrition Section -->")
    if pc.nutrition is not None:
        parts.append(_nutrition(pc.nutrition))
    parts.append("</div></div></div></div>")
    return "".join(parts)


def product(p: Product, pc: ProductCharacteristic) -> str:
    """Render the full page for one product and its characteristics.

    Raises ValueError if the product has no category.
    """
    if p.category is None:
        raise ValueError(f"product {p.product_id} has no category")
    return _header(p) + _left_column(p, pc, p.category) + _right_column(p, pc)