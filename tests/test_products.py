from uuid import UUID

import pytest

from items_renderer.domain import Product
from items_renderer.products import grid

GRID_OPEN = '<div class="grid grid-cols-2 sm:grid-cols-3 md:grid-cols-4 gap-3 p-3">'
PID_A = UUID("11111111-2222-3333-4444-555555555555")
PID_B = UUID("aaaaaaaa-bbbb-cccc-dddd-eeeeeeeeeeee")


def _product(**overrides):
    values = dict(product_id=PID_A, name="Milk", brand="Farm", category="dairy", price=1000000, rating=4.5)
    values.update(overrides)
    return Product(**values)


def test_empty_grid():
    assert grid([]) == GRID_OPEN + "</div>"


def test_grid_wraps_cards():
    html = grid([_product()])
    assert html.startswith(GRID_OPEN)
    assert html.endswith("</div>")


def test_card_links_and_image():
    html = grid([_product()])
    pid = str(PID_A)
    assert f'id="{pid}"' in html
    assert f'hx-get="/catalogue/product/{pid}"' in html
    assert f'src="/images/dairy/{pid}"' in html
    assert f'id="{pid}-image"' in html
    assert 'hx-target="#content" hx-replace-url="true"' in html


def test_name_and_brand():
    html = grid([_product()])
    assert '<div class="font-medium truncate text-sm">Milk</div>' in html
    assert '<div class="text-xs text-gray-500 truncate">Farm</div>' in html


def test_no_brand_omits_brand_block():
    html = grid([_product(brand=None)])
    assert "text-xs text-gray-500 truncate" not in html


def test_price_formatting():
    html = grid([_product(price=1000000)])
    assert '<div class="px-2 pb-1 text-sm font-bold">₽100.00</div>' in html


def test_rating_present():
    html = grid([_product(rating=4.5)])
    assert '<div class="text-xs">4.5</div>' in html
    assert "No ratings" not in html


def test_rating_missing():
    html = grid([_product(rating=None)])
    assert '<div class="text-xs text-gray-400">No ratings</div>' in html
    assert "★" not in html


def test_escaping_of_name():
    html = grid([_product(name="<b>&</b>")])
    assert "&lt;b&gt;&amp;&lt;/b&gt;" in html
    assert "<b>" not in html


def test_order_preserved():
    html = grid([_product(product_id=PID_B), _product(product_id=PID_A)])
    assert html.index(str(PID_B)) < html.index(str(PID_A))
    assert html.count('hx-get="/catalogue/product/') == 2


def test_missing_category_raises():
    with pytest.raises(ValueError):
        grid([_product(category=None)])


def test_accepts_generator():
    html = grid(p for p in [_product(), _product(product_id=PID_B)])
    assert html.count("No ratings") == 0
    assert html.count("hx-replace-url") == 2