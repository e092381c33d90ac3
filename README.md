# items-renderer

A small WSGI application that renders the HTML fragments of a product
catalogue: a grid of categories, a grid of products in one category, and the
full page of one product. The fragments carry htmx attributes (`hx-get`,
`hx-target="#content"`) and are meant to be swapped into a host page.

It uses nothing beyond the standard library.

## Routes

`items_renderer.app.compose` builds a `Router` with three routes:

| Route               | Handler            | Workflows run                                    | Fragment               |
|---------------------|--------------------|--------------------------------------------------|------------------------|
| `GET /`             | `CatalogueHandler` | `GetCategories`                                  | grid of category tiles |
| `GET /{category}`   | `CategoryHandler`  | `GetProductsByCategory` (with the category)      | grid of product cards  |
| `GET /product/{id}` | `PageHandler`      | `GetProductByID`, `GetProductCharacteristicByID` | full product page      |

`HEAD` is answered for every `GET` route. An unknown path gets
`404 page not found`, a known path with another method gets `405` with an
`Allow` header, and an exception raised by a handler is logged and answered
with `500 Internal Server Error`. Successful responses are
`text/html; charset=utf-8`.

The links inside the fragments point at `/catalogue/<category>` and
`/catalogue/product/<id>`, and images at `/images/<category>/<name>`. The router
serves neither of these prefixes itself. Mount it under `/catalogue/` behind a
proxy or a host application, and serve the images elsewhere.

## Rendering fragments directly

The template modules return HTML as strings:

```python
from items_renderer import categories, products, page
from items_renderer.domain import Category, Product, ProductCharacteristic

categories.grid([Category(name="dairy", label="Dairy")])
products.grid([Product(name="Milk", category="dairy", price=899000)])
page.product(Product(name="Milk", category="dairy"), ProductCharacteristic())
```

All text is HTML-escaped with `items_renderer.markup.escape`. A category with
no `label` makes `categories.grid` raise `ValueError`. A product with no
`category` makes `products.grid` and `page.product` raise `ValueError` too.

`items_renderer.catalogue` has two more building blocks, `category_grid(names)`
and `item(item_id)`. They take plain strings.

The page helpers format values the way the page shows them. Prices are stored
in ten-thousandths of a rouble:

```python
from datetime import timedelta
from items_renderer.page import format_number, format_price, format_shelf_life

format_number(3.5)                     # '3,50'
format_price(1234500)                  # '123,45 ₽'
format_shelf_life(timedelta(days=30))  # '30 дней'
```

On the product page, nutrition is read from a string such as
`"(3.2, 2.5, 4.7, 52)"`: proteins, fats, carbohydrates and calories. It is shown
only when it splits into exactly four parts.

## Running the service

A `WorkflowClient` maps workflow names to Python callables and runs them in
process. If you set `task_queue`, it only accepts requests whose
`StartWorkflowOptions.task_queue` matches. An unknown workflow or queue raises
`LookupError`. A workflow may return the domain records themselves, plain
mappings (read with `from_dict`), or `None`.

```python
from items_renderer.app import compose, serve
from items_renderer.handlers import (
    CatalogueHandler,
    CategoryHandler,
    PageHandler,
    StartWorkflowOptions,
    WorkflowClient,
)

client = WorkflowClient(
    workflows={
        "GetCategories": lambda: [{"Name": "dairy", "Label": "Dairy"}],
        "GetProductsByCategory": lambda category: [],
        "GetProductByID": lambda product_id: {"Name": "Milk", "Category": "dairy"},
        "GetProductCharacteristicByID": lambda product_id: None,
    },
    task_queue="repo",
)
options = StartWorkflowOptions(task_queue="repo")

app = compose(
    CatalogueHandler(client, options),
    CategoryHandler(client, options),
    PageHandler(client, options),
)
serve(app, "", 8080)  # blocks; uses wsgiref
```

`app` is an ordinary WSGI callable, so any WSGI server can host it as well.

## Data model

`items_renderer.domain` holds three frozen dataclasses:

- `Product`: `product_id`, `name`, `brand`, `category`, `price`, `rating`.
- `Category`: `name`, `label`.
- `ProductCharacteristic`: `product_id`, `description`, `weight`,
  `quantity_in_package`, `shelf_life` (a `timedelta`), `storage_conditions`,
  `nutrition`.

`from_dict` takes keys such as `"ProductID"` or `"QuantityInPackage"`. It
matches them exactly first and then without regard to case. Missing keys take
the field defaults. `ShelfLife` is whole nanoseconds or a `timedelta`. A value
of the wrong type raises `TypeError`.

## What it does not do

- It has no command-line program. You build the application and call `serve`
  yourself, as shown above.
- It does not connect to a remote workflow service. `WorkflowClient` only runs
  the callables you give it, so fetching the catalogue data is up to those
  callables.
- It serves no images, scripts or host page. It serves only the HTML fragments.