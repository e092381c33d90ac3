"""Request handlers that fetch catalogue data from workflows and render it."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, TypeVar

from . import categories, page, products
from .domain import Category, Product, ProductCharacteristic

CATALOGUE_ENDPOINT = "GET /{$}"
CATEGORY_ENDPOINT = "GET /{category}"
PAGE_ENDPOINT = "GET /product/{id}"

_Record = TypeVar("_Record", Category, Product, ProductCharacteristic)


@dataclass(frozen=True)
class StartWorkflowOptions:
    """Options used when starting a workflow."""

    task_queue: str = ""


@dataclass
class WorkflowClient:
    """Runs named workflows registered for one task queue.

    ``task_queue`` of None accepts requests for any queue.
    """

    workflows: Mapping[str, Callable[..., Any]] = field(default_factory=dict)
    task_queue: str | None = None

    def execute_workflow(self, options: StartWorkflowOptions, workflow: str, *args: Any) -> Any:
        """Run ``workflow`` with ``args`` and return its result.

        Raises LookupError if no worker serves the queue or the workflow is unknown.
        """
        if self.task_queue is not None and options.task_queue != self.task_queue:
            raise LookupError(f"no worker polls task queue {options.task_queue!r}")
        try:
            run = self.workflows[workflow]
        except KeyError:
            raise LookupError(f"unknown workflow {workflow!r}") from None
        return run(*args)


def _record(value: Any, cls: type[_Record]) -> _Record:
    if isinstance(value, cls):
        return value
    if value is None:
        return cls()
    if isinstance(value, Mapping):
        return cls.from_dict(value)
    raise TypeError(f"cannot read {cls.__name__} from {type(value).__name__}")


def _records(value: Any, cls: type[_Record]) -> list[_Record]:
    if value is None:
        return []
    return [_record(item, cls) for item in value]


class CatalogueHandler:
    """Renders the grid of all categories."""

    def __init__(self, client: WorkflowClient, options: StartWorkflowOptions) -> None:
        self.client = client
        self.options = options

    def handle(self, params: Mapping[str, str]) -> str:
        result = self.client.execute_workflow(self.options, "GetCategories")
        return categories.grid(_records(result, Category))


class CategoryHandler:
    """Renders the grid of products in the requested category."""

    def __init__(self, client: WorkflowClient, options: StartWorkflowOptions) -> None:
        self.client = client
        self.options = options

    def handle(self, params: Mapping[str, str]) -> str:
        result = self.client.execute_workflow(
            self.options, "GetProductsByCategory", params.get("category", "")
        )
        return products.grid(_records(result, Product))


class PageHandler:
    """Renders the page of the requested product."""

    def __init__(self, client: WorkflowClient, options: StartWorkflowOptions) -> None:
        self.client = client
        self.options = options

    def handle(self, params: Mapping[str, str]) -> str:
        product_id = params.get("id", "")
        product_result = self.client.execute_workflow(self.options, "GetProductByID", product_id)
        characteristic_result = self.client.execute_workflow(
            self.options, "GetProductCharacteristicByID", product_id
        )
        return page.product(
            _record(product_result, Product),
            _record(characteristic_result, ProductCharacteristic),
        )