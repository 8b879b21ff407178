"""In-memory catalog of example and category definitions."""

from __future__ import annotations

from collections.abc import Iterable

from fhevm_hub.errors import (
    DuplicateDefinitionError,
    UnknownCategoryError,
    UnknownExampleError,
)

from .models import CategoryDefinition, ExampleDefinition


class Registry:
    """Ordered lookup tables for examples and categories.

    Keys are matched case-insensitively.  Registering a name twice is an
    error rather than an overwrite, and an example that names a category
    can only be added once that category is present.
    """

    def __init__(
        self,
        categories: Iterable[CategoryDefinition] = (),
        examples: Iterable[ExampleDefinition] = (),
    ) -> None:
        self._categories: dict[str, CategoryDefinition] = {}
        self._examples: dict[str, ExampleDefinition] = {}
        for category in categories:
            self.add_category(category)
        for example in examples:
            self.add_example(example)

    # -- Registration ------------------------------------------------------

    def add_category(self, category: CategoryDefinition) -> None:
        key = category.name.lower()
        if key in self._categories:
            raise DuplicateDefinitionError("category", category.name)
        self._categories[key] = category

    def add_example(self, example: ExampleDefinition) -> None:
        key = example.name.lower()
        if key in self._examples:
            raise DuplicateDefinitionError("example", example.name)
        if example.category is not None and example.category.lower() not in self._categories:
            raise UnknownCategoryError(example.category, self.list_category_names())
        self._examples[key] = example

    # -- Lookup ------------------------------------------------------------

    def get_example(self, name: str) -> ExampleDefinition:
        try:
            return self._examples[name.lower()]
        except KeyError:
            raise UnknownExampleError(name, self.list_example_names()) from None

    def get_category(self, name: str) -> CategoryDefinition:
        try:
            return self._categories[name.lower()]
        except KeyError:
            raise UnknownCategoryError(name, self.list_category_names()) from None

    def has_example(self, name: str) -> bool:
        return name.lower() in self._examples

    def list_example_names(self) -> list[str]:
        """Example names in registration order."""
        return [example.name for example in self._examples.values()]

    def list_category_names(self) -> list[str]:
        """Category names in registration order."""
        return [category.name for category in self._categories.values()]

    def categories(self) -> list[CategoryDefinition]:
        return list(self._categories.values())

    def examples(self) -> list[ExampleDefinition]:
        return list(self._examples.values())

    def __len__(self) -> int:
        return len(self._examples)

    def __repr__(self) -> str:
        return (
            f"Registry(categories={len(self._categories)}, "
            f"examples={len(self._examples)})"
        )
