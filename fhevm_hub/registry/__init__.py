"""Example registry: static catalog of examples and categories.

Quick usage::

    from fhevm_hub.registry import default_registry

    registry = default_registry()
    counter = registry.get_example("counter")
    basic = registry.get_category("basic")
"""

from fhevm_hub.registry.catalog import CATEGORIES, EXAMPLES, default_registry
from fhevm_hub.registry.models import (
    CategoryDefinition,
    CategoryExampleRef,
    ExampleDefinition,
)
from fhevm_hub.registry.registry import Registry

__all__ = [
    "CATEGORIES",
    "EXAMPLES",
    "CategoryDefinition",
    "CategoryExampleRef",
    "ExampleDefinition",
    "Registry",
    "default_registry",
]
