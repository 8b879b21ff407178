"""FHEVM example scaffolder -- generates standalone Hardhat example projects.

Quick usage::

    from fhevm_hub.scaffolder import ExampleGenerator

    generator = ExampleGenerator("./generated-examples")
    result = await generator.generate_example("counter")
    result = await generator.generate_category("basic")
    result = await generator.generate_all()
"""

from fhevm_hub.scaffolder.generator import (
    ExampleGenerator,
    GenerationFailure,
    GenerationResult,
)
from fhevm_hub.scaffolder.payloads import PayloadRenderer, VerbatimPayloadRenderer
from fhevm_hub.scaffolder.templates import TemplateRenderer

__all__ = [
    "ExampleGenerator",
    "GenerationFailure",
    "GenerationResult",
    "PayloadRenderer",
    "TemplateRenderer",
    "VerbatimPayloadRenderer",
]
