"""Payload rendering for generated contract and test files.

The scaffolder never looks inside a payload: it asks a ``PayloadRenderer``
for the text of ``contracts/<Name>.sol`` and ``test/<Name>.test.ts`` and
writes whatever comes back.  ``VerbatimPayloadRenderer`` is plain textual
substitution.  A renderer that validates identifiers or parses Solidity can
be passed to ``ExampleGenerator`` without touching the directory-building
code.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from fhevm_hub.registry.models import CategoryDefinition, CategoryExampleRef, ExampleDefinition

from .templates import TemplateRenderer

SOLIDITY_VERSION = "0.8.19"


class PayloadRenderer(ABC):
    """Produces the source text written into a generated project."""

    @abstractmethod
    def contract_source(self, example: ExampleDefinition) -> str:
        """Text of ``contracts/<ContractName>.sol``."""

    @abstractmethod
    def test_source(self, example: ExampleDefinition) -> str:
        """Text of ``test/<ContractName>.test.ts``."""


class VerbatimPayloadRenderer(PayloadRenderer):
    """Copies the definition's payloads unchanged.

    Malformed payloads are written as-is; they surface when the generated
    project is compiled.
    """

    def contract_source(self, example: ExampleDefinition) -> str:
        return example.contract_content

    def test_source(self, example: ExampleDefinition) -> str:
        return example.test_content


def skeleton_definition(
    renderer: TemplateRenderer,
    ref: CategoryExampleRef,
    category: CategoryDefinition,
) -> ExampleDefinition:
    """Synthesize a minimal definition for a category entry with no full payloads.

    The skeleton contract and test both name ``pascal_case(ref.name)`` so the
    contract factory lookup in the test matches the generated contract.
    """
    chapter = ref.name.replace("-", "_")
    context = {"ref": ref, "chapter": chapter, "solidity_version": SOLIDITY_VERSION}
    return ExampleDefinition(
        name=ref.name,
        title=ref.title,
        description=ref.description,
        category=category.name,
        chapter=chapter,
        contract_content=renderer.render("skeleton/contract.sol.j2", context),
        test_content=renderer.render("skeleton/test.ts.j2", context),
    )
