"""Pydantic v2 models for the example registry.

Definitions are frozen: they are built once when the registry is populated
and handed to the scaffolder by value.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from fhevm_hub.utils import to_pascal_case


class ExampleDefinition(BaseModel):
    """One reusable contract + test + documentation bundle."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., pattern=r"^[a-z0-9]+(-[a-z0-9]+)*$", description="Unique kebab-case key")
    title: str = Field(..., description="Display title")
    description: str = Field(default="", description="One-line summary")
    category: Optional[str] = Field(
        default=None, description="Owning category name, or None for a standalone example"
    )
    chapter: str = Field(default="general", description="Documentation grouping key")
    difficulty: str = Field(default="Beginner")
    contract_content: str = Field(default="", description="Solidity source, copied verbatim")
    test_content: str = Field(default="", description="TypeScript test source, copied verbatim")
    documentation_content: str = Field(default="", description="Markdown appended to the README")

    @computed_field  # type: ignore[misc]
    @property
    def contract_name(self) -> str:
        """Identifier used for the contract file, test file and deploy script."""
        return to_pascal_case(self.name)


class CategoryExampleRef(BaseModel):
    """An entry in a category's ordered example list."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., pattern=r"^[a-z0-9]+(-[a-z0-9]+)*$")
    title: str
    description: str = ""

    @computed_field  # type: ignore[misc]
    @property
    def contract_name(self) -> str:
        return to_pascal_case(self.name)


class CategoryDefinition(BaseModel):
    """A named, ordered grouping of examples sharing a learning theme."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., pattern=r"^[a-z0-9]+(-[a-z0-9]+)*$")
    title: str
    description: str = ""
    examples: tuple[CategoryExampleRef, ...] = Field(default_factory=tuple)
