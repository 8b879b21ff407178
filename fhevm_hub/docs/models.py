"""Pydantic v2 models for extracted documentation."""

from __future__ import annotations

import re

from pydantic import BaseModel, Field, field_validator

_NON_ID_CHARS = re.compile(r"[^\w-]+")


def chapter_slug(raw: str) -> str:
    """Reduce a ``@chapter`` value to an identifier safe to use as a file name.

    Runs of characters other than word characters and ``-`` collapse to one
    ``-``, so ``guides/basics`` becomes ``guides-basics`` and ``../x``
    becomes ``x``.
    """
    return _NON_ID_CHARS.sub("-", raw).strip("-")


class DocSection(BaseModel):
    """One documented test: the prose above an ``it``/``describe`` call."""

    chapter: str = Field(..., description="Chapter the section is grouped under")
    title: str = Field(..., description="Quoted name of the describe/it call")
    content: str = Field(default="", description="Comment prose with decoration removed")
    examples: list[str] = Field(
        default_factory=list, description="Fenced code blocks found after the title line"
    )

    @field_validator("chapter")
    @classmethod
    def _chapter_is_identifier(cls, value: str) -> str:
        slug = chapter_slug(value)
        if not slug:
            raise ValueError(f"chapter {value!r} has no identifier characters")
        return slug
