"""Shared pytest fixtures for the FHEVM example hub test suite.

Provides reusable fixtures for:
- Temporary output directories
- A small registry with one full example and one skeleton entry
- Annotated test-source text for the documentation extractor
- A fully generated project on disk
"""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from fhevm_hub.registry import (
    CategoryDefinition,
    CategoryExampleRef,
    ExampleDefinition,
    Registry,
)


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Temporary directory for generated examples (auto-cleanup)."""
    out = tmp_path / "generated-examples"
    out.mkdir()
    yield out


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

@pytest.fixture
def basic_category() -> CategoryDefinition:
    return CategoryDefinition(
        name="basic",
        title="Basic Operations",
        description="Fundamental FHEVM operations and patterns",
        examples=(
            CategoryExampleRef(
                name="counter",
                title="Encrypted Counter",
                description="Simple encrypted counter",
            ),
            CategoryExampleRef(
                name="arithmetic",
                title="Arithmetic Operations",
                description="FHEVM arithmetic: add, subtract, multiply, compare",
            ),
        ),
    )


@pytest.fixture
def counter_example() -> ExampleDefinition:
    return ExampleDefinition(
        name="counter",
        title="FHE Counter",
        description="A simple encrypted counter",
        category="basic",
        chapter="arithmetic-operations",
        contract_content="pragma solidity ^0.8.19;\ncontract Counter {}\n",
        test_content=textwrap.dedent("""\
            /**
             * @chapter arithmetic-operations
             * Counter suite
             */
            describe("Counter", function () {
                /**
                 * Increments by one
                 */
                it("should increment", async function () {});
            });
        """),
        documentation_content="## Key Concepts\n\n- Encrypted addition\n",
    )


@pytest.fixture
def small_registry(basic_category, counter_example) -> Registry:
    """``basic`` category with a full ``counter`` and a skeleton ``arithmetic``."""
    return Registry(categories=[basic_category], examples=[counter_example])


# ---------------------------------------------------------------------------
# Annotated test sources
# ---------------------------------------------------------------------------

@pytest.fixture
def access_control_source() -> str:
    return textwrap.dedent("""\
        import { expect } from "chai";

        /**
         * @chapter access-control
         * Grants permission to a user.
         */
        it("grants permission", async function () {
            /*
             * ```solidity
             * TFHE.allow(value, user);
             * ```
             */
            expect(true).to.equal(true);
        });
    """)


@pytest.fixture
def sticky_chapter_source() -> str:
    return textwrap.dedent("""\
        /**
         * @chapter encryption
         * Encrypts one value.
         */
        it("encrypts a single value", async function () {});

        /**
         * Encrypts many values.
         */
        it("encrypts multiple values", async function () {});

        /**
         * @chapter decryption
         * Decrypts for the user.
         */
        it("user decrypts", async function () {});
    """)
