"""Integration tests for the scaffold -> verify -> document pipeline.

These tests run the real registry, scaffolder, verifier and documentation
builder against the built-in catalog and check that their outputs agree
with each other.

No external build tool is required: compile/test commands are not run.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from fhevm_hub.docs import generate_docs
from fhevm_hub.registry import default_registry
from fhevm_hub.scaffolder import ExampleGenerator
from fhevm_hub.verifier import VerificationRunner


@pytest.mark.integration
class TestScaffoldThenVerify:
    """Everything the scaffolder writes must pass the verifier."""

    @pytest.mark.asyncio
    async def test_single_example_is_complete(self, tmp_path: Path):
        await ExampleGenerator(tmp_path).generate_example("counter")

        report = await VerificationRunner(tmp_path).verify()

        assert [r.name for r in report.records] == ["counter"]
        assert report.records[0].is_complete

    @pytest.mark.asyncio
    async def test_all_categories_are_complete(self, tmp_path: Path):
        result = await ExampleGenerator(tmp_path).generate_all()
        assert result.ok

        report = await VerificationRunner(tmp_path).verify()

        registry = default_registry()
        expected = sorted(
            f"{category.name}/{ref.name}"
            for category in registry.categories()
            for ref in category.examples
        )
        assert sorted(r.name for r in report.records) == expected
        assert report.all_complete

    @pytest.mark.asyncio
    async def test_regeneration_keeps_path_set(self, tmp_path: Path):
        generator = ExampleGenerator(tmp_path)
        first = await generator.generate_category("basic")
        second = await generator.generate_category("basic")
        assert set(first.created_paths) == set(second.created_paths)


@pytest.mark.integration
class TestScaffoldThenDocument:
    """Generated test files carry annotations the extractor understands."""

    @pytest.mark.asyncio
    async def test_docs_from_generated_tests(self, tmp_path: Path):
        examples = tmp_path / "examples"
        await ExampleGenerator(examples).generate_category("basic")

        assembler, _ = await generate_docs(examples, tmp_path / "docs")

        # counter carries a full annotated suite; skeletons get one section each.
        assert assembler.chapters[0] == "arithmetic"
        assert "arithmetic-operations" in assembler.chapters
        chapter = (tmp_path / "docs" / "arithmetic-operations.md").read_text(encoding="utf-8")
        assert chapter.startswith("# Arithmetic Operations")
        assert "## should increment encrypted value" in chapter
        assert (tmp_path / "docs" / "SUMMARY.md").is_file()
