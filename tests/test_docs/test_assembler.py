"""Unit tests for the documentation assembler (fhevm_hub.docs.assembler).

Tests cover:
- Chapter bookkeeping and discovery order
- render_chapter (empty chapter, prose, first example only)
- render_table_of_contents ordering
- render_index counts, highlights and elision
- write() output file set
- generate_docs end to end over a directory of test files
- DocSection chapter normalization
"""

from __future__ import annotations

from pathlib import Path

import pytest

from fhevm_hub.docs import DocSection, DocumentationAssembler, generate_docs

pytestmark = pytest.mark.unit


def _section(chapter: str, title: str, **kwargs) -> DocSection:
    return DocSection(chapter=chapter, title=title, **kwargs)


@pytest.fixture
def assembler() -> DocumentationAssembler:
    asm = DocumentationAssembler()
    asm.add_sections([
        _section("zeta", "z1", content="Zeta prose."),
        _section("alpha", "a1", content="Alpha prose.", examples=["first();", "second();"]),
        _section("zeta", "z2"),
    ])
    return asm


# ---------------------------------------------------------------------------
# Bookkeeping
# ---------------------------------------------------------------------------

class TestChapters:
    def test_discovery_order(self, assembler):
        assert assembler.chapters == ["zeta", "alpha"]

    def test_section_count(self, assembler):
        assert assembler.section_count("zeta") == 2
        assert assembler.section_count("missing") == 0

    def test_empty_assembler(self):
        assert DocumentationAssembler().chapters == []


# ---------------------------------------------------------------------------
# render_chapter
# ---------------------------------------------------------------------------

class TestRenderChapter:
    def test_unknown_chapter_is_empty_string(self, assembler):
        assert assembler.render_chapter("missing") == ""

    def test_heading_and_sections(self, assembler):
        text = assembler.render_chapter("zeta")
        assert text.startswith("# Zeta\n")
        assert text.index("## z1") < text.index("Zeta prose.") < text.index("## z2")

    def test_only_first_example_rendered(self, assembler):
        text = assembler.render_chapter("alpha")
        assert "### Example" in text
        assert "```solidity\nfirst();\n```" in text
        assert "second();" not in text

    def test_example_language(self):
        asm = DocumentationAssembler(example_language="typescript")
        asm.add_section(_section("c", "t", examples=["x()"]))
        assert "```typescript\nx()\n```" in asm.render_chapter("c")

    def test_multiword_chapter_title(self):
        asm = DocumentationAssembler()
        asm.add_section(_section("access_control", "t"))
        assert asm.render_chapter("access_control").startswith("# Access Control")


# ---------------------------------------------------------------------------
# Table of contents & index
# ---------------------------------------------------------------------------

class TestTableOfContents:
    def test_chapters_in_discovery_order(self, assembler):
        toc = assembler.render_table_of_contents()
        assert toc.startswith("# Table of Contents")
        assert toc.index("- [Zeta](zeta.md)") < toc.index("- [Alpha](alpha.md)")

    def test_fixed_sections(self, assembler):
        toc = assembler.render_table_of_contents()
        assert "- [Introduction](introduction.md)" in toc
        assert "- [FAQ](faq.md)" in toc
        assert toc.index("## Getting Started") < toc.index("## Chapters") < toc.index(
            "## Advanced"
        )


class TestIndex:
    def test_elides_after_three(self):
        asm = DocumentationAssembler()
        asm.add_sections(_section("big", f"s{i}") for i in range(5))
        index = asm.render_index()

        assert "Contains 5 examples:" in index
        assert "- s0\n- s1\n- s2\n- ... and 2 more" in index
        assert "- s3" not in index

    def test_no_elision_at_three(self):
        asm = DocumentationAssembler()
        asm.add_sections(_section("c", f"s{i}") for i in range(3))
        assert "more" not in asm.render_index().split("## Documentation Structure")[0]

    def test_first_example_links_first_chapter(self, assembler):
        assert "3. [First Example](zeta.md)" in assembler.render_index()

    def test_empty_index_has_no_first_example(self):
        index = DocumentationAssembler().render_index()
        assert index.startswith("# FHEVM Documentation")
        assert "First Example" not in index


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

class TestWrite:
    @pytest.mark.asyncio
    async def test_file_set(self, assembler, tmp_path: Path):
        out = tmp_path / "docs"
        written = await assembler.write(out)

        assert [p.name for p in written] == [
            "zeta.md", "alpha.md", "SUMMARY.md", "index.md", "README.md",
        ]
        assert (out / "README.md").read_text(encoding="utf-8") == (
            out / "index.md"
        ).read_text(encoding="utf-8")


class TestGenerateDocs:
    @pytest.mark.asyncio
    async def test_end_to_end(self, tmp_path: Path, access_control_source, sticky_chapter_source):
        src = tmp_path / "test"
        src.mkdir()
        (src / "AccessControl.test.ts").write_text(access_control_source, encoding="utf-8")
        (src / "Encryption.test.ts").write_text(sticky_chapter_source, encoding="utf-8")
        (src / "notes.md").write_text("/** ignored */", encoding="utf-8")

        assembler, written = await generate_docs(src, tmp_path / "docs")

        assert assembler.chapters == ["access-control", "encryption", "decryption"]
        names = {p.name for p in written}
        assert {"access-control.md", "encryption.md", "decryption.md"} <= names
        chapter = (tmp_path / "docs" / "access-control.md").read_text(encoding="utf-8")
        assert "## grants permission" in chapter
        assert "TFHE.allow(value, user);" in chapter

    @pytest.mark.asyncio
    async def test_missing_input_writes_skeleton_docs(self, tmp_path: Path):
        assembler, written = await generate_docs(tmp_path / "none", tmp_path / "docs")
        assert assembler.chapters == []
        assert [p.name for p in written] == ["SUMMARY.md", "index.md", "README.md"]

    @pytest.mark.asyncio
    async def test_slashed_chapter_stays_in_output_dir(self, tmp_path: Path):
        src = tmp_path / "test"
        src.mkdir()
        (src / "Guides.test.ts").write_text(
            '/**\n * @chapter guides/basics\n * Start here.\n */\nit("starts", f);\n'
            '/**\n * @chapter ../escape\n * Elsewhere.\n */\nit("escapes", f);\n',
            encoding="utf-8",
        )
        out = tmp_path / "docs"

        assembler, written = await generate_docs(src, out)

        assert assembler.chapters == ["guides-basics", "escape"]
        assert all(p.parent == out for p in written)
        assert (out / "guides-basics.md").is_file()
        assert (out / "escape.md").is_file()
        assert not (tmp_path / "escape.md").exists()


# ---------------------------------------------------------------------------
# DocSection
# ---------------------------------------------------------------------------

class TestDocSection:
    def test_chapter_normalized(self):
        assert _section("guides/basics", "t").chapter == "guides-basics"
        assert _section("../../etc", "t").chapter == "etc"

    def test_chapter_without_identifier_chars_rejected(self):
        with pytest.raises(ValueError):
            _section("../", "t")
