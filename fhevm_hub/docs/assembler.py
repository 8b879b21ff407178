"""Documentation assembler.

Groups extracted :class:`DocSection` records by chapter and renders a
GitBook-style document set:

- ``<chapter>.md`` for every chapter with at least one section
- ``SUMMARY.md`` table of contents (chapters in first-discovery order)
- ``index.md`` overview with per-chapter counts and highlights
- ``README.md`` (same content as ``index.md``)

The chapter map is private; callers get documents only through the render
methods so that chapter files, the table of contents and the index always
agree on ordering and elision.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from pathlib import Path

from fhevm_hub.utils import console, print_success, to_title_words

from .extractor import TEST_FILE_SUFFIXES, AnnotationExtractor, find_test_files
from .models import DocSection

INDEX_HIGHLIGHTS = 3


class DocumentationAssembler:
    """Owns the ``chapter -> [DocSection]`` map and renders it to Markdown."""

    def __init__(self, example_language: str = "solidity") -> None:
        self.example_language = example_language
        self._chapters: dict[str, list[DocSection]] = {}

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    def add_section(self, section: DocSection) -> None:
        """Append *section* to its chapter, creating the chapter on first sight."""
        self._chapters.setdefault(section.chapter, []).append(section)

    def add_sections(self, sections: Iterable[DocSection]) -> None:
        for section in sections:
            self.add_section(section)

    @property
    def chapters(self) -> list[str]:
        """Chapter names in first-discovery order."""
        return [name for name, sections in self._chapters.items() if sections]

    def section_count(self, chapter: str) -> int:
        return len(self._chapters.get(chapter, []))

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render_chapter(self, chapter: str) -> str:
        """Render one chapter; an unknown or empty chapter renders as ``""``."""
        sections = self._chapters.get(chapter)
        if not sections:
            return ""

        parts: list[str] = [f"# {to_title_words(chapter)}\n"]
        for section in sections:
            parts.append(f"## {section.title}\n")
            if section.content:
                parts.append(f"{section.content}\n")
            if section.examples:
                parts.append("### Example\n")
                parts.append(
                    f"```{self.example_language}\n{section.examples[0]}\n```\n"
                )
        return "\n".join(parts)

    def render_table_of_contents(self) -> str:
        """Render ``SUMMARY.md``."""
        lines: list[str] = [
            "# Table of Contents",
            "",
            "## Getting Started",
            "",
            "- [Introduction](introduction.md)",
            "- [Setup Guide](setup.md)",
            "",
            "## Chapters",
            "",
        ]
        for chapter in self.chapters:
            lines.append(f"- [{to_title_words(chapter)}]({chapter}.md)")
        lines.extend([
            "",
            "## Advanced",
            "",
            "- [FAQ](faq.md)",
            "- [Troubleshooting](troubleshooting.md)",
            "- [Reference](reference.md)",
            "",
        ])
        return "\n".join(lines)

    def render_index(self) -> str:
        """Render ``index.md``: quick start, chapter overview, learning paths."""
        lines: list[str] = [
            "# FHEVM Documentation",
            "",
            "Welcome to the FHEVM Examples and Learning Guide.",
            "",
            "## Quick Start",
            "",
            "1. [Installation & Setup](setup.md)",
            "2. [Basic Concepts](introduction.md)",
        ]
        if self.chapters:
            first = self.chapters[0]
            lines.append(f"3. [First Example]({first}.md)")
        lines.extend(["", "## Chapter Overview", ""])

        for chapter in self.chapters:
            sections = self._chapters[chapter]
            lines.append(f"### [{to_title_words(chapter)}]({chapter}.md)")
            lines.append(f"Contains {len(sections)} examples:")
            for section in sections[:INDEX_HIGHLIGHTS]:
                lines.append(f"- {section.title}")
            if len(sections) > INDEX_HIGHLIGHTS:
                lines.append(f"- ... and {len(sections) - INDEX_HIGHLIGHTS} more")
            lines.append("")

        lines.extend([
            "## Documentation Structure",
            "",
            "This documentation is organized as follows:",
            "",
            "- **Getting Started**: Installation and basic setup",
            "- **Chapters**: Organized by concept and difficulty",
            "- **Examples**: Working code for each concept",
            "- **Reference**: API and function documentation",
            "",
            "## Learning Paths",
            "",
            "### For Beginners",
            "1. Introduction",
            "2. Basic Arithmetic",
            "3. Encryption Basics",
            "",
            "### For Developers",
            "1. Setup Guide",
            "2. All Chapters in Order",
            "3. Reference & API",
            "",
            "### For Advanced Users",
            "1. Advanced Patterns",
            "2. Gas Optimization",
            "3. Security Best Practices",
            "",
        ])
        return "\n".join(lines)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    async def write(self, output_dir: str | Path) -> list[Path]:
        """Write chapter files, ``SUMMARY.md``, ``index.md`` and ``README.md``.

        Returns the written paths in write order.
        """
        out = Path(output_dir)
        await asyncio.to_thread(out.mkdir, parents=True, exist_ok=True)

        documents: list[tuple[str, str]] = [
            (f"{chapter}.md", self.render_chapter(chapter)) for chapter in self.chapters
        ]
        index = self.render_index()
        documents.extend([
            ("SUMMARY.md", self.render_table_of_contents()),
            ("index.md", index),
            ("README.md", index),
        ])

        written: list[Path] = []
        for file_name, content in documents:
            path = out / file_name
            await asyncio.to_thread(path.write_text, content, "utf-8")
            console.print(f"  Created: {file_name}")
            written.append(path)
        return written


# ---------------------------------------------------------------------------
# Pipeline entry point
# ---------------------------------------------------------------------------


async def generate_docs(
    input_dir: str | Path,
    output_dir: str | Path,
    *,
    extractor: AnnotationExtractor | None = None,
    example_language: str = "solidity",
    suffixes: tuple[str, ...] = TEST_FILE_SUFFIXES,
) -> tuple[DocumentationAssembler, list[Path]]:
    """Extract annotations from every test file under *input_dir* and write docs.

    Files are processed in sorted path order, so chapter order and section
    order are reproducible across runs.

    Raises:
        OSError: If a test file cannot be read or an output file cannot be
            written.
    """
    extractor = extractor or AnnotationExtractor()
    assembler = DocumentationAssembler(example_language=example_language)

    console.print("\n[bold]Generating documentation[/bold]")
    console.print(f"Input directory: {input_dir}")
    console.print(f"Output directory: {output_dir}")

    test_files = find_test_files(input_dir, suffixes)
    console.print(f"Found {len(test_files)} test files")

    for path in test_files:
        sections = await asyncio.to_thread(extractor.extract_file, path)
        assembler.add_sections(sections)

    written = await assembler.write(output_dir)
    print_success(
        f"Documentation generated: {len(assembler.chapters)} chapters, "
        f"{len(written)} files in {output_dir}"
    )
    return assembler, written
