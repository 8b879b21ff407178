"""Annotation extractor for test sources.

Scans TypeScript/JavaScript test files for ``/** ... */`` doc comments and
turns each one that precedes a ``describe``/``it`` call into a
:class:`DocSection`.  Uses pure regex and a small line-driven state machine
-- no TypeScript parsing.

The ``@chapter <id>`` tag is file-scoped: once seen, it applies to every
following section in the same file until another tag replaces it.  Tag
values are reduced to identifier characters because they become file names.

Malformed input never raises.  An unterminated comment is discarded with a
warning; a comment with no recognizable title falls back to the first code
line after it.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from enum import Enum
from pathlib import Path

from fhevm_hub.utils import print_warning

from .models import DocSection, chapter_slug


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

TEST_FILE_SUFFIXES: tuple[str, ...] = (".test.ts", ".test.js", ".spec.ts", ".spec.js")

_TITLE_PATTERN = re.compile(
    r"""(?<![.\w])(?:describe|it|test|context)(?:\.(?:only|skip))?\s*\(\s*(["'`])(.*?)\1"""
)
_CHAPTER_PATTERN = re.compile(r"@chapter\s+(\S+)")
_FENCE = "```"


class ExtractorState(str, Enum):
    """Where the extractor is relative to the current doc comment."""

    OUTSIDE = "outside"
    IN_COMMENT = "in_comment"
    AWAITING_TITLE = "awaiting_title"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _strip_decoration(line: str, keep_indent: bool = False) -> str:
    """Remove ``/**``, ``/*``, a leading ``*`` and a trailing ``*/`` from a comment line.

    With *keep_indent*, only one space after the ``*`` is removed so that
    code inside a comment keeps its indentation.
    """
    text = line.strip()
    if text.endswith("*/"):
        text = text[:-2]
    if text.startswith("/**"):
        text = text[3:]
    elif text.startswith("/*"):
        text = text[2:]
    elif text.startswith("*"):
        text = text[1:]
    if keep_indent:
        return text[1:].rstrip() if text.startswith(" ") else text.rstrip()
    return text.strip()


def _is_comment_line(stripped: str) -> bool:
    return stripped.startswith(("//", "/*", "*"))


def find_test_files(
    input_dir: str | Path, suffixes: Sequence[str] = TEST_FILE_SUFFIXES
) -> list[Path]:
    """Return every test file under *input_dir*, sorted by path.

    A missing directory yields an empty list.
    """
    root = Path(input_dir)
    if not root.is_dir():
        return []
    return sorted(
        (
            p
            for p in root.rglob("*")
            if p.is_file() and p.name.endswith(tuple(suffixes))
            and "node_modules" not in p.relative_to(root).parts
        ),
        key=lambda p: p.as_posix(),
    )


# ---------------------------------------------------------------------------
# AnnotationExtractor
# ---------------------------------------------------------------------------


class AnnotationExtractor:
    """Line-driven state machine that emits :class:`DocSection` records.

    Parameters
    ----------
    default_chapter:
        Chapter assigned to sections that appear before any ``@chapter`` tag.
    title_lookahead:
        How many non-blank, non-comment lines after a comment are searched
        for a ``describe``/``it`` title before falling back to the first one.
    example_window:
        How many lines, starting at the title line, are scanned for fenced
        code blocks.
    """

    def __init__(
        self,
        default_chapter: str = "general",
        title_lookahead: int = 2,
        example_window: int = 30,
    ) -> None:
        self.default_chapter = chapter_slug(default_chapter) or "general"
        self.title_lookahead = max(1, title_lookahead)
        self.example_window = example_window
        self.reset()

    def reset(self, source: str = "<text>") -> None:
        """Return to ``OUTSIDE`` with the default chapter and no output."""
        self.source = source
        self.current_chapter = self.default_chapter
        self.sections: list[DocSection] = []
        self._state = ExtractorState.OUTSIDE
        self._buffer: list[str] = []
        self._fallback_title: str | None = None
        self._lookahead_left = self.title_lookahead
        self._lines: list[str] = []
        self._index = 0

    @property
    def state(self) -> ExtractorState:
        return self._state

    # -- Public API --------------------------------------------------------

    def extract_text(self, text: str, source: str = "<text>") -> list[DocSection]:
        """Extract every documented section from *text*."""
        self.reset(source)
        self._lines = text.splitlines()
        for index, line in enumerate(self._lines):
            self._index = index
            self.step(line)
        self.finish()
        return list(self.sections)

    def extract_file(self, path: str | Path) -> list[DocSection]:
        """Extract sections from a file.

        Raises:
            OSError: If the file cannot be read.
        """
        file_path = Path(path)
        text = file_path.read_text(encoding="utf-8", errors="replace")
        return self.extract_text(text, source=str(file_path))

    # -- Transitions -------------------------------------------------------

    def step(self, line: str) -> DocSection | None:
        """Feed one line; return the section emitted by this line, if any."""
        stripped = line.strip()

        if self._state is ExtractorState.OUTSIDE:
            if stripped.startswith("/**"):
                self._open_comment(stripped)
            return None

        if self._state is ExtractorState.IN_COMMENT:
            self._absorb(stripped)
            return None

        # AWAITING_TITLE
        if stripped.startswith("/**"):
            emitted = None
            if self._fallback_title is not None:
                emitted = self._emit(self._fallback_title)
            self._open_comment(stripped)
            return emitted

        if not stripped or _is_comment_line(stripped):
            return None

        match = _TITLE_PATTERN.search(stripped)
        if match:
            return self._emit(match.group(2))

        if self._fallback_title is None:
            self._fallback_title = stripped
        self._lookahead_left -= 1
        if self._lookahead_left <= 0:
            return self._emit(self._fallback_title)
        return None

    def finish(self) -> DocSection | None:
        """Handle end of input; always leaves the machine ``OUTSIDE``."""
        emitted = None
        if self._state is ExtractorState.IN_COMMENT:
            print_warning(
                f"Unterminated doc comment in {self.source}; "
                f"discarded {len(self._buffer)} line(s)"
            )
        elif self._state is ExtractorState.AWAITING_TITLE and self._fallback_title is not None:
            emitted = self._emit(self._fallback_title)
        self._buffer = []
        self._state = ExtractorState.OUTSIDE
        return emitted

    def _open_comment(self, stripped: str) -> None:
        self._state = ExtractorState.IN_COMMENT
        self._buffer = []
        self._absorb(stripped)

    def _absorb(self, stripped: str) -> None:
        text = _strip_decoration(stripped)
        chapter = _CHAPTER_PATTERN.search(text)
        if chapter:
            # A tag with no identifier characters leaves the chapter unchanged.
            self.current_chapter = chapter_slug(chapter.group(1)) or self.current_chapter
            text = (text[: chapter.start()] + text[chapter.end():]).strip()
        if text:
            self._buffer.append(text)

        if stripped.endswith("*/"):
            self._state = ExtractorState.AWAITING_TITLE
            self._fallback_title = None
            self._lookahead_left = self.title_lookahead

    def _emit(self, title: str) -> DocSection | None:
        self._state = ExtractorState.OUTSIDE
        if not self._buffer:
            return None
        section = DocSection(
            chapter=self.current_chapter,
            title=title,
            content="\n".join(self._buffer),
            examples=self._collect_examples(self._index),
        )
        self._buffer = []
        self.sections.append(section)
        return section

    # -- Code examples -----------------------------------------------------

    def _collect_examples(self, start: int) -> list[str]:
        """Collect fenced code blocks in the window beginning at *start*.

        An unclosed fence at the end of the window is dropped.
        """
        examples: list[str] = []
        block: list[str] = []
        inside = False
        for line in self._lines[start : start + self.example_window]:
            if _FENCE in line:
                if inside:
                    examples.append("\n".join(block))
                    block = []
                inside = not inside
            elif inside:
                block.append(_strip_decoration(line, keep_indent=True))
        return examples
