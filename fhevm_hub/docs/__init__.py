"""Documentation generation from annotated test files.

Usage::

    from fhevm_hub.docs import generate_docs

    assembler, written = await generate_docs("test", "docs")
    print(assembler.chapters)
"""

from fhevm_hub.docs.assembler import DocumentationAssembler, generate_docs
from fhevm_hub.docs.extractor import (
    TEST_FILE_SUFFIXES,
    AnnotationExtractor,
    ExtractorState,
    find_test_files,
)
from fhevm_hub.docs.models import DocSection

__all__ = [
    "TEST_FILE_SUFFIXES",
    "AnnotationExtractor",
    "DocSection",
    "DocumentationAssembler",
    "ExtractorState",
    "find_test_files",
    "generate_docs",
]
