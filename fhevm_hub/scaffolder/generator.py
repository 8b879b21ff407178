"""Main scaffolding orchestrator.

Turns registry entries into standalone Hardhat projects:

- ``generate_example`` renders one full example into ``<output>/<name>/``.
- ``generate_category`` renders every entry of a category into
  ``<output>/<category>/<name>/`` (skeletons for entries without payloads)
  plus the category ``README.md`` and ``INDEX.md``.
- ``generate_all`` walks every category in registry order and writes
  ``EXAMPLES_INDEX.md``, collecting per-category failures instead of
  stopping at the first one.

Regeneration always refreshes: directories are created only when missing,
but every file is rewritten on every call so generated output tracks the
registry.  Writes are awaited one at a time.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, computed_field
from rich.markup import escape

from fhevm_hub.registry import (
    CategoryDefinition,
    ExampleDefinition,
    Registry,
    default_registry,
)
from fhevm_hub.utils import console, dump_json, print_error, print_success

from .payloads import (
    SOLIDITY_VERSION,
    PayloadRenderer,
    VerbatimPayloadRenderer,
    skeleton_definition,
)
from .templates import TemplateRenderer, write_file

PROJECT_DIRS: tuple[str, ...] = ("contracts", "test", "scripts")
MASTER_INDEX = "EXAMPLES_INDEX.md"

_DEV_DEPENDENCIES: dict[str, str] = {
    "@nomicfoundation/hardhat-toolbox": "^5.0.0",
    "@fhevm/hardhat-plugin": "0.0.1-3",
    "hardhat": "^2.24.3",
    "@types/node": "^20.0.0",
    "ts-node": "^10.9.0",
    "typescript": "^5.0.0",
}


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------


class GenerationFailure(BaseModel):
    """One item of a batch run that could not be generated."""

    item: str = Field(..., description="Category or file that failed")
    error: str = Field(..., description="Error message, including the attempted path")


class GenerationResult(BaseModel):
    """Files written by a generation call, plus any batch failures."""

    created_paths: list[Path] = Field(default_factory=list)
    failures: list[GenerationFailure] = Field(default_factory=list)

    @computed_field  # type: ignore[misc]
    @property
    def ok(self) -> bool:
        return not self.failures

    def extend(self, other: "GenerationResult") -> None:
        self.created_paths.extend(other.created_paths)
        self.failures.extend(other.failures)


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ExampleGenerator:
    """Scaffolds example projects from registry definitions.

    Each generated project contains ``contracts/<Name>.sol``,
    ``test/<Name>.test.ts``, ``hardhat.config.ts``, ``tsconfig.json``,
    ``scripts/deploy.ts``, ``README.md`` and ``package.json``, where
    ``<Name>`` is the PascalCase form of the example name.
    """

    def __init__(
        self,
        output_dir: str | Path,
        registry: Registry | None = None,
        renderer: TemplateRenderer | None = None,
        payloads: PayloadRenderer | None = None,
    ) -> None:
        self.output_dir = Path(output_dir)
        self.registry = registry if registry is not None else default_registry()
        self.renderer = renderer or TemplateRenderer()
        self.payloads = payloads or VerbatimPayloadRenderer()

    # -- Public API --------------------------------------------------------

    async def generate_example(self, name: str) -> GenerationResult:
        """Generate ``<output>/<name>/`` from the full registry definition.

        Raises:
            UnknownExampleError: If *name* is not registered.
            OSError: If any directory or file cannot be written.
        """
        example = self.registry.get_example(name)
        console.print(f"\n[bold]Creating example:[/bold] {example.title}")

        project_dir = self.output_dir / example.name
        paths = await self._write_project(project_dir, example)

        print_success(f"Example created: {project_dir}")
        return GenerationResult(created_paths=paths)

    async def generate_category(self, name: str) -> GenerationResult:
        """Generate every example of a category under ``<output>/<category>/``.

        Raises:
            UnknownCategoryError: If *name* is not registered.
            OSError: If any directory or file cannot be written.
        """
        category = self.registry.get_category(name)
        result = GenerationResult()
        await self._generate_category_into(category, result)
        return result

    async def generate_all(self) -> GenerationResult:
        """Generate every category in registry order, then the master index.

        A filesystem error in one category is recorded in
        ``result.failures`` and the sweep moves on to the next category.
        """
        console.print("\n[bold]Generating all FHEVM example categories...[/bold]")
        result = GenerationResult()
        categories = self.registry.categories()

        for category in categories:
            try:
                await self._generate_category_into(category, result)
            except OSError as exc:
                print_error(f"  Category '{category.name}' failed: {escape(str(exc))}")
                result.failures.append(
                    GenerationFailure(item=category.name, error=str(exc))
                )

        try:
            index_path = await self.renderer.render_to_file(
                f"{MASTER_INDEX}.j2",
                self.output_dir / MASTER_INDEX,
                {"categories": categories},
            )
            result.created_paths.append(index_path)
            console.print(f"  Created: {MASTER_INDEX}")
        except OSError as exc:
            print_error(f"  {MASTER_INDEX} failed: {escape(str(exc))}")
            result.failures.append(GenerationFailure(item=MASTER_INDEX, error=str(exc)))

        if result.failures:
            print_error(f"Generation finished with {len(result.failures)} failure(s):")
            for failure in result.failures:
                print_error(f"  - {failure.item}: {escape(failure.error)}")
        else:
            print_success(f"All {len(categories)} categories generated")
        return result

    # -- Category ----------------------------------------------------------

    async def _generate_category_into(
        self, category: CategoryDefinition, result: GenerationResult
    ) -> None:
        """Render one category, appending written paths to *result* as it goes."""
        console.print(f"\n[bold]Generating category:[/bold] {category.title}")
        category_dir = self.output_dir / category.name
        await _ensure_dir(category_dir)

        for ref in category.examples:
            if self.registry.has_example(ref.name):
                example = self.registry.get_example(ref.name)
            else:
                example = skeleton_definition(self.renderer, ref, category)
            console.print(f"  Creating example: {ref.title}")
            result.created_paths.extend(
                await self._write_project(category_dir / ref.name, example, category)
            )

        ctx = {"category": category}
        result.created_paths.append(
            await self.renderer.render_to_file(
                "category/README.md.j2", category_dir / "README.md", ctx
            )
        )
        result.created_paths.append(
            await self.renderer.render_to_file(
                "category/INDEX.md.j2", category_dir / "INDEX.md", ctx
            )
        )
        print_success(
            f"Category '{category.name}' generated ({len(category.examples)} examples)"
        )

    # -- Project -----------------------------------------------------------

    async def _write_project(
        self,
        project_dir: Path,
        example: ExampleDefinition,
        category: CategoryDefinition | None = None,
    ) -> list[Path]:
        """Write the full file set for one example and return the paths written."""
        await self._create_directory_structure(project_dir)
        ctx = self._build_context(example, category)
        name = example.contract_name
        written: list[Path] = []

        written.append(
            await write_file(
                project_dir / "contracts" / f"{name}.sol",
                self.payloads.contract_source(example),
            )
        )
        written.append(
            await write_file(
                project_dir / "test" / f"{name}.test.ts",
                self.payloads.test_source(example),
            )
        )
        written.extend(await self.renderer.render_tree("project", project_dir, ctx))
        written.append(
            await self.renderer.render_to_file(
                "example/README.md.j2", project_dir / "README.md", ctx
            )
        )
        written.append(
            await write_file(project_dir / "package.json", dump_json(_package_json(example)))
        )

        for path in written:
            console.print(f"    [dim]wrote {path.relative_to(project_dir).as_posix()}[/dim]")
        return written

    async def _create_directory_structure(self, project_dir: Path) -> None:
        """Create the project directory tree, skipping directories that exist."""
        for d in (project_dir, *(project_dir / sub for sub in PROJECT_DIRS)):
            await _ensure_dir(d)

    def _build_context(
        self, example: ExampleDefinition, category: CategoryDefinition | None
    ) -> dict[str, Any]:
        """Build the Jinja2 template context for one example."""
        if category is None and example.category is not None:
            category = self.registry.get_category(example.category)
        return {
            "example": example,
            "category_title": category.title if category else "Standalone",
            "solidity_version": SOLIDITY_VERSION,
        }


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _package_json(example: ExampleDefinition) -> dict[str, Any]:
    """Synthesize ``package.json`` for an example from its name and category."""
    keywords = ["fhevm", "homomorphic-encryption", "privacy"]
    if example.category:
        keywords.append(example.category.lower())
    return {
        "name": f"fhevm-{example.name}-example",
        "version": "1.0.0",
        "description": example.description,
        "scripts": {
            "compile": "hardhat compile",
            "test": "hardhat test",
            "deploy": "hardhat run scripts/deploy.ts",
        },
        "devDependencies": dict(_DEV_DEPENDENCIES),
        "keywords": keywords,
        "author": "FHEVM Community",
        "license": "MIT",
    }


async def _ensure_dir(path: Path) -> None:
    if not path.is_dir():
        await asyncio.to_thread(path.mkdir, parents=True, exist_ok=True)
        console.print(f"  [dim]Created directory: {path}[/dim]")
