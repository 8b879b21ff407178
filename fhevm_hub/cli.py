"""Command-line entry point for the FHEVM example hub.

Usage::

    fhevm-hub create-example counter
    fhevm-hub create-category basic
    fhevm-hub create-category all
    fhevm-hub generate-docs --input test --output docs
    fhevm-hub validate --full --report report.json
    fhevm-hub list-examples
    fhevm-hub init
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Sequence
from pathlib import Path

from rich.markup import escape

from fhevm_hub.config import Config
from fhevm_hub.docs import AnnotationExtractor, generate_docs
from fhevm_hub.errors import UnknownCategoryError, UnknownExampleError
from fhevm_hub.registry import Registry, default_registry
from fhevm_hub.scaffolder import ExampleGenerator, TemplateRenderer
from fhevm_hub.utils import console, print_error, print_success, print_summary_table
from fhevm_hub.verifier import VerificationRunner


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fhevm-hub",
        description="FHEVM example hub -- scaffold, document and verify examples",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  fhevm-hub create-example counter\n"
            "  fhevm-hub create-category all -o ./examples\n"
            "  fhevm-hub generate-docs --input test --output docs\n"
            "  fhevm-hub validate --full\n"
        ),
    )
    parser.add_argument(
        "--output-dir", "-o",
        default=None,
        help="Output directory for generated examples (default: ./generated-examples)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a saved .automation.json configuration",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("create-example", help="Generate one standalone example project")
    p.add_argument("name", help="Example name, e.g. counter")

    p = sub.add_parser("create-category", help="Generate a category, or 'all' categories")
    p.add_argument("name", help="Category name, or 'all'")

    p = sub.add_parser("generate-docs", help="Build GitBook docs from annotated tests")
    p.add_argument("--input", default=None, help="Directory of annotated test files")
    p.add_argument("--output", default=None, help="Documentation output directory")

    p = sub.add_parser("validate", help="Check generated projects for completeness")
    p.add_argument("--compile", action="store_true", help="Compile each project")
    p.add_argument("--test", action="store_true", help="Run each project's tests")
    p.add_argument("--full", action="store_true", help="Same as --compile --test")
    p.add_argument(
        "--optional-deploy",
        action="store_true",
        help="Do not require scripts/deploy.ts",
    )
    p.add_argument("--report", default=None, help="Write a JSON report to this path")

    sub.add_parser("list-examples", help="List registered categories and examples")
    sub.add_parser("init", help="Create output directories and save the configuration")

    return parser


def load_config(args: argparse.Namespace) -> Config:
    """Saved config if ``--config`` is given, else environment; CLI flags win."""
    config = Config.load(Path(args.config)) if args.config else Config.from_env()
    if args.output_dir:
        config.output_dir = Path(args.output_dir)
    return config


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


async def _create_example(config: Config, registry: Registry, name: str) -> int:
    generator = ExampleGenerator(
        config.output_dir, registry, TemplateRenderer(config.templates_dir)
    )
    result = await generator.generate_example(name)
    console.print(f"Created {len(result.created_paths)} files")
    return 0


async def _create_category(config: Config, registry: Registry, name: str) -> int:
    generator = ExampleGenerator(
        config.output_dir, registry, TemplateRenderer(config.templates_dir)
    )
    if name.lower() == "all":
        result = await generator.generate_all()
        return 0 if result.ok else 1
    result = await generator.generate_category(name)
    console.print(f"Created {len(result.created_paths)} files")
    return 0


async def _generate_docs(config: Config, input_dir: str | None, output_dir: str | None) -> int:
    source = Path(input_dir) if input_dir else config.docs_input_dir
    target = Path(output_dir) if output_dir else config.docs_output_dir
    if not source.is_dir():
        print_error(f"Input directory not found: {source}")
        return 1
    extractor = AnnotationExtractor(
        default_chapter=config.docs.default_chapter,
        title_lookahead=config.docs.title_lookahead,
        example_window=config.docs.example_window,
    )
    await generate_docs(
        source,
        target,
        extractor=extractor,
        example_language=config.docs.example_language,
    )
    return 0


async def _validate(config: Config, args: argparse.Namespace) -> int:
    if not config.output_dir.is_dir():
        print_error(f"Examples directory not found: {config.output_dir}")
        return 1
    verify_config = config.verify
    if args.optional_deploy:
        verify_config = verify_config.model_copy(update={"require_deploy_script": False})
    runner = VerificationRunner(config.output_dir, verify_config)
    report = await runner.verify(
        compile=args.compile or args.full,
        test=args.test or args.full,
    )
    if args.report:
        path = report.save(Path(args.report))
        console.print(f"Report written to {path}")
    if report.total == 0:
        return 1
    return 0 if report.all_complete and report.commands_passed else 1


def _list_examples(registry: Registry) -> int:
    for category in registry.categories():
        console.print(f"\n[bold]{category.title}[/bold] ({category.name})")
        for ref in category.examples:
            marker = "" if registry.has_example(ref.name) else " [dim](skeleton)[/dim]"
            console.print(f"  - {ref.name}: {ref.description}{marker}")
    standalone = [e for e in registry.examples() if e.category is None]
    if standalone:
        console.print("\n[bold]Standalone[/bold]")
        for example in standalone:
            console.print(f"  - {example.name}: {example.description}")
    console.print()
    return 0


def _init(config: Config) -> int:
    config.ensure_directories()
    path = config.save()
    print_summary_table(
        {
            "Output directory": str(config.output_dir),
            "Docs input": str(config.docs_input_dir),
            "Docs output": str(config.docs_output_dir),
            "Config file": str(path),
        },
        title="Initialized",
    )
    print_success("Automation environment initialized")
    return 0


def run(args: argparse.Namespace, registry: Registry | None = None) -> int:
    """Dispatch a parsed command and return the process exit code."""
    config = load_config(args)
    registry = registry if registry is not None else default_registry()

    try:
        if args.command == "create-example":
            return asyncio.run(_create_example(config, registry, args.name))
        if args.command == "create-category":
            return asyncio.run(_create_category(config, registry, args.name))
        if args.command == "generate-docs":
            return asyncio.run(_generate_docs(config, args.input, args.output))
        if args.command == "validate":
            return asyncio.run(_validate(config, args))
        if args.command == "list-examples":
            return _list_examples(registry)
        if args.command == "init":
            return _init(config)
    except (UnknownExampleError, UnknownCategoryError, OSError) as exc:
        print_error(f"Error: {escape(str(exc))}")
        return 1

    print_error(f"Unknown command: {args.command}")
    return 1


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point for ``fhevm-hub`` and ``python -m fhevm_hub``."""
    parser = build_parser()
    args = parser.parse_args(argv)
    sys.exit(run(args))


if __name__ == "__main__":
    main()
