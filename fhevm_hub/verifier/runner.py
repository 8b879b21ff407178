"""Verification orchestrator for generated example projects.

Walks a directory of generated projects, checks each one for the required
artifact set, and optionally compiles and tests each project with the
external build tool.  Projects are processed strictly one at a time: the
build tool's shared caches make parallel runs contend, and sequential runs
keep each failure attributable to a single project.

Results are collected into :class:`VerificationReport`.
"""

from __future__ import annotations

import time
from collections.abc import Iterator
from pathlib import Path

from rich.markup import escape
from rich.table import Table

from fhevm_hub.config import VerifyConfig
from fhevm_hub.utils import (
    console,
    format_command,
    format_duration,
    print_error,
    print_success,
    run_command,
)

from .results import ARTIFACTS, CommandOutcome, VerificationRecord, VerificationReport

# Any of these marks a directory as a project rather than a category folder.
_PROJECT_MARKERS: tuple[str, ...] = ("contracts", "test", "package.json", "hardhat.config.ts")
_SKIP_DIRS: frozenset[str] = frozenset({"node_modules", "artifacts", "cache", "typechain-types"})


# ---------------------------------------------------------------------------
# Artifact checks
# ---------------------------------------------------------------------------

def _dir_has_suffix(directory: Path, suffix: str) -> bool:
    return directory.is_dir() and any(
        p.is_file() and p.name.endswith(suffix) for p in directory.iterdir()
    )


def check_project(
    project_path: str | Path, name: str | None = None, *, deploy_script_required: bool = True
) -> VerificationRecord:
    """Check one project directory for every required artifact."""
    path = Path(project_path)
    return VerificationRecord(
        name=name or path.name,
        path=str(path.resolve()),
        has_contract=_dir_has_suffix(path / "contracts", ".sol"),
        has_tests=_dir_has_suffix(path / "test", ".test.ts"),
        has_readme=(path / "README.md").is_file(),
        has_package_json=(path / "package.json").is_file(),
        has_hardhat_config=(path / "hardhat.config.ts").is_file(),
        has_ts_config=(path / "tsconfig.json").is_file(),
        has_deploy_script=(path / "scripts" / "deploy.ts").is_file(),
        deploy_script_required=deploy_script_required,
    )


def _is_project(directory: Path) -> bool:
    return any((directory / marker).exists() for marker in _PROJECT_MARKERS)


def _subdirectories(directory: Path) -> list[Path]:
    return sorted(
        (
            p
            for p in directory.iterdir()
            if p.is_dir() and not p.name.startswith(".") and p.name not in _SKIP_DIRS
        ),
        key=lambda p: p.name,
    )


def discover_projects(root: str | Path) -> list[Path]:
    """Return the project directories under *root*, sorted by path.

    A *root* that is itself a project is the only result.  Otherwise,
    directories without project markers are treated as category folders and
    searched recursively.  A folder with nothing project-like beneath it is
    itself reported, so an empty or broken project still gets a record.
    """
    root_path = Path(root)
    if not root_path.is_dir():
        return []
    if _is_project(root_path):
        return [root_path]
    return list(_walk(root_path))


def _walk(directory: Path) -> Iterator[Path]:
    for child in _subdirectories(directory):
        if _is_project(child):
            yield child
            continue
        nested = list(_walk(child))
        if nested:
            yield from nested
        else:
            yield child


# ---------------------------------------------------------------------------
# VerificationRunner
# ---------------------------------------------------------------------------


class VerificationRunner:
    """Checks every generated project under *root*.

    Parameters
    ----------
    root:
        Directory that holds generated projects, either directly or one
        category level down.
    config:
        Commands, timeout and whether ``scripts/deploy.ts`` is required.
    """

    def __init__(self, root: str | Path, config: VerifyConfig | None = None) -> None:
        self.root = Path(root)
        self.config = config or VerifyConfig()

    # -- Public API --------------------------------------------------------

    def discover_projects(self) -> list[Path]:
        return discover_projects(self.root)

    def check_all(self) -> VerificationReport:
        """Artifact checks only; no external commands."""
        records = [self._check(path) for path in self.discover_projects()]
        return VerificationReport(root=str(self.root), records=records)

    async def verify(self, *, compile: bool = False, test: bool = False) -> VerificationReport:
        """Check every project and, if asked, compile and test each in turn."""
        projects = self.discover_projects()
        console.print(f"\n[bold]Validating examples[/bold] in {self.root}")
        console.print(f"Found {len(projects)} example(s)\n")

        records: list[VerificationRecord] = []
        for project in projects:
            record = self._check(project)
            if compile or test:
                record = await self._run_commands(project, record, compile=compile, test=test)
            records.append(record)
            self._print_record(record)

        report = VerificationReport(root=str(self.root), records=records)
        self.print_report(report)
        return report

    # -- Checks ------------------------------------------------------------

    def _check(self, project: Path) -> VerificationRecord:
        name = project.relative_to(self.root).as_posix()
        if name == ".":
            name = self.root.resolve().name
        return check_project(
            project,
            name,
            deploy_script_required=self.config.require_deploy_script,
        )

    async def _run_commands(
        self,
        project: Path,
        record: VerificationRecord,
        *,
        compile: bool,
        test: bool,
    ) -> VerificationRecord:
        """Run install/compile/test for one project and return the updated record."""
        updates: dict[str, CommandOutcome] = {}

        if not record.has_package_json:
            missing = CommandOutcome(
                command="", returncode=1, error="package.json not found"
            )
            if compile:
                updates["compile"] = missing
            if test:
                updates["test"] = missing
            return record.model_copy(update=updates)

        if not (project / "node_modules").is_dir():
            console.print(f"  Installing dependencies for {record.name}...")
            install = await self._run(self.config.install_command, project)
            if not install.succeeded:
                failed = install.model_copy(
                    update={"error": install.error or "dependency install failed"}
                )
                if compile:
                    updates["compile"] = failed
                if test:
                    updates["test"] = failed
                return record.model_copy(update=updates)

        if compile:
            console.print(f"  Compiling {record.name}...")
            updates["compile"] = await self._run(self.config.compile_command, project)
        if test:
            console.print(f"  Testing {record.name}...")
            updates["test"] = await self._run(self.config.test_command, project)
        return record.model_copy(update=updates)

    async def _run(self, command: list[str], cwd: Path) -> CommandOutcome:
        """Run one command, turning launch failures and timeouts into outcomes."""
        display = format_command(command)
        start = time.monotonic()
        try:
            returncode, _stdout, stderr = await run_command(
                command, cwd=cwd, timeout=self.config.command_timeout
            )
        except (FileNotFoundError, PermissionError) as exc:
            return CommandOutcome(
                command=display,
                returncode=127,
                duration_seconds=time.monotonic() - start,
                error=f"could not launch {command[0]}: {exc}",
            )
        error = stderr if returncode == -1 else ""
        return CommandOutcome(
            command=display,
            returncode=returncode,
            duration_seconds=time.monotonic() - start,
            error=error,
        )

    # -- Reporting ---------------------------------------------------------

    def _print_record(self, record: VerificationRecord) -> None:
        if record.is_complete:
            console.print(f"[green]+[/green] {record.name}")
        else:
            console.print(f"[red]x[/red] {record.name}")
            for label in record.missing_artifacts:
                console.print(f"   - Missing {label}")
        for label, outcome in (("Compilation", record.compile), ("Tests", record.test)):
            if outcome is None:
                continue
            mark = "[green]ok[/green]" if outcome.succeeded else "[red]FAIL[/red]"
            detail = f" ({escape(outcome.error)})" if outcome.error else ""
            console.print(
                f"   {label}: {mark} [{format_duration(outcome.duration_seconds)}]{detail}"
            )

    def print_report(self, report: VerificationReport) -> None:
        """Print the per-artifact tally and the overall verdict."""
        table = Table(title="Detailed Breakdown", show_header=True, header_style="bold cyan")
        table.add_column("Artifact", style="dim", no_wrap=True)
        table.add_column("Present")
        for label in ARTIFACTS.values():
            table.add_row(label, f"{report.artifact_tally[label]}/{report.total}")

        console.print()
        console.print(f"Total Examples: {report.total}")
        console.print(f"Complete Examples: {report.complete_count}/{report.total}")
        console.print(table)

        if report.compile_failures:
            print_error(f"Compilation failed: {', '.join(report.compile_failures)}")
        if report.test_failures:
            print_error(f"Tests failed: {', '.join(report.test_failures)}")
        if report.total == 0:
            print_error(f"No examples found in {self.root}")
        elif report.all_complete:
            print_success("All examples are complete and ready for deployment!")
        else:
            print_error("Some examples are missing required files.")
