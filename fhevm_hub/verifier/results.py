"""Verification results collection, aggregation, and reporting.

Provides Pydantic v2 models for the outcome of checking generated projects:
external command outcomes, one frozen record per project, and the
aggregate report with its per-artifact tally.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


# Artifact flag -> label used in reports and the tally.
ARTIFACTS: dict[str, str] = {
    "has_contract": "contracts/*.sol",
    "has_tests": "test/*.test.ts",
    "has_readme": "README.md",
    "has_package_json": "package.json",
    "has_hardhat_config": "hardhat.config.ts",
    "has_ts_config": "tsconfig.json",
    "has_deploy_script": "scripts/deploy.ts",
}


# ---------------------------------------------------------------------------
# External command outcome
# ---------------------------------------------------------------------------

class CommandOutcome(BaseModel):
    """Exit status of one external build-tool invocation."""

    model_config = ConfigDict(frozen=True)

    command: str = Field(..., description="Command line as displayed")
    returncode: int = Field(..., description="Process exit status; -1 on timeout")
    duration_seconds: float = Field(default=0.0, ge=0.0)
    error: str = Field(default="", description="Why the command did not run or finish")

    @computed_field  # type: ignore[misc]
    @property
    def succeeded(self) -> bool:
        return self.returncode == 0


# ---------------------------------------------------------------------------
# Per-project record
# ---------------------------------------------------------------------------

class VerificationRecord(BaseModel):
    """Artifact check for one generated project."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Project path relative to the verified root")
    path: str = Field(default="", description="Absolute project path")
    has_contract: bool = False
    has_tests: bool = False
    has_readme: bool = False
    has_package_json: bool = False
    has_hardhat_config: bool = False
    has_ts_config: bool = False
    has_deploy_script: bool = False
    deploy_script_required: bool = True
    compile: Optional[CommandOutcome] = None
    test: Optional[CommandOutcome] = None

    @computed_field  # type: ignore[misc]
    @property
    def is_complete(self) -> bool:
        """True when every required artifact is present."""
        return not self.missing_artifacts

    @property
    def missing_artifacts(self) -> list[str]:
        """Labels of required artifacts that are absent."""
        missing: list[str] = []
        for flag, label in ARTIFACTS.items():
            if flag == "has_deploy_script" and not self.deploy_script_required:
                continue
            if not getattr(self, flag):
                missing.append(label)
        return missing


# ---------------------------------------------------------------------------
# Aggregate report
# ---------------------------------------------------------------------------

class VerificationReport(BaseModel):
    """Aggregate result of a verification run."""

    root: str = Field(default="", description="Directory that was verified")
    records: list[VerificationRecord] = Field(default_factory=list)
    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(),
        description="ISO-8601 timestamp of when the report was generated",
    )

    @computed_field  # type: ignore[misc]
    @property
    def total(self) -> int:
        return len(self.records)

    @computed_field  # type: ignore[misc]
    @property
    def complete_count(self) -> int:
        return sum(1 for r in self.records if r.is_complete)

    @computed_field  # type: ignore[misc]
    @property
    def all_complete(self) -> bool:
        """True when every project has all required artifacts."""
        return self.complete_count == self.total

    @computed_field  # type: ignore[misc]
    @property
    def artifact_tally(self) -> dict[str, int]:
        """How many projects have each artifact, keyed by artifact label."""
        return {
            label: sum(1 for r in self.records if getattr(r, flag))
            for flag, label in ARTIFACTS.items()
        }

    @computed_field  # type: ignore[misc]
    @property
    def compile_failures(self) -> list[str]:
        return [r.name for r in self.records if r.compile is not None and not r.compile.succeeded]

    @computed_field  # type: ignore[misc]
    @property
    def test_failures(self) -> list[str]:
        return [r.name for r in self.records if r.test is not None and not r.test.succeeded]

    @property
    def commands_passed(self) -> bool:
        return not self.compile_failures and not self.test_failures

    # -- Serialisation helpers -----------------------------------------------

    def to_json(self, indent: int = 2) -> str:
        return self.model_dump_json(indent=indent)

    def save(self, path: Path) -> Path:
        """Persist the report to a JSON file, creating parent directories as needed."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json(), encoding="utf-8")
        return path

    @classmethod
    def load(cls, path: Path) -> "VerificationReport":
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    # -- Summary helpers -----------------------------------------------------

    def summary_dict(self) -> dict[str, Any]:
        """Return a condensed summary suitable for logs and reports."""
        return {
            "all_complete": self.all_complete,
            "complete": f"{self.complete_count}/{self.total}",
            "artifacts": {
                label: f"{count}/{self.total}" for label, count in self.artifact_tally.items()
            },
            "compile_failures": self.compile_failures,
            "test_failures": self.test_failures,
        }

    def summary_text(self) -> str:
        """Human-readable multi-line summary."""
        status = "COMPLETE" if self.all_complete else "INCOMPLETE"
        lines: list[str] = [
            f"Verification Report  [{status}]  {self.timestamp}",
            "-" * 60,
            f"  Total examples:    {self.total}",
            f"  Complete examples: {self.complete_count}/{self.total}",
            "",
            "  Detailed breakdown:",
        ]
        for label, count in self.artifact_tally.items():
            lines.append(f"    {label:20s} {count}/{self.total}")
        if self.compile_failures:
            lines.append(f"  Compile failures: {', '.join(self.compile_failures)}")
        if self.test_failures:
            lines.append(f"  Test failures: {', '.join(self.test_failures)}")
        lines.append("-" * 60)
        return "\n".join(lines)
