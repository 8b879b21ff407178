"""FHEVM example hub configuration.

Centralised, typed configuration for scaffolding, documentation generation
and verification. All settings use Pydantic v2 models so they can be
validated at construction time and serialised to/from JSON or environment
variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field


class DocsConfig(BaseModel):
    """Tuning knobs for annotation extraction and chapter rendering."""

    title_lookahead: int = Field(
        default=2,
        ge=1,
        description="Non-blank, non-comment lines inspected for a describe/it title",
    )
    example_window: int = Field(
        default=30, ge=1, description="Lines scanned for fenced code after a section"
    )
    example_language: str = Field(
        default="solidity", description="Fence language used for rendered examples"
    )
    default_chapter: str = Field(
        default="general", description="Chapter used before any @chapter tag is seen"
    )


class VerifyConfig(BaseModel):
    """Settings for the verification runner and its external build tool."""

    require_deploy_script: bool = Field(
        default=True, description="Whether scripts/deploy.ts counts toward completeness"
    )
    install_command: list[str] = Field(default=["npm", "install", "--silent"])
    compile_command: list[str] = Field(default=["npm", "run", "compile"])
    test_command: list[str] = Field(default=["npm", "run", "test"])
    command_timeout: int = Field(
        default=600, ge=10, description="Per-command timeout in seconds"
    )


class Config(BaseModel):
    """Global configuration for the example hub.

    Instances are typically created once by the CLI entry point and then
    passed to the generator, documentation builder and verifier.
    """

    output_dir: Path = Field(default=Path("./generated-examples"))
    docs_input_dir: Path = Field(default=Path("test"))
    docs_output_dir: Path = Field(default=Path("./generated-docs"))
    templates_dir: Optional[Path] = Field(
        default=None, description="Override for the bundled Jinja2 templates"
    )
    docs: DocsConfig = Field(default_factory=DocsConfig)
    verify: VerifyConfig = Field(default_factory=VerifyConfig)

    @property
    def config_path(self) -> Path:
        """Where ``init`` stores the configuration inside the output directory."""
        return self.output_dir / ".automation.json"

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path | None = None) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file. Defaults to ``<output_dir>/.automation.json``.

        Returns:
            The path where the file was written.
        """
        target = path or self.config_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            FHEVM_OUTPUT_DIR, FHEVM_DOCS_INPUT_DIR, FHEVM_DOCS_OUTPUT_DIR,
            FHEVM_TEMPLATES_DIR, FHEVM_REQUIRE_DEPLOY_SCRIPT,
            FHEVM_COMMAND_TIMEOUT, FHEVM_EXAMPLE_LANGUAGE.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("FHEVM_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["FHEVM_OUTPUT_DIR"])
        if os.environ.get("FHEVM_DOCS_INPUT_DIR"):
            kwargs["docs_input_dir"] = Path(os.environ["FHEVM_DOCS_INPUT_DIR"])
        if os.environ.get("FHEVM_DOCS_OUTPUT_DIR"):
            kwargs["docs_output_dir"] = Path(os.environ["FHEVM_DOCS_OUTPUT_DIR"])
        if os.environ.get("FHEVM_TEMPLATES_DIR"):
            kwargs["templates_dir"] = Path(os.environ["FHEVM_TEMPLATES_DIR"])

        docs_kwargs: dict[str, Any] = {}
        if os.environ.get("FHEVM_EXAMPLE_LANGUAGE"):
            docs_kwargs["example_language"] = os.environ["FHEVM_EXAMPLE_LANGUAGE"]

        verify_kwargs: dict[str, Any] = {}
        if os.environ.get("FHEVM_REQUIRE_DEPLOY_SCRIPT"):
            verify_kwargs["require_deploy_script"] = os.environ[
                "FHEVM_REQUIRE_DEPLOY_SCRIPT"
            ].strip().lower() not in ("0", "false", "no")
        if os.environ.get("FHEVM_COMMAND_TIMEOUT"):
            verify_kwargs["command_timeout"] = int(os.environ["FHEVM_COMMAND_TIMEOUT"])

        return cls(
            docs=DocsConfig(**docs_kwargs),
            verify=VerifyConfig(**verify_kwargs),
            **kwargs,
        )

    def ensure_directories(self) -> None:
        """Create the output and documentation directories."""
        for directory in (self.output_dir, self.docs_output_dir):
            directory.mkdir(parents=True, exist_ok=True)
