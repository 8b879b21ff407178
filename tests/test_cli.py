"""Unit tests for the command-line entry point (fhevm_hub.cli).

Tests cover:
- Argument parsing for every subcommand
- Exit codes for success, unknown names and validation failures
- init writes .automation.json
- --config loading and --output-dir override
"""

from __future__ import annotations

from pathlib import Path

import pytest

from fhevm_hub.cli import build_parser, load_config, main, run
from fhevm_hub.config import Config

pytestmark = pytest.mark.unit


def _run(argv: list[str], registry) -> int:
    return run(build_parser().parse_args(argv), registry=registry)


class TestParser:
    def test_validate_flags(self):
        args = build_parser().parse_args(["validate", "--full", "--optional-deploy"])
        assert args.full and args.optional_deploy
        assert not args.compile and not args.test
        assert args.report is None

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_output_dir_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.delenv("FHEVM_OUTPUT_DIR", raising=False)
        args = build_parser().parse_args(["-o", str(tmp_path), "list-examples"])
        assert load_config(args).output_dir == tmp_path

    def test_config_file(self, tmp_path: Path):
        saved = Config(output_dir=tmp_path / "saved").save(tmp_path / "cfg.json")
        args = build_parser().parse_args(["--config", str(saved), "list-examples"])
        assert load_config(args).output_dir == tmp_path / "saved"


class TestCommands:
    def test_create_example(self, output_dir: Path, small_registry):
        assert _run(["-o", str(output_dir), "create-example", "counter"], small_registry) == 0
        assert (output_dir / "counter" / "contracts" / "Counter.sol").is_file()

    def test_unknown_example_exits_1(self, output_dir: Path, small_registry, capsys):
        assert _run(["-o", str(output_dir), "create-example", "nope"], small_registry) == 1
        assert "counter" in capsys.readouterr().out

    def test_create_category_all(self, output_dir: Path, small_registry):
        assert _run(["-o", str(output_dir), "create-category", "all"], small_registry) == 0
        assert (output_dir / "EXAMPLES_INDEX.md").is_file()
        assert (output_dir / "basic" / "INDEX.md").is_file()

    def test_unknown_category_exits_1(self, output_dir: Path, small_registry):
        assert _run(["-o", str(output_dir), "create-category", "nope"], small_registry) == 1

    def test_list_examples(self, small_registry, capsys):
        assert _run(["list-examples"], small_registry) == 0
        out = capsys.readouterr().out
        assert "Basic Operations" in out
        assert "arithmetic" in out

    def test_init(self, tmp_path: Path, small_registry):
        out = tmp_path / "examples"
        assert _run(["-o", str(out), "init"], small_registry) == 0
        assert (out / ".automation.json").is_file()

    def test_generate_docs(self, tmp_path: Path, small_registry, access_control_source):
        src = tmp_path / "test"
        src.mkdir()
        (src / "Acl.test.ts").write_text(access_control_source, encoding="utf-8")
        docs = tmp_path / "docs"

        code = _run(
            ["generate-docs", "--input", str(src), "--output", str(docs)], small_registry
        )

        assert code == 0
        assert (docs / "access-control.md").is_file()

    def test_generate_docs_missing_input(self, tmp_path: Path, small_registry):
        code = _run(["generate-docs", "--input", str(tmp_path / "none")], small_registry)
        assert code == 1


class TestValidateCommand:
    def test_complete_examples_exit_0(self, output_dir: Path, small_registry, tmp_path: Path):
        _run(["-o", str(output_dir), "create-category", "basic"], small_registry)
        report = tmp_path / "report.json"

        code = _run(
            ["-o", str(output_dir), "validate", "--report", str(report)], small_registry
        )

        assert code == 0
        assert report.is_file()

    def test_incomplete_exits_1(self, output_dir: Path, small_registry):
        (output_dir / "broken").mkdir()
        assert _run(["-o", str(output_dir), "validate"], small_registry) == 1

    def test_optional_deploy(self, output_dir: Path, small_registry):
        _run(["-o", str(output_dir), "create-example", "counter"], small_registry)
        (output_dir / "counter" / "scripts" / "deploy.ts").unlink()

        assert _run(["-o", str(output_dir), "validate"], small_registry) == 1
        assert _run(
            ["-o", str(output_dir), "validate", "--optional-deploy"], small_registry
        ) == 0

    def test_missing_output_dir_exits_1(self, tmp_path: Path, small_registry, capsys):
        code = _run(["-o", str(tmp_path / "typo"), "validate"], small_registry)

        assert code == 1
        assert "not found" in capsys.readouterr().out
        assert not (tmp_path / "typo").exists()

    def test_empty_output_dir_exits_1(self, output_dir: Path, small_registry, tmp_path: Path):
        report = tmp_path / "report.json"

        code = _run(
            ["-o", str(output_dir), "validate", "--report", str(report)], small_registry
        )

        assert code == 1
        assert report.is_file()


class TestMain:
    def test_main_exits_with_code(self, output_dir: Path):
        with pytest.raises(SystemExit) as exc_info:
            main(["-o", str(output_dir), "create-example", "does-not-exist"])
        assert exc_info.value.code == 1
