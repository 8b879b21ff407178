"""Unit tests for verification result models (fhevm_hub.verifier.results).

Tests cover:
- CommandOutcome.succeeded
- VerificationRecord completeness and missing_artifacts, with and without
  the deploy-script requirement
- VerificationReport aggregation, tally and failure lists
- JSON save / load round trip and summary helpers
"""

from __future__ import annotations

from pathlib import Path

import pytest

from fhevm_hub.verifier import ARTIFACTS, CommandOutcome, VerificationRecord, VerificationReport

pytestmark = pytest.mark.unit

_ALL_FLAGS = {flag: True for flag in ARTIFACTS}


def _record(name: str, **overrides) -> VerificationRecord:
    return VerificationRecord(name=name, **{**_ALL_FLAGS, **overrides})


class TestCommandOutcome:
    def test_succeeded(self):
        assert CommandOutcome(command="npm test", returncode=0).succeeded
        assert not CommandOutcome(command="npm test", returncode=1).succeeded
        assert not CommandOutcome(command="npm test", returncode=-1).succeeded


class TestVerificationRecord:
    def test_complete(self):
        record = _record("basic/counter")
        assert record.is_complete
        assert record.missing_artifacts == []

    def test_missing_artifacts_listed(self):
        record = _record("x", has_readme=False, has_ts_config=False)
        assert not record.is_complete
        assert record.missing_artifacts == ["README.md", "tsconfig.json"]

    def test_deploy_script_optional(self):
        required = _record("x", has_deploy_script=False)
        optional = _record("x", has_deploy_script=False, deploy_script_required=False)
        assert not required.is_complete
        assert optional.is_complete

    def test_empty_record_incomplete(self):
        assert len(VerificationRecord(name="empty").missing_artifacts) == len(ARTIFACTS)


class TestVerificationReport:
    def test_empty_report_is_complete(self):
        report = VerificationReport()
        assert report.total == 0
        assert report.all_complete

    def test_aggregates(self):
        report = VerificationReport(
            records=[
                _record("a"),
                _record("b", has_contract=False),
                _record("c", has_contract=False, has_tests=False),
            ]
        )
        assert report.total == 3
        assert report.complete_count == 1
        assert not report.all_complete
        assert report.artifact_tally["contracts/*.sol"] == 1
        assert report.artifact_tally["test/*.test.ts"] == 2
        assert report.artifact_tally["README.md"] == 3

    def test_command_failures(self):
        ok = CommandOutcome(command="npm run compile", returncode=0)
        bad = CommandOutcome(command="npm run test", returncode=1)
        report = VerificationReport(
            records=[
                _record("a", compile=ok, test=bad),
                _record("b", compile=bad),
                _record("c"),
            ]
        )
        assert report.compile_failures == ["b"]
        assert report.test_failures == ["a"]
        assert not report.commands_passed

    def test_round_trip(self, tmp_path: Path):
        report = VerificationReport(
            root="/tmp/examples",
            records=[_record("a", compile=CommandOutcome(command="c", returncode=0))],
        )
        path = report.save(tmp_path / "reports" / "verify.json")
        loaded = VerificationReport.load(path)

        assert loaded.records == report.records
        assert loaded.timestamp == report.timestamp
        assert loaded.all_complete

    def test_summary_helpers(self):
        report = VerificationReport(records=[_record("a"), _record("b", has_readme=False)])
        summary = report.summary_dict()
        assert summary["complete"] == "1/2"
        assert summary["artifacts"]["README.md"] == "1/2"

        text = report.summary_text()
        assert "INCOMPLETE" in text
        assert "Complete examples: 1/2" in text
