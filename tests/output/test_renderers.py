"""Tests for operation-specific Rich renderers."""

from __future__ import annotations

from namectl.output.renderers import format_tokens, render_quiet, render_result
from namectl.services.result import ServiceError, ServiceResult


def test_format_tokens() -> None:
    assert format_tokens(0) == "0.000000"
    assert format_tokens(1_500_000) == "1.500000"
    assert format_tokens(3_923_076_923_076) == "3,923,076.923076"


class TestCompileRenderer:
    def _result(self, **extra: object) -> ServiceResult:
        data = {
            "names": 22,
            "roots": 14,
            "embargoed": 9,
            "custom_values": 1,
            "rejected": 10,
            "name_value": 5_000_000,
            "root_value": 7_000_000,
            "extra_value": 0,
            "residue": 3,
            "total_value": 12_000_000,
            "reasons": {"collision": 3, "blacklist": 1},
            "artifacts": ["/tmp/build/names.db"],
            "dry_run": False,
        }
        data.update(extra)
        return ServiceResult(ok=True, op="compile", data=data)

    def test_summary_and_reasons(self) -> None:
        output = render_result(self._result())
        assert output.startswith("OK")
        assert "name_value" in output
        assert "5.000000" in output
        assert output.index("collision") < output.index("blacklist")
        assert "names.db" not in output

    def test_verbose_lists_artifacts(self) -> None:
        output = render_result(self._result(), verbose=True)
        assert "/tmp/build/names.db" in output

    def test_dry_run_banner(self) -> None:
        assert "dry run" in render_result(self._result(dry_run=True))


class TestLookupRenderer:
    def test_panel(self) -> None:
        result = ServiceResult(
            ok=True,
            op="lookup",
            data={
                "name": "ir",
                "hash": "ab" * 32,
                "target": "ir.",
                "flags": ["root", "embargoed"],
                "custom": None,
                "value": 0,
            },
        )
        output = render_result(result)
        assert "ir." in output
        assert "root embargoed" in output
        assert "custom" not in output

    def test_quiet_target(self) -> None:
        result = ServiceResult(ok=True, op="lookup", data={"target": "google.com."})
        assert render_quiet(result) == "google.com."


class TestErrorRenderer:
    def _error(self) -> ServiceResult:
        return ServiceResult(
            ok=False,
            op="compile",
            error=ServiceError(
                code="INVARIANT_VIOLATION",
                message="Custom values not satisfied: missing.com",
                detail={"unmatched": {"missing.com": 1}},
            ),
        )

    def test_message(self) -> None:
        output = render_result(self._error())
        assert output.startswith("ERROR")
        assert "missing.com" in output
        assert "detail" not in output

    def test_verbose_detail(self) -> None:
        assert "unmatched" in render_result(self._error(), verbose=True)


class TestTelemetryTree:
    def test_nested_spans(self) -> None:
        result = ServiceResult(
            ok=True,
            op="extract",
            data={"names": 2},
            meta={
                "telemetry": {
                    "name": "ZoneService.extract",
                    "duration_ms": 1.5,
                    "children": [
                        {"name": "parse", "duration_ms": 0.5, "annotations": {"records": 4}}
                    ],
                }
            },
        )
        output = render_result(result, verbose=True)
        assert "ZoneService.extract" in output
        assert "parse" in output
        assert "records=4" in output


def test_generic_fallback() -> None:
    result = ServiceResult(ok=True, op="other", data={"items": [1, 2]})
    assert "items: [1,2]" in render_result(result)
