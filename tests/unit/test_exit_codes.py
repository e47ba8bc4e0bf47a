"""Tests for mapping errors onto process exit codes."""

from __future__ import annotations

import pytest

from cli.exit_codes import ExitCode
from columnar.documents import DocumentDecodeError
from mapping_spec.loader import MappingError


@pytest.mark.parametrize(
    ("exc", "expected"),
    [
        (MappingError("bad mapping"), ExitCode.VALIDATION_ERROR),
        (DocumentDecodeError("bad document"), ExitCode.VALIDATION_ERROR),
        (ValueError("negative sample size"), ExitCode.VALIDATION_ERROR),
        (KeyError("FAST"), ExitCode.CONFIG_ERROR),
        (FileNotFoundError("mapping.json"), ExitCode.CONFIG_ERROR),
        (OSError("disk full"), ExitCode.EXECUTION_ERROR),
        (RuntimeError("boom"), ExitCode.GENERAL_ERROR),
    ],
)
def test_from_exception(exc: BaseException, expected: ExitCode) -> None:
    """Classify command failures by their error type."""
    assert ExitCode.from_exception(exc) is expected


@pytest.mark.parametrize(
    ("result", "expected"),
    [(None, 0), (0, 0), (3, 3), ("done", ExitCode.GENERAL_ERROR)],
)
def test_from_result(result: object, expected: int) -> None:
    """Turn command return values into process statuses."""
    assert ExitCode.from_result(result) == expected
