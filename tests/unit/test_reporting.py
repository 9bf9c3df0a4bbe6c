#!/usr/bin/env python3
"""
Unit tests for fixpoint/utils/reporting.py

Tests comparison tables:
- Text layout: step column, right-aligned value columns, ragged lengths
- LaTeX longtable layout
- Precision and format fallbacks
"""

import math

import pytest

from fixpoint import picard
from fixpoint.utils.exceptions import ReportFormatError
from fixpoint.utils.reporting import compare

TWO_RUNS = [{"values": [1.0, 0.5]}, {"values": [2.0]}]

# =============================================================================
# Input Handling
# =============================================================================


@pytest.mark.unit
@pytest.mark.parametrize("iterations", [None, "abc", 42, {"values": [1.0]}])
def test_compare_non_list_returns_none(iterations):
    """Test anything but a list of runs yields None."""
    assert compare(iterations) is None


@pytest.mark.unit
def test_compare_empty_list():
    """Test an empty list produces an empty table."""
    assert compare([]) == ""


@pytest.mark.unit
def test_compare_accepts_results(cosine_fixed_point):
    """Test iteration results can be compared directly."""
    result = picard(math.cos, 1.0)

    table = compare([result], precision=3)
    rows = table.splitlines()

    assert len(rows) == len(result.values)
    assert rows[0].split() == ["0", "1.000"]
    assert rows[-1].endswith(f"{cosine_fixed_point:.3f}")


# =============================================================================
# Text Format
# =============================================================================


@pytest.mark.unit
def test_text_table():
    """Test the text layout with columns of different length."""
    assert compare(TWO_RUNS, precision=2) == "0 1.00 2.00\n1 0.50\n"


@pytest.mark.unit
def test_text_columns_right_aligned():
    """Test cells are padded to the widest cell of their column."""
    assert compare([{"values": [1.0, -10.5]}], precision=1) == "0   1.0\n1 -10.5\n"


@pytest.mark.unit
def test_text_step_column_width():
    """Test the step column widens for ten or more rows."""
    table = compare([{"values": [0.0] * 11}], precision=0)
    rows = table.splitlines()

    assert rows[0] == " 0 0"
    assert rows[10] == "10 0"


@pytest.mark.unit
def test_text_default_precision():
    """Test six digits by default."""
    assert compare([{"values": [0.5]}]) == "0 0.500000\n"


@pytest.mark.unit
@pytest.mark.parametrize("precision", [math.nan, math.inf, 2.5, -1, "3", None])
def test_invalid_precision_falls_back(precision):
    """Test invalid precisions use six digits."""
    assert compare([{"values": [0.5]}], precision=precision) == "0 0.500000\n"


@pytest.mark.unit
def test_integral_float_precision():
    """Test an integral float precision is accepted."""
    assert compare([{"values": [0.5]}], precision=2.0) == "0 0.50\n"


@pytest.mark.unit
def test_unknown_format_falls_back_to_text():
    """Test unknown formats render as text."""
    assert compare(TWO_RUNS, precision=2, format="markdown") == compare(TWO_RUNS, precision=2)


# =============================================================================
# LaTeX Format
# =============================================================================


@pytest.mark.unit
def test_latex_table():
    """Test the longtable layout with a placeholder for missing cells."""
    expected = (
        "\\begin{longtable}{|r|rr|}\n"
        "\\hline\n"
        "0  & 1.00 & 2.00 \\\\\n"
        "1  & 0.50 &    ~ \\\\\n"
        "\\hline\n"
        "\\end{longtable}"
    )

    assert compare(TWO_RUNS, precision=2, format="latex") == expected


@pytest.mark.unit
def test_latex_column_format_matches_runs():
    """Test one column specifier per run."""
    table = compare([{"values": [1.0]}] * 3, format="latex")

    assert table.startswith("\\begin{longtable}{|r|rrr|}\n")


# =============================================================================
# HTML Format
# =============================================================================


@pytest.mark.unit
def test_html_unimplemented():
    """Test the recognized html format raises."""
    with pytest.raises(ReportFormatError) as exc_info:
        compare(TWO_RUNS, format="html")

    assert exc_info.value.message == "unimplemented"
    assert exc_info.value.report_format == "html"
