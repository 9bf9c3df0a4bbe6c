"""
Comparison tables for the sequences of one or more iteration runs.

Each run becomes one right-aligned column, one row per step:

>>> from fixpoint.utils.reporting import compare
>>> print(compare([{"values": [1.0, 0.5]}, {"values": [2.0]}], precision=2), end="")
0 1.00 2.00
1 0.50
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from fixpoint.utils.exceptions import ReportFormatError
from fixpoint.utils.logger import get_logger
from fixpoint.utils.numerics import is_finite_real

logger = get_logger(__name__)

REPORT_FORMATS = ("text", "latex", "html")
DEFAULT_PRECISION = 6


def _values_of(run: Any) -> Sequence[float]:
    if isinstance(run, Mapping):
        return run["values"]
    return run.values


def _fixed(value: float, precision: int) -> str:
    return f"{value:.{precision}f}"


def compare(iterations: Any, precision: Any = DEFAULT_PRECISION, format: str = "text") -> str | None:
    """
    Create a comparison table of the approximations of several runs.

    Args:
        iterations: List of ``IterationResult`` objects or mappings with a
            ``"values"`` sequence. Anything else yields None.
        precision: Digits after the decimal point; non-integral or
            non-finite values fall back to 6
        format: "text" or "latex"; "html" is recognized but not implemented
            and unknown formats fall back to "text"

    Returns:
        The table as a string, or None if ``iterations`` is not a list

    Raises:
        ReportFormatError: For ``format="html"``
    """
    if not isinstance(iterations, (list, tuple)):
        return None

    if not is_finite_real(precision) or precision != int(precision) or precision < 0:
        precision = DEFAULT_PRECISION
    precision = int(precision)

    if format not in REPORT_FORMATS:
        logger.warning(f"Unknown report format {format!r}, using 'text'")
        format = "text"

    if format == "html":
        raise ReportFormatError(format)

    columns = [[_fixed(v, precision) for v in _values_of(run)] for run in iterations]
    max_steps = max((len(column) for column in columns), default=0)
    widths = [max((len(cell) for cell in column), default=0) for column in columns]
    step_width = len(str(max_steps))

    if format == "text":
        return "".join(_text_row(step, columns, widths, step_width) for step in range(max_steps))

    lines = ["\\begin{longtable}{|r|" + "r" * len(columns) + "|}\n", "\\hline\n"]
    lines.extend(_latex_row(step, columns, widths, step_width) for step in range(max_steps))
    lines.append("\\hline\n\\end{longtable}")
    return "".join(lines)


def _text_row(step: int, columns: list[list[str]], widths: list[int], step_width: int) -> str:
    line = str(step).rjust(step_width)
    for column, width in zip(columns, widths, strict=True):
        cell = column[step] if step < len(column) else ""
        line += " " + cell.rjust(width)
    return line.rstrip() + "\n"


def _latex_row(step: int, columns: list[list[str]], widths: list[int], step_width: int) -> str:
    line = str(step).rjust(step_width) + " "
    for column, width in zip(columns, widths, strict=True):
        cell = column[step] if step < len(column) else "~"
        line += " & " + cell.rjust(width)
    return line + " \\\\\n"


__all__ = ["DEFAULT_PRECISION", "REPORT_FORMATS", "compare"]
