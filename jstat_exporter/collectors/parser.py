"""Positional parser for jstat tabular output."""

import math
from typing import Dict

from ..exceptions import MalformedOutputError
from .reports import ReportSpec

# jstat prints one header line followed by the data line(s)
DATA_LINE_INDEX = 1


def parse_report(text: str, report: ReportSpec) -> Dict[str, float]:
    """
    Extract the report's metrics from raw jstat output.

    Only the first data line is read. Extraction is all-or-nothing: any
    missing or non-numeric column rejects the whole line.

    Args:
        text: Raw jstat stdout
        report: Report the output was produced for

    Returns:
        Dict[str, float]: Metric name to value, in extraction order

    Raises:
        MalformedOutputError: If the output is too short, a column is missing,
            or a field is not a finite number

    Example output (jstat -gcold):
           MC       MU      CCSC     CCSU       OC          OU       YGC    FGC    FGCT     GCT
         14464.0  13882.4   1664.0   1504.6     44032.0     21577.1     10     1    0.032    0.071
    """
    lines = text.splitlines()
    if len(lines) <= DATA_LINE_INDEX:
        raise MalformedOutputError(
            f"Expected a header and a data line from jstat {report.flag}, got {len(lines)} line(s)",
            report=report.name,
            line=lines[0] if lines else None
        )

    line = lines[DATA_LINE_INDEX]
    fields = line.split()
    if len(fields) < report.min_columns:
        raise MalformedOutputError(
            f"jstat {report.flag} data line has {len(fields)} field(s), "
            f"expected at least {report.min_columns}",
            report=report.name,
            line=line
        )

    values: Dict[str, float] = {}
    for extraction in report.extractions:
        raw = fields[extraction.column]
        try:
            value = float(raw)
        except ValueError:
            raise MalformedOutputError(
                f"Column {extraction.column} ({extraction.metric}) of jstat {report.flag} "
                f"is not numeric: {raw!r}",
                report=report.name,
                line=line
            ) from None
        if not math.isfinite(value):
            raise MalformedOutputError(
                f"Column {extraction.column} ({extraction.metric}) of jstat {report.flag} "
                f"is not finite: {raw!r}",
                report=report.name,
                line=line
            )
        values[extraction.metric] = value

    return values
