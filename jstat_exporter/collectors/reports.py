"""Catalog of jstat report modes and the columns exported from each."""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple


@dataclass(frozen=True)
class Extraction:
    """One exported column of a report's data line."""

    column: int
    metric: str
    documentation: str


@dataclass(frozen=True)
class ReportSpec:
    """A jstat report mode and the metrics taken from its output."""

    name: str
    flag: str
    extractions: Tuple[Extraction, ...]

    @property
    def metric_names(self) -> Tuple[str, ...]:
        return tuple(extraction.metric for extraction in self.extractions)

    @property
    def min_columns(self) -> int:
        """Smallest number of fields a data line needs for every extraction to succeed."""
        return max(extraction.column for extraction in self.extractions) + 1


# Column indices follow the JDK 8+ jstat layouts. A jstat release that moves a
# column must be reflected here; the parser has no header matching.
CATALOG: Tuple[ReportSpec, ...] = (
    # NGCMN NGCMX NGC S0C S1C EC OGCMN OGCMX OGC OC ...
    ReportSpec(
        name="gccapacity",
        flag="-gccapacity",
        extractions=(
            Extraction(1, "newMax", "NGCMX: Maximum new generation capacity (kB)."),
            Extraction(2, "newCommit", "NGC: Current new generation capacity (kB)."),
            Extraction(7, "oldMax", "OGCMX: Maximum old generation capacity (kB)."),
            Extraction(8, "oldCommit", "OGC: Current old generation capacity (kB)."),
        ),
    ),
    # MCMN MCMX MC CCSMN CCSMX CCSC YGC FGC FGCT GCT
    ReportSpec(
        name="gcmetacapacity",
        flag="-gcmetacapacity",
        extractions=(
            Extraction(1, "metaMax", "MCMX: Maximum metaspace capacity (kB)."),
            Extraction(2, "metaCommit", "MC: Metaspace capacity (kB)."),
        ),
    ),
    # MC MU CCSC CCSU OC OU YGC FGC FGCT GCT
    ReportSpec(
        name="gcold",
        flag="-gcold",
        extractions=(
            Extraction(1, "metaUsed", "MU: Metaspace utilization (kB)."),
            Extraction(5, "oldUsed", "OU: Old space utilization (kB)."),
        ),
    ),
    # S0C S1C S0U S1U TT MTT DSS EC EU YGC YGCT
    ReportSpec(
        name="gcnew",
        flag="-gcnew",
        extractions=(
            Extraction(2, "sv0Used", "S0U: Survivor space 0 utilization (kB)."),
            Extraction(3, "sv1Used", "S1U: Survivor space 1 utilization (kB)."),
            Extraction(8, "edenUsed", "EU: Eden space utilization (kB)."),
        ),
    ),
)

REPORT_NAMES: Tuple[str, ...] = tuple(report.name for report in CATALOG)


def get_report(name: str) -> Optional[ReportSpec]:
    """Return the catalog entry called *name*, or None."""
    for report in CATALOG:
        if report.name == name:
            return report
    return None


def select_reports(names: Optional[Iterable[str]] = None) -> List[ReportSpec]:
    """
    Select catalog entries by name, keeping catalog order.

    Args:
        names: Report names to run; None selects the whole catalog

    Returns:
        List[ReportSpec]: Selected reports in catalog order

    Raises:
        ValueError: If a name is not in the catalog
    """
    if names is None:
        return list(CATALOG)

    wanted = set(names)
    unknown = sorted(wanted - set(REPORT_NAMES))
    if unknown:
        raise ValueError(
            f"Unknown jstat report(s): {', '.join(unknown)}. "
            f"Known reports: {', '.join(REPORT_NAMES)}"
        )
    return [report for report in CATALOG if report.name in wanted]
