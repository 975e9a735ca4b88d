"""Shared pytest configuration and fixtures."""

import os
import stat

import pytest

from jstat_exporter.config.models import ExporterConfig
from jstat_exporter.utils.logger import setup_logger
from jstat_exporter.utils.metrics import Sample


GCCAPACITY_OUTPUT = """ NGCMN    NGCMX     NGC     S0C   S1C       EC      OGCMN      OGCMX       OGC         OC       MCMN     MCMX      MC     CCSMN    CCSMX     CCSC    YGC    FGC
  1024.0  19648.0   5632.0  512.0  512.0   4608.0    44032.0    44032.0    44032.0    44032.0      0.0 1060864.0  14464.0      0.0 1048576.0   1664.0     10     1
"""

GCMETACAPACITY_OUTPUT = """   MCMN       MCMX        MC       CCSMN      CCSMX       CCSC     YGC   FGC    FGCT     GCT
       0.0  1060864.0    14464.0        0.0  1048576.0     1664.0    10     1    0.032    0.071
"""

GCOLD_OUTPUT = """   MC       MU      CCSC     CCSU       OC          OU       YGC    FGC    FGCT     GCT
 14464.0  13882.4   1664.0   1504.6     44032.0     21577.1     10     1    0.032    0.071
"""

GCNEW_OUTPUT = """ S0C    S1C    S0U    S1U   TT MTT  DSS      EC       EU     YGC     YGCT
 512.0  512.0    0.0  480.1 15  15  512.0   4608.0   2315.6     10    0.039
"""

REPORT_OUTPUTS = {
    "-gccapacity": GCCAPACITY_OUTPUT,
    "-gcmetacapacity": GCMETACAPACITY_OUTPUT,
    "-gcold": GCOLD_OUTPUT,
    "-gcnew": GCNEW_OUTPUT,
}


@pytest.fixture
def logger():
    """Create logger for tests."""
    return setup_logger("test")


@pytest.fixture
def config():
    """Default configuration targeting a fake pid."""
    return ExporterConfig(target={"pid": "4242"})


@pytest.fixture
def report_outputs():
    """Realistic jstat stdout per report flag."""
    return dict(REPORT_OUTPUTS)


@pytest.fixture
def make_script(tmp_path):
    """Write an executable shell script standing in for jstat."""
    def _make(body: str, name: str = "jstat") -> str:
        path = tmp_path / name
        path.write_text("#!/bin/sh\n" + body + "\n")
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return str(path)
    return _make


class FakeSampler:
    """Sampler double returning canned output or raising per report flag."""

    def __init__(self, outputs):
        self.path = "/fake/jstat"
        self.outputs = dict(outputs)
        self.calls = []

    def sample(self, report, pid):
        self.calls.append((report.flag, str(pid)))
        output = self.outputs[report.flag]
        if isinstance(output, BaseException):
            raise output
        return Sample(report=report.name, text=output, captured_at=1700000000.0)


@pytest.fixture
def fake_sampler(report_outputs):
    """FakeSampler preloaded with healthy output for every report."""
    return FakeSampler(report_outputs)


@pytest.fixture
def make_sampler():
    """Factory for FakeSampler with custom per-flag output or exceptions."""
    return FakeSampler


def pytest_collection_modifyitems(config, items):
    """Skip tests that need /bin/sh where it is unavailable."""
    if os.path.exists("/bin/sh"):
        return
    skip = pytest.mark.skip(reason="/bin/sh not available")
    for item in items:
        if "make_script" in getattr(item, "fixturenames", ()):
            item.add_marker(skip)
