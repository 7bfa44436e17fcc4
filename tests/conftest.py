from collections import defaultdict

import pytest
from rich.console import Console
from rich.table import Table

# Defined markers in pyproject.toml
KNOWN_MARKERS = ("unit_common", "unit_core", "unit_store", "unit_gui", "unit_ui")

SAMPLE_CATALOG_XML = """<?xml version="1.0" encoding="utf-8"?>
<config>
  <group protocol="CSG13" region="南网,GUANGDONG">
    <dataitem id="04000100">
      <name>电压</name>
      <length>2</length>
    </dataitem>
    <dataitem id="04000101" dir="0">
      <name>电流</name>
    </dataitem>
  </group>
  <group protocol="CSG13" region="YUNNAN">
    <dataitem id="04000100">
      <name>云南电压</name>
    </dataitem>
  </group>
  <dataitem id="E0000130" protocol="CSG13" region="南网">
    <name>Meter Clock</name>
  </dataitem>
</config>
"""


@pytest.fixture
def catalog_dir(tmp_path):
    """Directory holding a single CSG13 definition file."""
    root = tmp_path / "protocolconfig"
    root.mkdir()
    (root / "CSG13.xml").write_text(SAMPLE_CATALOG_XML, encoding="utf-8")
    return root


def pytest_terminal_summary(terminalreporter, exitstatus, config):
    """Print pass/fail/skip counts and durations per marker."""
    _ = (exitstatus, config)
    marker_stats = defaultdict(
        lambda: {"passed": 0, "failed": 0, "skipped": 0, "total": 0, "duration": 0.0}
    )

    for outcome in ("passed", "failed", "skipped"):
        for report in terminalreporter.stats.get(outcome, []):
            # Count the test call itself, plus skips raised during setup
            if report.when != "call" and not (report.when == "setup" and report.outcome == "skipped"):
                continue
            for marker in KNOWN_MARKERS:
                if marker in report.keywords:
                    stats = marker_stats[marker]
                    stats[outcome] += 1
                    stats["total"] += 1
                    stats["duration"] += getattr(report, "duration", 0.0)

    if not marker_stats:
        return

    table = Table(title="Test Statistics by Marker", show_header=True, header_style="bold magenta")
    table.add_column("Marker", style="cyan")
    table.add_column("Total", justify="right")
    table.add_column("Passed", justify="right", style="green")
    table.add_column("Failed", justify="right", style="red")
    table.add_column("Skipped", justify="right", style="yellow")
    table.add_column("Duration (s)", justify="right", style="blue")

    for marker in sorted(marker_stats):
        stats = marker_stats[marker]
        table.add_row(
            marker,
            str(stats["total"]),
            str(stats["passed"]),
            str(stats["failed"]),
            str(stats["skipped"]),
            f"{stats['duration']:.2f}",
        )

    console = Console()
    console.print("\n")
    console.print(table)
