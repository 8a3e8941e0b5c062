"""integration tests for the complete gcovtool system"""

import json

from typer.testing import CliRunner

from gcovtool import (
    ARC_FAKE,
    ARC_ON_TREE,
    CoverageReport,
    GCOV_VERSION_8_1,
    builder,
    parse_files,
)
from gcovtool.cli import app


class TestFullSystemIntegration:
    """test the complete system working together"""

    def create_realistic_unit(self, base, version=None, big_endian=False):
        """
        a unit with a loop-bearing main, a helper called from it and a header
        inline shared between both
        """
        kwargs = {"big_endian": big_endian, "cwd": "/home/user/project"}
        if version is not None:
            kwargs["version"] = version
        b = builder(**kwargs)

        # main: entry -> setup -> header <-> body, header -> exit
        main = b.add_function("main", "app.c", 10, checksum=0xC0FFEE)
        main.add_blocks(6)
        main.add_arc(0, 1, flags=ARC_ON_TREE)
        main.add_arc(1, 2, flags=ARC_ON_TREE)
        main.add_arc(2, 3, count=4)
        main.add_arc(2, 4, flags=ARC_ON_TREE)
        main.add_arc(3, 2, flags=ARC_ON_TREE)
        main.add_arc(4, 5, count=1)
        main.add_arc(4, 5, flags=ARC_FAKE)
        main.add_lines(1, [11, 12])
        main.add_lines(2, [13])
        main.add_lines(3, [14, 15])
        main.add_lines(3, [3], source="app.h")
        main.add_lines(4, [17])

        # helper: called four times, early return never taken
        helper = b.add_function("helper", "app.c", 20, checksum=0xBEEF)
        helper.add_blocks(4)
        helper.add_arc(0, 1, flags=ARC_ON_TREE)
        helper.add_arc(1, 2, count=0)
        helper.add_arc(1, 3, count=4)
        helper.add_arc(2, 3, flags=ARC_ON_TREE)
        helper.add_lines(1, [21, 22])
        helper.add_lines(2, [23])
        helper.add_lines(1, [4], source="app.h")

        b.write(base)
        return b

    def test_complete_parse(self, tmp_path):
        """test decoding, solving and aggregating a realistic unit"""
        self.create_realistic_unit(tmp_path / "app")
        report = CoverageReport.from_files([tmp_path / "app"])

        assert [f.file for f in report] == ["app.c", "app.h"]
        app_c = report.find("app.c")
        assert [line.line for line in app_c.lines] == [11, 12, 13, 14, 15, 17, 21, 22, 23]
        assert app_c.find_line(11).count == 1
        assert app_c.find_line(13).count == 5
        assert app_c.find_line(14).count == 4
        assert app_c.find_line(17).count == 1
        assert app_c.find_line(21).count == 4
        assert app_c.find_line(23).executed is False
        assert (app_c.instrumented, app_c.executed) == (9, 8)

        app_h = report.find("app.h")
        assert [(line.line, line.count) for line in app_h.lines] == [(3, 4), (4, 4)]

        main = report.functions[0]
        assert main.blocks[4].call_site
        assert [block.count for block in main.blocks] == [1, 1, 5, 4, 1, 1]
        assert all(arc.resolved for f in report.functions for arc in f.arcs)

    def test_formats_agree(self, tmp_path):
        """test older versions and byte orders produce the same coverage"""
        self.create_realistic_unit(tmp_path / "current")
        self.create_realistic_unit(tmp_path / "older", version=GCOV_VERSION_8_1)
        self.create_realistic_unit(tmp_path / "swapped", big_endian=True)

        expected = parse_files([tmp_path / "current"])
        assert parse_files([tmp_path / "older"]) == expected
        assert parse_files([tmp_path / "swapped"]) == expected

    def test_cli_matches_library(self, tmp_path):
        """test the summary command reports what the library computes"""
        self.create_realistic_unit(tmp_path / "app")
        coverages = parse_files([tmp_path / "app"])

        runner = CliRunner()
        result = runner.invoke(app, ["summary", str(tmp_path / "app.gcno"), "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [f["file"] for f in data["files"]] == [c.file for c in coverages]
        assert [f["instrumented"] for f in data["files"]] == [
            c.instrumented for c in coverages
        ]
        assert [f["executed"] for f in data["files"]] == [c.executed for c in coverages]
        assert data["files"][0]["missed_lines"] == [23]
        assert data["summary"]["functions"] == 2

    def test_rebuilt_units_are_stable(self, tmp_path):
        """test writing the same unit twice yields identical files"""
        first = self.create_realistic_unit(tmp_path / "first")
        second = self.create_realistic_unit(tmp_path / "second")

        assert first.notes_bytes() == second.notes_bytes()
        assert (tmp_path / "first.gcda").read_bytes() == (
            tmp_path / "second.gcda"
        ).read_bytes()
