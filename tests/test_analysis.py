"""tests for analysis functionality"""

import json

from gcovtool.core import CoverageReport
from gcovtool.analysis import (
    _coverage_bar,
    _coverage_style,
    _function_rows,
    _generate_summary_data,
    print_function_table,
    print_line_listing,
    print_report_stats,
    print_summary_json,
    print_summary_rich,
)


class TestAnalysisFunctions:
    """test analysis functions"""

    def create_test_report(self, make_unit):
        """helper to create a two file report"""
        return CoverageReport.from_units(
            [
                make_unit("main.c", instrumented=10, missed=(4, 5), runs=2),
                make_unit("util.c", instrumented=4, missed=(1, 2, 3, 4)),
            ]
        )

    def test_generate_summary_data(self, make_unit):
        """test summary data generation"""
        report = self.create_test_report(make_unit)
        data = _generate_summary_data(report)

        assert data["filter"] is None
        assert data["summary"] == {
            "files": 2,
            "functions": 2,
            "instrumented": 14,
            "executed": 8,
            "percentage": 57.1,
        }
        main, util = data["files"]
        assert main["file"] == "main.c"
        assert main["percentage"] == 80.0
        assert main["missed_lines"] == [4, 5]
        assert util["executed"] == 0
        assert util["missed_lines"] == [1, 2, 3, 4]

    def test_generate_summary_data_filtered(self, make_unit):
        """test summary data restricted by file filter"""
        report = self.create_test_report(make_unit)
        data = _generate_summary_data(report, "util")

        assert data["filter"] == "util"
        assert data["summary"]["files"] == 1
        assert data["summary"]["instrumented"] == 4
        assert data["summary"]["percentage"] == 0.0
        assert [f["file"] for f in data["files"]] == ["util.c"]

    def test_summary_data_without_files(self, make_unit):
        """test a filter matching nothing"""
        report = self.create_test_report(make_unit)
        data = _generate_summary_data(report, "nothing")

        assert data["files"] == []
        assert data["summary"]["instrumented"] == 0
        assert data["summary"]["percentage"] == 0.0

    def test_print_summary_json(self, make_unit, capsys):
        """test json summary output"""
        report = self.create_test_report(make_unit)
        print_summary_json(report)

        data = json.loads(capsys.readouterr().out)
        assert data == _generate_summary_data(report)

    def test_print_summary_rich(self, make_unit, capsys):
        """test rich summary output"""
        report = self.create_test_report(make_unit)
        print_summary_rich(report)

        out = capsys.readouterr().out
        assert "Line Coverage" in out
        assert "main.c" in out
        assert "util.c" in out
        assert "80.0%" in out
        assert "8 of 14" in out

    def test_print_report_stats(self, make_unit, capsys):
        """test printing report statistics"""
        report = self.create_test_report(make_unit)
        print_report_stats(report, "units")

        out = capsys.readouterr().out
        assert "units:" in out
        assert "source files: 2" in out
        assert "functions: 2" in out
        assert "lines: 8/14 executed" in out

    def test_print_line_listing(self, make_unit, capsys):
        """test listing every line with counts"""
        report = self.create_test_report(make_unit)
        print_line_listing(report, "main")

        out = capsys.readouterr().out
        assert "main.c" in out
        assert "util.c" not in out
        assert "#####" in out
        assert out.count("#####") == 2

    def test_print_line_listing_missed_only(self, make_unit, capsys):
        """test listing only lines that never ran"""
        report = self.create_test_report(make_unit)
        print_line_listing(report, missed_only=True)

        out = capsys.readouterr().out
        assert out.count("#####") == 6

    def test_print_line_listing_no_match(self, make_unit, capsys):
        """test a filter that matches no file"""
        report = self.create_test_report(make_unit)
        print_line_listing(report, "nothing")

        assert "no matching source files" in capsys.readouterr().out

    def test_function_rows(self, make_unit):
        """test per-function graph statistics"""
        report = self.create_test_report(make_unit)
        main, util = _function_rows(report)

        assert main["name"] == "main"
        assert main["source"] == "main.c"
        assert main["line"] == 0
        assert main["blocks"] == 4
        assert main["arcs"] == 4
        assert main["measured"] == 2
        assert main["unresolved"] == 0
        assert main["calls"] == 2
        assert util["calls"] == 1

    def test_print_function_table(self, make_unit, capsys):
        """test the function table"""
        report = self.create_test_report(make_unit)
        print_function_table(report)

        out = capsys.readouterr().out
        assert "Functions" in out
        assert "main" in out

    def test_print_function_table_empty(self, capsys):
        """test a report without functions"""
        print_function_table(CoverageReport([]))
        assert "no functions decoded" in capsys.readouterr().out


class TestDisplayHelpers:
    """test coverage styling helpers"""

    def test_coverage_style(self):
        assert _coverage_style(100.0) == "green"
        assert _coverage_style(90.0) == "green"
        assert _coverage_style(75.0) == "yellow"
        assert _coverage_style(10.0) == "red"

    def test_coverage_bar(self):
        assert _coverage_bar(0.0) == "░" * 20
        assert _coverage_bar(100.0) == "█" * 20
        assert _coverage_bar(50.0, width=10) == "█" * 5 + "░" * 5
