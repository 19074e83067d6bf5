# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import io
import json

import click
import pytest
from click.testing import CliRunner
from lxml import etree
from PIL import Image

from diagramgen import cli_helpers, export, records
from diagramgen.__main__ import main

from .conftest import DASHBOARD, SAMPLE_RECORDS, FakeClipboard


@pytest.mark.parametrize(
    "value",
    [
        pytest.param(str(DASHBOARD), id="str-path"),
        pytest.param(DASHBOARD, id="path"),
        pytest.param(DASHBOARD.read_text(), id="json"),
    ],
)
def test_dashboardcli_loads_dashboards(value):
    paramtype = cli_helpers.DashboardCLI()

    converted = paramtype.convert(value, None, None)

    assert isinstance(converted, records.Dashboard)
    assert converted.title == "Quarterly review"


def test_dashboardcli_is_idempotent():
    paramtype = cli_helpers.DashboardCLI()
    dashboard = records.Dashboard("Title")

    converted = paramtype.convert(dashboard, None, None)

    assert converted is dashboard


@pytest.mark.parametrize(
    "value",
    [
        pytest.param("/nonexistent/dashboard.json", id="missing-file"),
        pytest.param("{not json", id="malformed"),
    ],
)
def test_dashboardcli_reports_bad_input(value):
    paramtype = cli_helpers.DashboardCLI()

    with pytest.raises(click.BadParameter):
        paramtype.convert(value, None, None)


def test_loaddashboard_reads_stdin(monkeypatch):
    text = json.dumps(SAMPLE_RECORDS["SWOT"])
    monkeypatch.setattr("sys.stdin", io.StringIO(text))

    dashboard = cli_helpers.loaddashboard("-")

    assert isinstance(dashboard.diagrams[0], records.SwotRecord)


def test_commands_are_listed():
    result = CliRunner().invoke(main, ["--help"])

    assert result.exit_code == 0, result.output
    assert "render" in result.output
    assert "copy" in result.output


class TestRender:
    def test_partial_failure_exits_with_code_3(self, tmp_path):
        result = CliRunner().invoke(
            main, ["render", str(DASHBOARD), "-o", str(tmp_path)]
        )

        assert result.exit_code == 3, result.output
        assert (tmp_path / "01_pareto.svg").is_file()
        assert (tmp_path / "02_swot.svg").is_file()
        assert not (tmp_path / "03_radar.svg").exists()

    def test_index_lists_all_diagrams(self, tmp_path):
        CliRunner().invoke(
            main, ["render", str(DASHBOARD), "-o", str(tmp_path)]
        )

        index = json.loads((tmp_path / "index.json").read_text())
        assert index["title"] == "Quarterly review"
        assert [i["type"] for i in index["diagrams"]] == [
            "PARETO",
            "SWOT",
            "RADAR",
        ]
        assert [i["success"] for i in index["diagrams"]] == [
            True,
            True,
            False,
        ]
        html = etree.parse(
            str(tmp_path / "index.html"), etree.HTMLParser()
        ).getroot()
        assert html.xpath("//a/@href") == ["01_pareto.svg", "02_swot.svg"]
        assert html.xpath("//span[@class='missing']/text()") == ["Radar"]

    def test_no_index(self, tmp_path):
        CliRunner().invoke(
            main,
            ["render", str(DASHBOARD), "-o", str(tmp_path), "--no-index"],
        )

        assert not (tmp_path / "index.json").exists()
        assert not (tmp_path / "index.html").exists()

    def test_json_format_dumps_the_scene(self, tmp_path):
        text = json.dumps(SAMPLE_RECORDS["TIMELINE"])

        result = CliRunner().invoke(
            main, ["render", text, "-o", str(tmp_path), "-f", "json"]
        )

        assert result.exit_code == 0, result.output
        scene = json.loads((tmp_path / "01_timeline.json").read_text())
        assert scene["type"] == "TIMELINE"
        assert scene["contents"]

    def test_png_format_rasterizes(self, tmp_path, monkeypatch):
        monkeypatch.setenv("DIAGRAMGEN_DOWNLOAD_SCALE", "1")
        text = json.dumps(SAMPLE_RECORDS["RADAR"])

        result = CliRunner().invoke(
            main, ["render", text, "-o", str(tmp_path), "-f", "png"]
        )

        assert result.exit_code == 0, result.output
        with Image.open(tmp_path / "01_radar.png") as image:
            assert image.size == (600, 500)

    def test_width_option_is_passed_to_the_layout(self, tmp_path):
        text = json.dumps(SAMPLE_RECORDS["SWOT"])

        CliRunner().invoke(
            main, ["render", text, "-o", str(tmp_path), "-w", "1000"]
        )

        tree = etree.parse(str(tmp_path / "01_swot.svg")).getroot()
        assert float(tree.get("width")) == 1000

    def test_empty_dashboard_renders_nothing(self, tmp_path):
        output = tmp_path / "out"

        result = CliRunner().invoke(
            main, ["render", '{"diagrams": []}', "-o", str(output)]
        )

        assert result.exit_code == 0, result.output
        assert not output.exists()

    def test_all_diagrams_failing_exits_with_code_1(self, tmp_path):
        text = json.dumps({"type": "RADAR", "axes": []})

        result = CliRunner().invoke(
            main, ["render", text, "-o", str(tmp_path)]
        )

        assert result.exit_code == 1

    def test_malformed_dashboard_is_a_usage_error(self, tmp_path):
        result = CliRunner().invoke(
            main, ["render", "{oops", "-o", str(tmp_path)]
        )

        assert result.exit_code == 2


class TestCopy:
    @pytest.fixture
    def clipboard(self, monkeypatch) -> FakeClipboard:
        board = FakeClipboard()
        monkeypatch.setattr(export, "system_clipboard", lambda: board)
        return board

    def test_selected_diagram_is_copied(self, clipboard):
        result = CliRunner().invoke(
            main, ["copy", str(DASHBOARD), "--position", "2"]
        )

        assert result.exit_code == 0, result.output
        ((data, mimetype),) = clipboard.images
        assert mimetype == "image/png"
        assert data.startswith(b"\x89PNG")

    def test_position_past_the_end_is_rejected(self, clipboard):
        result = CliRunner().invoke(
            main, ["copy", str(DASHBOARD), "-p", "9"]
        )

        assert result.exit_code == 2
        assert not clipboard.images

    def test_empty_diagram_is_not_copied(self, clipboard):
        result = CliRunner().invoke(
            main, ["copy", str(DASHBOARD), "-p", "3"]
        )

        assert result.exit_code == 1
        assert not clipboard.images

    def test_clipboard_failure_exits_with_code_1(self, monkeypatch):
        def unavailable():
            raise export.ClipboardUnavailableError("No clipboard")

        monkeypatch.setattr(export, "system_clipboard", unavailable)

        result = CliRunner().invoke(main, ["copy", str(DASHBOARD)])

        assert result.exit_code == 1


def test_version_option():
    result = CliRunner().invoke(main, ["--version"])

    assert result.exit_code == 0
    assert "diagramgen" in result.output
