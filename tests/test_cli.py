"""Tests for the command line interface."""

import json

import pytest
import yaml
from click.testing import CliRunner
from craftlens.cli.main import cli, render_beats
from craftlens.editor.beat_detector import BeatSheetAnalysis, StoryBeat, rounded_percent


@pytest.fixture
def manuscript(tmp_path, monkeypatch):
    for name in ("CRAFTLENS_TEMPLATE", "CRAFTLENS_FORMAT", "CRAFTLENS_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "manuscript.txt"
    path.write_text("The cat sat. The cat sat. The cat sat.", encoding="utf-8")
    return path


def test_readability_text_output(manuscript):
    result = CliRunner().invoke(cli, ["readability", str(manuscript)])
    assert result.exit_code == 0
    assert "Total words: 9" in result.stdout
    assert "Flesch Reading Ease: 119.2" in result.stdout


def test_readability_json_output(manuscript):
    result = CliRunner().invoke(cli, ["readability", str(manuscript), "--format", "json"])
    assert result.exit_code == 0
    assert json.loads(result.stdout)["total_words"] == 9


def test_beats_with_template(manuscript):
    result = CliRunner().invoke(cli, ["beats", str(manuscript), "--template", "hero-journey"])
    assert result.exit_code == 0
    assert "Hero's Journey" in result.stdout


def test_pov_and_motifs(manuscript):
    runner = CliRunner()
    assert "Dominant POV" in runner.invoke(cli, ["pov", str(manuscript)]).stdout
    assert "Motifs found: 0" in runner.invoke(cli, ["motifs", str(manuscript)]).stdout


def test_report_yaml(manuscript):
    result = CliRunner().invoke(cli, ["report", str(manuscript), "--format", "yaml"])
    assert result.exit_code == 0
    assert set(yaml.safe_load(result.stdout)) == {"readability", "beats", "pov", "motifs"}


def test_output_file(manuscript, tmp_path):
    target = tmp_path / "result.json"
    result = CliRunner().invoke(
        cli, ["readability", str(manuscript), "--format", "json", "--output", str(target)]
    )
    assert result.exit_code == 0
    assert json.loads(target.read_text(encoding="utf-8"))["total_sentences"] == 3


def test_configured_format_is_default(manuscript, tmp_path):
    (tmp_path / "craftlens.yaml").write_text("output_format: json\n")
    result = CliRunner().invoke(cli, ["readability", str(manuscript)])
    assert json.loads(result.stdout)["total_words"] == 9


def test_templates_listing():
    result = CliRunner().invoke(cli, ["templates"])
    assert result.exit_code == 0
    for key in ("three-act", "five-act", "hero-journey"):
        assert key in result.stdout


def test_missing_config_file(manuscript):
    result = CliRunner().invoke(cli, ["--config", "missing.yaml", "readability", str(manuscript)])
    assert result.exit_code == 1


def test_malformed_config_reports_error(manuscript, tmp_path):
    (tmp_path / "craftlens.yaml").write_text("log_level: null\n")
    result = CliRunner().invoke(cli, ["readability", str(manuscript)])
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Error loading settings" in result.output


def test_beat_percentages_round_half_up():
    """Listed positions agree with the rounding used in recommendations."""
    beat = StoryBeat(
        name="Midpoint",
        description="Major turning point or revelation",
        location=125,
        offset=750,
        excerpt="",
        expected_position=50,
        actual_position=12.5,
        confidence=22.5,
    )
    analysis = BeatSheetAnalysis(structure="three-act", beats=[beat], total_words=1000)

    lines = render_beats(analysis)
    assert "  • Midpoint: expected ~50%, found at 13% (word 125, confidence 23%)" in lines
    assert rounded_percent(12.5) == 13
