"""
Tests for the cubby-template command-line tool.

Run with: pytest tests/test_cli.py -v
"""

import json

import pytest

from cubby.app.cli import create_argument_parser, main


REABANK = """\
Bank 1 1 SFX Violins Long
//! c=long o=note:24
1 Long
Bank 1 2 SFX Violins Short
1 Staccato
Bank 1 3 SFX Cellos Long
1 Long
Bank 2 1 SFBB Horns Long
1 Long
Bank 5
"""


@pytest.fixture
def workspace(tmp_path):
    reabank = tmp_path / "banks.reabank"
    reabank.write_text(REABANK, encoding="utf-8")
    config = tmp_path / "config.yaml"
    config.write_text(
        f"project:\n  tempo: 100\n  output: {tmp_path / 'default.RPP'}\n"
        f"reabank:\n  directory: {tmp_path}\n",
        encoding="utf-8",
    )
    return tmp_path, reabank, config


def run(config, *args):
    return main(["--config", str(config), *args])


class TestArgumentParser:
    def test_requires_command(self):
        with pytest.raises(SystemExit):
            create_argument_parser().parse_args([])

    def test_generate_options(self):
        args = create_argument_parser().parse_args(
            ["generate", "a.reabank", "--select", "1-1", "--select", "2-1", "--group"]
        )
        assert args.select == ["1-1", "2-1"]
        assert args.group is True
        assert args.files == ["a.reabank"]


class TestParseCommand:
    def test_summary(self, workspace, capsys):
        _, reabank, config = workspace
        assert run(config, "parse", str(reabank)) == 0
        captured = capsys.readouterr()
        assert captured.out.startswith("4 banks, 1 errors")
        assert "Invalid bank format" in captured.err

    def test_json(self, workspace, capsys):
        _, reabank, config = workspace
        assert run(config, "parse", str(reabank), "--json") == 0
        banks = json.loads(capsys.readouterr().out)
        assert [b["name"] for b in banks][:2] == ["SFX Violins Long", "SFX Violins Short"]
        assert banks[0]["articulations"][0]["color"] == "long"

    def test_uses_configured_directory(self, workspace, capsys):
        _, _, config = workspace
        assert run(config, "parse") == 0
        assert capsys.readouterr().out.startswith("4 banks")

    def test_missing_file(self, workspace, capsys):
        tmp_path, _, config = workspace
        assert run(config, "parse", str(tmp_path / "missing.reabank")) == 1
        assert capsys.readouterr().err.startswith("error:")


class TestTreeAndSearch:
    def test_tree(self, workspace, capsys):
        _, reabank, config = workspace
        assert run(config, "tree", str(reabank)) == 0
        out = capsys.readouterr().out
        assert "Spitfire Audio/ (3)" in out
        assert "  Violins/ (2)" in out
        assert "Violins Long  [1-1]" in out

    def test_search(self, workspace, capsys):
        _, reabank, config = workspace
        assert run(config, "search", str(reabank), "--query", "long violins") == 0
        out = capsys.readouterr().out
        assert "SFX Violins Long" in out
        assert "SFX Cellos Long" not in out
        assert "1 of 4 banks" in out


class TestGenerateCommand:
    def test_select_by_key(self, workspace):
        tmp_path, reabank, config = workspace
        output = tmp_path / "out.RPP"
        assert run(config, "generate", str(reabank), "--select", "2-1", "-o", str(output)) == 0
        rpp = output.read_text(encoding="utf-8")
        assert 'NAME "SFBB Horns Long"' in rpp
        assert "TEMPO 100 4 4" in rpp
        assert rpp.count("<TRACK") == 1

    def test_folder_grouped(self, workspace):
        tmp_path, reabank, config = workspace
        output = tmp_path / "out.RPP"
        assert run(config, "generate", str(reabank), "--folder", "Spitfire Audio",
                   "--group", "--tempo", "80", "-o", str(output)) == 0
        rpp = output.read_text(encoding="utf-8")
        assert rpp.count("<TRACK") == 4
        assert 'NAME "Spitfire Audio"' in rpp
        assert "TEMPO 80 4 4" in rpp

    def test_query_uses_configured_output(self, workspace):
        tmp_path, reabank, config = workspace
        assert run(config, "generate", str(reabank), "--query", "horns") == 0
        assert (tmp_path / "default.RPP").exists()

    def test_nothing_selected(self, workspace, capsys):
        _, reabank, config = workspace
        assert run(config, "generate", str(reabank), "--query", "timpani") == 1
        assert "No banks selected" in capsys.readouterr().err

    def test_unknown_key(self, workspace, capsys):
        _, reabank, config = workspace
        assert run(config, "generate", str(reabank), "--select", "9-9") == 1
        assert "9-9" in capsys.readouterr().err

    def test_unknown_folder(self, workspace, capsys):
        _, reabank, config = workspace
        assert run(config, "generate", str(reabank), "--folder", "Nowhere") == 1
        assert "Nowhere" in capsys.readouterr().err
