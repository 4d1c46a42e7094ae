"""
Tests for the .RPP project generator.

Run with: pytest tests/test_generator.py -v
"""

import json
import re

import pytest
from pydantic import ValidationError

from cubby.data.schema import ArticulationEntry, BankRecord
from cubby.protocol.messages import bank_from_payload, decode_message
from cubby.project.requests import build_project, folders_from_banks, tracks_from_banks
from cubby.project.rpp_generator import (
    DEFAULT_TRACK_COLOR,
    REATICULATE_JSFX_STATE,
    bank_hash,
    escape_rpp,
    generate,
    generate_guid,
    generate_reaticulate_guid,
    generate_rpp,
    hex_to_reaper_color,
    track_color,
)
from cubby.project.schema import BankInfo, FolderConfig, ProjectConfig, TrackConfig


TRACK_GUID_REGEX = re.compile(r'\{[0-9A-F]{8}-[0-9A-F]{4}-[0-9A-F]{4}-[0-9A-F]{4}-[0-9A-F]{12}\}')
BANK_GUID_REGEX = re.compile(r'[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}')


def make_track(name="Test Bank", msb=1, lsb=2, color=None):
    return TrackConfig(bank=BankInfo(msb=msb, lsb=lsb, name=name), name=name, color=color)


def state_json(rpp):
    """The JSON payload of the project-level Reaticulate STATE line."""
    lines = [line.strip() for line in rpp.split("\n") if line.strip().startswith("STATE ")]
    assert len(lines) == 1
    return json.loads(lines[0][len("STATE "):])


def track_ext_json(rpp):
    """Every per-track reaticulate assignment payload, in order."""
    payloads = []
    for line in rpp.split("\n"):
        line = line.strip()
        if line.startswith("reaticulate '2"):
            payloads.append(json.loads(line[len("reaticulate '2"):-1]))
    return payloads


def isbus_values(rpp):
    return [line.strip()[len("ISBUS "):] for line in rpp.split("\n") if line.strip().startswith("ISBUS ")]


def strip_ids(rpp):
    return BANK_GUID_REGEX.sub("<id>", TRACK_GUID_REGEX.sub("<GUID>", rpp))


class TestIdentifiers:
    def test_guid_format(self):
        assert TRACK_GUID_REGEX.fullmatch(generate_guid())

    def test_reaticulate_guid_format(self):
        guid = generate_reaticulate_guid()
        assert BANK_GUID_REGEX.fullmatch(guid)
        assert "{" not in guid

    def test_guids_are_fresh(self):
        assert generate_guid() != generate_guid()
        assert generate_reaticulate_guid() != generate_reaticulate_guid()


class TestBankHash:
    @pytest.mark.parametrize("name", ["Test Bank", "", "a", "NICRQ Amati Viola Longs", "Ümlaut ♪"])
    def test_negative(self, name):
        assert bank_hash(name) < 0

    def test_deterministic(self):
        assert bank_hash("Test Bank") == bank_hash("Test Bank")

    def test_distinct_names(self):
        assert bank_hash("Violins") != bank_hash("Violas")

    def test_folds_positive_hashes(self):
        # "a" hashes to 97 before folding
        assert bank_hash("a") == -1000000097

    def test_lone_surrogate_hashes_as_code_unit(self):
        # U+D800 is a single UTF-16 code unit, 55296
        assert bank_hash("\ud800") == -1000055296

    def test_lone_surrogate_from_transport_generates(self):
        payload = decode_message(
            '{"type": "bankData", "trackName": "T", "bankName": "Bad \\ud800 Name",'
            ' "msb": 1, "lsb": 2, "articulations": []}'
        )
        rpp = generate_rpp(build_project([bank_from_payload(payload)]))
        assert rpp.count("<EXTSTATE") == 1
        assert "Bad \ud800 Name" in rpp


class TestColors:
    def test_hex_to_reaper_color(self):
        assert hex_to_reaper_color("#FF0000") == 0x010000FF
        assert hex_to_reaper_color("0000FF") == 0x01FF0000

    def test_family_color(self):
        assert track_color("SFX Violins Long") == hex_to_reaper_color("#8B4513")
        assert track_color("SFBB HORNS") == hex_to_reaper_color("#DAA520")

    def test_first_family_wins(self):
        # "violin" is listed before "strings"
        assert track_color("Violin Strings") == hex_to_reaper_color("#8B4513")

    def test_default_color(self):
        assert track_color("Synth Pad") == hex_to_reaper_color(DEFAULT_TRACK_COLOR)


class TestGenerate:
    """Structure of generated projects."""

    def test_single_track_extstate(self):
        rpp = generate(ProjectConfig(tracks=[make_track()]))
        assert rpp.count("<EXTSTATE") == 1
        assert rpp.count("<REATICULATE") == 1
        state = state_json(rpp)
        assert list(state["msblsb_by_guid"].values()) == [130]
        assert state["gc_ok"] is True

    def test_track_assignment_matches_extstate(self):
        rpp = generate_rpp(ProjectConfig(tracks=[make_track(), make_track("Other", 3, 4)]))
        payloads = track_ext_json(rpp)
        assert len(payloads) == 2
        guids = [p["banks"][0]["v"] for p in payloads]
        assert state_json(rpp)["msblsb_by_guid"] == {guids[0]: 130, guids[1]: 3 * 128 + 4}

    def test_track_assignment_fields(self):
        bank = track_ext_json(generate_rpp(ProjectConfig(tracks=[make_track()])))[0]["banks"][0]
        assert bank["t"] == "g"
        assert BANK_GUID_REGEX.fullmatch(bank["v"])
        assert bank["h"] == bank_hash("Test Bank")
        assert bank["name"] == "Test Bank"
        assert (bank["src"], bank["dst"], bank["dstbus"]) == (17, 17, 1)

    def test_plugins_present(self):
        rpp = generate_rpp(ProjectConfig(tracks=[make_track()]))
        assert "<FXCHAIN" in rpp
        assert "<JS jsfx/Reaticulate.jsfx" in rpp
        assert "Kontakt" in rpp

    def test_no_tracks_no_extstate(self):
        rpp = generate_rpp(ProjectConfig())
        assert "<EXTSTATE" not in rpp
        assert rpp.startswith("<REAPER_PROJECT")
        assert rpp.endswith("\n>")

    def test_header_values(self):
        rpp = generate_rpp(ProjectConfig(tempo=92.5, sample_rate=44100))
        assert "  TEMPO 92.5 4 4" in rpp
        assert "  SAMPLERATE 44100 0 0" in rpp
        assert "  TEMPO 120 4 4" in generate_rpp(ProjectConfig())

    @pytest.mark.parametrize("tempo,text", [
        (123.4567, "123.4567"),
        (60, "60"),
        (99.999999, "99.999999"),
    ])
    def test_tempo_keeps_all_digits(self, tempo, text):
        assert f"  TEMPO {text} 4 4" in generate_rpp(ProjectConfig(tempo=tempo))

    def test_jsfx_state_line(self):
        expected = (
            "0 0 0 -1 0 0 0 0 1 "
            + "8421504 " * 16
            + "0 " * 36
            + "12 0 0"
        )
        assert REATICULATE_JSFX_STATE == expected
        assert len(REATICULATE_JSFX_STATE.split()) == 64
        rpp = generate_rpp(ProjectConfig(tracks=[make_track()]))
        assert f"\n        {expected}\n" in rpp

    def test_two_space_indentation(self):
        rpp = generate_rpp(ProjectConfig(tracks=[make_track()]))
        for line in rpp.split("\n")[1:]:
            indent = len(line) - len(line.lstrip(" "))
            assert indent % 2 == 0

    def test_blocks_balance(self):
        rpp = generate_rpp(ProjectConfig(
            tracks=[make_track()],
            folders=[FolderConfig(name="Strings", tracks=[make_track("A", 1, 1)])],
        ))
        lines = [line.strip() for line in rpp.split("\n")]
        opens = sum(1 for line in lines if line.startswith("<"))
        closes = sum(1 for line in lines if line == ">")
        assert opens == closes

    def test_quotes_escaped(self):
        rpp = generate_rpp(ProjectConfig(tracks=[make_track('My "Quoted" Bank')]))
        assert 'NAME "My \\"Quoted\\" Bank"' in rpp
        assert escape_rpp('a"b') == 'a\\"b'

    def test_explicit_color_overrides_family(self):
        rpp = generate_rpp(ProjectConfig(tracks=[make_track("Violins", color="#0000FF")]))
        assert f"PEAKCOL {hex_to_reaper_color('#0000FF')}" in rpp

    def test_structure_is_stable_between_runs(self):
        config = ProjectConfig(
            tracks=[make_track(), make_track("Horns", 2, 1)],
            folders=[FolderConfig(name="Strings", tracks=[make_track("Violins", 1, 1)])],
        )
        first, second = generate_rpp(config), generate_rpp(config)
        assert first != second
        assert strip_ids(first) == strip_ids(second)

    def test_invalid_values_are_written_as_given(self):
        rpp = generate_rpp(ProjectConfig(tracks=[make_track("", msb=-1, lsb=500)]))
        assert list(state_json(rpp)["msblsb_by_guid"].values()) == [-128 + 500]


class TestFolders:
    """Folder tracks and ISBUS markers."""

    def test_folder_markers(self):
        folder = FolderConfig(name="Strings", tracks=[make_track("A", 1, 1), make_track("B", 1, 2)])
        rpp = generate_rpp(ProjectConfig(folders=[folder], tracks=[make_track("C", 2, 1)]))
        assert isbus_values(rpp) == ["1 1", "0 0", "2 -1", "0 0"]

    def test_single_track_folder(self):
        folder = FolderConfig(name="Brass", tracks=[make_track("A", 1, 1)])
        assert isbus_values(generate_rpp(ProjectConfig(folders=[folder]))) == ["1 1", "2 -1"]

    def test_folder_precedes_members(self):
        folder = FolderConfig(name="Strings", tracks=[make_track("Violins A", 1, 1)])
        rpp = generate_rpp(ProjectConfig(folders=[folder]))
        assert rpp.index('NAME "Strings"') < rpp.index('NAME "Violins A"')

    def test_extstate_covers_every_folder(self):
        folders = [
            FolderConfig(name="Strings", tracks=[make_track("A", 1, 1)]),
            FolderConfig(name="Brass", tracks=[make_track("B", 2, 1), make_track("C", 2, 2)]),
        ]
        rpp = generate_rpp(ProjectConfig(folders=folders))
        assert rpp.count("<EXTSTATE") == 1
        assert sorted(state_json(rpp)["msblsb_by_guid"].values()) == [129, 257, 258]


class TestSchema:
    def test_bad_color_rejected(self):
        with pytest.raises(ValidationError):
            make_track(color="red")

    def test_track_count(self):
        config = ProjectConfig(
            tracks=[make_track()],
            folders=[FolderConfig(name="F", tracks=[make_track(), make_track()])],
        )
        assert config.track_count == 4

    def test_bank_info_from_record(self):
        record = BankRecord(msb=4, lsb=5, name="X", articulations=[
            ArticulationEntry(number=3, name="Long", color="long"),
        ])
        info = BankInfo.from_record(record)
        assert (info.msb, info.lsb, info.name) == (4, 5, "X")
        assert [(a.number, a.name) for a in info.articulations] == [(3, "Long")]


class TestRequests:
    """Building requests from parsed banks."""

    def setup_method(self):
        self.banks = [
            BankRecord(msb=1, lsb=1, name="SFX Violins Long"),
            BankRecord(msb=2, lsb=1, name="SFBB Horns Long"),
            BankRecord(msb=1, lsb=2, name="SFX Cellos Long"),
        ]

    def test_tracks_from_banks(self):
        tracks = tracks_from_banks(self.banks)
        assert [t.name for t in tracks] == [b.name for b in self.banks]
        assert tracks[0].bank.msb == 1

    def test_folders_group_by_library(self):
        folders = folders_from_banks(self.banks)
        assert [f.name for f in folders] == ["Spitfire Audio", "Spitfire British Brass"]
        assert [t.name for t in folders[0].tracks] == ["SFX Violins Long", "SFX Cellos Long"]

    def test_build_project(self):
        flat = build_project(self.banks, name="T", tempo=90)
        assert (flat.name, flat.tempo, len(flat.tracks), flat.folders) == ("T", 90, 3, [])
        grouped = build_project(self.banks, group=True)
        assert grouped.tracks == []
        assert grouped.track_count == 5
