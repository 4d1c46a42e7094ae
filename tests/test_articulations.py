"""
Tests for articulation models and helpers.

Run with: pytest tests/test_articulations.py -v
"""

import pytest

from cubby.data.articulations import (
    apply_channel,
    auto_assign_remote_triggers,
    count_auto_assigned_remotes,
    demo_articulation_set,
    describe_midi,
    group_articulations,
    has_unassigned_remotes,
    midi_note_to_name,
)
from cubby.data.schema import (
    ArticulationEntry,
    BankRecord,
    MidiMessage,
    RemoteTrigger,
    parse_output_spec,
)


class TestOutputSpec:
    @pytest.mark.parametrize("spec,expected", [
        ("note:24", [(0x90, 24, 127)]),
        ("note:24,100", [(0x90, 24, 100)]),
        ("cc:32,64", [(0xB0, 32, 64)]),
        ("note:24/cc:1,10", [(0x90, 24, 127), (0xB0, 1, 10)]),
        ("pc:3", []),
        ("cc:32", []),
        ("note:x", []),
        ("", []),
        (None, []),
    ])
    def test_parse(self, spec, expected):
        messages = parse_output_spec(spec)
        assert [(m.status, m.data1, m.data2) for m in messages] == expected


class TestArticulationEntry:
    def test_defaults(self):
        art = ArticulationEntry(number=1, name="Long")
        assert art.color == "default"
        assert art.group == 0
        assert art.key_switch is None

    def test_derived_fields(self):
        art = ArticulationEntry(number=4, name="Spiccato Long Name", color="short", output_spec="note:25")
        assert art.key_switch == 25
        assert art.color_index == 4
        assert art.color_hex == "#FF9800"
        assert art.short_name == "Spiccato"
        assert art.description == "Spiccato Long Name (PC 4)"

    def test_unknown_color_uses_default_index(self):
        assert ArticulationEntry(number=1, name="X", color="weird").color_index == 0

    def test_bank_keys(self):
        bank = BankRecord(msb=42, lsb=1, name="B", articulations=[ArticulationEntry(number=7, name="X")])
        assert bank.key == "42-1"
        assert bank.msblsb == 42 * 128 + 1
        assert bank.articulation_id(bank.articulations[0]) == "42-1-7"


class TestRemoteTriggers:
    def make_bank(self):
        return BankRecord(msb=1, lsb=1, name="B", articulations=[
            ArticulationEntry(number=1, name="Has Key Switch", output_spec="note:0"),
            ArticulationEntry(number=2, name="Explicit",
                              remote_trigger=RemoteTrigger(data1=1)),
            ArticulationEntry(number=3, name="Free A"),
            ArticulationEntry(number=4, name="Free B"),
        ])

    def test_has_unassigned(self):
        assert has_unassigned_remotes(self.make_bank())
        assert not has_unassigned_remotes(demo_articulation_set())

    def test_assigns_lowest_free_notes(self):
        bank = auto_assign_remote_triggers(self.make_bank())
        notes = [a.remote_trigger.data1 for a in bank.articulations]
        # note 0 is a key switch and note 1 is taken explicitly
        assert notes == [2, 1, 3, 4]
        assert count_auto_assigned_remotes(bank) == 3
        assert not bank.articulations[1].remote_trigger.is_auto_assigned

    def test_input_not_modified(self):
        original = self.make_bank()
        auto_assign_remote_triggers(original)
        assert original.articulations[2].remote_trigger is None

    def test_stops_when_notes_run_out(self):
        arts = [ArticulationEntry(number=i, name=f"A{i}") for i in range(130)]
        bank = auto_assign_remote_triggers(BankRecord(msb=1, lsb=1, name="Big", articulations=arts))
        assert count_auto_assigned_remotes(bank) == 127
        assert bank.articulations[-1].remote_trigger is None


class TestHelpers:
    def test_group_articulations(self):
        arts = [
            ArticulationEntry(number=1, name="A"),
            ArticulationEntry(number=2, name="B", group=2),
            ArticulationEntry(number=3, name="C"),
        ]
        groups = group_articulations(arts)
        assert [a.name for a in groups[0]] == ["A", "C"]
        assert [a.name for a in groups[2]] == ["B"]

    @pytest.mark.parametrize("note,name", [(60, "C4"), (0, "C-1"), (61, "C#4"), (127, "G9")])
    def test_midi_note_to_name(self, note, name):
        assert midi_note_to_name(note) == name

    def test_apply_channel(self):
        message = MidiMessage(status=0x90, data1=60, data2=100)
        assert apply_channel(message, 3).status == 0x93
        assert apply_channel(message, 99).status == 0x9F
        assert apply_channel(message, -5).status == 0x90

    def test_apply_channel_leaves_system_messages(self):
        message = MidiMessage(status=0xF8, data1=0)
        assert apply_channel(message, 5) == message

    @pytest.mark.parametrize("message,text", [
        (MidiMessage(status=0x90, data1=60, data2=100), "Note On ch1 note=60 vel=100"),
        (MidiMessage(status=0x91, data1=60, data2=0), "Note Off ch2 note=60"),
        (MidiMessage(status=0xB0, data1=1, data2=64), "CC ch1 cc=1 val=64"),
        (MidiMessage(status=0xC2, data1=5), "Program Change ch3 program=5"),
    ])
    def test_describe_midi(self, message, text):
        assert describe_midi(message) == text

    def test_demo_set(self):
        demo = demo_articulation_set()
        assert demo.name == "Demo Strings"
        assert len(demo.articulations) == 8
        assert [a.remote_trigger.data1 for a in demo.articulations] == list(range(8))
