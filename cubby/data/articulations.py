"""
Articulation helpers: remote triggers, grouping and MIDI display utilities.

A controller (or the browser remote) fires articulations by sending MIDI.
Articulations that declare an output note already have an obvious trigger;
the rest get one auto-assigned from the lowest free note numbers.
"""

from typing import Dict, List

from cubby.data.schema import (
    ArticulationEntry,
    BankRecord,
    MidiMessage,
    RemoteTrigger,
    NOTE_ON,
)


NOTE_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

# Highest note auto-assignment may hand out (exclusive)
MAX_TRIGGER_NOTE = 127

MESSAGE_TYPES = {
    0x80: "Note Off",
    0x90: "Note On",
    0xA0: "Poly Pressure",
    0xB0: "CC",
    0xC0: "Program Change",
    0xD0: "Channel Pressure",
    0xE0: "Pitch Bend",
}


# =============================================================================
# REMOTE TRIGGERS
# =============================================================================

def has_unassigned_remotes(bank: BankRecord) -> bool:
    """Check if any articulations are missing remote triggers."""
    return any(a.remote_trigger is None for a in bank.articulations)


def auto_assign_remote_triggers(bank: BankRecord) -> BankRecord:
    """
    Give every articulation without a remote trigger a Note On trigger.

    Notes already used by explicit (non-auto) triggers or by key switches
    are skipped. Assignment stops silently once the note range runs out,
    leaving the remaining articulations untouched.

    Returns:
        A copy of the bank; the input is not modified.
    """
    used_notes = set()
    for art in bank.articulations:
        if art.remote_trigger is not None and not art.remote_trigger.is_auto_assigned:
            used_notes.add(art.remote_trigger.data1)
        if art.key_switch is not None:
            used_notes.add(art.key_switch)

    next_note = 0
    articulations = []
    for art in bank.articulations:
        if art.remote_trigger is not None:
            articulations.append(art)
            continue

        while next_note in used_notes and next_note < MAX_TRIGGER_NOTE:
            next_note += 1

        if next_note >= MAX_TRIGGER_NOTE:
            articulations.append(art)
            continue

        used_notes.add(next_note)
        trigger = RemoteTrigger(status=NOTE_ON, data1=next_note, is_auto_assigned=True)
        articulations.append(art.model_copy(update={"remote_trigger": trigger}))
        next_note += 1

    return bank.model_copy(update={"articulations": articulations})


def count_auto_assigned_remotes(bank: BankRecord) -> int:
    return sum(
        1 for a in bank.articulations
        if a.remote_trigger is not None and a.remote_trigger.is_auto_assigned
    )


def group_articulations(articulations: List[ArticulationEntry]) -> Dict[int, List[ArticulationEntry]]:
    """Group articulations by group number, keeping declaration order."""
    groups: Dict[int, List[ArticulationEntry]] = {}
    for art in articulations:
        groups.setdefault(art.group or 0, []).append(art)
    return groups


# =============================================================================
# MIDI DISPLAY / CHANNEL HELPERS
# =============================================================================

def midi_note_to_name(note: int) -> str:
    """Convert a MIDI note number to a note name (60 → "C4")."""
    octave = note // 12 - 1
    return f"{NOTE_NAMES[note % 12]}{octave}"


def apply_channel(message: MidiMessage, channel: int) -> MidiMessage:
    """
    Re-target a channel voice message to a MIDI channel (0-15).

    The channel is clamped into range. System messages (0xF0 and up) and
    data bytes below 0x80 are returned unchanged.
    """
    channel = max(0, min(15, channel))
    if not 0x80 <= message.status < 0xF0:
        return message
    return message.model_copy(update={"status": (message.status & 0xF0) | channel})


def describe_midi(message: MidiMessage) -> str:
    """Human readable description of a MIDI message, for logs."""
    status = message.status
    channel = (status & 0x0F) + 1
    kind = status & 0xF0

    if kind == 0x90 and message.data2 == 0:
        return f"Note Off ch{channel} note={message.data1}"
    if kind in (0x80, 0x90):
        return f"{MESSAGE_TYPES[kind]} ch{channel} note={message.data1} vel={message.data2}"
    if kind == 0xA0:
        return f"Poly Pressure ch{channel} note={message.data1} pressure={message.data2}"
    if kind == 0xB0:
        return f"CC ch{channel} cc={message.data1} val={message.data2}"
    if kind == 0xC0:
        return f"Program Change ch{channel} program={message.data1}"
    if kind == 0xD0:
        return f"Channel Pressure ch{channel} pressure={message.data1}"
    if kind == 0xE0:
        return f"Pitch Bend ch{channel}"
    return f"Unknown 0x{status:x}"


# =============================================================================
# DEMO DATA
# =============================================================================

def demo_articulation_set() -> BankRecord:
    """A small string bank for demos and for trying the remote without files."""
    demo = [
        (1, "Sustain", "long"),
        (2, "Staccato", "short"),
        (3, "Spiccato", "short"),
        (4, "Pizzicato", "pizz"),
        (5, "Tremolo", "tremolo"),
        (6, "Trills", "trill"),
        (7, "Harmonics", "harmonics"),
        (8, "Legato", "legato"),
    ]
    articulations = [
        ArticulationEntry(
            number=number,
            name=name,
            color=color,
            remote_trigger=RemoteTrigger(status=NOTE_ON, data1=number - 1),
        )
        for number, name, color in demo
    ]
    return BankRecord(msb=0, lsb=0, name="Demo Strings", articulations=articulations)
