"""
Schema definitions for Reaticulate banks and articulations.

This module defines the Pydantic models shared by every part of the
package: the parser produces them, the classifier and index read them, and
the transport layer converts its JSON payloads into them.

A bank is addressed by an MSB/LSB pair (the two bytes of a MIDI bank
select) and owns an ordered list of articulations. Records are frozen once
built; helpers that "modify" a bank return a copy.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
import re


# =============================================================================
# VALID OPTIONS (Reaticulate color names and their display values)
# =============================================================================

# Reaticulate color names to color indices
COLOR_MAP = {
    "default": 0,
    "long": 1,
    "long-light": 2,
    "long-dark": 3,
    "short": 4,
    "short-light": 5,
    "short-dark": 6,
    "textured": 7,
    "fx": 8,
    "legato": 9,
    "staccato": 10,
    "tremolo": 11,
    "trill": 12,
    "pizz": 13,
    "harmonics": 14,
    "percussion": 15,
}

# Color indices to hex values
REATICULATE_COLORS = {
    0: "#808080",   # default - gray
    1: "#4CAF50",   # long - green
    2: "#81C784",   # long-light
    3: "#2E7D32",   # long-dark
    4: "#FF9800",   # short - orange
    5: "#FFB74D",   # short-light
    6: "#EF6C00",   # short-dark
    7: "#9C27B0",   # textured - purple
    8: "#607D8B",   # fx - blue-gray
    9: "#2196F3",   # legato - blue
    10: "#f44336",  # staccato - red
    11: "#E91E63",  # tremolo - pink
    12: "#00BCD4",  # trill - cyan
    13: "#795548",  # pizz - brown
    14: "#03A9F4",  # harmonics - light blue
    15: "#9E9E9E",  # percussion - gray
}

DEFAULT_COLOR = "default"

INTEGER_REGEX = re.compile(r'^-?[0-9]+$')

NOTE_ON = 0x90
CONTROL_CHANGE = 0xB0


# =============================================================================
# MIDI VALUES
# =============================================================================

class MidiMessage(BaseModel):
    """A raw 3-byte MIDI message."""

    model_config = ConfigDict(frozen=True)

    status: int
    data1: int
    data2: int = 0


class RemoteTrigger(BaseModel):
    """The incoming MIDI event a controller uses to fire an articulation."""

    model_config = ConfigDict(frozen=True)

    status: int = NOTE_ON
    data1: int
    is_auto_assigned: bool = False


# =============================================================================
# HELPER FUNCTION
# =============================================================================

def _to_int(text: str) -> Optional[int]:
    text = text.strip()
    if not INTEGER_REGEX.match(text):
        return None
    return int(text)


def parse_output_spec(output_spec: Optional[str]) -> List[MidiMessage]:
    """
    Decode a Reaticulate output spec into the MIDI messages it implies.

    Supported forms (several may be joined with "/"):
        note:24        → Note On, note 24, velocity 127
        note:24,100    → Note On, note 24, velocity 100
        cc:32,64       → Control Change 32, value 64

    Anything else (program changes, pitch, unknown types, garbage numbers)
    produces no message.

    Examples:
        parse_output_spec("note:24")   → [MidiMessage(144, 24, 127)]
        parse_output_spec("cc:32,64")  → [MidiMessage(176, 32, 64)]
        parse_output_spec(None)        → []
    """
    if not output_spec:
        return []

    messages = []
    for part in output_spec.split("/"):
        kind, _, args = part.partition(":")
        values = [_to_int(a) for a in args.split(",")] if args else []

        if kind == "note" and values and values[0] is not None:
            velocity = values[1] if len(values) > 1 and values[1] is not None else 127
            messages.append(MidiMessage(status=NOTE_ON, data1=values[0], data2=velocity))
        elif kind == "cc" and len(values) >= 2 and None not in values[:2]:
            messages.append(MidiMessage(status=CONTROL_CHANGE, data1=values[0], data2=values[1]))

    return messages


# =============================================================================
# MAIN SCHEMA
# =============================================================================

class ArticulationEntry(BaseModel):
    """
    One articulation inside a bank.

    Attributes:
        number: Program-change value declared in the bank (1-based, duplicates allowed)
        name: Display name
        color: Reaticulate color name ("default" when not declared)
        icon: Reaticulate icon name, if declared
        output_spec: Raw output string such as "note:24" or "cc:32,64"
        group: Articulation group (0 unless declared with g=)
        remote_trigger: MIDI event that fires this articulation from a controller

    MIDI messages and the key switch are derived from output_spec on demand
    rather than stored.

    Example:
        >>> art = ArticulationEntry(number=1, name="Long Finger",
        ...                         color="long", output_spec="note:24")
        >>> art.key_switch
        24
    """

    model_config = ConfigDict(frozen=True)

    number: int = Field(..., description="Program-change value")
    name: str = Field(..., description="Display name")
    color: str = Field(default=DEFAULT_COLOR, description="Reaticulate color name")
    icon: Optional[str] = None
    output_spec: Optional[str] = None
    group: int = 0
    remote_trigger: Optional[RemoteTrigger] = None

    @property
    def midi_messages(self) -> List[MidiMessage]:
        return parse_output_spec(self.output_spec)

    @property
    def key_switch(self) -> Optional[int]:
        """The note number that selects this articulation, if output is a note."""
        for message in self.midi_messages:
            if message.status == NOTE_ON:
                return message.data1
        return None

    @property
    def color_index(self) -> int:
        return COLOR_MAP.get(self.color, 0)

    @property
    def color_hex(self) -> str:
        return REATICULATE_COLORS[self.color_index]

    @property
    def short_name(self) -> str:
        return self.name[:8]

    @property
    def description(self) -> str:
        return f"{self.name} (PC {self.number})"


class BankRecord(BaseModel):
    """
    A named set of articulations addressed by an MSB/LSB pair.

    (msb, lsb) is not guaranteed unique across files. Anything that indexes
    banks by key uses insert-or-replace, so the last declaration wins.
    """

    model_config = ConfigDict(frozen=True)

    msb: int
    lsb: int
    name: str
    articulations: List[ArticulationEntry] = Field(default_factory=list)

    @property
    def key(self) -> str:
        """Selection/lookup key, "{msb}-{lsb}"."""
        return f"{self.msb}-{self.lsb}"

    @property
    def msblsb(self) -> int:
        """The single integer Reaticulate stores for this bank."""
        return self.msb * 128 + self.lsb

    def articulation_id(self, articulation: ArticulationEntry) -> str:
        return f"{self.key}-{articulation.number}"
