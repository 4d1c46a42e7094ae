"""
Data Subpackage

This package handles everything related to bank data:
    - schema.py: Pydantic models for banks, articulations and MIDI values
    - reabank_parser.py: The .reabank text parser (and its serializer)
    - articulations.py: Remote-trigger assignment and MIDI helpers
    - loader.py: Reading .reabank files from disk and the BankCache

The core data structure is the BankRecord, which contains:
    - msb / lsb: MIDI bank-select pair
    - name: Raw bank name, e.g. "NICRQ Amati Viola Longs"
    - articulations: Ordered ArticulationEntry list
"""

from cubby.data.schema import ArticulationEntry, BankRecord, MidiMessage, RemoteTrigger
from cubby.data.reabank_parser import ParsedReabank, format_reabank, parse, parse_reabank
