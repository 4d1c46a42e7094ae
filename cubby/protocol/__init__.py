"""
Protocol Subpackage - JSON envelopes for the remote transport

    - messages.py: Typed midi / trackChange / bankData / ping / pong messages
"""

from cubby.protocol.messages import (
    BankData,
    MidiEnvelope,
    Ping,
    Pong,
    TrackChange,
    bank_from_payload,
    bank_to_payload,
    decode_message,
    encode_message,
    track_change_for,
)
