"""
Transport Messages - JSON envelopes exchanged with the remote surface

Every message is a JSON object with a "type" field:

    {"type": "midi", "status": 144, "data1": 24, "data2": 127}
    {"type": "trackChange", "trackName": "Violins", "msb": 42, "lsb": 1}
    {"type": "bankData", "trackName": ..., "bankName": ..., "msb": ..., "lsb": ...,
     "articulations": [{"number": 1, "name": "Long", "color": "long"}, ...]}
    {"type": "ping"}
    {"type": "pong", "port": 3001}

Field names on the wire are camelCase; the models accept either the wire
name or the Python name. The articulation list in bankData carries the same
number/name/color fields as a parsed ArticulationEntry, so a bank received
over the wire converts to a BankRecord without loss of those fields.
"""

from typing import Annotated, List, Literal, Optional, Union
import json
import logging

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from cubby.data.schema import DEFAULT_COLOR, ArticulationEntry, BankRecord
from cubby.errors import ProtocolError

logger = logging.getLogger(__name__)


class _Envelope(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class MidiEnvelope(_Envelope):
    type: Literal["midi"] = "midi"
    status: int = Field(..., ge=0, le=255)
    data1: int = Field(..., ge=0, le=127)
    data2: int = Field(default=0, ge=0, le=127)


class TrackChange(_Envelope):
    """The host selected a different track; msb/lsb are set if it has a bank."""
    type: Literal["trackChange"] = "trackChange"
    track_name: str = Field(..., alias="trackName")
    msb: Optional[int] = None
    lsb: Optional[int] = None
    bank_name: Optional[str] = Field(default=None, alias="bankName")


class ArticulationPayload(_Envelope):
    number: int
    name: str
    color: str = DEFAULT_COLOR


class BankData(_Envelope):
    type: Literal["bankData"] = "bankData"
    track_name: str = Field(..., alias="trackName")
    bank_name: str = Field(..., alias="bankName")
    msb: int
    lsb: int
    articulations: List[ArticulationPayload] = Field(default_factory=list)


class Ping(_Envelope):
    type: Literal["ping"] = "ping"


class Pong(_Envelope):
    type: Literal["pong"] = "pong"
    port: Optional[int] = None


Message = Annotated[
    Union[MidiEnvelope, TrackChange, BankData, Ping, Pong],
    Field(discriminator="type"),
]

_message_adapter = TypeAdapter(Message)


# =============================================================================
# ENCODE / DECODE
# =============================================================================

def decode_message(raw: Union[str, bytes, dict]) -> Message:
    """
    Parse one envelope into its typed model.

    Raises:
        ProtocolError: Invalid JSON, not an object, unknown type or bad fields
    """
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except ValueError as e:
            raise ProtocolError(f"Message is not valid JSON: {e}") from e

    if not isinstance(raw, dict):
        raise ProtocolError(f"Message must be a JSON object, got {type(raw).__name__}")

    try:
        return _message_adapter.validate_python(raw)
    except ValidationError as e:
        raise ProtocolError(f"Invalid '{raw.get('type')}' message: {e}") from e


def encode_message(message: BaseModel) -> str:
    """Compact JSON with wire (camelCase) field names."""
    return message.model_dump_json(by_alias=True, exclude_none=True)


# =============================================================================
# BANK CONVERSION
# =============================================================================

def bank_from_payload(payload: BankData) -> BankRecord:
    return BankRecord(
        msb=payload.msb,
        lsb=payload.lsb,
        name=payload.bank_name,
        articulations=[
            ArticulationEntry(number=a.number, name=a.name, color=a.color)
            for a in payload.articulations
        ],
    )


def bank_to_payload(bank: BankRecord, track_name: str) -> BankData:
    return BankData(
        track_name=track_name,
        bank_name=bank.name,
        msb=bank.msb,
        lsb=bank.lsb,
        articulations=[
            ArticulationPayload(number=a.number, name=a.name, color=a.color)
            for a in bank.articulations
        ],
    )


def track_change_for(track_name: str, bank: Optional[BankRecord]) -> TrackChange:
    """The trackChange message for a track and the bank matched to it (if any)."""
    if bank is None:
        logger.debug("No bank matched track '%s'", track_name)
        return TrackChange(track_name=track_name)
    return TrackChange(track_name=track_name, msb=bank.msb, lsb=bank.lsb, bank_name=bank.name)
