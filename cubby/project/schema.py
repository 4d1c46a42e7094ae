"""
Schema definitions for project generation requests.

A ProjectConfig lists the tracks (and optionally folders of tracks) to
write into a REAPER project. Each track carries just the bank fields the
generator needs, so a request can be built from parsed records or from
any other source of bank data.

Values are not range-checked: out-of-range MSB/LSB or empty names are
written as given. Only explicit track colors are validated, because they
have to be turned into REAPER color integers.
"""

from typing import List, Optional
from pydantic import BaseModel, Field, field_validator
import re

from cubby.data.schema import BankRecord


HEX_COLOR_REGEX = re.compile(r'^#?[0-9A-Fa-f]{6}$')


def _validate_hex_color(v: Optional[str]) -> Optional[str]:
    if v is not None and not HEX_COLOR_REGEX.match(v):
        raise ValueError(f"Color must be a hex value like '#8B4513'. Got: '{v}'")
    return v


class ArticulationRef(BaseModel):
    number: int
    name: str


class BankInfo(BaseModel):
    """The subset of a bank record written into a project."""
    msb: int
    lsb: int
    name: str
    articulations: List[ArticulationRef] = Field(default_factory=list)

    @classmethod
    def from_record(cls, bank: BankRecord) -> "BankInfo":
        return cls(
            msb=bank.msb,
            lsb=bank.lsb,
            name=bank.name,
            articulations=[
                ArticulationRef(number=a.number, name=a.name) for a in bank.articulations
            ],
        )


class TrackConfig(BaseModel):
    """One output track with its Reaticulate bank assignment."""
    bank: BankInfo
    name: str
    color: Optional[str] = Field(default=None, description="Hex color override")

    @field_validator('color')
    @classmethod
    def validate_color(cls, v: Optional[str]) -> Optional[str]:
        return _validate_hex_color(v)


class FolderConfig(BaseModel):
    """A folder track and the tracks inside it."""
    name: str
    color: Optional[str] = None
    tracks: List[TrackConfig] = Field(default_factory=list)

    @field_validator('color')
    @classmethod
    def validate_color(cls, v: Optional[str]) -> Optional[str]:
        return _validate_hex_color(v)


class ProjectConfig(BaseModel):
    """
    A project generation request.

    Folders are written first (each folder track followed by its members),
    then the standalone tracks, each list in the given order.
    """
    name: str = "My Template"
    tempo: float = 120
    sample_rate: int = 48000
    tracks: List[TrackConfig] = Field(default_factory=list)
    folders: List[FolderConfig] = Field(default_factory=list)

    @property
    def track_count(self) -> int:
        return len(self.tracks) + sum(1 + len(f.tracks) for f in self.folders)
