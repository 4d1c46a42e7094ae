"""Build ProjectConfig track/folder lists from parsed banks."""

from typing import Dict, Iterable, List

from cubby.data.schema import BankRecord
from cubby.project.schema import BankInfo, FolderConfig, ProjectConfig, TrackConfig
from cubby.rules.classifier import classify


def track_from_bank(bank: BankRecord) -> TrackConfig:
    return TrackConfig(bank=BankInfo.from_record(bank), name=bank.name)


def tracks_from_banks(banks: Iterable[BankRecord]) -> List[TrackConfig]:
    """One track per bank, named after the bank, in input order."""
    return [track_from_bank(bank) for bank in banks]


def folders_from_banks(banks: Iterable[BankRecord]) -> List[FolderConfig]:
    """
    Group banks into one folder per library (first classification level).

    Folders appear in the order their first bank appears; tracks keep
    input order within each folder.
    """
    folders: Dict[str, FolderConfig] = {}
    for bank in banks:
        library = classify(bank)[0]
        if library not in folders:
            folders[library] = FolderConfig(name=library)
        folders[library].tracks.append(track_from_bank(bank))
    return list(folders.values())


def build_project(
    banks: Iterable[BankRecord],
    name: str = "My Template",
    tempo: float = 120,
    sample_rate: int = 48000,
    group: bool = False,
) -> ProjectConfig:
    """Project request for the given banks, either flat or grouped by library."""
    banks = list(banks)
    if group:
        return ProjectConfig(name=name, tempo=tempo, sample_rate=sample_rate,
                             folders=folders_from_banks(banks))
    return ProjectConfig(name=name, tempo=tempo, sample_rate=sample_rate,
                         tracks=tracks_from_banks(banks))
