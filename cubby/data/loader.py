"""
Loading .reabank files from disk, and the bank cache used by pollers.

The parser itself never touches the file system. This module is the
boundary: it reads files, parses each one independently and concatenates
the results. No cross-file de-duplication happens here.
"""

from pathlib import Path
from typing import Dict, List, Optional, Union
import logging

from tqdm import tqdm

from cubby.data.reabank_parser import ParsedReabank, parse_reabank
from cubby.data.schema import BankRecord
from cubby.errors import ReabankLoadError

logger = logging.getLogger(__name__)

DEFAULT_PATTERN = "*.reabank"

PathLike = Union[str, Path]


# =============================================================================
# FILE LOADING
# =============================================================================

def load_reabank_file(path: PathLike) -> ParsedReabank:
    """
    Read and parse one .reabank file.

    Parse errors are prefixed with the file name so they stay meaningful
    once several files are combined.

    Raises:
        ReabankLoadError: If the file cannot be read
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise ReabankLoadError(f"Cannot read {path}: {e}") from e

    result = parse_reabank(text)
    result.errors = [f"{path.name}: {error}" for error in result.errors]
    logger.info("Loaded %s: %s", path.name, result)
    return result


def find_reabank_files(directory: PathLike, pattern: str = DEFAULT_PATTERN) -> List[Path]:
    directory = Path(directory)
    if not directory.is_dir():
        raise ReabankLoadError(f"Reabank folder not found: {directory}")
    return sorted(p for p in directory.glob(pattern) if p.is_file())


def load_reabank_files(paths: List[PathLike], show_progress: bool = False) -> ParsedReabank:
    """Parse several files and concatenate their banks and errors in order."""
    combined = ParsedReabank()
    for path in tqdm(paths, desc="Parsing reabanks", unit="file", disable=not show_progress):
        result = load_reabank_file(path)
        combined.banks.extend(result.banks)
        combined.errors.extend(result.errors)
        combined.parse_time += result.parse_time
    return combined


def load_reabank_dir(
    directory: PathLike,
    pattern: str = DEFAULT_PATTERN,
    show_progress: bool = False,
) -> ParsedReabank:
    """
    Load every matching file in a directory (non-recursive).

    Raises:
        ReabankLoadError: If the directory is missing or has no matching files
    """
    files = find_reabank_files(directory, pattern)
    if not files:
        raise ReabankLoadError(f"No {pattern} files found in {directory}")

    result = load_reabank_files(files, show_progress=show_progress)
    logger.info("Loaded %d banks from %d files", len(result.banks), len(files))
    return result


# =============================================================================
# BANK CACHE
# =============================================================================

class BankCache:
    """
    Key-indexed bank lookup for whatever loop polls the DAW.

    The cache is an explicit object owned by its caller. It is filled by
    reload() and emptied by invalidate(); nothing is shared between
    instances.

    Banks are indexed with insert-or-replace semantics: when two banks share
    an MSB/LSB key (or a name), the one loaded last wins.

    Example:
        >>> cache = BankCache("~/Library/Application Support/REAPER/Data")
        >>> cache.reload()
        >>> cache.get(42, 1).name
        'NICRQ Amati Viola Longs'
    """

    def __init__(self, directory: Optional[PathLike] = None, pattern: str = DEFAULT_PATTERN):
        self.directory = Path(directory).expanduser() if directory else None
        self.pattern = pattern
        self._by_key: Dict[str, BankRecord] = {}
        self._by_name: Dict[str, BankRecord] = {}
        self.errors: List[str] = []

    def __len__(self) -> int:
        return len(self._by_key)

    def __contains__(self, key: str) -> bool:
        return key in self._by_key

    @property
    def banks(self) -> List[BankRecord]:
        return list(self._by_key.values())

    def add(self, bank: BankRecord) -> None:
        """Insert a bank, replacing any previous bank with the same key or name."""
        self._by_key[bank.key] = bank
        self._by_name[bank.name.lower()] = bank

    def add_all(self, banks: List[BankRecord]) -> None:
        for bank in banks:
            self.add(bank)

    def invalidate(self) -> None:
        """Drop every cached bank."""
        self._by_key.clear()
        self._by_name.clear()
        self.errors = []

    def reload(self, show_progress: bool = False) -> int:
        """
        Re-parse the cache directory from scratch.

        Returns:
            Number of distinct bank keys now cached

        Raises:
            ReabankLoadError: If no directory was configured or it can't be read
        """
        if self.directory is None:
            raise ReabankLoadError("BankCache has no directory to load from")

        result = load_reabank_dir(self.directory, self.pattern, show_progress=show_progress)
        self.invalidate()
        self.add_all(result.banks)
        self.errors = result.errors
        logger.info("Bank cache reloaded: %d banks", len(self))
        return len(self)

    def get(self, msb: int, lsb: int) -> Optional[BankRecord]:
        return self._by_key.get(f"{msb}-{lsb}")

    def find_by_name(self, name: str) -> Optional[BankRecord]:
        """Exact, case-insensitive bank name lookup."""
        return self._by_name.get(name.lower())

    def match_track(self, track_name: str) -> Optional[BankRecord]:
        """
        Find a bank for a track by name.

        Exact name matches win; otherwise the first bank whose name contains
        the track name, or is contained in it, is returned.
        """
        if not track_name:
            return None
        exact = self.find_by_name(track_name)
        if exact is not None:
            return exact

        lower = track_name.lower()
        for bank_lower, bank in self._by_name.items():
            if lower in bank_lower or bank_lower in lower:
                return bank
        return None
