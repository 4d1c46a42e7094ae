"""
Reabank Parser Module - Read Reaticulate Bank Definitions

Parses the text format Reaticulate uses for its bank files:

    // plain comment
    Bank 42 1 NICRQ Amati Viola Longs
    //! c=long i=legato o=note:24
    1 Long Finger
    //! c=short o=note:25
    2 Spiccato

    Bank * * Wildcard Bank
    ...

    - "Bank <MSB> <LSB> <name>" opens a bank. MSB/LSB are integers or "*".
    - "//!" lines carry metadata for the NEXT articulation only.
    - "<number> <name>" lines are articulations of the open bank.

The parser is a single forward pass. It never raises for malformed input;
bad bank lines are reported in the returned error list and skipped.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple
import logging
import re
import time

from cubby.data.schema import ArticulationEntry, BankRecord, DEFAULT_COLOR

logger = logging.getLogger(__name__)


# =============================================================================
# LINE GRAMMAR
# =============================================================================

BANK_KEYWORD_REGEX = re.compile(r'^Bank\b')
BANK_LINE_REGEX = re.compile(r'^Bank\s+(\S+)\s+(\S+)\s+(.+)$')
BANK_NUMBER_REGEX = re.compile(r'^[0-9]+$')
ARTICULATION_REGEX = re.compile(r'^([0-9]+)\s+(.+)$')

METADATA_PREFIX = "//!"
COMMENT_PREFIX = "//"
WILDCARD = "*"

# Metadata keys we keep, mapped to ArticulationEntry fields
METADATA_KEYS = {
    "c": "color",
    "i": "icon",
    "o": "output_spec",
    "g": "group",
}


# =============================================================================
# PARSE RESULT
# =============================================================================

@dataclass
class ParsedReabank:
    """Result of one parse pass."""
    banks: List[BankRecord] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    parse_time: float = 0.0  # milliseconds

    def __str__(self) -> str:
        return (
            f"{len(self.banks)} banks, {len(self.errors)} errors "
            f"({self.parse_time:.1f} ms)"
        )


# =============================================================================
# LINE PARSERS
# =============================================================================

def parse_metadata(line: str) -> Dict[str, object]:
    """
    Parse a "//!" metadata line into ArticulationEntry field values.

    Unknown keys are ignored. If a key appears twice, the first value wins.

    Example:
        parse_metadata("//! c=long i=legato o=note:24")
        → {"color": "long", "icon": "legato", "output_spec": "note:24"}
    """
    meta: Dict[str, object] = {}
    for token in line[len(METADATA_PREFIX):].split():
        key, sep, value = token.partition("=")
        if not sep or not value or key not in METADATA_KEYS:
            continue
        field_name = METADATA_KEYS[key]
        if field_name == "group":
            if not BANK_NUMBER_REGEX.match(value):
                continue
            meta.setdefault(field_name, int(value))
        else:
            meta.setdefault(field_name, value)
    return meta


def _bank_number(token: str) -> Optional[int]:
    if BANK_NUMBER_REGEX.match(token):
        return int(token)
    return None


# =============================================================================
# MAIN PARSING FUNCTION
# =============================================================================

def parse_reabank(text: str) -> ParsedReabank:
    """
    Parse .reabank text into bank records.

    Args:
        text: Full contents of one (or several concatenated) .reabank files

    Returns:
        ParsedReabank with banks in declaration order, per-line error
        messages, and the time the pass took.

    Wildcard banks ("Bank * * ...") get a synthetic MSB from a counter that
    starts at 1 for each call, and LSB 0.
    """
    start = time.perf_counter()

    banks: List[BankRecord] = []
    errors: List[str] = []

    # Working state for the bank being read. Articulations are collected
    # here and the frozen record is built when the bank is closed.
    current: Optional[Tuple[int, int, str]] = None
    current_articulations: List[ArticulationEntry] = []
    pending_meta: Optional[Dict[str, object]] = None
    wildcard_counter = 0

    def flush() -> None:
        if current is not None:
            msb, lsb, name = current
            banks.append(BankRecord(
                msb=msb, lsb=lsb, name=name, articulations=current_articulations
            ))

    for line_number, raw_line in enumerate(text.split("\n"), start=1):
        line = raw_line.strip()

        if not line:
            continue

        if line.startswith(METADATA_PREFIX):
            pending_meta = parse_metadata(line)
            continue

        if line.startswith(COMMENT_PREFIX):
            continue

        if BANK_KEYWORD_REGEX.match(line):
            match = BANK_LINE_REGEX.match(line)
            msb_token, lsb_token = (match.group(1), match.group(2)) if match else ("", "")

            if match and WILDCARD in (msb_token, lsb_token):
                wildcard_counter += 1
                msb, lsb = wildcard_counter, 0
            else:
                msb, lsb = _bank_number(msb_token), _bank_number(lsb_token)

            if msb is None or lsb is None:
                errors.append(f"Line {line_number}: Invalid bank format: {line}")
                continue

            flush()
            current = (msb, lsb, match.group(3).strip())
            current_articulations = []
            pending_meta = None
            continue

        match = ARTICULATION_REGEX.match(line)
        if match and current is not None:
            meta = pending_meta or {}
            current_articulations.append(ArticulationEntry(
                number=int(match.group(1)),
                name=match.group(2).strip(),
                color=meta.get("color", DEFAULT_COLOR),
                icon=meta.get("icon"),
                output_spec=meta.get("output_spec"),
                group=meta.get("group", 0),
            ))
            pending_meta = None

    flush()

    result = ParsedReabank(
        banks=banks,
        errors=errors,
        parse_time=(time.perf_counter() - start) * 1000.0,
    )
    logger.debug("Parsed reabank text: %s", result)
    return result


def parse(text: str) -> Tuple[List[BankRecord], List[str]]:
    """Parse .reabank text, returning (banks, errors)."""
    result = parse_reabank(text)
    return result.banks, result.errors


# =============================================================================
# SERIALIZATION
# =============================================================================

def format_articulation(articulation: ArticulationEntry) -> List[str]:
    """Format one articulation as its metadata line (if any) plus entry line."""
    meta = []
    if articulation.color != DEFAULT_COLOR:
        meta.append(f"c={articulation.color}")
    if articulation.icon:
        meta.append(f"i={articulation.icon}")
    if articulation.output_spec:
        meta.append(f"o={articulation.output_spec}")
    if articulation.group:
        meta.append(f"g={articulation.group}")

    lines = []
    if meta:
        lines.append(f"{METADATA_PREFIX} " + " ".join(meta))
    lines.append(f"{articulation.number} {articulation.name}")
    return lines


def format_reabank(banks: Iterable[BankRecord]) -> str:
    """
    Serialize bank records back into .reabank text.

    parse(format_reabank(banks)) yields records equal to the input for any
    banks with real MSB/LSB values and names without surrounding whitespace.
    """
    lines: List[str] = []
    for bank in banks:
        lines.append(f"Bank {bank.msb} {bank.lsb} {bank.name}")
        for articulation in bank.articulations:
            lines.extend(format_articulation(articulation))
        lines.append("")
    return "\n".join(lines)
