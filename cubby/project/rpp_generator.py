"""
RPP Generator Module - Write REAPER Project Files with Reaticulate Banks

Builds the text of a .RPP project where every track already has a
Reaticulate bank assigned:

    <REAPER_PROJECT ...>
      <TRACK {GUID}              one per bank, with:
        <EXT                       reaticulate '2{"banks":[...]}' assignment
        <FXCHAIN                   Reaticulate JSFX + empty Kontakt instance
      <EXTENSIONS>
      <EXTSTATE                  project-level Reaticulate state:
        <REATICULATE               msblsb_by_guid for every assigned bank

Reaticulate reads the per-track EXT block and the project EXTSTATE when the
project loads; both must agree on the bank GUIDs, so they are generated
together here.

Output is deterministic except for the freshly generated identifiers
(track GUIDs, FX ids, bank GUIDs and the change cookie).
"""

from typing import Dict, List, Optional, Tuple
import json
import logging
import uuid

from cubby.project.schema import FolderConfig, ProjectConfig, TrackConfig

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

INDENT = "  "

# Instrument family keyword → track color. First keyword found in the
# lower-cased bank name wins, so more specific words come first.
FAMILY_COLORS = {
    "violin": "#8B4513",
    "viola": "#A0522D",
    "cello": "#CD853F",
    "bass": "#DEB887",
    "flute": "#87CEEB",
    "oboe": "#B0C4DE",
    "clarinet": "#6495ED",
    "bassoon": "#4682B4",
    "horn": "#DAA520",
    "trumpet": "#FFD700",
    "trombone": "#FFA500",
    "tuba": "#FF8C00",
    "timpani": "#808080",
    "percussion": "#696969",
    "harp": "#DDA0DD",
    "piano": "#2F4F4F",
    "strings": "#8B4513",
    "brass": "#DAA520",
    "woodwinds": "#87CEEB",
}

DEFAULT_TRACK_COLOR = "#ff69b4"

# Reaticulate channel routing: 17 means "channel 1" in its numbering
REATICULATE_SOURCE_CHANNEL = 17
REATICULATE_DEST_CHANNEL = 17
REATICULATE_DEST_BUS = 1

# ISBUS values: (folder depth change, compact flag)
ISBUS_NORMAL = "0 0"
ISBUS_FOLDER_START = "1 1"
ISBUS_FOLDER_END = "2 -1"

REATICULATE_JSFX_STATE = (
    "0 0 0 -1 0 0 0 0 1 " + " ".join(["8421504"] * 16) + " " + " ".join(["0"] * 36) + " 12 0 0"
)
KONTAKT_PLUGIN = '"VST3: Kontakt (Native Instruments GmbH)" "Kontakt.vst3" 0 ""'
KONTAKT_EMPTY_STATE = "47k9Krn+5e4CAAAAAQAAAAAAAAACAAAAAAAAAAIAAAABAAAAAAAAAAIAAAAAAAAATAAAAAEAAAAAABAA"


# =============================================================================
# IDENTIFIERS, HASHES, COLORS
# =============================================================================

def generate_guid() -> str:
    """A REAPER-style GUID: {XXXXXXXX-XXXX-XXXX-XXXX-XXXXXXXXXXXX}, upper case."""
    return "{" + str(uuid.uuid4()).upper() + "}"


def generate_reaticulate_guid() -> str:
    """A Reaticulate bank/cookie id: lower case, no braces."""
    return str(uuid.uuid4())


def bank_hash(bank_name: str) -> int:
    """
    Hash a bank name into the large negative integer Reaticulate stores.

    32-bit h = h * 31 + c over UTF-16 code units, read as signed. A
    non-negative result is folded to -abs(h) - 1000000000 so the value is
    always negative.
    """
    h = 0
    data = bank_name.encode("utf-16-le", errors="surrogatepass")
    for i in range(0, len(data), 2):
        code_unit = data[i] | (data[i + 1] << 8)
        h = (h * 31 + code_unit) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return h if h < 0 else -abs(h) - 1000000000


def hex_to_reaper_color(hex_color: str) -> int:
    """Convert "#RRGGBB" to REAPER's native color integer (BGR + enable flag)."""
    hex_color = hex_color.lstrip("#")
    r = int(hex_color[0:2], 16)
    g = int(hex_color[2:4], 16)
    b = int(hex_color[4:6], 16)
    return 0x01000000 | (b << 16) | (g << 8) | r


def track_color(bank_name: str) -> int:
    lower = bank_name.lower()
    for family, color in FAMILY_COLORS.items():
        if family in lower:
            return hex_to_reaper_color(color)
    return hex_to_reaper_color(DEFAULT_TRACK_COLOR)


def escape_rpp(text: str) -> str:
    return text.replace('"', '\\"')


def _json(value) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def _format_number(value: float) -> str:
    """Shortest round-trip form, without a trailing ".0" (120.0 → "120")."""
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def _indent(level: int) -> str:
    return INDENT * level


# =============================================================================
# BLOCK BUILDERS
# =============================================================================

def _track_header(guid: str, name: str, color: int, isbus: str) -> List[str]:
    i2 = _indent(2)
    return [
        f"{_indent(1)}<TRACK {guid}",
        f'{i2}NAME "{escape_rpp(name)}"',
        f"{i2}PEAKCOL {color}",
        f"{i2}BEAT -1",
        f"{i2}AUTOMODE 0",
        f"{i2}VOLPAN 1 0 -1 -1 1",
        f"{i2}MUTESOLO 0 0 0",
        f"{i2}IPHASE 0",
        f"{i2}PLAYOFFS 0 1",
        f"{i2}ISBUS {isbus}",
        f"{i2}BUSCOMP 0 0 0 0 0",
        f"{i2}SHOWINMIX 1 0.6667 0.5 1 0.5 -1 -1 -1",
        f"{i2}SEL 0",
        f"{i2}REC 0 0 1 0 0 0 0 0",
        f"{i2}VU 2",
        f"{i2}TRACKHEIGHT 0 0 0 0 0 0",
        f"{i2}INQ 0 0 0 0.5 100 0 0 100",
        f"{i2}NCHAN 2",
        f"{i2}FX 1",
        f"{i2}TRACKID {guid}",
        f"{i2}PERF 0",
    ]


def reaticulate_track_config(bank_guid: str, bank_name: str) -> Dict:
    """The JSON object stored in a track's EXT block."""
    return {
        "banks": [{
            "t": "g",
            "v": bank_guid,
            "dstbus": REATICULATE_DEST_BUS,
            "h": bank_hash(bank_name),
            "name": bank_name,
            "src": REATICULATE_SOURCE_CHANNEL,
            "dst": REATICULATE_DEST_CHANNEL,
        }],
        "y": 0,
        "v": 1,
        "defchan": 1,
    }


def _fx_chain(reaticulate_fx_guid: str, kontakt_guid: str) -> List[str]:
    i2, i3, i4 = _indent(2), _indent(3), _indent(4)
    return [
        f"{i2}<FXCHAIN",
        f"{i3}WNDRECT 0 0 0 0",
        f"{i3}SHOW 0",
        f"{i3}LASTSEL 0",
        f"{i3}DOCKED 0",
        f"{i3}BYPASS 0 0 0",
        # Articulation switching engine
        f'{i3}<JS jsfx/Reaticulate.jsfx ""',
        f"{i4}{REATICULATE_JSFX_STATE}",
        f"{i3}>",
        f"{i3}FLOATPOS 0 0 0 0",
        f"{i3}FXID {reaticulate_fx_guid}",
        f"{i3}WAK 0 0",
        f"{i3}BYPASS 0 0 0",
        # Instrument placeholder, loaded by the user later
        f"{i3}<VST {KONTAKT_PLUGIN} {kontakt_guid} \"\"",
        f"{i4}{KONTAKT_EMPTY_STATE}",
        f"{i3}>",
        f"{i3}FLOATPOS 0 0 0 0",
        f"{i3}FXID {kontakt_guid}",
        f"{i3}WAK 0 0",
        f"{i3}BYPASS 0 0 0",
        f"{i2}>",
    ]


def folder_track_block(folder: FolderConfig) -> List[str]:
    """A folder (bus) track; its member tracks follow it in the output."""
    guid = generate_guid()
    color = hex_to_reaper_color(folder.color) if folder.color else track_color(folder.name)
    lines = _track_header(guid, folder.name, color, ISBUS_FOLDER_START)
    lines.append(f"{_indent(2)}MIDIOUT -1")
    lines.append(f"{_indent(2)}MAINSEND 1 0")
    lines.append(f"{_indent(1)}>")
    return lines


def track_block(track: TrackConfig, isbus: str = ISBUS_NORMAL) -> Tuple[List[str], Tuple[str, int]]:
    """
    Build one bank track.

    Returns:
        (lines, (bank_guid, msb * 128 + lsb)) - the mapping goes into the
        project-level EXTSTATE block.
    """
    track_guid = generate_guid()
    kontakt_guid = generate_guid()
    reaticulate_fx_guid = generate_guid()
    bank_guid = generate_reaticulate_guid()
    msblsb = track.bank.msb * 128 + track.bank.lsb

    color = hex_to_reaper_color(track.color) if track.color else track_color(track.bank.name)

    lines = _track_header(track_guid, track.name, color, isbus)
    config_json = _json(reaticulate_track_config(bank_guid, track.bank.name))
    lines.extend([
        f"{_indent(2)}<EXT",
        f"{_indent(3)}reaticulate '2{config_json}'",
        f"{_indent(2)}>",
        f"{_indent(2)}MIDIOUT -1",
        f"{_indent(2)}MAINSEND 1 0",
    ])
    lines.extend(_fx_chain(reaticulate_fx_guid, kontakt_guid))
    lines.append(f"{_indent(1)}>")

    return lines, (bank_guid, msblsb)


def _project_header(config: ProjectConfig) -> List[str]:
    i1 = _indent(1)
    return [
        '<REAPER_PROJECT 0.1 "7.0" 1234567890',
        f"{i1}RIPPLE 0",
        f"{i1}GROUPOVERRIDE 0 0 0",
        f"{i1}AUTOXFADE 129",
        f"{i1}ENVATTACH 3",
        f"{i1}MIXERUIFLAGS 11 48",
        f"{i1}PEAKGAIN 1",
        f"{i1}FEEDBACK 0",
        f"{i1}PANLAW 1",
        f"{i1}PROJOFFS 0 0 0",
        f"{i1}MAXPROJLEN 0 600",
        f"{i1}GRID 3199 8 1 8 1 0 0 0",
        f"{i1}TIMEMODE 1 5 -1 30 0 0 -1",
        f"{i1}PANMODE 3",
        f"{i1}CURSOR 0",
        f"{i1}ZOOM 100 0 0",
        f"{i1}VZOOMEX 6 0",
        f"{i1}USE_REC_CFG 0",
        f"{i1}RECMODE 1",
        f"{i1}LOOP 0",
        f"{i1}LOOPGRAN 0 4",
        f'{i1}RECORD_PATH "" ""',
        f'{i1}RENDER_FILE ""',
        f"{i1}RENDER_FMT 0 2 0",
        f"{i1}TEMPO {_format_number(config.tempo)} 4 4",
        f"{i1}PLAYRATE 1 0 0.25 4",
        f"{i1}MASTERAUTOMODE 0",
        f"{i1}MASTERTRACKHEIGHT 0 0",
        f"{i1}MASTERMUTESOLO 0",
        f"{i1}MASTERTRACKVIEW 0 0.6667 0.5 0.5 -1 -1 -1 0 0 0 -1 -1 0",
        f"{i1}MASTERHWOUT 0 0 1 0 0 0 0 -1",
        f"{i1}MASTER_NCH 2 2",
        f"{i1}MASTER_VOLUME 1 0 -1 -1 1",
        f"{i1}MASTER_PANMODE 3",
        f"{i1}MASTER_FX 1",
        f"{i1}MASTER_SEL 0",
        f"{i1}SAMPLERATE {config.sample_rate} 0 0",
        f"{i1}<MASTERFXLIST",
        f"{i1}>",
    ]


def extstate_block(mappings: List[Tuple[str, int]], change_cookie: Optional[str] = None) -> List[str]:
    """The project-level Reaticulate state covering every assigned bank."""
    msblsb_by_guid = {guid: msblsb for guid, msblsb in mappings}
    state = _json({"msblsb_by_guid": msblsb_by_guid, "gc_ok": True})
    cookie = change_cookie or generate_reaticulate_guid()
    return [
        f"{_indent(1)}<EXTSTATE",
        f"{_indent(2)}<REATICULATE",
        f"{_indent(3)}CHANGE_COOKIE {cookie}",
        f"{_indent(3)}STATE {state}",
        f"{_indent(2)}>",
        f"{_indent(1)}>",
    ]


# =============================================================================
# MAIN GENERATOR FUNCTION
# =============================================================================

def generate_rpp(config: ProjectConfig) -> str:
    """
    Generate a complete .RPP project.

    No validation happens here: whatever the request contains is written.

    Args:
        config: The tracks/folders and project settings

    Returns:
        Project text (lines joined with "\\n", no trailing newline)
    """
    lines = _project_header(config)
    mappings: List[Tuple[str, int]] = []

    for folder in config.folders:
        lines.extend(folder_track_block(folder))
        for i, track in enumerate(folder.tracks):
            is_last = i == len(folder.tracks) - 1
            track_lines, mapping = track_block(track, ISBUS_FOLDER_END if is_last else ISBUS_NORMAL)
            lines.extend(track_lines)
            mappings.append(mapping)

    for track in config.tracks:
        track_lines, mapping = track_block(track)
        lines.extend(track_lines)
        mappings.append(mapping)

    lines.append(f"{_indent(1)}<EXTENSIONS")
    lines.append(f"{_indent(1)}>")

    if mappings:
        lines.extend(extstate_block(mappings))

    lines.append(">")

    logger.info(
        "Generated project '%s': %d tracks, %d bank assignments",
        config.name, config.track_count, len(mappings),
    )
    return "\n".join(lines)


def generate(config: ProjectConfig) -> str:
    """Alias for generate_rpp()."""
    return generate_rpp(config)
