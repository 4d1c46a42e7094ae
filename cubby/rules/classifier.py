"""
Hierarchy Classifier - Turn Bank Names into a Folder Tree

Bank names are compressed vendor codes plus a description:

    "SFBB Horns Long"           → Spitfire British Brass / Horns Long
    "8DC Century Ens Lite CB"   → 8Dio Century / Basses / Century Ens Lite CB
    "NICRQ Amati Viola Longs"   → Native Instruments / Amati Viola Longs
    "XYZ Mystery Patch"         → XYZ / Mystery Patch
    "lowercase name"            → Other / lowercase name

Classification walks the ordered tables in library_patterns.py and stops at
the first match. It is total (always returns a non-empty path) and a pure
function of the name.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Tuple
import logging

from cubby.data.schema import BankRecord
from cubby.rules.library_patterns import (
    ABBREVIATION_PATTERNS,
    GENERIC_PREFIX_REGEX,
    INSTRUMENT_PATTERNS,
    LARGE_LIBRARIES,
    LEADING_NUMBER_REGEX,
    OTHER_FOLDER,
    PREFIX_PATTERNS,
)

logger = logging.getLogger(__name__)

PATH_SEPARATOR = "/"
ROOT_NAME = "Root"


# =============================================================================
# FOLDER TREE
# =============================================================================

@dataclass
class FolderNode:
    """
    One folder of the classified bank tree.

    Attributes:
        name: Folder label ("Spitfire Audio", "Violins", ...)
        path: Slash-joined ancestor chain; "" for the root
        banks: Banks sitting directly in this folder
        children: Sub-folders by name (unordered; sort when rendering)
    """
    name: str
    path: str = ""
    banks: List[BankRecord] = field(default_factory=list)
    children: Dict[str, "FolderNode"] = field(default_factory=dict)

    def child(self, name: str) -> "FolderNode":
        """Get a sub-folder, creating it if needed."""
        node = self.children.get(name)
        if node is None:
            path = f"{self.path}{PATH_SEPARATOR}{name}" if self.path else name
            node = FolderNode(name=name, path=path)
            self.children[name] = node
        return node

    def all_banks(self) -> List[BankRecord]:
        """Every bank in this folder and all of its descendants."""
        banks = list(self.banks)
        for sub in self.children.values():
            banks.extend(sub.all_banks())
        return banks

    def count(self) -> int:
        return len(self.banks) + sum(sub.count() for sub in self.children.values())

    def sorted_children(self) -> List["FolderNode"]:
        return sorted(self.children.values(), key=lambda n: n.name.lower())

    def walk(self) -> Iterator["FolderNode"]:
        """Yield this node and all descendants, depth first, sorted by name."""
        yield self
        for sub in self.sorted_children():
            yield from sub.walk()

    def find(self, path: str) -> Optional["FolderNode"]:
        """Look up a descendant by its slash-joined path."""
        node = self
        for part in [p for p in path.split(PATH_SEPARATOR) if p]:
            node = node.children.get(part)
            if node is None:
                return None
        return node


# =============================================================================
# CLASSIFICATION
# =============================================================================

def extract_instrument_folder(rest: str) -> Optional[str]:
    """
    Find the instrument folder for the part of a name after its library code.

    Tries, in order:
        1. full instrument words at the start ("Violins", "1st Violin", "Horn"),
           after dropping a leading number token
        2. short codes anywhere ("Vln" → Violins, "Tpt" → Trumpets)

    Returns:
        Instrument folder label, or None if nothing matched
    """
    without_number = LEADING_NUMBER_REGEX.sub("", rest, count=1)

    for pattern, label in INSTRUMENT_PATTERNS:
        match = pattern.search(without_number)
        if match:
            return label or match.group(1)

    for pattern, label in ABBREVIATION_PATTERNS:
        if pattern.search(without_number):
            return label

    return None


def match_library(name: str) -> Optional[Tuple[str, str]]:
    """Return (library, rest of name) for the first matching prefix rule."""
    for pattern, library in PREFIX_PATTERNS:
        match = pattern.match(name)
        if match:
            rest = name[match.end():].strip()
            return library, rest or name
    return None


def classify_name(name: str) -> List[str]:
    """
    Classify a bank name into a folder path.

    Returns:
        [library, display_name] or [library, instrument, display_name];
        never empty. The last element is always the leaf display name.
    """
    matched = match_library(name)
    if matched is not None:
        library, rest = matched
        if library in LARGE_LIBRARIES:
            instrument = extract_instrument_folder(rest)
            if instrument:
                return [library, instrument, rest]
        return [library, rest]

    generic = GENERIC_PREFIX_REGEX.match(name)
    if generic:
        return [generic.group(1), generic.group(2)]

    return [OTHER_FOLDER, name]


def classify(bank: BankRecord) -> List[str]:
    """Classify a bank record by its name."""
    return classify_name(bank.name)


def display_name(bank: BankRecord) -> str:
    """The leaf label a bank is shown under in the tree."""
    return classify(bank)[-1] or bank.name


def build_tree(banks: Iterable[BankRecord]) -> FolderNode:
    """
    Fold every bank's classified path into a folder tree.

    Intermediate folders are created on demand. A bank whose path has a
    single element sits directly on the root.
    """
    root = FolderNode(name=ROOT_NAME)
    total = 0
    for bank in banks:
        node = root
        for part in classify(bank)[:-1]:
            node = node.child(part)
        node.banks.append(bank)
        total += 1

    logger.debug("Built folder tree: %d banks in %d top-level folders", total, len(root.children))
    return root
