"""
Selection Module - Tri-state folder selection over the bank tree

Banks are selected by key ("{msb}-{lsb}"). A folder's state is derived
from every bank beneath it, at any depth:

    none  - no descendant bank is selected (also: the folder is empty)
    some  - at least one, but not all
    all   - every descendant bank is selected

Toggling a folder that is "all" clears it; toggling "none" or "some"
selects everything beneath it. A partly selected folder therefore goes to
fully selected, never to cleared.

Two banks that share a key share their selection state. That is a known
limitation of the key scheme and is left as is.
"""

from typing import Dict, Iterable, List, Literal, Optional, Set
import logging

from cubby.data.schema import BankRecord
from cubby.index.search import search
from cubby.rules.classifier import FolderNode, build_tree

logger = logging.getLogger(__name__)

FolderState = Literal["none", "some", "all"]


# =============================================================================
# PURE FUNCTIONS
# =============================================================================

def bank_key(bank: BankRecord) -> str:
    return f"{bank.msb}-{bank.lsb}"


def index_by_key(banks: Iterable[BankRecord]) -> Dict[str, BankRecord]:
    """Key → bank map. Later banks replace earlier ones with the same key."""
    indexed: Dict[str, BankRecord] = {}
    for bank in banks:
        indexed[bank_key(bank)] = bank
    return indexed


def folder_state(node: FolderNode, selected_keys: Set[str]) -> FolderState:
    banks = node.all_banks()
    if not banks:
        return "none"
    selected_count = sum(1 for bank in banks if bank_key(bank) in selected_keys)
    if selected_count == 0:
        return "none"
    if selected_count == len(banks):
        return "all"
    return "some"


def toggle_folder(node: FolderNode, selected_keys: Set[str]) -> Set[str]:
    """Return a new selection with the folder toggled (see module docstring)."""
    keys = {bank_key(bank) for bank in node.all_banks()}
    if folder_state(node, selected_keys) == "all":
        return set(selected_keys) - keys
    return set(selected_keys) | keys


def toggle_bank(bank: BankRecord, selected_keys: Set[str]) -> Set[str]:
    key = bank_key(bank)
    if key in selected_keys:
        return set(selected_keys) - {key}
    return set(selected_keys) | {key}


def selected_banks(banks: Iterable[BankRecord], selected_keys: Set[str]) -> List[BankRecord]:
    """Selected banks in their original order."""
    return [bank for bank in banks if bank_key(bank) in selected_keys]


# =============================================================================
# BANK INDEX
# =============================================================================

class BankIndex:
    """
    The browsing state for one loaded bank list: tree, key map, selection.

    The selection set is mutable and owned by this object. Callers that
    share one index between threads must serialize writes themselves.

    Example:
        >>> index = BankIndex(banks)
        >>> index.toggle_folder("Spitfire Audio")
        >>> [b.name for b in index.selected()]
    """

    def __init__(self, banks: List[BankRecord]):
        self.banks = list(banks)
        self.tree = build_tree(self.banks)
        self.by_key = index_by_key(self.banks)
        self.selected_keys: Set[str] = set()
        if len(self.by_key) != len(self.banks):
            logger.debug(
                "%d banks share a key with another bank; the last one wins",
                len(self.banks) - len(self.by_key),
            )

    def __len__(self) -> int:
        return len(self.banks)

    def search(self, query: str) -> List[BankRecord]:
        return search(self.banks, query)

    def folder(self, path: str) -> Optional[FolderNode]:
        return self.tree.find(path)

    def _node(self, folder) -> FolderNode:
        if isinstance(folder, FolderNode):
            return folder
        node = self.tree.find(folder)
        if node is None:
            raise KeyError(f"No folder at path '{folder}'")
        return node

    def folder_state(self, folder) -> FolderState:
        return folder_state(self._node(folder), self.selected_keys)

    def toggle_folder(self, folder) -> FolderState:
        """Toggle a folder (node or path) and return its new state."""
        node = self._node(folder)
        self.selected_keys = toggle_folder(node, self.selected_keys)
        return folder_state(node, self.selected_keys)

    def toggle_bank(self, bank: BankRecord) -> bool:
        """Toggle one bank; returns True if it is now selected."""
        self.selected_keys = toggle_bank(bank, self.selected_keys)
        return bank_key(bank) in self.selected_keys

    def select_keys(self, keys: Iterable[str]) -> None:
        self.selected_keys |= set(keys)

    def clear(self) -> None:
        self.selected_keys = set()

    def get(self, key: str) -> Optional[BankRecord]:
        return self.by_key.get(key)

    def selected(self) -> List[BankRecord]:
        return selected_banks(self.banks, self.selected_keys)
