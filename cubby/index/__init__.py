"""
Index Subpackage - Search and selection over a loaded bank list

    - search.py: Case-insensitive multi-term AND search over bank names
    - selection.py: Bank keys, tri-state folder selection, BankIndex
"""

from cubby.index.search import search
from cubby.index.selection import (
    BankIndex,
    bank_key,
    folder_state,
    index_by_key,
    selected_banks,
    toggle_bank,
    toggle_folder,
)
