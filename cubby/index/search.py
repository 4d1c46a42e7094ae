"""Multi-term bank name search."""

from typing import List, Sequence

from cubby.data.schema import BankRecord


def search_terms(query: str) -> List[str]:
    return query.lower().split()


def matches(bank: BankRecord, terms: Sequence[str]) -> bool:
    """True if the bank name contains every term (case-insensitive)."""
    name = bank.name.lower()
    return all(term in name for term in terms)


def search(banks: List[BankRecord], query: str) -> List[BankRecord]:
    """
    Filter banks by a whitespace-separated query with AND semantics.

    "violin long" keeps banks whose name contains both words, in any order.
    A blank query returns the input list itself, unchanged.
    """
    terms = search_terms(query)
    if not terms:
        return banks
    return [bank for bank in banks if matches(bank, terms)]
