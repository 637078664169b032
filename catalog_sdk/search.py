from typing import Iterable, List, TypeVar

R = TypeVar("R")


def normalize_query(query: str) -> str:
    return (query or "").strip().lower()


def filter_records(records: Iterable[R], query: str) -> List[R]:
    """Records whose name contains the query, case-insensitively, in catalog order.

    A blank query returns every record.
    """
    term = normalize_query(query)
    if not term:
        return list(records)
    return [r for r in records if term in (getattr(r, "name", "") or "").lower()]
