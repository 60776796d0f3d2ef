"""Merge notices, warnings and errors reported by the sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from civicsearch.models import Diagnostic, SourceResult


@dataclass(frozen=True)
class Diagnostics:
    notices: Tuple[Diagnostic, ...] = ()
    warnings: Tuple[Diagnostic, ...] = ()
    errors: Tuple[Diagnostic, ...] = ()


def union(*groups: Optional[Iterable[Diagnostic]]) -> Tuple[Diagnostic, ...]:
    """Concatenate groups and drop repeats, keeping the first occurrence.

    Entries are compared by equality rather than hash so structured
    diagnostics (dicts, lists) deduplicate too.
    """

    merged: List[Diagnostic] = []
    for group in groups:
        for item in group or ():
            if item not in merged:
                merged.append(item)
    return tuple(merged)


def merge_diagnostics(results: Sequence[SourceResult]) -> Diagnostics:
    """Union each diagnostic category across all source results."""

    return Diagnostics(
        notices=union(*(result.notices for result in results)),
        warnings=union(*(result.warnings for result in results)),
        errors=union(*(result.errors for result in results)),
    )


__all__ = ["Diagnostics", "merge_diagnostics", "union"]
