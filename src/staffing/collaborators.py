from __future__ import annotations

import dataclasses
from collections import Counter
from typing import Any, Iterable

from staffing.coverage import ROTATION_12X36_LABEL, is_twelve_by_thirty_six
from staffing.records import Collaborator, DailyWorker

ALL = "all"
ALLOCATION_FILTERS = (ALL, "alocado", "nao_alocado")


def filter_collaborators(
    items: Iterable[Collaborator],
    status: str = ALL,
    unit_id: str = ALL,
    allocation: str = ALL,
    role: str = ALL,
) -> list[Collaborator]:
    """
    Apply the collaborator list filters and return matches ordered by name.

    Every filter accepts "all" to disable it. `status` is compared ignoring
    case. `allocation` is one of "all", "alocado" (has a post) or
    "nao_alocado" (no post).
    """
    if allocation not in ALLOCATION_FILTERS:
        raise ValueError(f"allocation must be one of {ALLOCATION_FILTERS}")

    out: list[Collaborator] = []
    for c in items:
        if status != ALL and not c.is_active(status):
            continue
        if unit_id != ALL and c.unit_id != unit_id:
            continue
        if allocation == "alocado" and not c.is_allocated:
            continue
        if allocation == "nao_alocado" and c.is_allocated:
            continue
        if role != ALL and c.role != role:
            continue
        out.append(c)
    return sorted(out, key=lambda c: c.full_name)


def search_collaborators(
    items: Iterable[Collaborator], term: str
) -> list[Collaborator]:
    """
    Match `term` against name and email (ignoring case) or as a CPF substring.
    """
    raw = term.strip()
    if not raw:
        return list(items)
    needle = raw.lower()
    return [
        c
        for c in items
        if needle in c.full_name.lower()
        or raw in (c.cpf or "")
        or needle in (c.email or "").lower()
    ]


def search_daily_workers(items: Iterable[DailyWorker], term: str) -> list[DailyWorker]:
    raw = term.strip()
    if not raw:
        return list(items)
    needle = raw.lower()
    return [
        w
        for w in items
        if needle in w.full_name.lower()
        or needle in (w.email or "").lower()
        or raw in (w.phone or "")
    ]


def rotation_label(shift_type: Any, label: str = ROTATION_12X36_LABEL) -> str:
    """Display label for a collaborator's rotation."""
    if is_twelve_by_thirty_six(shift_type, label=label):
        return f"escala_{label.strip().lower()}"
    if not isinstance(shift_type, str) or not shift_type.strip():
        return "efetivo"
    text = shift_type.strip()
    if text.lower() == "diarista":
        return "diarista"
    return text


def unassign_from_post(collaborator: Collaborator) -> Collaborator:
    """Return a copy of `collaborator` without a post allocation."""
    return dataclasses.replace(collaborator, post_id=None)


def active_count_by_post(
    items: Iterable[Collaborator], active_status: str = "ativo"
) -> dict[str, int]:
    """Count active, allocated collaborators per post id."""
    counts: Counter[str] = Counter()
    for c in items:
        if c.post_id is not None and c.is_active(active_status):
            counts[c.post_id] += 1
    return dict(counts)
