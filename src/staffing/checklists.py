from __future__ import annotations

import dataclasses
import random
from typing import Iterable, Mapping, Optional

from staffing.records import (
    ChecklistExecution,
    ChecklistItem,
    ChecklistResponse,
    ExecutionStatus,
)

__all__ = [
    "ChecklistClosedError",
    "ExecutionStatus",
    "concluded_count_for_month",
    "ensure_accepts_responses",
    "generate_unique_order",
    "month_options",
    "record_response",
    "search_checklist_items",
    "search_executions",
    "search_responses",
    "set_status",
]


class ChecklistClosedError(ValueError):
    """Raised when a response targets an execution that is already concluded."""


def set_status(
    execution: ChecklistExecution, status: ExecutionStatus | str
) -> ChecklistExecution:
    """Return a copy of `execution` moved to `status`. Reopening is allowed."""
    return dataclasses.replace(execution, status=ExecutionStatus(status))


def ensure_accepts_responses(execution: ChecklistExecution) -> None:
    if execution.is_done:
        raise ChecklistClosedError(
            f"Execution {execution.id} is concluded; reopen it before "
            "recording new responses."
        )


def record_response(
    execution: ChecklistExecution, response: ChecklistResponse
) -> ChecklistResponse:
    if response.execution_id != execution.id:
        raise ValueError(
            f"Response {response.id} belongs to execution {response.execution_id}, "
            f"not {execution.id}."
        )
    ensure_accepts_responses(execution)
    return response


def _month_key(execution: ChecklistExecution) -> Optional[str]:
    if execution.executed_on is None:
        return None
    return execution.executed_on.strftime("%Y-%m")


def month_options(executions: Iterable[ChecklistExecution]) -> list[str]:
    """Distinct YYYY-MM keys with at least one execution, newest first."""
    keys = {k for k in (_month_key(e) for e in executions) if k is not None}
    return sorted(keys, reverse=True)


def concluded_count_for_month(
    executions: Iterable[ChecklistExecution], month: str
) -> int:
    if not month:
        return 0
    return sum(1 for e in executions if e.is_done and _month_key(e) == month)


def search_executions(
    executions: Iterable[ChecklistExecution],
    term: str = "",
    checklist_names: Mapping[int, str] | None = None,
    collaborator_names: Mapping[str, str] | None = None,
    collaborator_id: str = "all",
    status: str = "all",
) -> list[ChecklistExecution]:
    """
    Text search over checklist name, collaborator name, ids and status,
    combined with the collaborator and status filters.
    """
    checklist_names = checklist_names or {}
    collaborator_names = collaborator_names or {}
    needle = term.lower()

    out: list[ChecklistExecution] = []
    for e in executions:
        checklist_name = checklist_names.get(e.checklist_id, "")
        collaborator_name = (
            collaborator_names.get(e.collaborator_id, "") if e.collaborator_id else ""
        )
        matches_search = (
            needle in checklist_name.lower()
            or needle in collaborator_name.lower()
            or needle in str(e.checklist_id)
            or (e.collaborator_id is not None and needle in e.collaborator_id.lower())
            or needle in e.status.value
        )
        matches_collaborator = collaborator_id == "all" or (
            e.collaborator_id == collaborator_id
        )
        matches_status = status == "all" or e.status.value == status
        if matches_search and matches_collaborator and matches_status:
            out.append(e)
    return out


def search_checklist_items(
    items: Iterable[ChecklistItem],
    term: str = "",
    checklist_names: Mapping[int, str] | None = None,
) -> list[ChecklistItem]:
    """Match item description, its checklist name or its order."""
    checklist_names = checklist_names or {}
    needle = term.strip().lower()
    if not needle:
        return list(items)
    return [
        i
        for i in items
        if needle in i.description.lower()
        or needle in checklist_names.get(i.checklist_id, "").lower()
        or needle in str(i.order)
    ]


def search_responses(
    responses: Iterable[ChecklistResponse],
    term: str = "",
    item_descriptions: Mapping[str, str] | None = None,
    executions: Mapping[str, ChecklistExecution] | None = None,
    checklist_names: Mapping[int, str] | None = None,
    collaborator_names: Mapping[str, str] | None = None,
) -> list[ChecklistResponse]:
    """
    Match the answer text or the item description, and through the parent
    execution the checklist name and the collaborator name.
    """
    item_descriptions = item_descriptions or {}
    executions = executions or {}
    checklist_names = checklist_names or {}
    collaborator_names = collaborator_names or {}
    needle = term.strip().lower()
    if not needle:
        return list(responses)

    out: list[ChecklistResponse] = []
    for r in responses:
        execution = executions.get(r.execution_id)
        haystack = [
            r.answer or "",
            item_descriptions.get(r.item_id, "") if r.item_id else "",
        ]
        if execution is not None:
            haystack.append(checklist_names.get(execution.checklist_id, ""))
            if execution.collaborator_id:
                haystack.append(
                    collaborator_names.get(execution.collaborator_id, "")
                )
        if any(needle in text.lower() for text in haystack):
            out.append(r)
    return out


def generate_unique_order(
    existing: Iterable[int],
    rng: random.Random | None = None,
    attempts: int = 50,
    low: int = 1,
    high: int = 999_999,
) -> int:
    """
    Draw a random checklist item order in [low, high] not already in `existing`.
    """
    if low > high:
        raise ValueError("low must be <= high")
    taken = set(existing)
    rng = rng or random.Random()
    for _ in range(attempts):
        candidate = rng.randint(low, high)
        if candidate not in taken:
            return candidate
    raise RuntimeError(
        f"Could not generate a unique order after {attempts} attempts."
    )
