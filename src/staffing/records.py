from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping, Optional

from staffing.coverage import PostInfo


class ExecutionStatus(str, Enum):
    IN_PROGRESS = "em_andamento"
    DONE = "concluido"


CHECKLIST_KINDS = ("diario", "semanal", "mensal", "pontual")
CHECKLIST_STATUSES = ("ativo", "inativo")


def shift_type_of(value: Any) -> Any:
    """Unwrap an embedded `escala` row ({nome, tipo}) into its rotation label."""
    if isinstance(value, Mapping):
        return value.get("tipo") or value.get("nome")
    return value


def _clean_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        value = str(value)
    value = value.strip()
    return value or None


def _optional_int(value: Any, field: str) -> Optional[int]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValueError(f"Invalid integer for '{field}': {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid integer for '{field}': {value!r}") from exc


def _optional_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        except ValueError as exc:
            raise ValueError(f"Invalid date string '{value}'") from exc
    raise TypeError("Dates must be ISO strings or date/datetime objects.")


def _optional_bool(value: Any) -> Optional[bool]:
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("", "null", "none"):
            return None
        if lowered in ("true", "1", "sim", "yes"):
            return True
        if lowered in ("false", "0", "nao", "não", "no"):
            return False
    raise ValueError(f"Invalid tri-state flag: {value!r}")


@dataclass(slots=True)
class ServicePost:
    """
    A service post (posto de servico) inside a business unit.
    """

    id: str
    name: str
    code: Optional[str] = None
    unit_id: Optional[str] = None
    shift_type: Optional[str] = None
    planned_headcount: Optional[int] = None
    status: str = "ativo"

    def __post_init__(self) -> None:
        self.id = str(self.id)
        self.name = _clean_text(self.name) or ""
        self.code = _clean_text(self.code)
        self.unit_id = _clean_text(self.unit_id)
        self.shift_type = _clean_text(shift_type_of(self.shift_type))
        self.planned_headcount = _optional_int(
            self.planned_headcount, "planned_headcount"
        )
        self.status = _clean_text(self.status) or "ativo"

    @property
    def info(self) -> PostInfo:
        return PostInfo(
            shift_type=self.shift_type, planned_headcount=self.planned_headcount
        )


@dataclass(slots=True)
class Collaborator:
    """
    An employee that can be allocated to a service post.
    """

    id: str
    full_name: str
    status: str = "ativo"
    role: Optional[str] = None
    unit_id: Optional[str] = None
    post_id: Optional[str] = None
    shift_type: Optional[str] = None
    cpf: Optional[str] = None
    email: Optional[str] = None

    def __repr__(self) -> str:
        post = self.post_id if self.post_id is not None else "-"
        return (
            f"Collaborator(id={self.id}, name='{self.full_name}', "
            f"status={self.status}, role={self.role}, post={post})"
        )

    def __post_init__(self) -> None:
        self.id = str(self.id)
        self.full_name = _clean_text(self.full_name) or ""
        self.status = _clean_text(self.status) or "ativo"
        self.role = _clean_text(self.role)
        self.unit_id = _clean_text(self.unit_id)
        self.post_id = _clean_text(self.post_id)
        self.shift_type = _clean_text(shift_type_of(self.shift_type))
        self.cpf = _clean_text(self.cpf)
        self.email = _clean_text(self.email)

    @property
    def is_allocated(self) -> bool:
        return self.post_id is not None

    def is_active(self, active_status: str = "ativo") -> bool:
        return self.status.lower() == active_status.strip().lower()


@dataclass(slots=True)
class DailyWorker:
    id: str
    full_name: str
    status: str = "ativo"
    phone: Optional[str] = None
    city: Optional[str] = None
    email: Optional[str] = None

    def __post_init__(self) -> None:
        self.id = str(self.id)
        self.full_name = _clean_text(self.full_name) or ""
        self.status = _clean_text(self.status) or "ativo"
        self.phone = _clean_text(self.phone)
        self.city = _clean_text(self.city)
        self.email = _clean_text(self.email)


@dataclass(slots=True)
class Checklist:
    """
    A checklist template attached (optionally) to a business unit.
    """

    id: int
    name: str
    description: Optional[str] = None
    kind: str = "diario"
    unit_id: Optional[str] = None
    status: str = "ativo"

    def __post_init__(self) -> None:
        checklist_id = _optional_int(self.id, "id")
        if checklist_id is None:
            raise ValueError("Checklist requires an id.")
        self.id = checklist_id
        self.name = _clean_text(self.name) or ""
        self.description = _clean_text(self.description)
        self.kind = (_clean_text(self.kind) or "diario").lower()
        if self.kind not in CHECKLIST_KINDS:
            raise ValueError(
                f"kind must be one of {CHECKLIST_KINDS}, got {self.kind!r}"
            )
        self.unit_id = _clean_text(self.unit_id)
        self.status = (_clean_text(self.status) or "ativo").lower()
        if self.status not in CHECKLIST_STATUSES:
            raise ValueError(
                f"status must be one of {CHECKLIST_STATUSES}, got {self.status!r}"
            )

    @property
    def is_active(self) -> bool:
        return self.status == "ativo"


@dataclass(slots=True)
class ChecklistItem:
    """
    One question of a checklist. `order` positions it inside the checklist.
    """

    id: str
    checklist_id: int
    order: int
    description: str
    answer_type: Optional[str] = None
    required: bool = False

    def __post_init__(self) -> None:
        self.id = str(self.id)
        checklist_id = _optional_int(self.checklist_id, "checklist_id")
        if checklist_id is None:
            raise ValueError("ChecklistItem requires a checklist_id.")
        self.checklist_id = checklist_id
        order = _optional_int(self.order, "order")
        if order is None:
            raise ValueError("ChecklistItem requires an order.")
        self.order = order
        self.description = _clean_text(self.description) or ""
        self.answer_type = _clean_text(self.answer_type)
        self.required = bool(_optional_bool(self.required))


@dataclass(slots=True)
class ChecklistExecution:
    """
    One run of a checklist, optionally attributed to a collaborator.
    """

    id: str
    checklist_id: int
    collaborator_id: Optional[str] = None
    executed_on: Optional[date] = None
    status: ExecutionStatus = ExecutionStatus.IN_PROGRESS
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        self.id = str(self.id)
        checklist_id = _optional_int(self.checklist_id, "checklist_id")
        if checklist_id is None:
            raise ValueError("ChecklistExecution requires a checklist_id.")
        self.checklist_id = checklist_id
        self.collaborator_id = _clean_text(self.collaborator_id)
        self.executed_on = _optional_date(self.executed_on)
        self.status = ExecutionStatus(self.status or ExecutionStatus.IN_PROGRESS)
        self.notes = _clean_text(self.notes)

    @property
    def is_done(self) -> bool:
        return self.status is ExecutionStatus.DONE


@dataclass(slots=True)
class ChecklistResponse:
    id: str
    execution_id: str
    item_id: Optional[str] = None
    answer: Optional[str] = None
    compliant: Optional[bool] = None  # None = not assessed
    photo_url: Optional[str] = None
    note: Optional[str] = None

    def __post_init__(self) -> None:
        self.id = str(self.id)
        execution_id = _clean_text(self.execution_id)
        if execution_id is None:
            raise ValueError("ChecklistResponse requires an execution_id.")
        self.execution_id = execution_id
        self.item_id = _clean_text(self.item_id)
        self.answer = _clean_text(self.answer)
        self.compliant = _optional_bool(self.compliant)
        self.photo_url = _clean_text(self.photo_url)
        self.note = _clean_text(self.note)
