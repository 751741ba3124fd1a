from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Mapping, Sequence

import pandas as pd

from staffing.records import (
    Checklist,
    ChecklistExecution,
    ChecklistItem,
    ChecklistResponse,
    Collaborator,
    DailyWorker,
    ServicePost,
    shift_type_of,
)

# Accepted top-level keys per record kind: English name, then hosted table name.
TABLE_KEYS: dict[str, tuple[str, ...]] = {
    "posts": ("posts", "postos_servico"),
    "collaborators": ("collaborators", "colaboradores"),
    "daily_workers": ("daily_workers", "diaristas"),
    "checklists": ("checklists",),
    "items": ("items", "checklist_itens"),
    "executions": ("executions", "checklist_execucoes"),
    "responses": ("responses", "checklist_respostas"),
}


def _pick(raw: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in raw and raw[key] is not None:
            return raw[key]
    return default


def _nested_shift_type(raw: Mapping[str, Any]) -> Any:
    # `escala` may be a plain label or an embedded {nome, tipo} row
    return shift_type_of(_pick(raw, "shift_type", "escala"))


def _post_from_raw(raw: Mapping[str, Any]) -> ServicePost:
    return ServicePost(
        id=_require(raw, "id"),
        name=_pick(raw, "name", "nome", default=""),
        code=_pick(raw, "code", "codigo"),
        unit_id=_pick(raw, "unit_id", "unidade_id"),
        shift_type=_nested_shift_type(raw),
        planned_headcount=_pick(raw, "planned_headcount", "efetivo_planejado"),
        status=_pick(raw, "status", default="ativo"),
    )


def _collaborator_from_raw(raw: Mapping[str, Any]) -> Collaborator:
    return Collaborator(
        id=_require(raw, "id"),
        full_name=_pick(raw, "full_name", "nome_completo", default=""),
        status=_pick(raw, "status", default="ativo"),
        role=_pick(raw, "role", "cargo"),
        unit_id=_pick(raw, "unit_id", "unidade_id"),
        post_id=_pick(raw, "post_id", "posto_servico_id"),
        shift_type=_nested_shift_type(raw),
        cpf=_pick(raw, "cpf"),
        email=_pick(raw, "email"),
    )


def _daily_worker_from_raw(raw: Mapping[str, Any]) -> DailyWorker:
    return DailyWorker(
        id=_require(raw, "id"),
        full_name=_pick(raw, "full_name", "nome_completo", default=""),
        status=_pick(raw, "status", default="ativo"),
        phone=_pick(raw, "phone", "telefone"),
        city=_pick(raw, "city", "cidade"),
        email=_pick(raw, "email"),
    )


def _checklist_from_raw(raw: Mapping[str, Any]) -> Checklist:
    return Checklist(
        id=_require(raw, "id"),
        name=_pick(raw, "name", "nome", default=""),
        description=_pick(raw, "description", "descricao"),
        kind=_pick(raw, "kind", "tipo", default="diario"),
        unit_id=_pick(raw, "unit_id", "unidade_id"),
        status=_pick(raw, "status", default="ativo"),
    )


def _item_from_raw(raw: Mapping[str, Any]) -> ChecklistItem:
    return ChecklistItem(
        id=_require(raw, "id"),
        checklist_id=_pick(raw, "checklist_id"),
        order=_pick(raw, "order", "ordem"),
        description=_pick(raw, "description", "descricao", default=""),
        answer_type=_pick(raw, "answer_type", "tipo_resposta"),
        required=_pick(raw, "required", "obrigatorio", default=False),
    )


def _execution_from_raw(raw: Mapping[str, Any]) -> ChecklistExecution:
    return ChecklistExecution(
        id=_require(raw, "id"),
        checklist_id=_pick(raw, "checklist_id"),
        collaborator_id=_pick(raw, "collaborator_id", "colaborador_id"),
        executed_on=_pick(raw, "executed_on", "data_execucao"),
        status=_pick(raw, "status", default="em_andamento"),
        notes=_pick(raw, "notes", "observacoes"),
    )


def _response_from_raw(raw: Mapping[str, Any]) -> ChecklistResponse:
    return ChecklistResponse(
        id=_require(raw, "id"),
        execution_id=_pick(raw, "execution_id", "execucao_id"),
        item_id=_pick(raw, "item_id"),
        answer=_pick(raw, "answer", "resposta"),
        compliant=_pick(raw, "compliant", "conforme"),
        photo_url=_pick(raw, "photo_url", "foto_url"),
        note=_pick(raw, "note", "observacao"),
    )


_BUILDERS: dict[str, Callable[[Mapping[str, Any]], Any]] = {
    "posts": _post_from_raw,
    "collaborators": _collaborator_from_raw,
    "daily_workers": _daily_worker_from_raw,
    "checklists": _checklist_from_raw,
    "items": _item_from_raw,
    "executions": _execution_from_raw,
    "responses": _response_from_raw,
}


def records_from_json(path: str | Path, kind: str) -> list[Any]:
    """
    Load records of one kind from a JSON export on disk.

    Files may contain either a list of row objects or an object with a
    top-level key named after the kind (e.g. `posts`) or after the hosted
    table (e.g. `postos_servico`).
    """
    if kind not in _BUILDERS:
        raise ValueError(
            f"Unknown record kind {kind!r}; expected one of {sorted(_BUILDERS)}."
        )

    file_path = Path(path).expanduser()
    if file_path.suffix.lower() != ".json":
        raise ValueError("records_from_json expects a path to a .json file.")
    if not file_path.exists():
        raise FileNotFoundError(f"JSON file not found: {file_path}")

    try:
        data = json.loads(file_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {file_path}") from exc

    if isinstance(data, Mapping):
        entries = _pick(data, *TABLE_KEYS[kind])
        if entries is None:
            keys = "'/'".join(TABLE_KEYS[kind])
            raise ValueError(f"JSON file must contain a list or a '{keys}' key.")
    elif isinstance(data, Sequence) and not isinstance(data, (str, bytes)):
        entries = data
    else:
        raise TypeError(f"JSON file must contain a list of {kind} objects.")

    if isinstance(entries, (str, bytes, bytearray)) or not isinstance(
        entries, Sequence
    ):
        raise TypeError(f"JSON file must contain a list of {kind} objects.")

    build = _BUILDERS[kind]
    out: list[Any] = []
    for raw in entries:
        if not isinstance(raw, Mapping):
            raise TypeError(f"Each {kind} entry must be an object/dict.")
        out.append(build(raw))
    return out


def posts_to_dataframe(posts: Sequence[ServicePost]) -> pd.DataFrame:
    rows = [
        {
            "post_id": p.id,
            "name": p.name,
            "code": p.code,
            "unit_id": p.unit_id,
            "shift_type": p.shift_type,
            "planned_headcount": p.planned_headcount,
            "status": p.status,
        }
        for p in posts
    ]
    columns = [
        "post_id",
        "name",
        "code",
        "unit_id",
        "shift_type",
        "planned_headcount",
        "status",
    ]
    df = pd.DataFrame(rows, columns=columns)
    df["planned_headcount"] = df["planned_headcount"].astype("Int64")
    return df


def collaborators_to_dataframe(items: Sequence[Collaborator]) -> pd.DataFrame:
    rows = []
    for c in items:
        rows.append(
            {
                "id": c.id,
                "full_name": c.full_name,
                "status": c.status,
                "role": c.role,
                "unit_id": c.unit_id,
                "post_id": c.post_id,
                "shift_type": c.shift_type,
                "is_allocated": c.is_allocated,
            }
        )
    return pd.DataFrame(
        rows,
        columns=[
            "id",
            "full_name",
            "status",
            "role",
            "unit_id",
            "post_id",
            "shift_type",
            "is_allocated",
        ],
    )


def _require(raw: Mapping[str, Any], field: str) -> Any:
    value = raw.get(field)
    if value is None or value == "":
        raise ValueError(f"Entry missing '{field}'.")
    return value
