from __future__ import annotations

import json
from pathlib import Path

import pandas as pd
import pytest

from staffing.loaders import (
    collaborators_to_dataframe,
    posts_to_dataframe,
    records_from_json,
)
from staffing.records import (
    Checklist,
    ChecklistExecution,
    ChecklistItem,
    Collaborator,
    ServicePost,
)


def _write(tmp_path: Path, payload, name: str = "data.json") -> Path:
    path = tmp_path / name
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_loads_posts_from_hosted_table_export(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        {
            "postos_servico": [
                {
                    "id": "p1",
                    "nome": "Portaria",
                    "codigo": "PT-01",
                    "unidade_id": "u1",
                    "escala": "12x36",
                    "efetivo_planejado": 2,
                },
                {"id": "p2", "nome": "Ronda", "efetivo_planejado": None},
            ]
        },
    )
    posts = records_from_json(path, "posts")
    assert posts[0] == ServicePost(
        id="p1",
        name="Portaria",
        code="PT-01",
        unit_id="u1",
        shift_type="12x36",
        planned_headcount=2,
    )
    assert posts[1].planned_headcount is None


def test_loads_collaborators_with_embedded_rotation(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        [
            {
                "id": "c1",
                "nome_completo": "Ana Souza",
                "cargo": "vigilante",
                "posto_servico_id": "p1",
                "escala": {"nome": "Noturna", "tipo": "12x36"},
                "cpf": "123.456.789-00",
                "email": "ana@example.com",
            }
        ],
    )
    (c,) = records_from_json(path, "collaborators")
    assert isinstance(c, Collaborator)
    assert c.full_name == "Ana Souza"
    assert c.role == "vigilante"
    assert c.post_id == "p1"
    assert c.shift_type == "12x36"
    assert c.cpf == "123.456.789-00"
    assert c.email == "ana@example.com"


def test_loads_executions_and_responses(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        {
            "checklist_execucoes": [
                {
                    "id": "e1",
                    "checklist_id": 4,
                    "colaborador_id": "c1",
                    "data_execucao": "2024-03-10",
                    "status": "concluido",
                }
            ],
            "checklist_respostas": [
                {"id": "r1", "execucao_id": "e1", "resposta": "ok", "conforme": True}
            ],
        },
    )
    (e,) = records_from_json(path, "executions")
    assert isinstance(e, ChecklistExecution) and e.is_done
    (r,) = records_from_json(path, "responses")
    assert r.execution_id == "e1" and r.compliant is True


def test_loads_checklists_and_items(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        {
            "checklists": [
                {
                    "id": 4,
                    "nome": "Ronda noturna",
                    "descricao": "Rotina da madrugada",
                    "tipo": "semanal",
                    "unidade_id": "u1",
                }
            ],
            "checklist_itens": [
                {
                    "id": "i1",
                    "checklist_id": 4,
                    "ordem": 2,
                    "descricao": "Portao fechado",
                    "tipo_resposta": "sim_nao",
                    "obrigatorio": True,
                }
            ],
        },
    )
    (c,) = records_from_json(path, "checklists")
    assert c == Checklist(
        id=4,
        name="Ronda noturna",
        description="Rotina da madrugada",
        kind="semanal",
        unit_id="u1",
    )
    (item,) = records_from_json(path, "items")
    assert isinstance(item, ChecklistItem)
    assert (item.checklist_id, item.order, item.required) == (4, 2, True)
    assert item.answer_type == "sim_nao"

    bad = _write(tmp_path, [{"id": 1, "nome": "X", "tipo": "anual"}], "bad.json")
    with pytest.raises(ValueError):
        records_from_json(bad, "checklists")

def test_rejects_bad_inputs(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        records_from_json(tmp_path / "posts.csv", "posts")
    with pytest.raises(FileNotFoundError):
        records_from_json(tmp_path / "missing.json", "posts")
    with pytest.raises(ValueError):
        records_from_json(_write(tmp_path, [], "x.json"), "unknown")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        records_from_json(broken, "posts")

    with pytest.raises(ValueError):
        records_from_json(_write(tmp_path, {"other": []}, "o.json"), "posts")
    with pytest.raises(TypeError):
        records_from_json(_write(tmp_path, "posts", "s.json"), "posts")
    with pytest.raises(TypeError):
        records_from_json(_write(tmp_path, [1, 2], "n.json"), "posts")
    with pytest.raises(ValueError):
        records_from_json(_write(tmp_path, [{"nome": "sem id"}], "i.json"), "posts")


def test_dataframes_have_stable_columns() -> None:
    posts = [
        ServicePost(id="p1", name="A", planned_headcount=2),
        ServicePost(id="p2", name="B"),
    ]
    df = posts_to_dataframe(posts)
    assert list(df["post_id"]) == ["p1", "p2"]
    assert str(df["planned_headcount"].dtype) == "Int64"
    assert pd.isna(df.loc[1, "planned_headcount"])

    empty = posts_to_dataframe([])
    assert empty.empty and "shift_type" in empty.columns

    cdf = collaborators_to_dataframe(
        [Collaborator(id="c1", full_name="Ana", post_id="p1")]
    )
    assert cdf.loc[0, "is_allocated"]


def test_loads_daily_workers(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        {
            "diaristas": [
                {
                    "id": 9,
                    "nome_completo": "Joana",
                    "cidade": "Recife",
                    "telefone": "81 3333-0000",
                    "email": "j@x.com",
                }
            ]
        },
    )
    (w,) = records_from_json(path, "daily_workers")
    assert (w.id, w.full_name, w.city, w.status) == ("9", "Joana", "Recife", "ativo")
    assert w.email == "j@x.com"
    assert w.phone == "81 3333-0000"
