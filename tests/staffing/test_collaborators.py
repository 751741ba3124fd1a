from __future__ import annotations

import pytest

from staffing.collaborators import (
    active_count_by_post,
    filter_collaborators,
    rotation_label,
    search_collaborators,
    search_daily_workers,
    unassign_from_post,
)
from staffing.records import Collaborator, DailyWorker


@pytest.fixture
def people() -> list[Collaborator]:
    return [
        Collaborator(
            id="c3",
            full_name="Carla",
            role="porteiro",
            unit_id="u1",
            cpf="123.456.789-00",
            email="Carla.Lima@Example.com",
        ),
        Collaborator(
            id="c1", full_name="Ana", role="vigilante", unit_id="u1", post_id="p1"
        ),
        Collaborator(
            id="c2",
            full_name="Bruno",
            status="ferias",
            role="vigilante",
            unit_id="u2",
            post_id="p1",
        ),
        Collaborator(
            id="c4", full_name="Diego", role="vigilante", unit_id="u2", post_id="p2"
        ),
    ]


def test_filters_default_to_everything_sorted_by_name(people) -> None:
    names = [c.full_name for c in filter_collaborators(people)]
    assert names == ["Ana", "Bruno", "Carla", "Diego"]


def test_filters_combine(people) -> None:
    out = filter_collaborators(people, status="ativo", allocation="alocado")
    assert [c.id for c in out] == ["c1", "c4"]
    out = filter_collaborators(people, unit_id="u1", allocation="nao_alocado")
    assert [c.id for c in out] == ["c3"]
    out = filter_collaborators(people, role="vigilante", unit_id="u2")
    assert [c.id for c in out] == ["c2", "c4"]


def test_unknown_allocation_filter_raises(people) -> None:
    with pytest.raises(ValueError):
        filter_collaborators(people, allocation="talvez")


def test_search_matches_name_cpf_and_email(people) -> None:
    assert [c.id for c in search_collaborators(people, "ANA")] == ["c1"]
    assert [c.id for c in search_collaborators(people, "456.789")] == ["c3"]
    assert [c.id for c in search_collaborators(people, "carla.lima@")] == ["c3"]
    assert search_collaborators(people, "porteiro") == []
    assert search_collaborators(people, "c4") == []
    assert len(search_collaborators(people, "  ")) == 4


def test_search_daily_workers() -> None:
    workers = [
        DailyWorker(id="d1", full_name="Joana", phone="81 99999-1234"),
        DailyWorker(id="d2", full_name="Marcos", email="MARCOS@mail.com"),
    ]
    assert [w.id for w in search_daily_workers(workers, "joa")] == ["d1"]
    assert [w.id for w in search_daily_workers(workers, "marcos@")] == ["d2"]
    assert [w.id for w in search_daily_workers(workers, "1234")] == ["d1"]
    assert search_daily_workers(workers, "") == workers


def test_status_filter_ignores_case() -> None:
    people = [
        Collaborator(id="c1", full_name="Ana", status="Ativo"),
        Collaborator(id="c2", full_name="Bia", status="inativo"),
    ]
    assert [c.id for c in filter_collaborators(people, status="ativo")] == ["c1"]
    assert [c.id for c in filter_collaborators(people, status="ATIVO")] == ["c1"]


@pytest.mark.parametrize(
    "shift_type, expected",
    [
        ("12x36", "escala_12x36"),
        (" 12X36", "escala_12x36"),
        ("diarista", "diarista"),
        ("5x2", "5x2"),
        (None, "efetivo"),
        ("", "efetivo"),
        (float("nan"), "efetivo"),
        (3, "efetivo"),
    ],
)
def test_rotation_label(shift_type, expected: str) -> None:
    assert rotation_label(shift_type) == expected


def test_rotation_label_follows_configured_label() -> None:
    assert rotation_label("24x48", label="24x48") == "escala_24x48"
    assert rotation_label("12x36", label="24x48") == "12x36"


def test_unassign_returns_copy(people) -> None:
    original = people[1]
    freed = unassign_from_post(original)
    assert freed.post_id is None
    assert original.post_id == "p1"
    assert freed.id == original.id


def test_active_count_by_post_ignores_inactive_and_unallocated(people) -> None:
    assert active_count_by_post(people) == {"p1": 1, "p2": 1}
    assert active_count_by_post(people, active_status="ferias") == {"p1": 1}
