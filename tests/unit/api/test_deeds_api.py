"""Tests for the deeds API router."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from ibadat.api.app import create_app
from ibadat.api.deeds import get_deeds_observability, get_intake_service
from ibadat.services import DeedIntakeService, StaticDeedExtractor
from ibadat.settings import Settings


class _RecordingObservability:
    def __init__(self) -> None:
        self.events: list[tuple[str, dict]] = []
        self.metrics: list[str] = []

    def emit_event(self, event: str, **fields) -> None:
        self.events.append((event, fields))

    def increment(self, metric: str, **kwargs) -> None:
        self.metrics.append(metric)


@pytest.fixture()
def observability() -> _RecordingObservability:
    return _RecordingObservability()


@pytest.fixture()
def client(observability):
    app = create_app(Settings())
    app.dependency_overrides[get_deeds_observability] = lambda: observability
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def test_health_reports_rule_table_version(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "rule_table_version": "2025.1"}


def test_categories(client):
    body = client.get("/deeds/categories").json()

    assert [item["category"] for item in body] == [
        "Quran",
        "Surah",
        "Verses",
        "Salawat/Darood",
        "Zikr/Words",
        "Nawafil",
        "Other",
    ]
    assert body[5] == {"category": "Nawafil", "unit": "rakat", "placeholder": "e.g., Tahajjud"}


def test_canonicalize_preserves_request_order(client):
    response = client.post("/deeds/canonicalize", json={"names": ["yaseen", "darood sharif", "", "feed the poor"]})

    assert response.status_code == 200
    body = response.json()
    assert body["rule_table_version"] == "2025.1"
    assert [(item["raw"], item["canonical"]) for item in body["results"]] == [
        ("yaseen", "Surah Ya-Sin"),
        ("darood sharif", "Salawat"),
        ("", ""),
        ("feed the poor", "Feed The Poor"),
    ]
    assert body["results"][0]["rule"] == "surah"


def test_similarity_flags_and_emits_event(client, observability):
    payload = {
        "candidate": "darood khizry",
        "category": "Salawat/Darood",
        "known_names": ["Darood Khizri", "darood sharif"],
        "staged_names": [],
    }

    response = client.post("/deeds/similarity", json=payload)

    assert response.status_code == 200
    body = response.json()
    assert body["is_concern"] is True
    assert body["suggestion"] == "Darood Khizri"
    assert body["distance"] == 1
    assert body["message"] == 'Similar to existing "Darood Khizri"'
    assert observability.events[0][0] == "deed.similarity_flagged"
    assert observability.events[0][1]["suggestion"] == "Darood Khizri"
    assert observability.metrics == ["deed.similarity_flagged"]


def test_similarity_exact_match_is_quiet(client, observability):
    payload = {"candidate": "tahajud", "category": "Nawafil", "staged_names": ["Tahajjud"]}

    body = client.post("/deeds/similarity", json=payload).json()

    assert body == {
        "candidate": "Tahajjud",
        "is_concern": False,
        "suggestion": None,
        "distance": None,
        "message": "",
    }
    assert observability.events == []


def test_aggregate(client):
    entries = [
        {"ibadatType": "Surah Yaseen", "count": 3, "category": "Surah", "unit": "times"},
        {"ibadatType": "سورہ یاسین", "count": 2, "category": "Surah", "unit": "times"},
        {"ibadatType": "surah ya sin", "count": 1, "category": "Surah", "unit": "times"},
    ]

    response = client.post("/deeds/aggregate", json={"entries": entries})

    assert response.status_code == 200
    assert response.json() == [
        {"name": "Surah Ya-Sin", "category": "Surah", "unit": "times", "total_count": 6.0, "entries_count": 3}
    ]


def test_aggregate_rejects_non_positive_count(client):
    response = client.post("/deeds/aggregate", json={"entries": [{"ibadatType": "kahf", "count": 0}]})

    assert response.status_code == 422


def test_dua_text(client):
    entries = [{"ibadatType": "kahf", "count": 2, "category": "Surah", "unit": "times"}]

    body = client.post("/deeds/dua", json={"title": "Jumu'ah", "entries": entries}).json()

    assert body["title"] == "Jumu'ah"
    assert "- Surah Al-Kahf: 2 times\n" in body["text"]


def test_stage_records(client):
    payload = {
        "records": [
            {"contributorName": "", "category": "Nawafil", "ibadatType": "tahajud", "count": 4},
            {"contributorName": "Aisha", "category": "Zikr/Words", "ibadatType": "istighfar", "count": 100, "unit": "times"},
        ],
        "occasion_id": "occ-7",
        "contributor_name": "Family of Omar",
    }

    response = client.post("/deeds/stage", json=payload)

    assert response.status_code == 200
    body = response.json()
    assert [item["ibadatType"] for item in body] == ["Tahajjud", "Istighfar"]
    assert [item["contributorName"] for item in body] == ["Family of Omar", "Aisha"]
    assert body[0]["unit"] == "rakat"
    assert body[0]["occasionId"] == "occ-7"


def test_import_uses_configured_extractor(client):
    extractor = StaticDeedExtractor([{"category": "Verses", "ibadatType": "ayat ul kursi", "count": 7}])
    service = DeedIntakeService(settings=Settings(), extractor=extractor)
    client.app.dependency_overrides[get_intake_service] = lambda: service

    response = client.post("/deeds/import", json={"text": "7x ayat ul kursi"})

    assert response.status_code == 200
    assert response.json()[0]["ibadatType"] == "Ayatul Kursi"


def test_import_uses_rule_based_extractor_by_default(client):
    response = client.post("/deeds/import", json={"text": "Ali: 3 juz", "occasion_id": "occ-1"})

    assert response.status_code == 200
    body = response.json()
    assert len(body) == 1
    assert body[0]["ibadatType"] == "Quran Juz"
    assert body[0]["contributorName"] == "Ali"
    assert body[0]["count"] == 3
    assert body[0]["unit"] == "juz"
    assert body[0]["category"] == "Quran"
    assert body[0]["occasionId"] == "occ-1"


def test_import_without_extractor_is_bad_gateway(client, monkeypatch):
    monkeypatch.setenv("IBADAT_INTAKE__EXTRACTOR_BACKEND", "none")

    response = client.post("/deeds/import", json={"text": "7x ayat ul kursi"})

    assert response.status_code == 502
    assert "extractor" in response.json()["detail"]


def test_stage_selection_expands_juz_in_order(client):
    payload = {"category": "Quran", "juz_numbers": [12, 3, 12], "count": 2, "contributor_name": "Maryam"}

    body = client.post("/deeds/stage/selection", json=payload).json()

    assert [item["ibadatType"] for item in body] == ["Juz 3", "Juz 12"]
    assert {item["count"] for item in body} == {2}
    assert {item["unit"] for item in body} == {"times"}


def test_stage_selection_surahs(client):
    payload = {"category": "Surah", "surahs": ["Ya-Sin", "al-mulk"]}

    body = client.post("/deeds/stage/selection", json=payload).json()

    assert [item["ibadatType"] for item in body] == ["Surah Ya-Sin", "Surah Al-Mulk"]


@pytest.mark.parametrize(
    "payload",
    [
        {"category": "Quran", "juz_numbers": [31]},
        {"category": "Surah", "surahs": ["Not A Surah"]},
        {"category": "Nawafil"},
    ],
)
def test_stage_selection_rejects_bad_selection(client, payload):
    assert client.post("/deeds/stage/selection", json=payload).status_code == 422


def test_filter_entries(client):
    entries = [
        {"ibadatType": "Surah Ya-Sin", "count": 1, "contributorName": "Ali", "occasionId": "a", "performedDate": "2024-03-01"},
        {"ibadatType": "Tahajjud", "count": 8, "contributorName": "Sara", "occasionId": "a", "performedDate": "2024-03-05"},
        {"ibadatType": "Tahajjud", "count": 2, "contributorName": "Omar", "occasionId": "b", "performedDate": "2024-03-04"},
    ]

    body = client.post(
        "/deeds/entries/filter",
        json={"entries": entries, "search": "TAHAJ", "start": "2024-03-02", "end": "2024-03-05"},
    ).json()

    assert [item["contributorName"] for item in body] == ["Sara", "Omar"]


def test_active_occasion(client):
    occasions = [
        {"id": "old", "title": "Ramadan", "startDate": "2024-03-10", "endDate": "2024-04-09"},
        {"id": "now", "title": "Exams", "startDate": "2024-05-01", "endDate": "2024-05-30"},
    ]

    body = client.post("/deeds/occasions/active", json={"occasions": occasions, "today": "2024-05-02"}).json()

    assert body["id"] == "now"
    assert body["startDate"] == "2024-05-01"


def test_active_occasion_none(client):
    response = client.post("/deeds/occasions/active", json={"occasions": []})

    assert response.status_code == 200
    assert response.json() is None
