from unittest.mock import MagicMock

import pytest

from services.exceptions import ValidationError
from services.grade_aggregation import GradeAggregationService


@pytest.fixture()
def campus(factory):
    """
    2024-2025: 7-A (Ana, Ben, Finn, Eve), 7-B (Cara), 8-A (Dan)
    2023-2024: 7-A (Ana, a Q3 grade only)
    """
    sy = factory.school_year("2024-2025", is_active=True)
    old = factory.school_year("2023-2024")
    math, science = factory.subject("Mathematics"), factory.subject("Science")

    a7 = factory.klass("7", "A")
    b7 = factory.klass("7", "B")
    a8 = factory.klass("8", "A")
    old_a7 = factory.klass("7", "A", school_year="2023-2024")
    for cls in (a7, b7, a8, old_a7):
        factory.assign(cls, math)
        factory.assign(cls, science)

    s = {name: factory.student(name) for name in ("Ana", "Ben", "Cara", "Dan", "Eve", "Finn")}
    for name in ("Ana", "Ben", "Eve", "Finn"):
        factory.enroll(a7, s[name])
    factory.enroll(b7, s["Cara"])
    factory.enroll(a8, s["Dan"])
    factory.enroll(old_a7, s["Ana"])

    # Ana: Q1 avg 87.50, overall 85.00
    factory.grade(s["Ana"], a7, math, 1, 90)
    factory.grade(s["Ana"], a7, science, 1, 85)
    factory.grade(s["Ana"], a7, math, 2, 80)
    # Ben: Q1 avg 87.50, overall 85.00
    factory.grade(s["Ben"], a7, math, 1, 95)
    factory.grade(s["Ben"], a7, science, 1, 80)
    factory.grade(s["Ben"], a7, math, 2, 80)
    # Cara: Q1 70.00, overall 71.00
    factory.grade(s["Cara"], b7, math, 1, 70)
    factory.grade(s["Cara"], b7, math, 2, 72)
    # Dan: Q1 99.00, overall 95.00
    factory.grade(s["Dan"], a8, math, 1, 99)
    factory.grade(s["Dan"], a8, math, 2, 91)
    # Finn: Q1 60.00
    factory.grade(s["Finn"], a7, math, 1, 60)
    # Eve: no grades
    factory.grade(s["Ana"], old_a7, math, 3, 50)

    return {"sy": sy, "old": old, "students": s, "math": math, "classes": {"7A": a7, "7B": b7, "8A": a8}}


def _names(body):
    return [e["student_name"].split()[0] for e in body["data"]]


# ==========================================================
# per-quarter ranking
# ==========================================================

def test_quarter_ranking_orders_by_average_missing_last(client, campus):
    resp = client.get("/api/academic-rankings", params={"schoolYear": "2024-2025", "quarter": 1})
    assert resp.status_code == 200
    data = resp.json()["data"]

    names = _names(resp.json())
    assert names[0] == "Dan"
    assert set(names[1:3]) == {"Ana", "Ben"}
    assert names[3:] == ["Cara", "Finn", "Eve"]
    assert data[0]["average"] == "99.00"
    assert data[1]["average"] == "87.50"
    assert data[-1]["average"] is None
    assert all(e["rank"] is None for e in data)


def test_quarter_ranking_uses_only_the_requested_quarter(client, campus):
    resp = client.get("/api/academic-rankings", params={"schoolYear": "2024-2025", "quarter": 2})
    data = resp.json()["data"]
    averages = {e["student_name"].split()[0]: e["average"] for e in data}
    assert averages == {
        "Dan": "91.00", "Ana": "80.00", "Ben": "80.00", "Cara": "72.00", "Finn": None, "Eve": None,
    }


def test_quarter_ranking_grade_level_filter(client, campus):
    resp = client.get(
        "/api/academic-rankings",
        params={"schoolYear": "2024-2025", "quarter": 1, "gradeLevel": "7"},
    )
    names = _names(resp.json())
    assert set(names) == {"Ana", "Ben", "Cara", "Finn", "Eve"}
    assert names[-1] == "Eve"


def test_quarter_ranking_grade_level_and_section_filter(client, campus):
    resp = client.get(
        "/api/academic-rankings",
        params={"schoolYear": "2024-2025", "quarter": 1, "gradeLevel": "7", "section": "A"},
    )
    names = _names(resp.json())
    assert set(names[:2]) == {"Ana", "Ben"}
    assert names[2:] == ["Finn", "Eve"]


def test_quarter_ranking_ignores_section_without_grade_level(client, campus):
    unfiltered = client.get("/api/academic-rankings", params={"schoolYear": "2024-2025", "quarter": 1})
    section_only = client.get(
        "/api/academic-rankings", params={"schoolYear": "2024-2025", "quarter": 1, "section": "B"},
    )
    assert section_only.status_code == 200
    assert len(section_only.json()["data"]) == len(unfiltered.json()["data"]) == 6


@pytest.mark.parametrize("params", [
    {"quarter": 1},
    {"schoolYear": "2024-2025"},
    {"schoolYear": "2024-2025", "quarter": 5},
    {"schoolYear": "2024-2025", "quarter": "final"},
])
def test_quarter_ranking_bad_parameters(client, campus, params):
    resp = client.get("/api/academic-rankings", params=params)
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"


def test_quarter_ranking_unknown_school_year(client, campus):
    resp = client.get("/api/academic-rankings", params={"schoolYear": "1999-2000", "quarter": 1})
    assert resp.status_code == 404


# ==========================================================
# final ranking of one class
# ==========================================================

def test_final_class_ranking_dense_ranks(client, campus):
    resp = client.get(
        "/api/academic-rankings/final",
        params={"schoolYearId": campus["sy"].id, "gradeLevel": "7", "section": "A"},
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    ranks = {e["student_name"].split()[0]: (e["average"], e["rank"]) for e in data}
    assert ranks == {
        "Ana": ("85.00", 1),
        "Ben": ("85.00", 1),
        "Finn": ("60.00", 2),
        "Eve": (None, None),
    }
    assert data[-1]["student_name"].startswith("Eve")


@pytest.mark.parametrize("missing", ["schoolYearId", "gradeLevel", "section"])
def test_final_class_ranking_requires_all_parameters(client, campus, missing):
    params = {"schoolYearId": campus["sy"].id, "gradeLevel": "7", "section": "A"}
    params.pop(missing)
    resp = client.get("/api/academic-rankings/final", params=params)
    assert resp.status_code == 400


def test_final_class_ranking_validates_before_querying():
    db = MagicMock()
    service = GradeAggregationService(db)
    with pytest.raises(ValidationError):
        service.final_class_ranking(1, "7", None)
    db.query.assert_not_called()


def test_final_class_ranking_unknown_class(client, campus):
    resp = client.get(
        "/api/academic-rankings/final",
        params={"schoolYearId": campus["sy"].id, "gradeLevel": "9", "section": "Z"},
    )
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "NOT_FOUND"


def test_final_class_ranking_unknown_school_year(client, campus):
    resp = client.get(
        "/api/academic-rankings/final",
        params={"schoolYearId": 999, "gradeLevel": "7", "section": "A"},
    )
    assert resp.status_code == 404


# ==========================================================
# campus ranking
# ==========================================================

def test_campus_ranking_final(client, campus):
    resp = client.get(
        "/api/academic-rankings/campus", params={"schoolYearId": campus["sy"].id, "quarter": "final"},
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    summary = [(e["student_name"].split()[0], e["average"], e["rank"]) for e in data]

    assert summary[0] == ("Dan", "95.00", 1)
    assert sorted(summary[1:3]) == [("Ana", "85.00", 2), ("Ben", "85.00", 2)]
    assert summary[3:] == [("Cara", "71.00", 3), ("Finn", "60.00", 4), ("Eve", None, None)]
    # grade level and section are part of each entry
    dan = data[0]
    assert (dan["grade_level"], dan["section"]) == ("8", "A")


def test_campus_ranking_defaults_to_final(client, campus):
    explicit = client.get(
        "/api/academic-rankings/campus", params={"schoolYearId": campus["sy"].id, "quarter": "final"},
    )
    default = client.get("/api/academic-rankings/campus", params={"schoolYearId": campus["sy"].id})
    assert default.json()["data"] == explicit.json()["data"]


def test_campus_ranking_single_quarter(client, campus):
    resp = client.get(
        "/api/academic-rankings/campus", params={"schoolYearId": campus["sy"].id, "quarter": 2},
    )
    summary = {e["student_name"].split()[0]: (e["average"], e["rank"]) for e in resp.json()["data"]}
    assert summary == {
        "Dan": ("91.00", 1),
        "Ana": ("80.00", 2),
        "Ben": ("80.00", 2),
        "Cara": ("72.00", 3),
        "Finn": (None, None),
        "Eve": (None, None),
    }


def test_campus_ranking_only_counts_the_requested_year(client, campus):
    resp = client.get(
        "/api/academic-rankings/campus", params={"schoolYearId": campus["old"].id},
    )
    data = resp.json()["data"]
    assert [(e["student_name"].split()[0], e["average"], e["rank"]) for e in data] == [("Ana", "50.00", 1)]


def test_campus_ranking_errors(client, campus):
    assert client.get("/api/academic-rankings/campus").status_code == 400
    assert client.get(
        "/api/academic-rankings/campus", params={"schoolYearId": campus["sy"].id, "quarter": "abc"},
    ).status_code == 400
    assert client.get("/api/academic-rankings/campus", params={"schoolYearId": 999}).status_code == 404


# ==========================================================
# quarter completeness
# ==========================================================

def test_check_quarters_partial(client, campus):
    resp = client.get("/api/academic-rankings/check-quarters", params={"schoolYearId": campus["sy"].id})
    assert resp.status_code == 200
    assert resp.json()["data"] == {
        "school_year_id": campus["sy"].id,
        "all_quarters_complete": False,
        "completed_quarters": [1, 2],
    }


def test_check_quarters_scoped(client, factory, campus):
    dan = campus["students"]["Dan"]
    a8 = campus["classes"]["8A"]
    factory.grade(dan, a8, campus["math"], 3, 90)
    factory.grade(dan, a8, campus["math"], 4, 92)

    grade8 = client.get(
        "/api/academic-rankings/check-quarters",
        params={"schoolYearId": campus["sy"].id, "gradeLevel": "8"},
    ).json()["data"]
    assert grade8["all_quarters_complete"] is True
    assert grade8["completed_quarters"] == [1, 2, 3, 4]

    section_7b = client.get(
        "/api/academic-rankings/check-quarters",
        params={"schoolYearId": campus["sy"].id, "gradeLevel": "7", "section": "B"},
    ).json()["data"]
    assert section_7b["completed_quarters"] == [1, 2]
    assert section_7b["all_quarters_complete"] is False


def test_check_quarters_requires_school_year(client, campus):
    assert client.get("/api/academic-rankings/check-quarters").status_code == 400
    assert client.get(
        "/api/academic-rankings/check-quarters", params={"schoolYearId": 999},
    ).status_code == 404
