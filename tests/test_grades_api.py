"""성적 통계 API 테스트 (/grades, /grades/stats, /grades/stats/{class_id})"""

import logging
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from dependencies.record_source import get_record_source
from main import app
from services.errors import SourceUnavailableError
from services.grade_stats import GradeRecord, ScoreEntry
from services.record_source import SqlRecordSource


class _BrokenSource:
    def fetch_records(self, class_id=None):
        raise SourceUnavailableError("database is down")

    def find_non_conforming_learners(self):
        raise SourceUnavailableError("database is down")


class TestGlobalClassStats:
    def test_returns_counts_ratio_and_class_ids(self, client, add_grade):
        add_grade(10, 1, [("exam", 80), ("exam", 90), ("quiz", 70), ("homework", 100)])
        add_grade(11, 2, [("exam", 50), ("quiz", 50), ("homework", 50)])

        response = client.get("/grades/stats")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"] == {
            "totalStudents": 2,
            "above60Students": 1,
            "ratio": 0.5,
            "classIds": [10, 11],
        }

    def test_learner_in_two_classes_is_merged(self, client, add_grade):
        add_grade(1, 5, [("exam", 100), ("quiz", 100), ("homework", 100)])
        add_grade(2, 5, [("exam", 100), ("quiz", 100), ("homework", 100)])

        data = client.get("/grades/stats").json()["data"]

        assert data["totalStudents"] == 1
        assert data["classIds"] == [1, 2]

    def test_empty_collection_returns_explicit_failure(self, client):
        response = client.get("/grades/stats")

        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["error"]["code"] == "EMPTY_RESULT"

    def test_response_has_latency_header(self, client, add_grade):
        add_grade(1, 1, [("exam", 70), ("quiz", 70), ("homework", 70)])

        response = client.get("/grades/stats")

        assert "x-latency-ms" in response.headers


class TestClassStatsById:
    def test_ratio_is_scoped_to_class(self, client, add_grade):
        add_grade(3, 1, [("exam", 90), ("quiz", 90), ("homework", 90)])
        add_grade(3, 2, [("exam", 20), ("quiz", 20), ("homework", 20)])
        add_grade(3, 3, [("exam", 80), ("quiz", 75), ("homework", 70), ("extra-credit", 0)])
        add_grade(4, 4, [("exam", 10), ("quiz", 10), ("homework", 10)])

        response = client.get("/grades/stats/3")

        assert response.status_code == 200
        assert response.json()["data"]["ratio"] == pytest.approx(2 / 3)

    def test_unknown_class_is_empty_result(self, client, add_grade):
        add_grade(3, 1, [("exam", 90), ("quiz", 90), ("homework", 90)])

        response = client.get("/grades/stats/299")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "EMPTY_RESULT"

    def test_class_with_only_incomplete_students_is_empty_result(self, client, add_grade):
        add_grade(7, 1, [("exam", 90), ("quiz", 90)])

        response = client.get("/grades/stats/7")

        assert response.status_code == 404

    def test_non_integer_class_id_is_rejected(self, client):
        response = client.get("/grades/stats/abc")

        assert response.status_code == 422


class TestEnrollmentStats:
    def test_inverted_ratio(self, client, add_grade):
        for learner_id in range(4):
            add_grade(1, learner_id, [("exam", 95), ("quiz", 75)])
        for learner_id in range(4, 10):
            add_grade(2, learner_id, [("homework", 30)])

        response = client.get("/grades")

        assert response.status_code == 200
        assert response.json()["data"] == {
            "totalLearners": 10,
            "learnersAvgAbove70": 4,
            "ratioOfStudentsAbove70": 2.5,
        }

    def test_no_learner_above_threshold_is_empty_result(self, client, add_grade):
        add_grade(1, 1, [("exam", 70)])

        response = client.get("/grades")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "EMPTY_RESULT"


class TestSourceFailures:
    def test_unavailable_source_is_generic_error(self, client):
        app.dependency_overrides[get_record_source] = lambda: _BrokenSource()

        response = client.get("/grades/stats")

        assert response.status_code == 500
        assert response.json()["error"] == {
            "code": "INTERNAL_ERROR",
            "message": "Seems like we messed up somewhere...",
        }

    def test_failed_request_is_logged_as_warning(self, client, caplog):
        app.dependency_overrides[get_record_source] = lambda: _BrokenSource()

        with caplog.at_level(logging.INFO, logger="middlewares.timing"):
            client.get("/grades/stats")

        timing = [r for r in caplog.records if r.name == "middlewares.timing"]
        assert [r.levelno for r in timing] == [logging.WARNING]
        assert "GET /grades/stats → 500" in timing[0].getMessage()

    def test_unexpected_error_is_generic_error(self):
        broken = MagicMock()
        broken.fetch_records.side_effect = RuntimeError("boom")
        app.dependency_overrides[get_record_source] = lambda: broken

        response = TestClient(app, raise_server_exceptions=False).get("/grades")

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "INTERNAL_ERROR"

    def test_sql_errors_become_source_unavailable(self):
        session = MagicMock(spec=Session)
        session.query.side_effect = OperationalError("SELECT 1", {}, Exception("gone away"))

        with pytest.raises(SourceUnavailableError):
            SqlRecordSource(session).fetch_records(class_id=1)


class TestSqlRecordSource:
    def test_keeps_score_order_and_filters_by_class(self, db, add_grade):
        add_grade(1, 1, [("homework", 3), ("exam", 1), ("quiz", 2)])
        add_grade(2, 2, [("exam", 9)])

        records = SqlRecordSource(db).fetch_records(class_id=1)

        assert records == [
            GradeRecord(
                class_id=1,
                learner_id=1,
                scores=[
                    ScoreEntry("homework", 3.0),
                    ScoreEntry("exam", 1.0),
                    ScoreEntry("quiz", 2.0),
                ],
            )
        ]

    def test_without_filter_returns_every_record(self, db, add_grade):
        add_grade(1, 1, [("exam", 1)])
        add_grade(2, 1, [])

        records = SqlRecordSource(db).fetch_records()

        assert [(r.class_id, r.learner_id) for r in records] == [(1, 1), (2, 1)]
        assert records[1].scores == []


def test_empty_result_is_logged_as_info(client, caplog):
    with caplog.at_level(logging.INFO, logger="middlewares.timing"):
        client.get("/grades/stats/5")

    timing = [r for r in caplog.records if r.name == "middlewares.timing"]
    assert [r.levelno for r in timing] == [logging.INFO]
    assert "/grades/stats/5 → 404" in timing[0].getMessage()
