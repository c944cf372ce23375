from datetime import datetime

from fastapi import status
from sqlalchemy.exc import OperationalError

from reviewhub.core.exceptions import MalformedAIResponseError
from reviewhub.models.report import Report
from reviewhub.services.ai_orchestrator import AIOrchestrator
from reviewhub.services.report_service import ReportService
from reviewhub.services.report_store import ReportStore


def test_backfill_mixes_existing_placeholder_and_generated(client, admin_headers, make_employee, add_review, fake_model, db_session):
    alice = make_employee("Alice")
    db_session.add(Report(employee_id=alice.id, month="2024-01", ranking=6, improvements=[], qualities=["Kind"], summary="Existing"))
    db_session.commit()
    add_review(alice, "Great February", datetime(2024, 2, 12))

    response = client.post("/api/reports/generate-missing", headers=admin_headers, json={
        "employeeId": alice.id,
        "months": ["2024-01", "2024-02", "2024-03"]
    })
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["success"] is True
    assert data["failedMonths"] == []
    by_month = {r["month"]: r for r in data["generatedReports"]}
    assert by_month["2024-01"]["summary"] == "Existing"
    assert by_month["2024-02"]["ranking"] == 8
    assert by_month["2024-03"]["ranking"] == 0
    assert [r["month"] for r in data["generatedReports"]] == ["2024-01", "2024-02", "2024-03"]
    assert len(fake_model.calls) == 1
    assert db_session.query(Report).count() == 3


def test_failing_month_does_not_stop_the_rest(db_session, org, make_employee, add_review, fake_model, monkeypatch):
    alice = make_employee("Alice")
    add_review(alice, "January", datetime(2024, 1, 10))
    add_review(alice, "February", datetime(2024, 2, 10))
    add_review(alice, "March", datetime(2024, 3, 10))

    responses = iter([
        '{"ranking": 7, "improvements": [], "qualities": [], "summary": "Jan"}',
        "garbage",
        '{"ranking": 9, "improvements": [], "qualities": [], "summary": "Mar"}',
    ])

    def flaky(messages, **kwargs):
        fake_model.calls.append(messages)
        return next(responses)

    monkeypatch.setattr(AIOrchestrator, "call_model", flaky)

    months = ["2024-01", "2024-02", "2024-03"]
    result = ReportService(db_session, org.id).generate_missing(alice.id, months)

    assert len(result.generated_reports) + len(result.failed_months) == len(months)
    assert result.success is False
    assert [r.month for r in result.generated_reports] == ["2024-01", "2024-03"]
    assert result.failed_months[0].month == "2024-02"
    assert result.failed_months[0].error.startswith("Malformed AI response")
    assert len(fake_model.calls) == 3


def test_database_error_on_existing_check_is_recorded(db_session, org, make_employee, add_review, fake_model, monkeypatch):
    alice = make_employee("Alice")
    add_review(alice, "January", datetime(2024, 1, 10))
    add_review(alice, "March", datetime(2024, 3, 10))

    real_fetch_one = ReportStore.fetch_one

    def locked_in_february(self, employee_id, month):
        if month == "2024-02":
            raise OperationalError("SELECT reports", {}, Exception("database is locked"))
        return real_fetch_one(self, employee_id, month)

    monkeypatch.setattr(ReportStore, "fetch_one", locked_in_february)

    months = ["2024-01", "2024-02", "2024-03"]
    result = ReportService(db_session, org.id).generate_missing(alice.id, months)

    assert len(result.generated_reports) + len(result.failed_months) == len(months)
    assert [r.month for r in result.generated_reports] == ["2024-01", "2024-03"]
    assert [f.month for f in result.failed_months] == ["2024-02"]
    assert result.failed_months[0].error == "Failed to save report"
    assert result.success is False
    assert db_session.query(Report).count() == 2


def test_every_month_failing(db_session, org, make_employee, add_review, fake_model):
    alice = make_employee("Alice")
    add_review(alice, "January", datetime(2024, 1, 10))
    add_review(alice, "February", datetime(2024, 2, 10))
    fake_model.error = MalformedAIResponseError("no JSON object found")

    result = ReportService(db_session, org.id).generate_missing(alice.id, ["2024-01", "2024-02"])
    assert result.generated_reports == []
    assert [f.month for f in result.failed_months] == ["2024-01", "2024-02"]
    assert result.success is False
    assert db_session.query(Report).count() == 0


def test_backfill_rejects_bad_month_strings(client, admin_headers, make_employee, fake_model):
    alice = make_employee("Alice")
    response = client.post("/api/reports/generate-missing", headers=admin_headers, json={
        "employeeId": alice.id, "months": ["2024-01", "2024-1"]
    })
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_backfill_requires_months(client, admin_headers, make_employee):
    alice = make_employee("Alice")
    response = client.post("/api/reports/generate-missing", headers=admin_headers, json={
        "employeeId": alice.id, "months": []
    })
    assert response.status_code == status.HTTP_400_BAD_REQUEST
