import pytest

from reviewhub.core.exceptions import DuplicateReportError
from reviewhub.models.report import Report
from reviewhub.schemas.report import ReportFields
from reviewhub.services.report_store import ReportStore


@pytest.fixture
def fields():
    return ReportFields(
        ranking=8.5,
        improvements=["Write more tests"],
        qualities=["Mentors juniors", "Calm under pressure"],
        summary="A strong month.",
    )


def test_create_then_fetch_one_returns_same_fields(db_session, org, make_employee, fields):
    alice = make_employee("Alice")
    store = ReportStore(db_session, org.id)
    store.create(alice.id, "2024-03", fields)

    fetched = store.fetch_one(alice.id, "2024-03")
    assert fetched.ranking == fields.ranking
    assert fetched.improvements == fields.improvements
    assert fetched.qualities == fields.qualities
    assert fetched.summary == fields.summary


def test_fetch_one_missing(db_session, org, make_employee):
    alice = make_employee("Alice")
    assert ReportStore(db_session, org.id).fetch_one(alice.id, "2024-03") is None


def test_duplicate_insert_is_rejected(db_session, org, make_employee, fields):
    alice = make_employee("Alice")
    store = ReportStore(db_session, org.id)
    store.create(alice.id, "2024-03", fields)

    with pytest.raises(DuplicateReportError) as exc_info:
        store.create(alice.id, "2024-03", fields)
    assert exc_info.value.status_code == 409
    assert exc_info.value.error_code == "DUPLICATE_REPORT"
    assert db_session.query(Report).count() == 1


def test_fetch_all_sorted_by_month_desc(db_session, org, make_employee, fields):
    alice = make_employee("Alice")
    store = ReportStore(db_session, org.id)
    for month in ("2024-01", "2024-03", "2023-12", "2024-02"):
        store.create(alice.id, month, fields)

    assert [r.month for r in store.fetch_all(alice.id)] == ["2024-03", "2024-02", "2024-01", "2023-12"]


def test_fetch_for_months(db_session, org, make_employee, fields):
    alice, bob = make_employee("Alice"), make_employee("Bob")
    store = ReportStore(db_session, org.id)
    store.create(alice.id, "2024-01", fields)
    store.create(bob.id, "2024-02", fields)
    store.create(bob.id, "2023-06", fields)

    found = store.fetch_for_months([alice.id, bob.id], ["2024-01", "2024-02"])
    assert sorted((r.employee_id, r.month) for r in found) == [(alice.id, "2024-01"), (bob.id, "2024-02")]
    assert store.fetch_for_months([], ["2024-01"]) == []
