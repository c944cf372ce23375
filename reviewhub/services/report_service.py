"""
Report generation: one month on demand, or a batch of missing months.

The canonical flow per month is
  existing report -> returned unchanged
  no reviews      -> zero-score placeholder, no model call
  otherwise       -> synthesize with the model, then persist
"""
from typing import List, Optional, Tuple, Union

from sqlalchemy.exc import SQLAlchemyError

from reviewhub.core.exceptions import AppException
from reviewhub.core.months import parse_month
from reviewhub.models.employee import Employee
from reviewhub.models.report import Report
from reviewhub.schemas.report import ReportFields
from reviewhub.services.base import BaseService
from reviewhub.services.employee_service import get_org_employee
from reviewhub.services.report_store import ReportStore
from reviewhub.services.review_aggregator import collect_month_reviews
from reviewhub.services.report_synthesizer import generate_performance_report


def placeholder_report(employee_name: str, month: str) -> ReportFields:
    return ReportFields(
        ranking=0,
        improvements=[],
        qualities=[],
        summary=f"No reviews available for {employee_name} in {month}.",
    )


class MonthFailure:
    def __init__(self, month: str, error: str):
        self.month = month
        self.error = error


class BackfillResult:
    def __init__(self):
        self.generated_reports: List[Report] = []
        self.failed_months: List[MonthFailure] = []

    @property
    def success(self) -> bool:
        return not self.failed_months


MonthOutcome = Union[Report, MonthFailure]


class ReportService(BaseService):
    def __init__(self, db, org_id: Optional[int] = None):
        super().__init__(db, org_id)
        self.store = ReportStore(db, org_id)

    def get_employee(self, employee_id: int) -> Employee:
        return get_org_employee(self.db, self.org_id, employee_id)

    def list_reports(self, employee_id: int) -> List[Report]:
        self.get_employee(employee_id)
        return self.store.fetch_all(employee_id)

    def get_report(self, employee_id: int, month: str) -> Optional[Report]:
        parse_month(month)
        self.get_employee(employee_id)
        return self.store.fetch_one(employee_id, month)

    def _build_fields(self, employee: Employee, month: str) -> ReportFields:
        reviews = collect_month_reviews(self.db, employee.id, month)
        if not reviews:
            self.log_info(f"No reviews for employee {employee.id} in {month}; storing placeholder")
            return placeholder_report(employee.name, month)
        return generate_performance_report(reviews, employee.name, employee.role)

    def generate(self, employee_id: int, month: str) -> Tuple[Report, bool]:
        """
        Generate the report for one month.
        Returns (report, created); created is False when the report already existed.
        """
        parse_month(month)
        employee = self.get_employee(employee_id)

        existing = self.store.fetch_one(employee.id, month)
        if existing:
            self.log_info(f"Report for employee {employee.id} in {month} already exists")
            return existing, False

        fields = self._build_fields(employee, month)
        return self.store.create(employee.id, month, fields), True

    def _backfill_month(self, employee: Employee, month: str) -> MonthOutcome:
        try:
            existing = self.store.fetch_one(employee.id, month)
            if existing:
                return existing
            fields = self._build_fields(employee, month)
            return self.store.create(employee.id, month, fields)
        except AppException as e:
            self.log_warning(f"Report for {month} failed: {e.message}", employee_id=employee.id)
            return MonthFailure(month=month, error=e.message)
        except SQLAlchemyError as e:
            self.db.rollback()
            self.log_error(f"Database error for {month}: {e}", employee_id=employee.id)
            return MonthFailure(month=month, error="Failed to save report")
        except Exception as e:
            self.db.rollback()
            self._logger.exception(f"Unexpected error generating report for {month}")
            return MonthFailure(month=month, error=f"Unexpected error: {type(e).__name__}")

    def generate_missing(self, employee_id: int, months: List[str]) -> BackfillResult:
        """
        Backfill every month in ``months`` for one employee, strictly in order.
        A failing month is recorded and never stops the remaining months.
        """
        for month in months:
            parse_month(month)
        employee = self.get_employee(employee_id)

        outcomes = [self._backfill_month(employee, month) for month in months]

        result = BackfillResult()
        for outcome in outcomes:
            if isinstance(outcome, MonthFailure):
                result.failed_months.append(outcome)
            else:
                result.generated_reports.append(outcome)

        self.log_info(
            f"Backfill for employee {employee.id}: {len(result.generated_reports)} ok, "
            f"{len(result.failed_months)} failed"
        )
        return result
