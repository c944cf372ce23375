from typing import Iterable, List, Optional

from sqlalchemy.exc import IntegrityError

from reviewhub.core.exceptions import DuplicateReportError
from reviewhub.models.report import Report
from reviewhub.schemas.report import ReportFields
from reviewhub.services.base import BaseService


class ReportStore(BaseService):
    """Persistence for monthly reports. One row per (employee, month), insert-only."""

    def fetch_one(self, employee_id: int, month: str) -> Optional[Report]:
        return self.db.query(Report).filter(
            Report.employee_id == employee_id,
            Report.month == month
        ).first()

    def fetch_all(self, employee_id: int) -> List[Report]:
        return self.db.query(Report).filter(
            Report.employee_id == employee_id
        ).order_by(Report.month.desc()).all()

    def fetch_for_months(self, employee_ids: Iterable[int], months: Iterable[str]) -> List[Report]:
        employee_ids, months = list(employee_ids), list(months)
        if not employee_ids or not months:
            return []
        return self.db.query(Report).filter(
            Report.employee_id.in_(employee_ids),
            Report.month.in_(months)
        ).all()

    def create(self, employee_id: int, month: str, fields: ReportFields) -> Report:
        """
        Insert a report. The (employee_id, month) unique constraint decides
        duplicates, so two racing requests cannot both succeed.
        """
        report = Report(
            employee_id=employee_id,
            month=month,
            ranking=fields.ranking,
            improvements=list(fields.improvements),
            qualities=list(fields.qualities),
            summary=fields.summary,
        )
        self.db.add(report)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if "UNIQUE" in str(e.orig).upper():
                self.log_warning(f"Duplicate report rejected for employee {employee_id} in {month}")
                raise DuplicateReportError(employee_id, month) from e
            raise
        self.db.refresh(report)
        self.log_info(f"Stored report {report.id} for employee {employee_id} in {month}")
        return report
