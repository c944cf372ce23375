"""
Best-employee ranking over the three completed months before a reference date.
"""
from collections import defaultdict
from datetime import date
from typing import Dict, List, Optional

from reviewhub.core.months import previous_months
from reviewhub.models.department import Department
from reviewhub.models.employee import Employee
from reviewhub.models.report import Report
from reviewhub.services.base import BaseService
from reviewhub.services.report_store import ReportStore

RANKING_WINDOW_MONTHS = 3


class EmployeeRanking:
    """One employee's standing over the ranking window."""

    def __init__(self, employee: Employee, average_score: float, missing_months: List[str], reports: List[Report]):
        self.employee = employee
        self.average_score = average_score
        self.missing_months = missing_months
        self.reports = reports

    @property
    def is_complete(self) -> bool:
        return not self.missing_months


def top_ranked(rankings: List[EmployeeRanking]) -> List[EmployeeRanking]:
    """Every employee tied at the highest average among those with no missing month."""
    complete = [r for r in rankings if r.is_complete]
    if not complete:
        return []
    best = max(r.average_score for r in complete)
    return [r for r in complete if r.average_score == best]


class RankingService(BaseService):
    def __init__(self, db, org_id: int):
        super().__init__(db, org_id)
        self.store = ReportStore(db, org_id)

    def _employees(self) -> List[Employee]:
        return self.db.query(Employee).filter(
            Employee.organization_id == self.org_id
        ).order_by(Employee.name, Employee.id).all()

    def rank(self, months: List[str]) -> List[EmployeeRanking]:
        employees = self._employees()
        reports = self.store.fetch_for_months([e.id for e in employees], months)

        by_employee: Dict[int, Dict[str, Report]] = defaultdict(dict)
        for report in reports:
            by_employee[report.employee_id][report.month] = report

        rankings = []
        for employee in employees:
            found = by_employee.get(employee.id, {})
            ordered = [found[m] for m in months if m in found]
            missing = [m for m in months if m not in found]
            average = sum(r.ranking for r in ordered) / len(ordered) if ordered else 0.0
            rankings.append(EmployeeRanking(employee, average, missing, ordered))

        # sorted() is stable, so equal averages keep the name/id fetch order
        return sorted(rankings, key=lambda r: r.average_score, reverse=True)

    def best_employees(self, reference: Optional[date] = None) -> dict:
        months = previous_months(RANKING_WINDOW_MONTHS, reference)
        rankings = self.rank(months)

        missing = [r for r in rankings if r.missing_months]

        departments = self.db.query(Department).filter(
            Department.organization_id == self.org_id
        ).order_by(Department.name).all()
        by_department = []
        for department in departments:
            members = [r for r in rankings if r.employee.department_id == department.id]
            best = top_ranked(members)
            if best:
                by_department.append({"department": department, "best_employees": best})

        self.log_info(
            f"Ranked {len(rankings)} employees over {months}; {len(missing)} with missing reports"
        )
        return {
            "months": months,
            "rankings": rankings,
            "has_missing_reports": bool(missing),
            "employees_with_missing_reports": missing,
            "best_employees": top_ranked(rankings),
            "best_employees_by_department": by_department,
        }
