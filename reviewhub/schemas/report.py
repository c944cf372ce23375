from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from reviewhub.core.months import MONTH_PATTERN
from reviewhub.core.schemas import CamelModel, CamelResponse
from reviewhub.schemas.employee import EmployeeSummary


class ReportFields(BaseModel):
    """The four fields the synthesizer produces and the store persists."""
    ranking: float = Field(..., ge=0, le=10)
    improvements: List[str] = []
    qualities: List[str] = []
    summary: str


class ReportResponse(CamelResponse):
    id: int = Field(serialization_alias="_id")
    employee_id: int
    month: str
    ranking: float
    improvements: List[str]
    qualities: List[str]
    summary: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class GenerateReportRequest(CamelModel):
    employee_id: int
    month: str = Field(..., pattern=MONTH_PATTERN)


class GenerateMissingRequest(CamelModel):
    employee_id: int
    months: List[str] = Field(..., min_length=1)


class FailedMonth(CamelResponse):
    month: str
    error: str


class BackfillResponse(CamelResponse):
    generated_reports: List[ReportResponse]
    failed_months: List[FailedMonth]
    success: bool


class RankedReport(CamelResponse):
    month: str
    ranking: float
    summary: str


class RankedEmployee(CamelResponse):
    employee: EmployeeSummary
    average_score: float
    missing_months: List[str]
    reports: List[RankedReport]


class MissingReportsEntry(CamelResponse):
    employee: EmployeeSummary
    missing_months: List[str]


class DepartmentRef(CamelResponse):
    id: int
    name: str


class DepartmentBest(CamelResponse):
    department: DepartmentRef
    best_employees: List[RankedEmployee]


class RankingResponse(CamelResponse):
    months: List[str]
    rankings: List[RankedEmployee]
    has_missing_reports: bool
    employees_with_missing_reports: List[MissingReportsEntry]
    best_employees: List[RankedEmployee]
    best_employees_by_department: List[DepartmentBest]
