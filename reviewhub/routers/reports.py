from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from reviewhub.core.config import settings
from reviewhub.core.exceptions import AccessDeniedError
from reviewhub.core.limiter import limiter
from reviewhub.database import get_db
from reviewhub.models.organization import Organization
from reviewhub.models.user import User
from reviewhub.routers.auth_deps import get_current_org, get_current_user, get_user_org_id
from reviewhub.schemas.report import (
    BackfillResponse, GenerateMissingRequest, GenerateReportRequest,
    RankingResponse, ReportResponse
)
from reviewhub.services.ranking_service import RankingService
from reviewhub.services.report_service import ReportService

router = APIRouter(
    prefix="/reports",
    tags=["reports"]
)


def _check_report_access(user: User, employee_id: int):
    """Admins read any report in their organization; employees only their own."""
    if user.is_org_admin:
        return
    if user.employee_profile is None or user.employee_profile.id != employee_id:
        raise AccessDeniedError("You can only view your own reports")


@router.get("/", response_model=List[ReportResponse])
def list_reports(
    employee_id: int = Query(..., alias="employeeId"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    org_id: int = Depends(get_user_org_id)
):
    _check_report_access(current_user, employee_id)
    return ReportService(db, org_id).list_reports(employee_id)


@router.get("/best-employee", response_model=RankingResponse)
def best_employee(db: Session = Depends(get_db), org: Organization = Depends(get_current_org)):
    return RankingService(db, org.id).best_employees()


@router.get("/{employee_id}/{month}", response_model=Optional[ReportResponse])
def get_report(
    employee_id: int,
    month: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    org_id: int = Depends(get_user_org_id)
):
    _check_report_access(current_user, employee_id)
    return ReportService(db, org_id).get_report(employee_id, month)


@router.post("/generate", response_model=ReportResponse)
@limiter.limit(settings.report_rate_limit)
def generate_report(
    request: Request,
    response: Response,
    data: GenerateReportRequest,
    db: Session = Depends(get_db),
    org: Organization = Depends(get_current_org)
):
    """200 with the report already on file, 201 with a newly generated one."""
    report, created = ReportService(db, org.id).generate(data.employee_id, data.month)
    if created:
        response.status_code = status.HTTP_201_CREATED
    return report


@router.post("/generate-missing", response_model=BackfillResponse)
@limiter.limit(settings.report_rate_limit)
def generate_missing_reports(
    request: Request,
    data: GenerateMissingRequest,
    db: Session = Depends(get_db),
    org: Organization = Depends(get_current_org)
):
    result = ReportService(db, org.id).generate_missing(data.employee_id, data.months)
    return {
        "generated_reports": result.generated_reports,
        "failed_months": result.failed_months,
        "success": result.success,
    }
