"""
Report Endpoints - Monthly attendance reports
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from app.db.session import get_db
from app.services.report_service import ReportService
from app.schemas import MonthlyReport, DataResponse
from app.api.deps import CurrentUser, require_auth, require_capability
from app.core import clock
from app.core.permissions import Capability
from app.core.config import settings
from atams.encryption import encrypt_response_data
from atams.exceptions import BadRequestException

router = APIRouter()
report_service = ReportService()


def _default_month() -> str:
    return clock.now_local().strftime("%Y-%m")


@router.get(
    "/monthly",
    response_model=DataResponse[MonthlyReport],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_capability(Capability.VIEW_ANY_REPORT, Capability.VIEW_OWN_REPORT))]
)
async def get_monthly_report(
    employee_id: Optional[int] = Query(None, description="Employee ID (admin only; employees always get their own)"),
    month: Optional[str] = Query(None, description="Month in YYYY-MM format (default: current month)"),
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_auth)
):
    """
    Monthly attendance report for one employee

    **Authorization:**
    - Admin: any employee of the tenant, employee_id required
    - HR employee: always their own report
    """
    if current_user.can(Capability.VIEW_ANY_REPORT):
        if employee_id is None:
            raise BadRequestException("employee_id is required")
        target_id = employee_id
    else:
        target_id = current_user.employee_id()

    report = report_service.monthly_report(
        db, current_user.client_id, target_id, month or _default_month()
    )

    response = DataResponse(
        success=True,
        message="Monthly report retrieved successfully",
        data=report
    )

    return encrypt_response_data(response, settings)


@router.get(
    "/my-monthly",
    response_model=DataResponse[MonthlyReport],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_capability(Capability.VIEW_OWN_REPORT))]
)
async def get_my_monthly_report(
    month: Optional[str] = Query(None, description="Month in YYYY-MM format (default: current month)"),
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_auth)
):
    """
    Current employee's monthly attendance report

    **Authorization:**
    - HR employee only
    """
    report = report_service.monthly_report(
        db, current_user.client_id, current_user.employee_id(), month or _default_month()
    )

    response = DataResponse(
        success=True,
        message="Monthly report retrieved successfully",
        data=report
    )

    return encrypt_response_data(response, settings)
