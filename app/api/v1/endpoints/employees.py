"""
Employee Endpoints - HR employee administration and self profile
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional

from app.db.session import get_db
from app.services.employee_service import EmployeeService
from app.schemas import (
    Employee,
    EmployeeCreate,
    EmployeeUpdate,
    EmployeeListItem,
    EmployeeCreated,
    EmployeeProfile,
    PasswordReset,
    PasswordResetResponse,
    DataResponse
)
from app.api.deps import CurrentUser, require_auth, require_capability
from app.core.permissions import Capability
from app.core.config import settings
from atams.encryption import encrypt_response_data

router = APIRouter()
employee_service = EmployeeService()


@router.get(
    "/employees",
    response_model=DataResponse[List[EmployeeListItem]],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_capability(Capability.MANAGE_EMPLOYEES))]
)
async def get_employees(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_auth)
):
    """
    List tenant employees

    **Authorization:**
    - Admin only

    **Response:**
    - Employee profile, biometric registration flag, schedule effective today
    """
    employees = employee_service.get_employees(db, current_user.client_id)

    response = DataResponse(
        success=True,
        message="Employees retrieved successfully",
        data=employees
    )

    return encrypt_response_data(response, settings)


@router.post(
    "/employees",
    response_model=DataResponse[EmployeeCreated],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_capability(Capability.MANAGE_EMPLOYEES))]
)
async def create_employee(
    request: EmployeeCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_auth)
):
    """
    Create an employee with an initial work schedule

    **Authorization:**
    - Admin only

    **Errors:**
    - 409: Username already exists in this clinic group
    """
    employee = employee_service.create_employee(db, current_user.client_id, request)

    return DataResponse(
        success=True,
        message="Employee created successfully",
        data=employee
    )


@router.put(
    "/employees/{employee_id}",
    response_model=DataResponse[Employee],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_capability(Capability.MANAGE_EMPLOYEES))]
)
async def update_employee(
    employee_id: int,
    request: EmployeeUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_auth)
):
    """
    Update an employee

    **Authorization:**
    - Admin only

    **Notes:**
    - Any schedule field starts a new schedule version; history is kept
    """
    employee = employee_service.update_employee(db, current_user.client_id, employee_id, request)

    return DataResponse(
        success=True,
        message="Employee updated successfully",
        data=employee
    )


@router.delete(
    "/employees/{employee_id}",
    response_model=DataResponse[Employee],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_capability(Capability.MANAGE_EMPLOYEES))]
)
async def deactivate_employee(
    employee_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_auth)
):
    """
    Deactivate an employee (soft delete)

    **Authorization:**
    - Admin only
    """
    employee = employee_service.deactivate_employee(db, current_user.client_id, employee_id)

    return DataResponse(
        success=True,
        message="Employee deactivated successfully",
        data=employee
    )


@router.post(
    "/employees/{employee_id}/reset-password",
    response_model=DataResponse[PasswordResetResponse],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_capability(Capability.MANAGE_EMPLOYEES))]
)
async def reset_employee_password(
    employee_id: int,
    request: Optional[PasswordReset] = None,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_auth)
):
    """
    Reset an employee's password

    **Authorization:**
    - Admin only

    **Response:**
    - The new plaintext password, shown once so the admin can hand it over
    """
    password = request.password if request else None
    result = employee_service.reset_password(db, current_user.client_id, employee_id, password)

    return DataResponse(
        success=True,
        message="Password reset successfully",
        data=result
    )


@router.get(
    "/me",
    response_model=DataResponse[EmployeeProfile],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_capability(Capability.VIEW_SELF))]
)
async def get_my_profile(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_auth)
):
    """
    Current employee's profile

    **Authorization:**
    - HR employee only

    **Response:**
    - Profile, schedule effective today, biometric count, today's attendance
    """
    profile = employee_service.get_profile(db, current_user.client_id, current_user.employee_id())

    response = DataResponse(
        success=True,
        message="Profile retrieved successfully",
        data=profile
    )

    return encrypt_response_data(response, settings)
