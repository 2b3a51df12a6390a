"""
Employee Repository - Data access layer for HR employees
"""
from typing import Optional, List, Dict, Any
from sqlalchemy.orm import Session

from atams.db import BaseRepository
from atams.transaction import transaction
from app.models.employee import Employee
from app.models.work_schedule import WorkSchedule


class EmployeeRepository(BaseRepository[Employee]):
    def __init__(self):
        super().__init__(Employee)

    def get_tenant_employee(self, db: Session, client_id: int, employee_id: int) -> Optional[Employee]:
        return db.query(Employee).filter(
            Employee.em_client_id == client_id,
            Employee.em_id == employee_id
        ).first()

    def get_tenant_employees(self, db: Session, client_id: int) -> List[Employee]:
        return db.query(Employee).filter(
            Employee.em_client_id == client_id
        ).order_by(Employee.em_full_name.asc(), Employee.em_id.asc()).all()

    def username_exists(self, db: Session, client_id: int, username: str) -> bool:
        """Check username within the tenant using native SQL"""
        query = """
            SELECT 1
            FROM hris.hr_employees
            WHERE em_client_id = :client_id AND em_username = :username
            LIMIT 1
        """
        result = self.execute_raw_sql_scalar(db, query, {"client_id": client_id, "username": username})
        return result is not None

    def create_with_schedule(
        self,
        db: Session,
        employee_data: Dict[str, Any],
        schedule_data: Dict[str, Any]
    ) -> Employee:
        """
        Insert an employee and its first schedule in one transaction

        Raises:
            IntegrityError: Username already taken in this tenant (after rollback)
        """
        with transaction(db):
            employee = Employee(**employee_data)
            db.add(employee)
            db.flush()

            db.add(WorkSchedule(
                ws_client_id=employee.em_client_id,
                ws_employee_id=employee.em_id,
                **schedule_data
            ))

        db.refresh(employee)
        return employee
