from fastapi import APIRouter
from app.api.v1.endpoints import clinics, employees, attendance, webauthn, reports, maintenance

api_router = APIRouter()

# Register routes
api_router.include_router(clinics.router, prefix="/hr/clinic", tags=["Clinic Location"])
api_router.include_router(employees.router, prefix="/hr", tags=["Employees"])
api_router.include_router(attendance.router, prefix="/hr/attendance", tags=["Attendance"])
api_router.include_router(webauthn.router, prefix="/hr/webauthn", tags=["WebAuthn"])
api_router.include_router(reports.router, prefix="/hr/reports", tags=["Reports"])
api_router.include_router(maintenance.router, prefix="/hr/maintenance", tags=["Maintenance"])
