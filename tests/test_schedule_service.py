from datetime import date, time

import pytest

from app.models import WorkSchedule
from app.schemas.work_schedule import ScheduleInput
from app.services.schedule_service import ScheduleService
from atams.exceptions import BadRequestException
from tests.helpers import add_employee, add_schedule


@pytest.fixture
def service():
    return ScheduleService()


def test_no_schedule_resolves_to_none(db, service):
    employee = add_employee(db, with_schedule=False)

    assert service.resolve(db, 1, employee.em_id, date(2025, 3, 3)) is None
    assert service.rules_for(db, 1, employee.em_id, date(2025, 3, 3)) is None


def test_resolves_version_effective_on_date(db, service):
    employee = add_employee(db, with_schedule=False)
    old = add_schedule(db, employee, effective_from=date(2025, 1, 1), effective_to=date(2025, 2, 28),
                       start_time=time(8, 0))
    new = add_schedule(db, employee, effective_from=date(2025, 3, 1), start_time=time(10, 0))

    assert service.resolve(db, 1, employee.em_id, date(2025, 2, 28)).ws_id == old.ws_id
    assert service.resolve(db, 1, employee.em_id, date(2025, 3, 1)).ws_id == new.ws_id
    assert service.resolve(db, 1, employee.em_id, date(2026, 1, 1)).ws_id == new.ws_id
    assert service.resolve(db, 1, employee.em_id, date(2024, 12, 31)) is None


def test_same_effective_date_prefers_latest_insert(db, service):
    employee = add_employee(db, with_schedule=False)
    add_schedule(db, employee, effective_from=date(2025, 3, 1), grace_minutes=10)
    latest = add_schedule(db, employee, effective_from=date(2025, 3, 1), grace_minutes=0)

    resolved = service.resolve(db, 1, employee.em_id, date(2025, 3, 5))

    assert resolved.ws_id == latest.ws_id


def test_resolution_is_tenant_scoped(db, service):
    employee = add_employee(db, client_id=1)

    assert service.resolve(db, 2, employee.em_id, date(2025, 3, 3)) is None


def test_rules_expose_schedule_fields(db, service):
    employee = add_employee(db, work_days=(1, 3, 5), start_time=time(7, 30), grace_minutes=5,
                            overtime_enabled=False)

    rules = service.rules_for(db, 1, employee.em_id, date(2025, 3, 3))

    assert rules.work_days == [1, 3, 5]
    assert rules.start_time == time(7, 30)
    assert rules.grace_minutes == 5
    assert rules.overtime_enabled is False
    assert rules.works_on(3) is True
    assert rules.works_on(2) is False


def test_replace_without_date_closes_previous_today(db, service):
    employee = add_employee(db, start_time=time(8, 0), grace_minutes=10)
    today = date(2025, 3, 10)

    new = service.replace_schedule(db, 1, employee.em_id, ScheduleInput(grace_minutes=5), today)

    versions = db.query(WorkSchedule).filter(
        WorkSchedule.ws_employee_id == employee.em_id
    ).order_by(WorkSchedule.ws_id).all()
    assert len(versions) == 2
    assert versions[0].ws_effective_to == today
    assert versions[1].ws_effective_from == today
    assert versions[1].ws_effective_to is None

    # Unspecified fields carry over from the replaced version
    assert new.ws_start_time == time(8, 0)
    assert new.ws_grace_minutes == 5

    assert service.resolve(db, 1, employee.em_id, today).ws_id == new.ws_id
    assert service.resolve(db, 1, employee.em_id, date(2025, 3, 9)).ws_id == versions[0].ws_id


def test_replace_with_future_date_closes_previous_day_before(db, service):
    employee = add_employee(db)

    new = service.replace_schedule(
        db, 1, employee.em_id,
        ScheduleInput(start_time=time(10, 0), effective_from=date(2025, 4, 1)),
        date(2025, 3, 10)
    )

    assert service.resolve(db, 1, employee.em_id, date(2025, 3, 31)).ws_start_time == time(9, 0)
    assert service.resolve(db, 1, employee.em_id, date(2025, 4, 1)).ws_id == new.ws_id
    open_versions = db.query(WorkSchedule).filter(
        WorkSchedule.ws_employee_id == employee.em_id,
        WorkSchedule.ws_effective_to.is_(None)
    ).all()
    assert [v.ws_id for v in open_versions] == [new.ws_id]


def test_undated_replace_rejected_while_future_version_pending(db, service):
    employee = add_employee(db)
    today = date(2025, 3, 10)
    pending = service.replace_schedule(
        db, 1, employee.em_id,
        ScheduleInput(start_time=time(10, 0), effective_from=date(2025, 4, 1)),
        today
    )

    with pytest.raises(BadRequestException):
        service.replace_schedule(db, 1, employee.em_id, ScheduleInput(start_time=time(8, 0)), today)

    versions = db.query(WorkSchedule).filter(
        WorkSchedule.ws_employee_id == employee.em_id
    ).order_by(WorkSchedule.ws_effective_from).all()
    assert [(v.ws_effective_from, v.ws_effective_to) for v in versions] == [
        (date(2025, 1, 1), date(2025, 3, 31)),
        (date(2025, 4, 1), None),
    ]
    assert service.resolve(db, 1, employee.em_id, date(2025, 4, 1)).ws_id == pending.ws_id


def test_dated_replace_after_pending_version_keeps_intervals_disjoint(db, service):
    employee = add_employee(db)
    today = date(2025, 3, 10)
    service.replace_schedule(
        db, 1, employee.em_id,
        ScheduleInput(start_time=time(10, 0), effective_from=date(2025, 4, 1)),
        today
    )
    service.replace_schedule(
        db, 1, employee.em_id,
        ScheduleInput(start_time=time(8, 0), effective_from=date(2025, 5, 1)),
        today
    )

    versions = db.query(WorkSchedule).filter(
        WorkSchedule.ws_employee_id == employee.em_id
    ).order_by(WorkSchedule.ws_effective_from).all()
    for version in versions:
        assert version.ws_effective_to is None or version.ws_effective_to >= version.ws_effective_from
    for earlier, later in zip(versions, versions[1:]):
        assert earlier.ws_effective_to < later.ws_effective_from


def test_replace_cannot_start_before_current_version(db, service):
    employee = add_employee(db, effective_from=date(2025, 3, 1))

    with pytest.raises(BadRequestException):
        service.replace_schedule(
            db, 1, employee.em_id,
            ScheduleInput(grace_minutes=0, effective_from=date(2025, 3, 1)),
            date(2025, 3, 10)
        )


def test_replace_without_previous_version_uses_defaults(db, service):
    employee = add_employee(db, with_schedule=False)

    new = service.replace_schedule(db, 1, employee.em_id, ScheduleInput(grace_minutes=0), date(2025, 3, 10))

    assert new.ws_work_days == [1, 2, 3, 4, 5]
    assert new.ws_start_time == time(9, 0)
    assert new.ws_end_time == time(17, 0)
    assert new.ws_overtime_enabled is True
    assert new.ws_grace_minutes == 0


def test_end_must_follow_start(db, service):
    employee = add_employee(db)

    with pytest.raises(BadRequestException):
        service.replace_schedule(
            db, 1, employee.em_id,
            ScheduleInput(start_time=time(22, 0), end_time=time(6, 0)),
            date(2025, 3, 10)
        )


def test_work_days_are_validated():
    with pytest.raises(ValueError):
        ScheduleInput(work_days=[0, 1])

    assert ScheduleInput(work_days=[5, 1, 1]).work_days == [1, 5]
