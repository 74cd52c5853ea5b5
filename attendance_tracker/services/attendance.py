"""
Kiosk tap handling: the clock-in / clock-out toggle

Each employee alternates between OUT (no log yet, or last event clock-out)
and IN (last event clock-in). A tap records the event that leaves the
current state.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from sqlmodel import Session
import structlog

from attendance_tracker.core.clock import as_utc, utc_now
from attendance_tracker.core.exceptions import CardNotRecognized, TapCooldownActive
from attendance_tracker.core.locks import KeyedLock, employee_locks
from attendance_tracker.models import AttendanceEvent, AttendanceLog, Employee, Kiosk
from attendance_tracker.repositories import AttendanceRepository, EmployeeRepository

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class TapResult:
    employee: Employee
    log: AttendanceLog

    @property
    def event(self) -> AttendanceEvent:
        return AttendanceEvent(self.log.event_type)


def next_event_type(last: Optional[AttendanceLog]) -> AttendanceEvent:
    if last is None or last.event_type == AttendanceEvent.CLOCK_OUT.value:
        return AttendanceEvent.CLOCK_IN
    return AttendanceEvent.CLOCK_OUT


def check_cooldown(last: Optional[AttendanceLog], cooldown: timedelta, now: datetime) -> None:
    """Reject a tap arriving within `cooldown` of the previous one; a zero window disables the check"""
    if last is None or cooldown <= timedelta(0):
        return

    elapsed = as_utc(now) - as_utc(last.timestamp)
    if elapsed < cooldown:
        remaining = cooldown - elapsed
        raise TapCooldownActive(
            cooldown_minutes=int(cooldown.total_seconds() // 60),
            retry_after_seconds=max(1, int(remaining.total_seconds())),
        )


def record_tap(
    session: Session,
    kiosk: Kiosk,
    nfc_card_id: str,
    cooldown: timedelta = timedelta(0),
    now: Optional[datetime] = None,
    locks: KeyedLock = employee_locks,
) -> TapResult:
    """Resolve the card within the kiosk's company and append the next clock event"""
    company_id = kiosk.company_id
    employee = EmployeeRepository(session).get_by_card(company_id, nfc_card_id)
    if employee is None:
        logger.info("Unrecognized card presented", company_id=company_id, kiosk_id=kiosk.id)
        raise CardNotRecognized(nfc_card_id)

    attendance = AttendanceRepository(session)
    with locks.hold(employee.id):
        try:
            last = attendance.latest_for_employee(company_id, employee.id)
            check_cooldown(last, cooldown, now or utc_now())

            log = attendance.append(
                company_id=company_id,
                employee_id=employee.id,
                kiosk_id=kiosk.id,
                nfc_card_id=nfc_card_id,
                event_type=next_event_type(last),
            )
            session.commit()
        except Exception:
            session.rollback()
            raise

    session.refresh(log)
    logger.info(f"{log.event_type} recorded for employee {employee.id}", company_id=company_id, kiosk_id=kiosk.id)
    return TapResult(employee=employee, log=log)
