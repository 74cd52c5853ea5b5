from typing import List, Optional, Tuple

from sqlmodel import Session, select

from attendance_tracker.models.attendance_log import AttendanceEvent, AttendanceLog
from attendance_tracker.models.employee import Employee


class AttendanceRepository:
    def __init__(self, session: Session):
        self.session = session

    def latest_for_employee(self, company_id: int, employee_id: int) -> Optional[AttendanceLog]:
        return self.session.exec(
            select(AttendanceLog)
            .where(
                AttendanceLog.company_id == company_id,
                AttendanceLog.employee_id == employee_id,
            )
            .order_by(AttendanceLog.timestamp.desc(), AttendanceLog.id.desc())
            .limit(1)
        ).first()

    def append(
        self,
        company_id: int,
        employee_id: int,
        kiosk_id: Optional[int],
        nfc_card_id: str,
        event_type: AttendanceEvent,
    ) -> AttendanceLog:
        log = AttendanceLog(
            company_id=company_id,
            employee_id=employee_id,
            kiosk_id=kiosk_id,
            nfc_card_id=nfc_card_id,
            event_type=event_type.value,
        )
        self.session.add(log)
        self.session.flush()
        return log

    def recent(self, company_id: int, limit: int = 100) -> List[Tuple[AttendanceLog, Optional[str]]]:
        """Newest first, paired with the employee name (None once the employee is deleted)"""
        rows = self.session.exec(
            select(AttendanceLog, Employee.name)
            .join(
                Employee,
                (Employee.id == AttendanceLog.employee_id) & (Employee.company_id == AttendanceLog.company_id),
                isouter=True,
            )
            .where(AttendanceLog.company_id == company_id)
            .order_by(AttendanceLog.timestamp.desc(), AttendanceLog.id.desc())
            .limit(limit)
        ).all()
        return [(log, name) for log, name in rows]
