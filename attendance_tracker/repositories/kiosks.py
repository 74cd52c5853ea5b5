from typing import List, Optional

from sqlmodel import Session, select

from attendance_tracker.models.kiosk import Kiosk


class KioskRepository:
    def __init__(self, session: Session):
        self.session = session

    def list(self, company_id: int) -> List[Kiosk]:
        return list(self.session.exec(
            select(Kiosk).where(Kiosk.company_id == company_id).order_by(Kiosk.id)
        ).all())

    def add(self, company_id: int, name: str) -> Kiosk:
        kiosk = Kiosk(company_id=company_id, name=name)
        self.session.add(kiosk)
        self.session.flush()
        return kiosk

    def get_by_api_key(self, api_key: str) -> Optional[Kiosk]:
        """Resolve a kiosk, and with it the tenant, from its credential"""
        return self.session.exec(select(Kiosk).where(Kiosk.api_key == api_key)).first()
