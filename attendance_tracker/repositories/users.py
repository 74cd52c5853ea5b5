from typing import Optional

from sqlmodel import Session, select

from attendance_tracker.models.user import User


class UserRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_email(self, email: str) -> Optional[User]:
        return self.session.exec(select(User).where(User.email == email)).first()

    def add(self, company_id: int, email: str, password_hash: str) -> User:
        user = User(company_id=company_id, email=email, password_hash=password_hash)
        self.session.add(user)
        self.session.flush()
        return user
