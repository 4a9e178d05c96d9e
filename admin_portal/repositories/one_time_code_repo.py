# admin_portal/repositories/one_time_code_repo.py
from sqlmodel import Session, select

from admin_portal.models.one_time_code import OneTimeCode


class OneTimeCodeRepository:
    """
    Data access layer for onboarding codes.

    Codes are hard-deleted; there is no soft delete for them.
    """

    def find(self, session: Session, email: str, code: str) -> OneTimeCode | None:
        """Exact (email, code) match, expired or not."""
        stmt = select(OneTimeCode).where(
            OneTimeCode.email == email,
            OneTimeCode.code == code,
        )
        return session.exec(stmt).first()

    def list_for_email(self, session: Session, email: str) -> list[OneTimeCode]:
        stmt = (
            select(OneTimeCode)
            .where(OneTimeCode.email == email)
            .order_by(OneTimeCode.created_at.desc())
        )
        return list(session.exec(stmt).all())

    def replace_for_email(self, session: Session, otp: OneTimeCode) -> OneTimeCode:
        """
        Store `otp` as the only code for its email.

        Earlier codes for the same email are removed in the same commit.
        """
        self.delete_for_email(session, otp.email)
        session.add(otp)
        session.commit()
        session.refresh(otp)
        return otp

    def delete_for_email(self, session: Session, email: str) -> None:
        """
        Remove every code for `email`.

        NOTE:
          - No commit here; the caller commits together with its own
            changes so both land or neither does.
        """
        for otp in self.list_for_email(session, email):
            session.delete(otp)
        session.flush()
