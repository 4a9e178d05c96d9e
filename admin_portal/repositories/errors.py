# admin_portal/repositories/errors.py
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session


class DuplicateRecordError(Exception):
    """
    A unique constraint rejected the write.

    Distinct from "not found", which repositories report by returning None.
    """


def commit_unique(session: Session, what: str) -> None:
    """
    Commit, turning a unique-constraint violation into DuplicateRecordError.

    The session is rolled back before raising so it stays usable.
    """
    try:
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        raise DuplicateRecordError(what) from exc
