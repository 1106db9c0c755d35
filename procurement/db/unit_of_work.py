#procurement/db/unit_of_work.py
from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Iterator, Optional, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from procurement.core.errors import (
    DeadlineExceeded,
    InfrastructureError,
    ProcurementError,
)

logger = logging.getLogger(__name__)

Log = Union[logging.Logger, logging.LoggerAdapter]


class UnitOfWork:
    """
    One database transaction, handed explicitly to every store call.

    Every access to `session` checks the operation deadline, so an operation
    that runs out of time fails before its next statement and never commits.
    """

    def __init__(self, session: Session, *, op: str, deadline: Optional[float] = None):
        self._session = session
        self.op = op
        self.deadline = deadline
        self.finished = False

    @property
    def session(self) -> Session:
        self.checkpoint()
        return self._session

    def checkpoint(self) -> None:
        if self.finished:
            raise InfrastructureError(f"{self.op}: transaction already finished")
        if self.deadline is not None and time.monotonic() >= self.deadline:
            raise DeadlineExceeded(f"{self.op}: deadline exceeded")

    def commit(self) -> None:
        self.checkpoint()
        try:
            self._session.commit()
        except SQLAlchemyError as e:
            raise InfrastructureError(f"{self.op}: commit: {e}") from e
        self.finished = True

    def rollback(self) -> None:
        # no-op once committed or rolled back
        if self.finished:
            return
        self.finished = True
        self._session.rollback()


@contextmanager
def unit_of_work(
    session_factory: sessionmaker,
    *,
    op: str,
    timeout: Optional[float] = None,
    log: Optional[Log] = None,
) -> Iterator[UnitOfWork]:
    """
    begin -> body -> (commit inside body) ; anything not committed is rolled back.

    Domain failures are logged at WARNING and re-raised untouched.
    Storage and any other unexpected failures are logged at ERROR and surface
    as InfrastructureError.
    A failing rollback is logged and never replaces the error in flight.
    """
    log = log or logger
    deadline = time.monotonic() + timeout if timeout is not None else None

    session = session_factory()
    uow = UnitOfWork(session, op=op, deadline=deadline)
    try:
        yield uow
    except InfrastructureError as e:
        log.error("%s", e.message, exc_info=True)
        raise
    except ProcurementError as e:
        log.warning("%s", e.message)
        raise
    except Exception as e:
        log.error("%s: %s", op, e, exc_info=True)
        raise InfrastructureError(f"{op}: {e}") from e
    finally:
        try:
            uow.rollback()
        except SQLAlchemyError:
            log.exception("failed to rollback transaction")
        finally:
            session.close()
