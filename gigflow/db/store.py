# gigflow/db/store.py
from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional, Type, TypeVar

from sqlalchemy import insert, literal, select, text, update
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session, sessionmaker

from gigflow.db.base import Base

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Base)


class StoreError(Exception):
    pass


class StoreUnavailable(StoreError):
    """Store could not be reached or did not acknowledge in time."""


class StoreConstraintViolation(StoreError):
    """A database constraint rejected the unit of work."""


class UnitOfWork:
    """
    Operations available inside one store transaction.

    Updates go out as single conditional statements so the
    read-modify-write happens inside the database, not in Python.
    """

    def __init__(self, session: Session):
        self.session = session

    # ---------------------------
    # READS
    # ---------------------------

    def get(self, kind: Type[R], record_id: Any, *, for_update: bool = False) -> Optional[R]:
        return self.session.get(
            kind,
            record_id,
            with_for_update=for_update or None,
            populate_existing=for_update,
        )

    def find(self, kind: Type[R], *, order_by=None, **criteria: Any) -> Iterator[R]:
        stmt = select(kind).filter_by(**criteria)
        if order_by is not None:
            stmt = stmt.order_by(order_by)
        return iter(self.session.execute(stmt).scalars())

    # ---------------------------
    # WRITES
    # ---------------------------

    def add(self, record: R) -> R:
        self.session.add(record)
        self.session.flush()
        self.session.refresh(record)
        return record

    def atomic_update(
        self,
        kind: Type[R],
        record_id: Any,
        changes: Dict[str, Any],
        *,
        expect: Optional[Dict[str, Any]] = None,
    ) -> Optional[R]:
        """
        Compare-and-set on one record.

        Returns the refreshed record, or None when the id does not exist or
        the current values do not match ``expect``.
        """
        conditions = [kind.id == record_id]
        conditions += [getattr(kind, k) == v for k, v in (expect or {}).items()]

        result = self.session.execute(
            update(kind)
            .where(*conditions)
            .values(**changes)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            return None

        return self.session.get(kind, record_id, populate_existing=True)

    def atomic_bulk_update(
        self,
        kind: Type[R],
        criteria: Dict[str, Any],
        changes: Dict[str, Any],
    ) -> int:
        result = self.session.execute(
            update(kind)
            .where(*[getattr(kind, k) == v for k, v in criteria.items()])
            .values(**changes)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def insert_guarded(
        self,
        record: R,
        guard_kind: Type[Base],
        guard_criteria: Dict[str, Any],
    ) -> bool:
        """
        INSERT ... SELECT ... WHERE <guard>: the row is written only if a
        ``guard_kind`` row matching ``guard_criteria`` exists at that instant.
        """
        table = type(record).__table__
        if getattr(record, "id", None) is None:
            record.id = uuid.uuid4()

        values = {
            col.name: getattr(record, col.name)
            for col in table.columns
            if getattr(record, col.name, None) is not None
        }

        source = select(
            *[literal(v, table.c[k].type).label(k) for k, v in values.items()]
        ).where(
            *[getattr(guard_kind, k) == v for k, v in guard_criteria.items()]
        ).with_for_update(read=True)  # FOR SHARE: waits on a concurrent FOR UPDATE of the guard row

        result = self.session.execute(insert(table).from_select(list(values), source))
        return result.rowcount == 1


class EntityStore:
    """
    Transactional store handle. Built once per application and passed to
    services explicitly.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    @contextmanager
    def transaction(self) -> Iterator[UnitOfWork]:
        """
        Commit on success, roll back on any exception, always release the
        session. Driver-level failures are re-raised as StoreError.
        """
        session: Session = self.session_factory()
        try:
            yield UnitOfWork(session)
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            raise StoreConstraintViolation(str(exc.orig)) from exc
        except (DBAPIError, PoolTimeoutError) as exc:
            logger.warning("[store] transaction failed: %s", exc.__class__.__name__)
            _safe_rollback(session)
            raise StoreUnavailable(str(exc)) from exc
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def ping(self) -> None:
        """Round-trip to the database; raises StoreUnavailable when it cannot."""
        with self.transaction() as uow:
            uow.session.execute(text("SELECT 1"))


def _safe_rollback(session: Session) -> None:
    # connection may already be gone; the rollback error is not the one to report
    try:
        session.rollback()
    except DBAPIError:
        logger.debug("[store] rollback after failure also failed", exc_info=True)
