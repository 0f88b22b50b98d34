"""Parameterized statement execution over the connection manager, with store error translation."""

import logging
import re
from contextlib import contextmanager
from typing import Any, Awaitable, Callable, Iterator, List, Mapping, Optional, Tuple, TypeVar

from fastapi import Request
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError, ResourceClosedError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.core.exceptions import ConstraintError, ServiceError, StoreConnectionError
from school_admin.db.session import ConnectionManager

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Column names that appear in FK / unique violations, mapped to caller-facing wording.
_RELATION_MESSAGES = {
    "section_id": "referenced section does not exist",
    "academic_year_id": "referenced academic year does not exist",
    "fee_type_id": "referenced fee type does not exist",
    "student_id": "referenced student does not exist",
}


def _integrity_details(exc: IntegrityError) -> Tuple[str, Optional[str]]:
    message = str(exc.orig if exc.orig is not None else exc).lower()
    if "unique" in message or "duplicate" in message:
        if "uq_attendance_student_date" in message or "attendance.student_id" in message:
            return "attendance already recorded for this student and date", "date"
        return "record already exists", None
    for column, wording in _RELATION_MESSAGES.items():
        if column in message:
            return wording, column
    match = re.search(r'constraint "([^"]+)"', message)
    return "referenced record does not exist", match.group(1) if match else None


@contextmanager
def translate_store_errors() -> Iterator[None]:
    """Map SQLAlchemy failures to the service error taxonomy without leaking driver text."""
    try:
        yield
    except PoolTimeoutError as e:
        logger.warning("Connection pool exhausted: %s", e)
        raise StoreConnectionError("pool exhausted") from e
    except IntegrityError as e:
        message, relation = _integrity_details(e)
        raise ConstraintError(message, relation=relation) from e
    except (OperationalError, InterfaceError, OSError) as e:
        logger.error("Store unavailable: %s", e)
        raise StoreConnectionError("store unavailable") from e
    except SQLAlchemyError as e:
        logger.error("Store error: %s", e)
        raise ServiceError("Database error") from e


class QueryExecutor:
    """Runs statements through scoped units of work; never string-builds SQL."""

    def __init__(self, manager: ConnectionManager) -> None:
        self.manager = manager

    async def execute(self, statement: Any, params: Optional[Mapping[str, Any]] = None) -> List[Mapping[str, Any]]:
        """Run one statement in its own unit of work and return rows as mappings."""
        async with self.manager.unit_of_work() as session:
            with translate_store_errors():
                result = await session.execute(statement, dict(params or {}))
                try:
                    rows = list(result.mappings().all())
                except ResourceClosedError:
                    # DML without RETURNING
                    rows = []
                await session.commit()
                return rows

    async def scalar(self, statement: Any, params: Optional[Mapping[str, Any]] = None) -> Any:
        rows = await self.execute(statement, params)
        if not rows:
            return None
        return next(iter(rows[0].values()))

    async def execute_in_transaction(self, fn: Callable[[AsyncSession], Awaitable[T]]) -> T:
        """
        Run fn(session) inside one transaction: commit on return, roll back and
        re-raise on any exception. Not retried here; fn must be safe for the
        caller to retry.
        """
        async with self.manager.unit_of_work() as session:
            with translate_store_errors():
                async with session.begin():
                    return await fn(session)


def get_executor(request: Request) -> QueryExecutor:
    return request.app.state.executor
