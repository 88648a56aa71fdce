"""Row-level access policies enforced by the database session.

Every policed table gets a :class:`TablePolicy` describing, per operation,
which rows a caller may touch. The policies are installed as SQLAlchemy
session events, so they apply to every session that has a caller bound to it
(see :func:`bind_caller`) no matter which code issues the query:

* SELECT statements get the table's ``select`` predicate added as loader
  criteria, so invisible rows are simply not returned.
* Before each flush, pending inserts, updates and deletes are checked against
  the ``insert`` / ``update`` + ``update_check`` / ``delete`` predicates. A
  failing row raises :class:`AccessDeniedError` and nothing is written.

An operation whose predicate is ``None`` is denied. Sessions with no caller
bound at all are service sessions and are not policed.

Predicates are called as ``predicate(caller_id, row)``. ``row`` is either a
mapped class (select criteria, must return a SQL expression) or a row object
(write checks, must return a bool). The helpers below build predicates that
work in both modes.
"""

from __future__ import annotations

import logging
import operator
from contextlib import contextmanager
from dataclasses import dataclass
from functools import reduce
from types import SimpleNamespace
from typing import Any, Callable, Dict, Iterator, Optional, Tuple

from sqlalchemy import TextClause, event, false, inspect, select, true
from sqlalchemy.orm import ORMExecuteState, Session, with_loader_criteria
from sqlalchemy.sql.util import find_tables

from friendzone.core.exceptions import AccessDeniedError
from friendzone.database import SessionLocal
from friendzone.models import Comment, Follow, Friendship, FriendshipStatus, Like, Post, Profile

logger = logging.getLogger(__name__)

# Session.info key holding the caller identity
CALLER_KEY = "caller_id"


Predicate = Callable[[Optional[str], Any], Any]


# ----- Predicate helpers -----
def anyone(caller_id: Optional[str], row: Any) -> Any:
    """Any authenticated caller."""
    return true() if isinstance(row, type) else True


def owned_by(column: str) -> Predicate:
    """Caller id equals ``row.<column>``."""
    def predicate(caller_id: Optional[str], row: Any) -> Any:
        return getattr(row, column) == caller_id
    return predicate


def participant_of(*columns: str) -> Predicate:
    """Caller id equals any of the given columns."""
    def predicate(caller_id: Optional[str], row: Any) -> Any:
        return reduce(operator.or_, [getattr(row, column) == caller_id for column in columns])
    return predicate


def status_in(*statuses: FriendshipStatus) -> Predicate:
    values = [status.value for status in statuses]

    def predicate(caller_id: Optional[str], row: Any) -> Any:
        if isinstance(row, type):
            return row.status.in_(values)
        return row.status in values
    return predicate


def all_of(*predicates: Predicate) -> Predicate:
    def predicate(caller_id: Optional[str], row: Any) -> Any:
        return reduce(operator.and_, [p(caller_id, row) for p in predicates])
    return predicate


@dataclass(frozen=True)
class TablePolicy:
    """Per-operation predicates for one table. ``None`` means denied."""

    select: Optional[Predicate] = None
    insert: Optional[Predicate] = None
    # evaluated against the stored row
    update: Optional[Predicate] = None
    # evaluated against the row as it will be written
    update_check: Optional[Predicate] = None
    delete: Optional[Predicate] = None
    immutable: Tuple[str, ...] = ()


_FRIENDSHIP_PARTICIPANT = participant_of("user_id_1", "user_id_2")


POLICIES: Dict[type, TablePolicy] = {
    Profile: TablePolicy(
        select=anyone,
        insert=owned_by("id"),
        update=owned_by("id"),
        update_check=owned_by("id"),
        delete=owned_by("id"),
        immutable=("id", "created_at"),
    ),
    Post: TablePolicy(
        select=anyone,
        insert=owned_by("user_id"),
        update=owned_by("user_id"),
        update_check=owned_by("user_id"),
        delete=owned_by("user_id"),
        immutable=("id", "user_id", "created_at"),
    ),
    Comment: TablePolicy(
        select=anyone,
        insert=owned_by("user_id"),
        delete=owned_by("user_id"),
    ),
    Like: TablePolicy(
        select=anyone,
        insert=owned_by("user_id"),
        delete=owned_by("user_id"),
    ),
    Follow: TablePolicy(
        select=anyone,
        insert=owned_by("follower_id"),
        delete=owned_by("follower_id"),
    ),
    # pending -> accepted is the only update; pending -> removed is a delete.
    # Accepted rows can be neither updated nor deleted.
    Friendship: TablePolicy(
        select=_FRIENDSHIP_PARTICIPANT,
        insert=all_of(
            owned_by("requested_by"),
            _FRIENDSHIP_PARTICIPANT,
            status_in(FriendshipStatus.PENDING),
        ),
        update=all_of(_FRIENDSHIP_PARTICIPANT, status_in(FriendshipStatus.PENDING)),
        update_check=all_of(
            _FRIENDSHIP_PARTICIPANT,
            status_in(FriendshipStatus.PENDING, FriendshipStatus.ACCEPTED),
        ),
        delete=all_of(_FRIENDSHIP_PARTICIPANT, status_in(FriendshipStatus.PENDING)),
        immutable=("id", "user_id_1", "user_id_2", "requested_by", "created_at"),
    ),
}


# ----- Caller binding -----
def bind_caller(db: Session, caller_id: Optional[str]) -> Session:
    """Police ``db`` as ``caller_id``; ``None`` binds an anonymous caller."""
    db.info[CALLER_KEY] = caller_id
    return db


def is_policed(db: Session) -> bool:
    return CALLER_KEY in db.info


@contextmanager
def caller_session(caller_id: Optional[str]) -> Iterator[Session]:
    """Open a session policed as ``caller_id``."""
    db = bind_caller(SessionLocal(), caller_id)
    try:
        yield db
    finally:
        db.close()


# ----- Row snapshots -----
def _stored_row(db: Session, obj: Any) -> Optional[SimpleNamespace]:
    """The row as committed, read from the database by the object's identity.

    Attribute history is empty for attributes expired by a commit, so it
    cannot tell the old value of a column assigned after one.
    """
    state = inspect(obj)
    mapper = state.mapper
    criteria = [column == value for column, value in zip(mapper.primary_key, state.identity)]
    # connection-level execute does not go through the session's policies
    row = db.connection().execute(select(mapper.local_table).where(*criteria)).first()
    if row is None:
        return None
    return SimpleNamespace(**{
        attr.key: row._mapping[attr.columns[0]] for attr in mapper.column_attrs
    })


def _pending_row(obj: Any) -> SimpleNamespace:
    """Column values about to be inserted, with scalar column defaults applied."""
    values = {}
    for attr in inspect(obj).mapper.column_attrs:
        value = getattr(obj, attr.key)
        column = attr.columns[0]
        if value is None and column.default is not None and column.default.is_scalar:
            value = column.default.arg
        values[attr.key] = value
    return SimpleNamespace(**values)


def _assigned_values(obj: Any) -> Dict[str, Any]:
    """Column values currently held by the object; unloaded columns are left out."""
    state = inspect(obj)
    return {
        attr.key: state.dict[attr.key]
        for attr in state.mapper.column_attrs
        if attr.key in state.dict
    }


# ----- Enforcement -----
def _deny(table: str, operation: str, caller_id: Optional[str]) -> None:
    logger.warning(f"[POLICY] Denied {operation} on {table} for caller={caller_id}")
    raise AccessDeniedError(table, operation)


def _passes(predicate: Optional[Predicate], caller_id: Optional[str], row: Any) -> bool:
    if predicate is None or caller_id is None or row is None:
        return False
    return bool(predicate(caller_id, row))


def check_insert(caller_id: Optional[str], obj: Any) -> None:
    policy = POLICIES[type(obj)]
    if not _passes(policy.insert, caller_id, _pending_row(obj)):
        _deny(obj.__tablename__, "insert", caller_id)


def check_update(db: Session, caller_id: Optional[str], obj: Any) -> None:
    policy = POLICIES[type(obj)]
    table = obj.__tablename__
    stored = _stored_row(db, obj)
    if not _passes(policy.update, caller_id, stored):
        _deny(table, "update", caller_id)

    assigned = _assigned_values(obj)
    changed = {key for key, value in assigned.items() if value != getattr(stored, key)}
    if changed & set(policy.immutable):
        _deny(table, "update", caller_id)

    new_row = SimpleNamespace(**{**vars(stored), **assigned})
    if not _passes(policy.update_check, caller_id, new_row):
        _deny(table, "update", caller_id)


def check_delete(db: Session, caller_id: Optional[str], obj: Any) -> None:
    policy = POLICIES[type(obj)]
    if not _passes(policy.delete, caller_id, _stored_row(db, obj)):
        _deny(obj.__tablename__, "delete", caller_id)


_POLICED_TABLES = frozenset(model.__tablename__ for model in POLICIES)


def _statement_kind(orm_execute_state: ORMExecuteState) -> str:
    if orm_execute_state.is_select:
        return "select"
    if orm_execute_state.is_insert:
        return "insert"
    if orm_execute_state.is_update:
        return "update"
    if orm_execute_state.is_delete:
        return "delete"
    return "execute"


def _policed_table_in(statement: Any) -> Optional[str]:
    """Name of a policed table the statement reads or writes, if any.

    Textual SQL cannot be inspected and counts as touching every table.
    """
    if isinstance(statement, TextClause):
        return "<text>"
    tables = find_tables(
        statement,
        check_columns=True,
        include_aliases=True,
        include_joins=True,
        include_selects=True,
        include_crud=True,
    )
    for table in tables:
        if getattr(table, "name", None) in _POLICED_TABLES:
            return table.name
    return None


@event.listens_for(Session, "do_orm_execute")
def _apply_row_policies(orm_execute_state: ORMExecuteState) -> None:
    session = orm_execute_state.session
    if not is_policed(session):
        return
    caller_id = session.info[CALLER_KEY]

    if not orm_execute_state.is_orm_statement:
        # Core statements against Table objects get no loader criteria and
        # no flush checks, so callers may not use them on policed tables.
        table = _policed_table_in(orm_execute_state.statement)
        if table is not None:
            _deny(table, _statement_kind(orm_execute_state), caller_id)
        return

    if orm_execute_state.is_select:
        # Relationship loads inherit the criteria from the parent query, and
        # column loads only refresh rows that were already visible.
        if orm_execute_state.is_column_load or orm_execute_state.is_relationship_load:
            return
        options = []
        for model, policy in POLICIES.items():
            if caller_id is None or policy.select is None:
                criteria = false()
            elif policy.select is anyone:
                continue
            else:
                criteria = policy.select(caller_id, model)
            options.append(with_loader_criteria(model, criteria, include_aliases=True))
        if options:
            orm_execute_state.statement = orm_execute_state.statement.options(*options)
    elif orm_execute_state.is_insert or orm_execute_state.is_update or orm_execute_state.is_delete:
        # Bulk statements would skip the per-row checks below
        mapper = orm_execute_state.bind_mapper
        if mapper is not None and mapper.class_ in POLICIES:
            _deny(mapper.class_.__tablename__, _statement_kind(orm_execute_state), caller_id)


@event.listens_for(Session, "before_flush")
def _check_row_policies(session: Session, flush_context, instances) -> None:
    if not is_policed(session):
        return
    caller_id = session.info[CALLER_KEY]

    for obj in list(session.new):
        if type(obj) in POLICIES:
            check_insert(caller_id, obj)
    for obj in list(session.dirty):
        if type(obj) in POLICIES and session.is_modified(obj, include_collections=False):
            check_update(session, caller_id, obj)
    for obj in list(session.deleted):
        if type(obj) in POLICIES:
            check_delete(session, caller_id, obj)


__all__ = [
    "CALLER_KEY",
    "POLICIES",
    "TablePolicy",
    "anyone",
    "owned_by",
    "participant_of",
    "status_in",
    "all_of",
    "bind_caller",
    "is_policed",
    "caller_session",
    "check_insert",
    "check_update",
    "check_delete",
]
