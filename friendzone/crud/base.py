"""Generic CRUD base class for SQLAlchemy models.

This is the whole data-access client: it forwards intents to the session
verbatim and never decides who may do what. Access is decided by the row
policies attached to the session (see ``friendzone.core.policies``).
"""

from __future__ import annotations

from typing import Any, Dict, Generic, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from friendzone.database import Base


ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
	"""Reusable CRUD helper for SQLAlchemy models.

	All methods operate on model instances and return database objects, not schemas.
	Failures roll the session back and propagate unchanged.
	"""

	def __init__(self, model: Type[ModelType]):
		self.model = model

	def _column(self, field_name: str):
		if not hasattr(self.model, field_name):
			raise AttributeError(f"Model '{self.model.__name__}' has no field '{field_name}'")
		return getattr(self.model, field_name)

	def _where(self, stmt, filters: Optional[Mapping[str, Any]], exclude: Optional[Mapping[str, Any]] = None):
		for field_name, value in (filters or {}).items():
			column = self._column(field_name)
			if isinstance(value, (list, tuple, set, frozenset)):
				stmt = stmt.where(column.in_(list(value)))
			else:
				stmt = stmt.where(column == value)
		for field_name, value in (exclude or {}).items():
			stmt = stmt.where(self._column(field_name) != value)
		return stmt

	# ----- Read -----
	def get(self, db: Session, id: Any) -> Optional[ModelType]:
		"""Get one record by primary key."""
		return db.get(self.model, id)

	def get_by_field(self, db: Session, field_name: str, value: Any) -> Optional[ModelType]:
		"""Get first record where given field equals value."""
		rows = self.select(db, filters={field_name: value}, limit=1)
		return rows[0] if rows else None

	def select(
		self,
		db: Session,
		*,
		filters: Optional[Mapping[str, Any]] = None,
		exclude: Optional[Mapping[str, Any]] = None,
		order_by: Optional[str] = None,
		descending: bool = False,
		skip: int = 0,
		limit: Optional[int] = None,
	) -> List[ModelType]:
		"""Select rows where each ``filters`` column equals its value.

		A list/tuple/set value matches any of its members; ``exclude`` columns
		must differ from their value.
		"""
		stmt = self._where(select(self.model), filters, exclude)
		if order_by:
			column = self._column(order_by)
			stmt = stmt.order_by(column.desc() if descending else column.asc())
		if skip:
			stmt = stmt.offset(skip)
		if limit is not None:
			stmt = stmt.limit(limit)
		return list(db.scalars(stmt).all())

	def count(self, db: Session, *, filters: Optional[Mapping[str, Any]] = None) -> int:
		"""Count rows matching ``filters``."""
		stmt = self._where(select(func.count()).select_from(self.model), filters)
		return db.scalar(stmt) or 0

	# ----- Write -----
	def _commit(self, db: Session, db_obj: Optional[ModelType] = None) -> None:
		"""Commit the unit of work; on any failure roll back and re-raise."""
		try:
			db.commit()
			if db_obj is not None:
				db.refresh(db_obj)
		except Exception:
			db.rollback()
			raise

	def create(self, db: Session, *, obj_in: Union[CreateSchemaType, Dict[str, Any]]) -> ModelType:
		"""Insert one row built from a Pydantic schema or dict."""
		values = obj_in.model_dump(exclude_unset=True) if isinstance(obj_in, BaseModel) else dict(obj_in)
		db_obj = self.model(**values)  # type: ignore[arg-type]
		db.add(db_obj)
		self._commit(db, db_obj)
		return db_obj

	def update(
		self,
		db: Session,
		*,
		db_obj: ModelType,
		obj_in: Union[UpdateSchemaType, Dict[str, Any]],
	) -> ModelType:
		"""Apply the set fields of ``obj_in`` to ``db_obj``."""
		changes = obj_in.model_dump(exclude_unset=True) if isinstance(obj_in, BaseModel) else dict(obj_in)
		for field_name, value in changes.items():
			self._column(field_name)
			setattr(db_obj, field_name, value)
		self._commit(db, db_obj)
		return db_obj

	def update_by_id(
		self,
		db: Session,
		*,
		id: Any,
		obj_in: Union[UpdateSchemaType, Dict[str, Any]],
	) -> Optional[ModelType]:
		"""Update the row with primary key ``id``; None if it is not visible."""
		db_obj = self.get(db, id)
		if db_obj is None:
			return None
		return self.update(db, db_obj=db_obj, obj_in=obj_in)

	def delete(self, db: Session, *, id: Any) -> Optional[ModelType]:
		"""Delete the row with primary key ``id``; returns it, or None if it is not visible."""
		db_obj = self.get(db, id)
		if db_obj is None:
			return None
		db.delete(db_obj)
		self._commit(db)
		return db_obj

	def delete_where(self, db: Session, *, filters: Mapping[str, Any]) -> int:
		"""Delete every visible row matching ``filters``; returns how many went."""
		rows = self.select(db, filters=filters)
		for row in rows:
			db.delete(row)
		if rows:
			self._commit(db)
		return len(rows)
