"""
Generic CRUD repository shared by the Team and Member repositories.

Every write goes through the same pipeline: normalise the payload, check
required fields, run the registered before-write hooks, then issue the
statement. Hooks are plain callables receiving the fields about to be
written; raising from a hook aborts the write before anything reaches the
datastore.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from roster.db import filters, schemas
from roster.db.errors import ConflictError, DatastoreError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

BeforeWriteHook = Callable[[Dict[str, Any]], None]


class CrudRepository:
    model = None

    def __init__(self, db: Session):
        self.db = db
        self.before_write: List[BeforeWriteHook] = []

    @property
    def name(self) -> str:
        return self.model.__name__

    def add_before_write(self, hook: BeforeWriteHook) -> None:
        self.before_write.append(hook)

    # -- helpers ---------------------------------------------------------

    @contextmanager
    def _datastore(self, action: str):
        try:
            yield
        except IntegrityError as e:
            self.db.rollback()
            logger.info("datastore_conflict: model=%s action=%s error=%s", self.name, action, e.orig)
            raise ConflictError(f"Cannot {action} {self.name}: {e.orig}") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("datastore_error: model=%s action=%s error=%s", self.name, action, e)
            raise DatastoreError(f"Failed to {action} {self.name}: {e}") from e

    def _writable_fields(self) -> List[str]:
        return [c.key for c in self.model.__table__.columns if c.key != 'id']

    def _normalize(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Map payload keys to attribute names and drop the immutable id."""
        values = {}
        for key, value in (data or {}).items():
            attr = filters.resolve_field(self.model, key)
            if attr == 'id':
                continue
            values[attr] = value
        return values

    def _check_required(self, record: Dict[str, Any], partial: bool = False) -> None:
        """A partial record only has the fields it carries checked."""
        missing = [
            f for f in self.model.required_fields
            if (f in record or not partial) and record.get(f) in (None, '')
        ]
        if missing:
            raise ValidationError(f"{self.name} is missing required field(s): {', '.join(missing)}")

    def _run_hooks(self, changes: Dict[str, Any]) -> None:
        for hook in self.before_write:
            hook(changes)

    def _sync_id_sequence(self) -> None:
        """Move the Postgres id sequence past ids that were inserted explicitly."""
        if self.db.get_bind().dialect.name != 'postgresql':
            return
        table = self.model.__tablename__
        self.db.execute(
            text(f"SELECT setval(pg_get_serial_sequence(:table, 'id'), (SELECT MAX(id) FROM {table}))"),
            {'table': table},
        )

    def _full_record(self, data: Dict[str, Any]) -> Dict[str, Any]:
        record = {f: None for f in self._writable_fields()}
        record.update(self._normalize(data))
        return record

    # -- reads -----------------------------------------------------------

    def get(self, record_id) -> Optional[Any]:
        """Return the row or None; used where a missing row is not an error."""
        with self._datastore("read"):
            instance = self.db.get(self.model, record_id)
        logger.debug("%s_lookup: id=%s found=%s", self.name.lower(), record_id, instance is not None)
        return instance

    def find_by_id(self, record_id):
        instance = self.get(record_id)
        if instance is None:
            raise NotFoundError(f"{self.name} with id {record_id} not found")
        return instance

    def exists(self, record_id) -> bool:
        return self.get(record_id) is not None

    def find_all(self, query_filter: Optional[schemas.Filter] = None) -> List[Any]:
        with self._datastore("list"):
            q = filters.apply_filter(self.db.query(self.model), self.model, query_filter)
            rows = q.all()
        logger.debug("%s_listed: count=%s", self.name.lower(), len(rows))
        return rows

    def find_one(self, query_filter: Optional[schemas.Filter] = None):
        single = (query_filter or schemas.Filter()).model_copy(update={'limit': 1})
        rows = self.find_all(single)
        if not rows:
            raise NotFoundError(f"No {self.name} matches the given filter")
        return rows[0]

    def count(self, where: Optional[Dict[str, Any]] = None) -> int:
        with self._datastore("count"):
            return self.db.query(self.model).filter(filters.build_condition(self.model, where)).count()

    # -- writes ----------------------------------------------------------

    def create(self, data: Dict[str, Any]):
        record = self._full_record(data)
        self._check_required(record)
        self._run_hooks(record)
        instance = self.model(**record)
        explicit_id = (data or {}).get('id') is not None
        if explicit_id:
            if self.get(data['id']) is not None:
                raise ConflictError(f"{self.name} with id {data['id']} already exists")
            instance.id = data['id']
        with self._datastore("create"):
            self.db.add(instance)
            if explicit_id:
                self.db.flush()
                self._sync_id_sequence()
            self.db.commit()
            self.db.refresh(instance)
        logger.info("%s_created: id=%s", self.name.lower(), instance.id)
        return instance

    def update(self, record_id, data: Dict[str, Any]):
        """Merge the given fields into an existing record."""
        instance = self.find_by_id(record_id)
        changes = self._normalize(data)
        self._check_required(changes, partial=True)
        self._run_hooks(changes)
        with self._datastore("update"):
            for key, value in changes.items():
                setattr(instance, key, value)
            self.db.commit()
            self.db.refresh(instance)
        logger.info("%s_updated: id=%s fields=%s", self.name.lower(), record_id, sorted(changes))
        return instance

    def replace(self, record_id, data: Dict[str, Any]):
        """Overwrite every non-id field; omitted optional fields become null."""
        instance = self.find_by_id(record_id)
        record = self._full_record(data)
        self._check_required(record)
        self._run_hooks(record)
        with self._datastore("replace"):
            for key, value in record.items():
                setattr(instance, key, value)
            self.db.commit()
            self.db.refresh(instance)
        logger.info("%s_replaced: id=%s", self.name.lower(), record_id)
        return instance

    def update_all(self, where: Optional[Dict[str, Any]], data: Dict[str, Any]) -> int:
        changes = self._normalize(data)
        self._check_required(changes, partial=True)
        condition = filters.build_condition(self.model, where)
        if not changes:
            return self.count(where)
        # A bulk payload carries one value per field, so hooks run once for
        # the whole statement.
        self._run_hooks(changes)
        with self._datastore("bulk update"):
            count = (
                self.db.query(self.model)
                .filter(condition)
                .update(changes, synchronize_session=False)
            )
            self.db.commit()
        logger.info("%s_bulk_updated: count=%s", self.name.lower(), count)
        return count

    def upsert_with_where(self, where: Optional[Dict[str, Any]], data: Dict[str, Any]):
        match = self.find_all(schemas.Filter(where=where, limit=1))
        if match:
            return self.update(match[0].id, data)
        seed = filters.equality_fields(self.model, where)
        return self.create({**seed, **(data or {})})

    def replace_or_create(self, data: Dict[str, Any]):
        record_id = (data or {}).get('id')
        if record_id is not None and self.exists(record_id):
            return self.replace(record_id, data)
        return self.create(data)

    def patch_or_create(self, data: Dict[str, Any]):
        record_id = (data or {}).get('id')
        if record_id is not None and self.exists(record_id):
            return self.update(record_id, data)
        return self.create(data)

    def delete(self, record_id) -> int:
        with self._datastore("delete"):
            count = (
                self.db.query(self.model)
                .filter(self.model.id == record_id)
                .delete(synchronize_session='fetch')
            )
            self.db.commit()
        logger.info("%s_deleted: id=%s count=%s", self.name.lower(), record_id, count)
        return count

    def delete_all(self, where: Optional[Dict[str, Any]] = None) -> int:
        condition = filters.build_condition(self.model, where)
        with self._datastore("bulk delete"):
            count = (
                self.db.query(self.model)
                .filter(condition)
                .delete(synchronize_session='fetch')
            )
            self.db.commit()
        logger.info("%s_bulk_deleted: count=%s", self.name.lower(), count)
        return count
