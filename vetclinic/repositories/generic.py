"""Table-agnostic CRUD accessor.

One :class:`Repository` instance is built per model; everything entity specific
(joins, lookups by other columns, stock arithmetic) lives in free functions next
to the instance that take the repository as their first argument.
"""
import logging
from contextlib import contextmanager
from typing import Generic, Optional, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from vetclinic import db
from vetclinic.errors import DuplicateKeyError, NotFoundError, StorageError, ValidationError
from vetclinic.models.base_model import serialize_fields

logger = logging.getLogger(__name__)

ModelT = TypeVar('ModelT', bound=db.Model)

_UNIQUE_MARKERS = ('unique', 'duplicate')


def is_unique_violation(error: IntegrityError) -> bool:
    # sqlite: "UNIQUE constraint failed", postgres: "duplicate key value", mysql: "Duplicate entry"
    message = str(error.orig).lower()
    return any(marker in message for marker in _UNIQUE_MARKERS)


class Repository(Generic[ModelT]):
    def __init__(self, model: type, not_found_message: str = 'Registro no encontrado'):
        self.model = model
        self.not_found_message = not_found_message

    @property
    def table_name(self) -> str:
        return self.model.__tablename__

    def __repr__(self):
        return f'<Repository {self.table_name}>'

    @contextmanager
    def storage_guard(self, action: str):
        """Roll back and translate driver errors raised inside the block."""
        try:
            yield
        except IntegrityError as e:
            db.session.rollback()
            if is_unique_violation(e):
                logger.info(f"Duplicate key on {self.table_name} during {action}: {e.orig}")
                raise DuplicateKeyError(mensaje=str(e.orig)) from e
            logger.error(f"Integrity error on {self.table_name} during {action}: {e.orig}")
            raise StorageError(mensaje=str(e.orig)) from e
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Storage error on {self.table_name} during {action}: {e}")
            raise StorageError(mensaje=str(e)) from e

    def get_all(self) -> list:
        with self.storage_guard('get_all'):
            return [record.to_dict() for record in self.model.query.all()]

    def get_by_id(self, record_id) -> Optional[dict]:
        with self.storage_guard('get_by_id'):
            record = db.session.get(self.model, record_id)
        return record.to_dict() if record is not None else None

    def create(self, fields: dict, commit: bool = True) -> dict:
        with self.storage_guard('create'):
            record = self.model(**fields)
            db.session.add(record)
            db.session.flush()
            record_id = record.id
            if commit:
                db.session.commit()
        return {'id': record_id, **serialize_fields(fields)}

    def update(self, record_id, fields: dict, commit: bool = True) -> dict:
        """Apply a partial update and echo ``id`` plus the submitted fields.

        The row is not read back, so columns absent from ``fields`` are not part
        of the result.
        """
        if not fields:
            raise ValidationError('Datos incompletos', 'Debes proporcionar al menos un campo a actualizar')
        with self.storage_guard('update'):
            affected = (self.model.query
                        .filter_by(id=record_id)
                        .update(fields, synchronize_session=False))
            if affected and commit:
                db.session.commit()
        if not affected:
            raise NotFoundError(self.not_found_message)
        return {'id': record_id, **serialize_fields(fields)}

    def delete(self, record_id, commit: bool = True) -> None:
        with self.storage_guard('delete'):
            affected = (self.model.query
                        .filter_by(id=record_id)
                        .delete(synchronize_session=False))
            if affected and commit:
                db.session.commit()
        if not affected:
            raise NotFoundError(self.not_found_message)


def commit_transaction(action: str) -> None:
    """Commit writes staged with ``commit=False``, rolling back on failure."""
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Error al confirmar {action}: {e}")
        raise StorageError(mensaje=str(e)) from e
