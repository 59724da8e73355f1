"""
Base repository providing common CRUD operations.
"""

from typing import Generic, List, Optional, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Generic base repository providing common CRUD operations.

    Writes commit immediately and refresh the instance, so callers always
    get back what the database stored.
    """

    def __init__(self, db: Session, model: Type[T]):
        self.db = db
        self.model = model

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    def _query(self):
        return self.db.query(self.model)

    def create(self, obj: T) -> T:
        self.db.add(obj)
        self._commit()
        self.db.refresh(obj)
        return obj

    def get_by_id(self, id: int) -> Optional[T]:
        return self._query().filter(self.model.id == id).first()

    def get_all(self, limit: Optional[int] = None, offset: int = 0) -> List[T]:
        """
        Retrieve all records ordered by primary key.

        Args:
            limit: Maximum number of records to return
            offset: Number of records to skip
        """
        query = self._query().order_by(self.model.id)
        if offset:
            query = query.offset(offset)
        if limit:
            query = query.limit(limit)
        return query.all()

    def update(self, obj: T) -> T:
        self.db.add(obj)
        self._commit()
        self.db.refresh(obj)
        return obj

    def delete(self, obj: T) -> T:
        """
        Delete a record and return it.

        The instance is detached afterwards but keeps its loaded attributes,
        so it can still be serialized in the response.
        """
        self.db.delete(obj)
        self._commit()
        return obj
