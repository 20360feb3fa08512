"""Table repository used by the SQL document store.

One instance per ORM model. Every write commits immediately: the store
has no multi-statement transactions, see SqlStore.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.orm import Session

from huddle.db.models import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Row access for a single table."""

    def __init__(self, model: type[ModelType]):
        self.model = model

    def get_by_id(self, db: Session, id: str) -> ModelType | None:
        return db.get(self.model, id)

    def list_by(
        self,
        db: Session,
        filters: dict[str, Any],
        limit: int | None = None,
        before_seq: int | None = None,
        descending: bool = False,
    ) -> list[ModelType]:
        """Rows whose columns equal filters, in seq order.

        A None filter value matches NULL (SQLAlchemy renders `col == None`
        as IS NULL).
        """
        stmt = select(self.model).where(
            *(getattr(self.model, column) == value for column, value in filters.items())
        )
        if before_seq is not None:
            stmt = stmt.where(self.model.seq < before_seq)
        stmt = stmt.order_by(self.model.seq.desc() if descending else self.model.seq)
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(db.scalars(stmt))

    def create(self, db: Session, values: dict[str, Any]) -> ModelType:
        row = self.model(**values)
        db.add(row)
        db.commit()
        db.refresh(row)
        return row

    def update(self, db: Session, row: ModelType, values: dict[str, Any]) -> ModelType:
        """Assign the given columns on a loaded row and commit.

        Keys that are not columns of the model are ignored.
        """
        for column, value in values.items():
            if hasattr(row, column):
                setattr(row, column, value)
        db.commit()
        db.refresh(row)
        return row

    def delete(self, db: Session, id: str) -> bool:
        """Delete by primary key. Returns False when no row had that id."""
        row = db.get(self.model, id)
        if row is None:
            return False
        db.delete(row)
        db.commit()
        return True
