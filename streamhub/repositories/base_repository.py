from typing import Generic, TypeVar, Type, Optional, Any
from sqlalchemy.orm import Session, Query
from sqlalchemy import asc, cast, desc, func, literal, select
from sqlalchemy.dialects.postgresql import JSONB
from streamhub.db import Base
from streamhub.services.filter_compiler import CONTAINS, QueryDescriptor

ModelType = TypeVar("ModelType", bound=Base)


def json_array_contains(column, value, dialect_name: str):
    """Case-sensitive element membership test for a JSON array column.

    PostgreSQL uses jsonb containment; SQLite expands the array with
    ``json_each`` and compares each element.
    """
    if dialect_name == "postgresql":
        return cast(column, JSONB).contains([value])
    elements = func.json_each(column).table_valued("value")
    return select(literal(1)).select_from(elements).where(elements.c.value == value).exists()


class BaseRepository(Generic[ModelType]):
    """Base repository with common read operations"""

    def __init__(self, model: Type[ModelType], db: Session):
        self.model = model
        self.db = db

    @property
    def dialect_name(self) -> str:
        return self.db.get_bind().dialect.name

    def get(self, id: Any) -> Optional[ModelType]:
        """Get by ID"""
        return self.db.query(self.model).filter(self.model.id == id).first()

    def get_active(self, id: Any) -> Optional[ModelType]:
        """Get by ID, ignoring deactivated rows"""
        return self.db.query(self.model).filter(
            self.model.id == id,
            self.model.is_active == True,  # noqa: E712
        ).first()

    def exists(self, **kwargs) -> bool:
        """Check if object exists"""
        return self.db.query(self.model).filter_by(**kwargs).first() is not None

    def filtered_query(self, descriptor: QueryDescriptor) -> Query:
        """Base filter + requested predicates, without ordering"""
        query = self.db.query(self.model)
        for column, value in descriptor.base_filter.items():
            query = query.filter(getattr(self.model, column) == value)
        for predicate in descriptor.predicates:
            attr = getattr(self.model, predicate.column)
            if predicate.kind == CONTAINS:
                query = query.filter(json_array_contains(attr, predicate.value, self.dialect_name))
            else:
                query = query.filter(attr == predicate.value)
        return query

    def order(self, query: Query, descriptor: QueryDescriptor) -> Query:
        clauses = []
        for column, descending in descriptor.ordering:
            attr = getattr(self.model, column)
            clauses.append(desc(attr) if descending else asc(attr))
        return query.order_by(*clauses)

    def query_for(self, descriptor: QueryDescriptor) -> Query:
        """Ordered candidate query for a compiled descriptor"""
        return self.order(self.filtered_query(descriptor), descriptor)
