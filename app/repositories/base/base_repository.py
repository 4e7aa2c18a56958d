# app/repositories/base/base_repository.py
"""
Base repository with common CRUD operations and utilities.

Repositories never commit on their own by default; services own the
transaction boundary.
"""

from typing import TypeVar, Generic, Type, Optional, List, Dict, Any

from sqlalchemy import and_, func, select
from sqlalchemy.orm import Session, joinedload

from app.models.base.base_model import BaseModel

T = TypeVar('T', bound=BaseModel)


class BaseRepository(Generic[T]):
    """
    Base repository providing common database operations.

    Features:
    - CRUD operations
    - Query building and filtering
    - Row locking for check-then-act sequences
    """

    def __init__(self, model: Type[T], session: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            session: Database session
        """
        self.model = model
        self.session = session

    # ============================================================================
    # CREATE OPERATIONS
    # ============================================================================

    def create(
        self,
        data: Dict[str, Any],
        commit: bool = False,
        flush: bool = True
    ) -> T:
        """
        Create a new entity.

        Args:
            data: Entity data
            commit: Whether to commit transaction
            flush: Whether to flush session

        Returns:
            Created entity

        Raises:
            IntegrityError: If unique constraint violated
        """
        entity = self.model(**data)
        self.session.add(entity)

        if flush:
            self.session.flush()
        if commit:
            self.session.commit()
            self.session.refresh(entity)

        return entity

    # ============================================================================
    # READ OPERATIONS
    # ============================================================================

    def find_by_id(
        self,
        id: str,
        load_relationships: Optional[List[str]] = None,
        for_update: bool = False,
    ) -> Optional[T]:
        """
        Find entity by ID.

        Args:
            id: Entity ID
            load_relationships: List of relationships to eager load
            for_update: Lock the row until the transaction ends

        Returns:
            Entity or None if not found
        """
        query = select(self.model).where(self.model.id == id)

        if load_relationships:
            for rel in load_relationships:
                query = query.options(joinedload(getattr(self.model, rel)))

        if for_update:
            # Refresh an instance already in the identity map with the locked row
            query = query.with_for_update().execution_options(populate_existing=True)

        result = self.session.execute(query)
        return result.unique().scalar_one_or_none()

    def _conditions(self, filters: Dict[str, Any]) -> List[Any]:
        conditions = []
        for field, value in filters.items():
            if hasattr(self.model, field):
                column = getattr(self.model, field)
                if isinstance(value, (list, tuple, set)):
                    conditions.append(column.in_(list(value)))
                elif value is None:
                    conditions.append(column.is_(None))
                else:
                    conditions.append(column == value)
        return conditions

    def find_by_criteria(
        self,
        filters: Dict[str, Any],
        order_by: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None
    ) -> List[T]:
        """
        Find entities matching criteria.

        Args:
            filters: Filter criteria (field: value pairs); list values become IN
            order_by: Column to order by
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of matching entities
        """
        query = select(self.model)

        conditions = self._conditions(filters)
        if conditions:
            query = query.where(and_(*conditions))

        if order_by:
            order_column = getattr(self.model, order_by, None)
            if order_column is not None:
                query = query.order_by(order_column)

        if limit:
            query = query.limit(limit)
        if offset:
            query = query.offset(offset)

        result = self.session.execute(query)
        return list(result.scalars().all())

    def find_one(self, filters: Dict[str, Any]) -> Optional[T]:
        """Find the first entity matching criteria."""
        found = self.find_by_criteria(filters, limit=1)
        return found[0] if found else None

    def exists(self, filters: Dict[str, Any], exclude_id: Optional[str] = None) -> bool:
        """
        Check if entity exists matching criteria.

        Args:
            filters: Filter criteria
            exclude_id: Entity to leave out (for uniqueness checks on update)

        Returns:
            True if exists, False otherwise
        """
        query = select(func.count(self.model.id))

        conditions = self._conditions(filters)
        if exclude_id is not None:
            conditions.append(self.model.id != exclude_id)
        if conditions:
            query = query.where(and_(*conditions))

        return self.session.execute(query).scalar() > 0

    def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        """
        Count entities matching criteria.

        Args:
            filters: Filter criteria

        Returns:
            Count of matching entities
        """
        query = select(func.count(self.model.id))

        conditions = self._conditions(filters or {})
        if conditions:
            query = query.where(and_(*conditions))

        return self.session.execute(query).scalar()

    # ============================================================================
    # UPDATE OPERATIONS
    # ============================================================================

    def update(
        self,
        entity: T,
        data: Dict[str, Any],
        flush: bool = True
    ) -> T:
        """
        Apply ``data`` to an entity.

        Args:
            entity: Loaded entity
            data: Update data; unknown keys are ignored
            flush: Whether to flush session

        Returns:
            Updated entity
        """
        for key, value in data.items():
            if hasattr(entity, key):
                setattr(entity, key, value)

        if flush:
            self.session.flush()

        return entity

    # ============================================================================
    # DELETE OPERATIONS
    # ============================================================================

    def delete(self, entity: T, flush: bool = True) -> None:
        """
        Hard delete an entity (ORM cascades apply).

        Args:
            entity: Loaded entity
            flush: Whether to flush session
        """
        self.session.delete(entity)
        if flush:
            self.session.flush()

    def flush(self):
        """Flush session."""
        self.session.flush()

    def refresh(self, entity: T):
        """Refresh entity from database."""
        self.session.refresh(entity)
