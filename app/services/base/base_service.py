"""
Base service class providing common functionality for all services.
"""

from typing import TypeVar, Generic, Optional, Dict, Any
from abc import ABC
from contextlib import contextmanager

from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.core.events.broadcaster import Broadcaster, get_broadcaster
from app.core.logging import get_logger, get_business_logger
from app.core.security import Actor, can_access_property
from app.models.property.property import Property
from app.repositories.base.base_repository import BaseRepository
from app.services.base.service_result import (
    ServiceResult,
    failure,
    ErrorCode,
    ErrorSeverity,
)


TModel = TypeVar("TModel")
TRepo = TypeVar("TRepo", bound=BaseRepository)


class TransactionAborted(Exception):
    """
    Raised inside ``transaction()`` to roll back and return a failed result.

    Example:
        try:
            with self.transaction():
                ...
                raise TransactionAborted(ServiceResult.not_found("Bed"))
        except TransactionAborted as aborted:
            return aborted.result
    """

    def __init__(self, result: ServiceResult):
        self.result = result
        super().__init__(result.message)


class BaseService(ABC, Generic[TModel, TRepo]):
    """
    Base service with common behaviors:
    - Shared logger, business event logger and db session
    - Consistent error handling via ServiceResult
    - Transaction management utilities
    - Property access checks for the acting user
    """

    def __init__(
        self,
        repository: TRepo,
        db_session: Session,
        broadcaster: Optional[Broadcaster] = None,
    ):
        """
        Initialize base service.

        Args:
            repository: Repository instance for data access
            db_session: SQLAlchemy database session
            broadcaster: Real-time channel notified after commits
        """
        self.repository: TRepo = repository
        self.db: Session = db_session
        self.broadcaster: Broadcaster = broadcaster or get_broadcaster()
        self._logger = get_logger(f"app.services.{self.__class__.__name__}").bind(service=self.__class__.__name__)
        self._events = get_business_logger()

    # -------------------------------------------------------------------------
    # Exception handling
    # -------------------------------------------------------------------------

    def _handle_exception(
        self,
        exception: Exception,
        operation: str,
        entity_ref: Optional[Any] = None,
        severity: ErrorSeverity = ErrorSeverity.CRITICAL,
    ) -> ServiceResult:
        """
        Log an unexpected exception and turn it into a failed result.

        A unique constraint violation means a concurrent request created the
        same floor, room, bed or tenant number first; it becomes ``CONFLICT``.
        Everything else is ``INTERNAL_ERROR``.
        """
        ref = str(entity_ref) if entity_ref is not None else None
        self._logger.error(
            f"Error during {operation}: {exception}",
            exc_info=True,
            extra={"operation": operation, "entity_ref": ref},
        )

        if isinstance(exception, IntegrityError):
            return failure(
                ErrorCode.CONFLICT,
                f"Failed to {operation}: conflicting record already exists",
                details={"entityRef": ref},
                severity=ErrorSeverity.ERROR,
            )
        return failure(
            ErrorCode.INTERNAL_ERROR,
            f"Failed to {operation}",
            details={"entityRef": ref},
            severity=severity,
        )

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    @contextmanager
    def transaction(self):
        """
        Run the block as one unit of work.

        Commits when the block finishes; rolls back and re-raises on
        ``TransactionAborted`` or any other exception, so entity changes and
        counter updates never commit separately.
        """
        try:
            yield self.db
            self.db.commit()
        except Exception:
            self._rollback()
            raise

    def _rollback(self) -> None:
        try:
            self.db.rollback()
        except SQLAlchemyError as e:
            # Never mask the original error
            self._logger.warning(f"Rollback failed: {e}")

    # -------------------------------------------------------------------------
    # Access control
    # -------------------------------------------------------------------------

    def _load_property(
        self,
        property_id: str,
        actor: Actor,
        resource_type: str = "Property",
    ) -> ServiceResult[Property]:
        """
        Load a property the actor may act on.

        Properties owned by someone else are reported exactly like missing
        ones.
        """
        prop = self.db.get(Property, property_id)
        if prop is None or not can_access_property(actor, prop):
            return ServiceResult.not_found(
                resource_type,
                property_id,
                message=f"{resource_type} not found or access denied",
            )
        return ServiceResult.success(prop)

    def _check_access(
        self,
        prop: Optional[Property],
        actor: Actor,
        resource_type: str,
        resource_id: Optional[str] = None,
    ) -> Optional[ServiceResult]:
        """Return a not-found failure when ``actor`` may not touch ``prop``."""
        if prop is None or not can_access_property(actor, prop):
            return ServiceResult.not_found(
                resource_type,
                resource_id,
                message=f"{resource_type} not found or access denied",
            )
        return None

    # -------------------------------------------------------------------------
    # Utility Methods
    # -------------------------------------------------------------------------

    def _log_operation(
        self,
        operation: str,
        entity_ref: Optional[Any] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Log service operation with standardized format."""
        context = {"entity_ref": str(entity_ref) if entity_ref else None}
        if extra:
            context.update(extra)

        self._logger.info(f"Operation: {operation}", extra=context)

    def _business_event(self, event: str, **data: Any) -> None:
        """Record a structured business event."""
        self._events.info(event, **data)
