"""
Base repository with standardized create, save and lookup operations and error handling.

Provides foundation for the SQLAlchemy-backed attendance repositories.
"""

import logging
from typing import Any, Generic, List, Optional, Type

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from attendance_app.core.exceptions import RepositoryError, ResourceNotFoundError
from attendance_app.models.base import ModelType

logger = logging.getLogger(__name__)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with standardized operations.

    Provides create, save and lookup operations with error handling
    for all domain repositories.
    """

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    # ==================== Create Operations ====================

    def create(self, entity: ModelType, commit: bool = True) -> ModelType:
        """
        Persist a new entity.

        Args:
            entity: Entity to create
            commit: Whether to commit immediately (otherwise flush only)

        Returns:
            Created entity
        """
        try:
            self.db.add(entity)
            if commit:
                self.db.commit()
                self.db.refresh(entity)
            else:
                self.db.flush()

            logger.debug(f"Created {self.model.__name__} with id: {entity.id}")
            return entity

        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(
                f"Create failed: {str(e)}",
                details={"model": self.model.__name__},
            ) from e

    def save(self, entity: ModelType, commit: bool = True) -> ModelType:
        """Persist changes made to an entity already attached to the session."""
        try:
            self.db.add(entity)
            if commit:
                self.db.commit()
            else:
                self.db.flush()
            return entity
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(
                f"Save failed: {str(e)}",
                details={"model": self.model.__name__, "id": getattr(entity, "id", None)},
            ) from e

    # ==================== Read Operations ====================

    def find_by_id(self, id: Any) -> Optional[ModelType]:
        """Find entity by primary key, or None."""
        try:
            return self.db.get(self.model, id)
        except SQLAlchemyError as e:
            raise RepositoryError(f"Find by id failed: {str(e)}") from e

    def get_by_id(self, id: Any) -> ModelType:
        """
        Get entity by primary key.

        Raises:
            ResourceNotFoundError: If no entity has that id
        """
        entity = self.find_by_id(id)
        if entity is None:
            raise ResourceNotFoundError(self.model.__name__, str(id))
        return entity

    def find_all(self) -> List[ModelType]:
        """Return every entity of this model."""
        try:
            return list(self.db.scalars(select(self.model)).all())
        except SQLAlchemyError as e:
            raise RepositoryError(f"Find all failed: {str(e)}") from e
