"""
Generic Repository - Data Access Layer
"""
from typing import Generic, List, Optional, Type, TypeVar

from sqlalchemy.orm import Session

from order_fulfillment.database import Base

ModelT = TypeVar("ModelT", bound=Base)


class Repository(Generic[ModelT]):
    """
    CRUD operations shared by every entity repository
    
    add/update/delete commit immediately. Callers that need several
    changes to land together (the fulfillment engine) work on the
    session directly and commit once.
    """
    
    model: Type[ModelT]
    
    def __init__(self, db: Session):
        self.db = db
    
    def get(self, entity_id: int) -> Optional[ModelT]:
        """Get entity by ID"""
        return self.db.query(self.model).filter(self.model.id == entity_id).first()
    
    def list_all(self, skip: int = 0, limit: Optional[int] = None) -> List[ModelT]:
        """Get all entities ordered by ID"""
        query = self.db.query(self.model).order_by(self.model.id).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return query.all()
    
    def add(self, entity: ModelT) -> ModelT:
        """Insert a new entity"""
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity
    
    def update(self, entity: ModelT) -> ModelT:
        """Persist changes made to an entity"""
        entity = self.db.merge(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity
    
    def delete(self, entity_id: int) -> bool:
        """Delete entity by ID"""
        entity = self.get(entity_id)
        if not entity:
            return False
        
        self.db.delete(entity)
        self.db.commit()
        return True
    
    def count(self) -> int:
        """Get total count of entities"""
        return self.db.query(self.model).count()
