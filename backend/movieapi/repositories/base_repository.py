from typing import Generic, TypeVar, Type, Optional, Any, Dict
from sqlalchemy.orm import Session
from movieapi.db import Base

ModelType = TypeVar("ModelType", bound=Base)

class BaseRepository(Generic[ModelType]):
    """Base repository with common CRUD operations"""

    def __init__(self, model: Type[ModelType], db: Session):
        self.model = model
        self.db = db

    def get(self, id: Any) -> Optional[ModelType]:
        """Get by primary key"""
        return self.db.get(self.model, id)

    def create(self, obj_in: Dict[str, Any]) -> ModelType:
        """Create new object"""
        db_obj = self.model(**obj_in)
        return self.add(db_obj)

    def add(self, db_obj: ModelType) -> ModelType:
        """Persist an already built object"""
        self.db.add(db_obj)
        self.db.commit()
        self.db.refresh(db_obj)
        return db_obj

    def update(self, db_obj: ModelType, obj_in: Dict[str, Any]) -> ModelType:
        """Update object"""
        for field, value in obj_in.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)
        self.db.commit()
        self.db.refresh(db_obj)
        return db_obj

    def delete(self, id: Any) -> bool:
        """Delete by primary key"""
        obj = self.get(id)
        if obj:
            self.db.delete(obj)
            self.db.commit()
            return True
        return False

    def exists(self, **kwargs) -> bool:
        """Check if object exists"""
        return self.db.query(self.model).filter_by(**kwargs).first() is not None
