from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from activity_planner.models import Category
from activity_planner.schemas import CategoryCreate, CategoryUpdate
from activity_planner.errors import ConflictError
from typing import List, Optional

def get_categories(db: Session) -> List[Category]:
    """Get all categories alphabetically"""
    return db.query(Category).order_by(Category.name.asc()).all()

def get_category(db: Session, category_id: int) -> Optional[Category]:
    """Get category by ID"""
    return db.query(Category).filter(Category.id == category_id).first()

def create_category(db: Session, category: CategoryCreate) -> Category:
    """Create a new category"""
    db_category = Category(**category.model_dump())
    db.add(db_category)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"Category '{category.name}' already exists")
    db.refresh(db_category)
    return db_category

def update_category(db: Session, category_id: int, data: CategoryUpdate) -> Optional[Category]:
    """Update the fields present in the payload"""
    db_category = get_category(db, category_id)
    if db_category:
        for key, value in data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(db_category, key, value)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ConflictError(f"Category '{data.name}' already exists")
        db.refresh(db_category)
    return db_category

def delete_category(db: Session, category_id: int) -> bool:
    """Delete category; its activities keep existing without a category"""
    db_category = get_category(db, category_id)
    if not db_category:
        return False
    db.delete(db_category)
    db.commit()
    return True
