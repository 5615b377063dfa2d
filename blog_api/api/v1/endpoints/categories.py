import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from blog_api.config.database import get_db
from blog_api.core.permissions import require_superadmin
from blog_api.models.category import BlogCategory
from blog_api.models.user import User
from blog_api.schemas.category import CategoryCreate, CategoryResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[CategoryResponse])
def get_categories(db: Session = Depends(get_db)):
    return db.query(BlogCategory).order_by(BlogCategory.name.asc()).all()


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    category_data: CategoryCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(
        require_superadmin(
            detail="Unauthorized: Only superadmins can create categories"
        )
    ),
):
    if BlogCategory.get_by_name(db, category_data.name):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Category with this name already exists",
        )

    category = BlogCategory(name=category_data.name)
    db.add(category)
    db.commit()
    db.refresh(category)

    logger.info("Blog category created: %s", category.name)
    return category


@router.delete("/{category_id}")
def delete_category(
    category_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(
        require_superadmin(
            detail="Unauthorized: Only superadmins can delete categories"
        )
    ),
):
    """
    Remove a category. Posts keep the category name they were saved with.
    """
    category = db.query(BlogCategory).filter(BlogCategory.id == category_id).first()
    if not category:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Category not found"
        )

    db.delete(category)
    db.commit()

    logger.info("Blog category deleted: %s", category_id)
    return {"message": "Category deleted successfully"}
