"""
Category API Endpoints

刪除分類會連同分類內的選手一起刪除
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
import logging

from database import get_db
from schemas import CategoryCreate, CategoryResponse, MessageResponse
from core.exceptions import DuplicateCategoryName, MissingField
from services import category_service

router = APIRouter(prefix="/api/categories", tags=["categories"])
logger = logging.getLogger(__name__)


@router.get("", response_model=List[CategoryResponse])
def get_categories(db: Session = Depends(get_db)):
    try:
        return category_service.list_categories(db)
    except Exception as e:
        logger.error(f"Failed to retrieve categories: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to retrieve categories")


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(category_id: int, db: Session = Depends(get_db)):
    category = category_service.get_category(db, category_id)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.post("", response_model=CategoryResponse, status_code=201)
def create_category(category_data: CategoryCreate, db: Session = Depends(get_db)):
    try:
        return category_service.create_category(db, category_data.name)

    except MissingField as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DuplicateCategoryName as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to create category: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create category")


@router.patch("/{category_id}", response_model=CategoryResponse)
def rename_category(category_id: int, category_data: CategoryCreate, db: Session = Depends(get_db)):
    try:
        category = category_service.rename_category(db, category_id, category_data.name)
        if not category:
            raise HTTPException(status_code=404, detail="Category not found")
        return category

    except HTTPException:
        raise
    except MissingField as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DuplicateCategoryName as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to update category: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update category")


@router.delete("/{category_id}", response_model=MessageResponse)
def delete_category(category_id: int, db: Session = Depends(get_db)):
    try:
        if not category_service.delete_category(db, category_id):
            raise HTTPException(status_code=404, detail="Category not found")
        return MessageResponse(message="Category deleted successfully")

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to delete category: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete category")
