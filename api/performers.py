"""
Performer API Endpoints

職責：
1. 選手 CRUD
2. 匯入 CSV（破壞性：取代所有選手與分類）
3. 匯出 CSV
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from fastapi.responses import Response
from sqlalchemy.orm import Session
import logging

from database import get_db
from schemas import (
    ImportResponse,
    MessageResponse,
    PerformerCreate,
    PerformerResponse,
    PerformerUpdate,
)
from core.exceptions import InvalidCategory, InvalidCsv, MissingField, PerformerNotFound
from services import csv_service, performer_service

router = APIRouter(prefix="/api/performers", tags=["performers"])
logger = logging.getLogger(__name__)

EXPORT_FILENAME = "performers.csv"


@router.get("", response_model=List[PerformerResponse])
def get_performers(
    category_id: Optional[int] = Query(default=None, alias="categoryId"),
    db: Session = Depends(get_db)
):
    """
    取得選手列表

    參數：
        categoryId: 只列出該分類的選手（依 order 排序）
    """
    try:
        if category_id is not None:
            return performer_service.list_performers_by_category(db, category_id)
        return performer_service.list_performers(db)
    except Exception as e:
        logger.error(f"Failed to retrieve performers: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to retrieve performers")


@router.get("/export")
def export_performers(db: Session = Depends(get_db)):
    """匯出所有選手為 CSV 檔"""
    try:
        rows = performer_service.export_performers(db)
        content = csv_service.serialize_performers_csv(rows)
    except Exception as e:
        logger.error(f"Failed to export performers: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to export performers")

    logger.info(f"Exported {len(rows)} performers")
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'}
    )


@router.post("/import", response_model=ImportResponse)
def import_performers(file: UploadFile = File(...), db: Session = Depends(get_db)):
    """
    匯入選手 CSV

    注意：
        會刪除所有既有的選手與分類，並把畫面切回 title 模式
    """
    raw = file.file.read()
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="CSV file must be UTF-8 encoded")

    try:
        rows = csv_service.parse_performers_csv(text)
        if not rows:
            raise InvalidCsv("CSV contains no valid performer rows")

        categories, performers = performer_service.import_performers(db, rows)
        return ImportResponse(
            message="Performers imported successfully",
            categories=categories,
            performers=performers
        )

    except InvalidCsv as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to import performers: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to import performers")


@router.get("/{performer_id}", response_model=PerformerResponse)
def get_performer(performer_id: int, db: Session = Depends(get_db)):
    performer = performer_service.get_performer(db, performer_id)
    if not performer:
        raise HTTPException(status_code=404, detail="Performer not found")
    return performer


@router.post("", response_model=PerformerResponse, status_code=201)
def create_performer(performer_data: PerformerCreate, db: Session = Depends(get_db)):
    try:
        return performer_service.create_performer(
            db,
            performer_data.order,
            performer_data.name,
            performer_data.club,
            performer_data.category_id,
            performer_data.routine
        )

    except MissingField as e:
        raise HTTPException(status_code=400, detail=str(e))
    except InvalidCategory:
        raise HTTPException(status_code=400, detail="Invalid category ID")
    except Exception as e:
        logger.error(f"Failed to create performer: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create performer")


@router.patch("/{performer_id}", response_model=PerformerResponse)
def update_performer(
    performer_id: int,
    performer_data: PerformerUpdate,
    db: Session = Depends(get_db)
):
    try:
        return performer_service.update_performer(
            db,
            performer_id,
            performer_data.order,
            performer_data.name,
            performer_data.club,
            performer_data.category_id,
            performer_data.routine
        )

    except MissingField as e:
        raise HTTPException(status_code=400, detail=str(e))
    except InvalidCategory:
        raise HTTPException(status_code=400, detail="Invalid category ID")
    except PerformerNotFound:
        raise HTTPException(status_code=404, detail="Performer not found")
    except Exception as e:
        logger.error(f"Failed to update performer: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update performer")


@router.delete("/{performer_id}", response_model=MessageResponse)
def delete_performer(performer_id: int, db: Session = Depends(get_db)):
    try:
        if not performer_service.delete_performer(db, performer_id):
            raise HTTPException(status_code=404, detail="Performer not found")
        return MessageResponse(message="Performer deleted successfully")

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to delete performer: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete performer")
