"""
Display API Endpoints

職責：
1. 公開畫面讀取目前內容（標題 或 選手）
2. 控制台：下一位、指定選手、切換分類、切換顯示模式

所有狀態轉換都在 DisplayManager，這裡只負責轉換格式與錯誤碼
"""
from typing import Union

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
import logging

from database import get_db
from schemas import (
    CategoryResponse,
    CurrentPerformerResponse,
    CurrentPerformerUpdate,
    DisplayResponse,
    DisplaySettingsResponse,
    DisplayTypeUpdate,
    PerformerDisplayResponse,
    PerformerResponse,
    StatusResponse,
    TitleDisplayResponse,
)
from core.display_manager import DisplayManager
from core.display_state import DisplaySettings, PerformerView
from core.exceptions import InvalidDisplayType, NotFound

router = APIRouter(prefix="/api/display", tags=["display"])
logger = logging.getLogger(__name__)


def _settings_response(settings: DisplaySettings) -> DisplaySettingsResponse:
    return DisplaySettingsResponse(
        bg_color=settings.bg_color,
        text_color=settings.text_color,
        font_size=settings.font_size,
        font_family=settings.font_family,
        display_type=settings.display_type,
        display_logo_left=settings.display_logo_left,
        display_logo_center=settings.display_logo_center,
        display_logo_right=settings.display_logo_right,
    )


def _current_performer_response(performer, category) -> CurrentPerformerResponse:
    return CurrentPerformerResponse(
        performer=PerformerResponse.model_validate(performer),
        category=CategoryResponse.model_validate(category),
    )


@router.get("", response_model=DisplayResponse)
def get_display(db: Session = Depends(get_db)) -> Union[TitleDisplayResponse, PerformerDisplayResponse]:
    """
    取得公開畫面內容

    返回（依 displayType 區分）：
        - title: title, subtitle, settings
        - performer: performer, category, settings
    """
    try:
        view = DisplayManager.get_current_view(db)

        if isinstance(view, PerformerView):
            return PerformerDisplayResponse(
                performer=PerformerResponse.model_validate(view.performer),
                category=CategoryResponse.model_validate(view.category),
                settings=_settings_response(view.settings),
            )

        return TitleDisplayResponse(
            title=view.title,
            subtitle=view.subtitle,
            settings=_settings_response(view.settings),
        )

    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to retrieve display settings: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to retrieve display settings")


@router.post("/next-performer", response_model=CurrentPerformerResponse)
def advance_to_next_performer(db: Session = Depends(get_db)):
    """
    切換到同分類的下一位選手

    已經是最後一位時返回 404，目前選手不變
    """
    try:
        performer, category = DisplayManager.advance(db)
        return _current_performer_response(performer, category)

    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to set next performer: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to set next performer")


@router.post("/current-performer", response_model=CurrentPerformerResponse)
def override_current_performer(data: CurrentPerformerUpdate, db: Session = Depends(get_db)):
    """直接指定目前選手（分類跟著選手的分類）"""
    try:
        performer, category = DisplayManager.override_current_performer(db, data.performer_id)
        return _current_performer_response(performer, category)

    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to set current performer: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to set current performer")


@router.post("/category/{category_id}", response_model=CurrentPerformerResponse)
def change_category(category_id: int, db: Session = Depends(get_db)):
    """切換分類，從該分類第一位選手開始"""
    try:
        performer, category = DisplayManager.set_category(db, category_id)
        return _current_performer_response(performer, category)

    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to set category: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to set category")


@router.post("/type", response_model=StatusResponse)
def change_display_type(data: DisplayTypeUpdate, db: Session = Depends(get_db)):
    try:
        mode = DisplayManager.switch_display_type(db, data.display_type)
        return StatusResponse(message=f"Display type changed to {mode.value}")

    except InvalidDisplayType as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to change display type: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to change display type")
