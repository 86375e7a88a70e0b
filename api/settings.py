"""
Settings API Endpoints

職責：
1. 查詢所有設定
2. 更新單一設定
3. 重設為預設值（保留目前顯示指標）
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
import logging

from database import get_db
from schemas import MessageResponse, SettingResponse, SettingUpdate
from core.exceptions import InvalidSettingKey, SettingNotFound
from services import settings_service

router = APIRouter(prefix="/api/settings", tags=["settings"])
logger = logging.getLogger(__name__)


@router.get("", response_model=List[SettingResponse])
def get_settings(db: Session = Depends(get_db)):
    try:
        return settings_service.get_all_settings(db)
    except Exception as e:
        logger.error(f"Failed to retrieve settings: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to retrieve settings")


@router.post("", response_model=SettingResponse)
def set_setting(setting_data: SettingUpdate, db: Session = Depends(get_db)):
    """
    更新單一設定

    異常對應：
    - key 不在固定清單內：400
    - key 尚未初始化：404
    """
    try:
        return settings_service.set_setting(db, setting_data.key, setting_data.value)

    except InvalidSettingKey as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SettingNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to update setting: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update setting")


@router.post("/reset", response_model=MessageResponse)
def reset_settings(db: Session = Depends(get_db)):
    try:
        settings_service.reset_settings(db)
        return MessageResponse(message="Settings reset to default values")
    except Exception as e:
        logger.error(f"Failed to reset settings: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to reset settings")
