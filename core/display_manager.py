"""
Display Manager：管理公開畫面的顯示狀態

職責：
1. 組出目前畫面（標題 或 選手）
2. 下一位選手
3. 直接指定目前選手
4. 切換分類（從分類第一位開始）
5. 切換顯示模式

狀態：
- mode: title | performer
- 指標: (current_category_id, current_performer_id)

「下一位」的規則：
    在同分類中，找 order 嚴格大於目前選手的最小 order（允許跳號與重複），
    不要求剛好 +1；沒有下一位時拋出 NoNextPerformer，不會繞回第一位
"""
from typing import Tuple, Union
import logging

from sqlalchemy.orm import Session

from models import Category, DisplayType, Performer, SettingKey
from core.display_state import (
    DisplaySettings,
    DisplayView,
    PerformerView,
    TitleView,
    load_pointer,
    pointer_from_settings,
    save_pointer,
)
from core.exceptions import (
    CategoryNotFound,
    InvalidDisplayType,
    NoNextPerformer,
    NoPerformersInCategory,
    PerformerNotFound,
    PerformerNotInCategory,
)
from services import settings_service
from services.category_service import get_category
from services.performer_service import get_performer, list_performers_by_category
from database import transactional

logger = logging.getLogger(__name__)


class DisplayManager:
    """公開畫面狀態管理器"""

    @staticmethod
    def get_current_view(db: Session) -> DisplayView:
        """
        取得目前畫面內容

        返回：
            PerformerView: mode 為 performer
            TitleView: mode 為 title（或任何無法辨識的值）

        異常：
            PerformerNotFound: 目前選手不存在（例如已被刪除）
            CategoryNotFound: 目前分類不存在
            PerformerNotInCategory: 目前選手不屬於目前分類
        """
        values = settings_service.get_settings_map(db)
        settings = DisplaySettings.from_settings(values)
        pointer = pointer_from_settings(values)

        if pointer.mode == DisplayType.PERFORMER:
            performer = get_performer(db, pointer.performer_id)
            if not performer:
                raise PerformerNotFound(pointer.performer_id)

            category = get_category(db, pointer.category_id)
            if not category:
                raise CategoryNotFound(pointer.category_id)

            if performer.category_id != category.id:
                raise PerformerNotInCategory(performer.id, category.id)

            return PerformerView(performer=performer, category=category, settings=settings)

        return TitleView(
            title=values[SettingKey.TITLE.value],
            subtitle=values[SettingKey.SUBTITLE.value],
            settings=settings,
        )

    @staticmethod
    @transactional
    def advance(db: Session) -> Tuple[Performer, Category]:
        """
        切換到同分類的下一位選手

        前置條件：
        1. 目前分類存在
        2. 目前選手存在且屬於目前分類

        異常：
            CategoryNotFound: 目前分類不存在
            PerformerNotFound: 目前選手不在目前分類內
            NoNextPerformer: 已經是最後一位（指標不變）
        """
        pointer = load_pointer(db)

        category = get_category(db, pointer.category_id)
        if not category:
            raise CategoryNotFound(pointer.category_id)

        performers = list_performers_by_category(db, category.id)
        current = next((p for p in performers if p.id == pointer.performer_id), None)
        if not current:
            raise PerformerNotFound(pointer.performer_id)

        # performers 已依 (order, id) 排序，第一個 order 較大的就是下一位
        next_performer = next((p for p in performers if p.order > current.order), None)
        if not next_performer:
            raise NoNextPerformer(category.id)

        save_pointer(db, pointer.point_at(next_performer))

        logger.info(
            f"Advanced from performer {current.id} (order {current.order}) "
            f"to {next_performer.id} (order {next_performer.order}) in category {category.id}"
        )
        return next_performer, category

    @staticmethod
    @transactional
    def override_current_performer(db: Session, performer_id: int) -> Tuple[Performer, Category]:
        """
        直接指定目前選手，分類指標跟著選手的分類更新

        異常：
            PerformerNotFound: 選手不存在
            CategoryNotFound: 選手的分類不存在
        """
        performer = get_performer(db, performer_id)
        if not performer:
            raise PerformerNotFound(performer_id)

        category = get_category(db, performer.category_id)
        if not category:
            raise CategoryNotFound(performer.category_id)

        save_pointer(db, load_pointer(db).point_at(performer))

        logger.info(f"Current performer set to {performer.id} (category {category.id})")
        return performer, category

    @staticmethod
    @transactional
    def set_category(db: Session, category_id: int) -> Tuple[Performer, Category]:
        """
        切換分類，並從該分類 order 最小的選手開始

        異常：
            CategoryNotFound: 分類不存在
            NoPerformersInCategory: 分類內沒有選手
        """
        category = get_category(db, category_id)
        if not category:
            raise CategoryNotFound(category_id)

        performers = list_performers_by_category(db, category_id)
        if not performers:
            raise NoPerformersInCategory(category_id)

        first = min(performers, key=lambda p: (p.order, p.id))
        save_pointer(db, load_pointer(db).point_at(first))

        logger.info(f"Category switched to {category.id}, starting with performer {first.id}")
        return first, category

    @staticmethod
    @transactional
    def switch_display_type(db: Session, display_type: Union[str, DisplayType]) -> DisplayType:
        """
        切換顯示模式（performer / title）

        異常：
            InvalidDisplayType: 不是 performer 或 title
        """
        try:
            mode = DisplayType(display_type)
        except ValueError:
            raise InvalidDisplayType(display_type)

        pointer = load_pointer(db)
        save_pointer(db, pointer.with_mode(mode))

        logger.info(f"Display type switched to {mode.value}")
        return mode
