"""
顯示狀態：目前畫面要顯示什麼

DisplayPointer 是 (mode, current_category_id, current_performer_id) 三元組，
持久化在 settings 表的三個 key，但程式只透過 load_pointer / save_pointer 存取。

畫面內容是兩種之一（tagged union，以 mode 區分）：
- TitleView: 比賽標題 + 副標題
- PerformerView: 目前選手 + 所屬分類
"""
from dataclasses import dataclass, replace
from typing import Dict, Union

from sqlalchemy.orm import Session

from models import Category, DisplayType, NO_SELECTION, Performer, SettingKey
from services import settings_service


@dataclass(frozen=True)
class DisplayPointer:
    mode: DisplayType = DisplayType.TITLE
    category_id: int = 0
    performer_id: int = 0

    def point_at(self, performer: Performer) -> "DisplayPointer":
        """指向某位選手，分類跟著選手走"""
        return replace(self, category_id=performer.category_id, performer_id=performer.id)

    def without_performer(self) -> "DisplayPointer":
        return replace(self, performer_id=0)

    def with_mode(self, mode: DisplayType) -> "DisplayPointer":
        return replace(self, mode=mode)


def parse_display_type(value: str) -> DisplayType:
    """無法辨識的值一律視為 title"""
    try:
        return DisplayType(value)
    except ValueError:
        return DisplayType.TITLE


def _parse_id(value: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def pointer_from_settings(values: Dict[str, str]) -> DisplayPointer:
    return DisplayPointer(
        mode=parse_display_type(values.get(SettingKey.CURRENT_DISPLAY.value)),
        category_id=_parse_id(values.get(SettingKey.CURRENT_CATEGORY.value)),
        performer_id=_parse_id(values.get(SettingKey.CURRENT_PERFORMER.value)),
    )


def load_pointer(db: Session) -> DisplayPointer:
    return pointer_from_settings(settings_service.get_settings_map(db))


def save_pointer(db: Session, pointer: DisplayPointer) -> DisplayPointer:
    """
    寫入顯示指標（不 commit，由呼叫端的 transaction 負責）
    """
    settings_service.write_value(db, SettingKey.CURRENT_DISPLAY, pointer.mode.value)
    settings_service.write_value(
        db, SettingKey.CURRENT_CATEGORY, str(pointer.category_id) if pointer.category_id else NO_SELECTION
    )
    settings_service.write_value(
        db, SettingKey.CURRENT_PERFORMER, str(pointer.performer_id) if pointer.performer_id else NO_SELECTION
    )
    return pointer


@dataclass
class DisplaySettings:
    bg_color: str
    text_color: str
    font_size: str
    font_family: str
    display_type: DisplayType
    display_logo_left: str
    display_logo_center: str
    display_logo_right: str

    @classmethod
    def from_settings(cls, values: Dict[str, str]) -> "DisplaySettings":
        return cls(
            bg_color=values[SettingKey.BG_COLOR.value],
            text_color=values[SettingKey.TEXT_COLOR.value],
            font_size=values[SettingKey.FONT_SIZE.value],
            font_family=values[SettingKey.FONT_FAMILY.value],
            display_type=parse_display_type(values[SettingKey.CURRENT_DISPLAY.value]),
            display_logo_left=values[SettingKey.DISPLAY_LOGO_LEFT.value],
            display_logo_center=values[SettingKey.DISPLAY_LOGO_CENTER.value],
            display_logo_right=values[SettingKey.DISPLAY_LOGO_RIGHT.value],
        )


@dataclass
class TitleView:
    title: str
    subtitle: str
    settings: DisplaySettings


@dataclass
class PerformerView:
    performer: Performer
    category: Category
    settings: DisplaySettings


DisplayView = Union[TitleView, PerformerView]
