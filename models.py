"""
ORM Models

三張表：
- settings: 固定 key 的 key/value 設定（含目前顯示指標）
- categories: 分類
- performers: 選手，屬於某個分類，並有分類內排序 order
"""
import enum

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from database import Base


class SettingKey(str, enum.Enum):
    BG_COLOR = "bg_color"
    TEXT_COLOR = "text_color"
    FONT_SIZE = "font_size"
    FONT_FAMILY = "font_family"
    CURRENT_DISPLAY = "current_display"  # 顯示比賽標題或選手
    TITLE = "title"
    SUBTITLE = "subtitle"
    DISPLAY_LOGO_LEFT = "display_logo_left"
    DISPLAY_LOGO_CENTER = "display_logo_center"
    DISPLAY_LOGO_RIGHT = "display_logo_right"
    CURRENT_CATEGORY = "current_category"  # 目前分類 id
    CURRENT_PERFORMER = "current_performer"  # 目前選手 id


class DisplayType(str, enum.Enum):
    TITLE = "title"
    PERFORMER = "performer"


# 指標 id 的空值
NO_SELECTION = "0"

DEFAULT_SETTINGS = {
    SettingKey.BG_COLOR: "#000000",
    SettingKey.TEXT_COLOR: "#FFFFFF",
    SettingKey.FONT_SIZE: "16px",
    SettingKey.FONT_FAMILY: "Arial, sans-serif",
    SettingKey.CURRENT_DISPLAY: DisplayType.TITLE.value,
    SettingKey.TITLE: "Competition Title",
    SettingKey.SUBTITLE: "Competition Subtitle",
    SettingKey.DISPLAY_LOGO_LEFT: "",
    SettingKey.DISPLAY_LOGO_CENTER: "",
    SettingKey.DISPLAY_LOGO_RIGHT: "",
    SettingKey.CURRENT_CATEGORY: NO_SELECTION,
    SettingKey.CURRENT_PERFORMER: NO_SELECTION,
}

# reset 時保留，避免清空設定時把現場畫面也一起清掉
POINTER_KEYS = (
    SettingKey.CURRENT_DISPLAY,
    SettingKey.CURRENT_CATEGORY,
    SettingKey.CURRENT_PERFORMER,
)


def get_default_setting_value(key: SettingKey) -> str:
    return DEFAULT_SETTINGS.get(key, "")


class Setting(Base):
    __tablename__ = "settings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    key = Column(String, unique=True, nullable=False)
    value = Column(String, nullable=False, default="")

    def __repr__(self):
        return f"<Setting(key='{self.key}', value='{self.value}')>"


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, unique=True, nullable=False)

    performers = relationship("Performer", back_populates="category")

    def __repr__(self):
        return f"<Category(id={self.id}, name='{self.name}')>"


class Performer(Base):
    __tablename__ = "performers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # 分類內的出場順序；允許重複，同順序時以 id 決定先後
    order = Column("order", Integer, nullable=False)
    name = Column(String, nullable=False)
    club = Column(String, nullable=False, default="")
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False)
    routine = Column(Text, nullable=False, default="")

    category = relationship("Category", back_populates="performers")

    def __repr__(self):
        return f"<Performer(id={self.id}, order={self.order}, name='{self.name}')>"
