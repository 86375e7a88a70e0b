"""
Pydantic schemas：API 的 request / response 格式

顯示畫面是 tagged union：依 displayType 分成 title 與 performer 兩種
"""
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from models import DisplayType


# ============ Settings ============

class SettingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    key: str
    value: str


class SettingUpdate(BaseModel):
    key: str = Field(..., min_length=1)
    value: Union[str, int, float]


class MessageResponse(BaseModel):
    message: str


# ============ Categories ============

class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


# ============ Performers ============

class PerformerCreate(BaseModel):
    # 不給 order 時排在分類最後
    order: Optional[int] = Field(default=None, ge=0)
    name: str = Field(..., min_length=1)
    club: str = Field(..., min_length=1)
    category_id: int
    routine: str = ""


class PerformerUpdate(BaseModel):
    order: int = Field(..., ge=0)
    name: str = Field(..., min_length=1)
    club: str = Field(..., min_length=1)
    category_id: int
    routine: str = ""


class PerformerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    order: int
    name: str
    club: str
    category_id: int
    routine: str


class ImportResponse(BaseModel):
    message: str
    categories: int
    performers: int


# ============ Display ============

class DisplaySettingsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    bg_color: str = Field(alias="bgColor")
    text_color: str = Field(alias="textColor")
    font_size: str = Field(alias="fontSize")
    font_family: str = Field(alias="fontFamily")
    display_type: DisplayType = Field(alias="displayType")
    display_logo_left: str = Field(alias="displayLogoLeft")
    display_logo_center: str = Field(alias="displayLogoCenter")
    display_logo_right: str = Field(alias="displayLogoRight")


class TitleDisplayResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    display_type: Literal[DisplayType.TITLE] = Field(default=DisplayType.TITLE, alias="displayType")
    title: str
    subtitle: str
    settings: DisplaySettingsResponse


class PerformerDisplayResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    display_type: Literal[DisplayType.PERFORMER] = Field(default=DisplayType.PERFORMER, alias="displayType")
    performer: PerformerResponse
    category: CategoryResponse
    settings: DisplaySettingsResponse


DisplayResponse = Annotated[
    Union[TitleDisplayResponse, PerformerDisplayResponse],
    Field(discriminator="display_type"),
]


class CurrentPerformerResponse(BaseModel):
    performer: PerformerResponse
    category: CategoryResponse


class DisplayTypeUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    display_type: str = Field(..., alias="displayType")


class CurrentPerformerUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    performer_id: int = Field(..., alias="performerId")


class StatusResponse(BaseModel):
    success: bool = True
    message: str
