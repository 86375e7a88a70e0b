"""
設定服務：固定 key 的 key/value 設定

規則：
- key 集合是封閉的（SettingKey），每個 key 都有預設值
- 首次啟動時補上預設值，既有值不覆蓋
- reset 會清空並重新寫入預設值，但保留目前顯示指標
"""
from typing import Dict, List, Union
import logging

from sqlalchemy.orm import Session

from models import (
    DEFAULT_SETTINGS,
    POINTER_KEYS,
    Setting,
    SettingKey,
    get_default_setting_value,
)
from core.exceptions import InvalidSettingKey, SettingNotFound
from database import transactional

logger = logging.getLogger(__name__)


def parse_setting_key(key: Union[str, SettingKey]) -> SettingKey:
    try:
        return SettingKey(key)
    except ValueError:
        raise InvalidSettingKey(key)


def format_setting_value(value: Union[str, int, float]) -> str:
    """數字存成字串；整數值的 float 去掉小數點，例如 48.0 存成 48"""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def get_all_settings(db: Session) -> List[Setting]:
    return db.query(Setting).order_by(Setting.id).all()


def get_settings_map(db: Session) -> Dict[str, str]:
    """
    取得所有設定的 dict（缺少的 key 以預設值補上）
    """
    values = {key.value: default for key, default in DEFAULT_SETTINGS.items()}
    for setting in get_all_settings(db):
        values[setting.key] = setting.value
    return values


def get_setting_value(db: Session, key: SettingKey) -> str:
    key = parse_setting_key(key)
    setting = db.query(Setting).filter(Setting.key == key.value).first()
    return setting.value if setting else get_default_setting_value(key)


def write_value(db: Session, key: SettingKey, value: str) -> Setting:
    """
    寫入設定值（upsert），不 commit

    給其他 transaction 內部使用，例如顯示指標的更新
    """
    setting = db.query(Setting).filter(Setting.key == key.value).first()
    if setting is None:
        setting = Setting(key=key.value, value=value)
        db.add(setting)
    else:
        setting.value = value
    db.flush()
    return setting


@transactional
def set_setting(db: Session, key: Union[str, SettingKey], value: Union[str, int, float]) -> Setting:
    """
    更新單一設定值

    異常：
        InvalidSettingKey: key 不在 SettingKey 內
        SettingNotFound: key 尚未初始化
    """
    key = parse_setting_key(key)
    setting = db.query(Setting).filter(Setting.key == key.value).first()
    if setting is None:
        raise SettingNotFound(key.value)

    setting.value = format_setting_value(value)
    logger.info(f"Setting {key.value} updated to {setting.value!r}")
    return setting


def initialize_settings(db: Session) -> None:
    """補上缺少的預設設定值"""
    existing = {row.key for row in db.query(Setting.key).all()}
    missing = [key for key in SettingKey if key.value not in existing]
    for key in missing:
        db.add(Setting(key=key.value, value=get_default_setting_value(key)))
    db.commit()

    if missing:
        logger.info(f"Seeded {len(missing)} default settings")


@transactional
def reset_settings(db: Session) -> List[Setting]:
    """
    重設所有設定為預設值

    目前顯示指標（current_display / current_category / current_performer）
    會被保留
    """
    preserved = {
        row.key: row.value
        for row in db.query(Setting).filter(
            Setting.key.in_([key.value for key in POINTER_KEYS])
        ).all()
    }

    db.query(Setting).delete()
    db.flush()

    for key in SettingKey:
        db.add(Setting(key=key.value, value=preserved.get(key.value, get_default_setting_value(key))))
    db.flush()

    logger.warning("Settings reset to default values")
    return get_all_settings(db)
