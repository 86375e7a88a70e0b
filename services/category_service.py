"""
分類服務：categories 表的 CRUD

刪除分類會連同分類內的選手一起刪除，
如果目前畫面正指向這個分類，顯示指標會一併歸零並回到標題畫面
"""
from typing import List, Optional
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models import Category, Performer
from core.display_state import DisplayPointer, load_pointer, save_pointer
from core.exceptions import DuplicateCategoryName, MissingField
from database import transactional

logger = logging.getLogger(__name__)


def _clean_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise MissingField("Category name is required")
    return name


def list_categories(db: Session) -> List[Category]:
    return db.query(Category).order_by(Category.id).all()


def get_category(db: Session, category_id: int) -> Optional[Category]:
    return db.query(Category).filter(Category.id == category_id).first()


def get_category_by_name(db: Session, name: str) -> Optional[Category]:
    return db.query(Category).filter(Category.name == name).first()


def _flush_or_conflict(db: Session, name: str) -> None:
    try:
        db.flush()
    except IntegrityError as e:
        raise DuplicateCategoryName(name) from e


@transactional
def create_category(db: Session, name: str) -> Category:
    """
    新增分類

    異常：
        MissingField: 名稱空白
        DuplicateCategoryName: 名稱已存在
    """
    name = _clean_name(name)
    if get_category_by_name(db, name):
        raise DuplicateCategoryName(name)

    category = Category(name=name)
    db.add(category)
    _flush_or_conflict(db, name)

    logger.info(f"Created category {category.id} ({name})")
    return category


@transactional
def rename_category(db: Session, category_id: int, name: str) -> Optional[Category]:
    """
    修改分類名稱

    返回：
        更新後的 Category，找不到則為 None
    """
    name = _clean_name(name)
    category = get_category(db, category_id)
    if category is None:
        return None

    existing = get_category_by_name(db, name)
    if existing is not None and existing.id != category.id:
        raise DuplicateCategoryName(name)

    category.name = name
    _flush_or_conflict(db, name)

    logger.info(f"Renamed category {category.id} to {name}")
    return category


@transactional
def delete_category(db: Session, category_id: int) -> bool:
    """
    刪除分類（連同分類內所有選手）

    返回：
        True 如果有刪除，False 如果分類不存在
    """
    category = get_category(db, category_id)
    if category is None:
        return False

    removed = db.query(Performer).filter(Performer.category_id == category_id).delete()
    db.query(Category).filter(Category.id == category_id).delete()

    pointer = load_pointer(db)
    if pointer.category_id == category_id:
        save_pointer(db, DisplayPointer())
        logger.info("Display pointer cleared: current category was deleted")

    logger.warning(f"Deleted category {category_id} and {removed} performers")
    return True
