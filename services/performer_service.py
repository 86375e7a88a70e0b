"""
選手服務：performers 表的 CRUD，以及整份名單的匯入/匯出

規則：
- category_id 必須指向存在的分類（寫入前檢查）
- order 是分類內的出場順序，允許重複（同順序以 id 先後為準）
- 刪除目前顯示中的選手時，current_performer 歸零
- 匯入是破壞性的：清空所有選手與分類後重建，整個過程在同一個 transaction 內
"""
from typing import Iterable, List, Optional, Tuple
import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from models import Category, Performer
from core.display_state import DisplayPointer, load_pointer, save_pointer
from core.exceptions import InvalidCategory, MissingField, PerformerNotFound
from services.category_service import get_category
from services.csv_service import PerformerRow
from database import transactional

logger = logging.getLogger(__name__)


def list_performers(db: Session) -> List[Performer]:
    return db.query(Performer).order_by(Performer.category_id, Performer.order, Performer.id).all()


def list_performers_by_category(db: Session, category_id: int) -> List[Performer]:
    """分類內的選手，依 order 由小到大"""
    return db.query(Performer).filter(
        Performer.category_id == category_id
    ).order_by(Performer.order, Performer.id).all()


def get_performer(db: Session, performer_id: int) -> Optional[Performer]:
    return db.query(Performer).filter(Performer.id == performer_id).first()


def next_order(db: Session, category_id: int) -> int:
    """分類內下一個可用的順序：1 + 目前最大值"""
    current_max = db.query(func.max(Performer.order)).filter(
        Performer.category_id == category_id
    ).scalar()
    return (current_max or 0) + 1


def _require_fields(name: str, club: str) -> None:
    if not (name or "").strip() or not (club or "").strip():
        raise MissingField("Name and club are required")


def _require_category(db: Session, category_id: int) -> None:
    if get_category(db, category_id) is None:
        raise InvalidCategory(category_id)


@transactional
def create_performer(
    db: Session,
    order: Optional[int],
    name: str,
    club: str,
    category_id: int,
    routine: str = ""
) -> Performer:
    """
    新增選手

    參數：
        order: 出場順序；None 則排在分類最後

    異常：
        MissingField: name 或 club 空白
        InvalidCategory: 分類不存在（不會寫入任何資料）
    """
    _require_fields(name, club)
    _require_category(db, category_id)

    if order is None:
        order = next_order(db, category_id)

    performer = Performer(
        order=order,
        name=name.strip(),
        club=club.strip(),
        category_id=category_id,
        routine=routine or ""
    )
    db.add(performer)
    db.flush()

    logger.info(f"Created performer {performer.id} ({performer.name}) in category {category_id}")
    return performer


@transactional
def update_performer(
    db: Session,
    performer_id: int,
    order: int,
    name: str,
    club: str,
    category_id: int,
    routine: str = ""
) -> Performer:
    """
    修改選手

    異常：
        MissingField: name 或 club 空白
        InvalidCategory: 分類不存在
        PerformerNotFound: 選手不存在

    如果修改的是目前顯示中的選手，current_category 會改成新分類
    """
    _require_fields(name, club)
    _require_category(db, category_id)

    performer = get_performer(db, performer_id)
    if performer is None:
        raise PerformerNotFound(performer_id)

    performer.order = order
    performer.name = name.strip()
    performer.club = club.strip()
    performer.category_id = category_id
    performer.routine = routine or ""
    db.flush()

    # 目前顯示中的選手換分類時，分類指標跟著移動
    pointer = load_pointer(db)
    if pointer.performer_id == performer.id and pointer.category_id != category_id:
        save_pointer(db, pointer.point_at(performer))
        logger.info(f"Current performer {performer.id} moved, display category set to {category_id}")

    logger.info(f"Updated performer {performer.id}")
    return performer


@transactional
def delete_performer(db: Session, performer_id: int) -> bool:
    """
    刪除選手

    如果刪除的是目前顯示中的選手，current_performer 歸零；
    之後在 performer 模式下讀取畫面會失敗，直到重新選擇選手
    """
    deleted = db.query(Performer).filter(Performer.id == performer_id).delete()
    if not deleted:
        return False

    pointer = load_pointer(db)
    if pointer.performer_id == performer_id:
        save_pointer(db, pointer.without_performer())
        logger.info(f"Current performer {performer_id} deleted, display pointer reset")

    logger.info(f"Deleted performer {performer_id}")
    return True


@transactional
def import_performers(db: Session, rows: Iterable[PerformerRow]) -> Tuple[int, int]:
    """
    匯入整份選手名單（破壞性）

    流程：
    1. 刪除所有選手與分類
    2. 顯示指標回到 title 模式並歸零
    3. 依首次出現順序建立分類
    4. 依輸入順序新增選手，order 為分類內 1..N

    任何一步失敗都會整個 rollback，保留匯入前的資料

    返回：
        (分類數量, 選手數量)
    """
    rows = list(rows)

    removed_performers = db.query(Performer).delete()
    removed_categories = db.query(Category).delete()
    logger.warning(
        f"Import: removed {removed_performers} performers and {removed_categories} categories"
    )

    save_pointer(db, DisplayPointer())

    categories = {}
    for row in rows:
        if row.category_name not in categories:
            category = Category(name=row.category_name)
            db.add(category)
            db.flush()
            categories[row.category_name] = category

    for row in rows:
        category = categories[row.category_name]
        db.add(Performer(
            order=next_order(db, category.id),
            name=row.name,
            club=row.club,
            category_id=category.id,
            routine=row.routine or ""
        ))
        db.flush()

    logger.info(f"Imported {len(rows)} performers into {len(categories)} categories")
    return len(categories), len(rows)


def export_performers(db: Session) -> List[PerformerRow]:
    """匯出所有選手（join 分類名稱）"""
    results = (
        db.query(Performer, Category.name)
        .join(Category, Performer.category_id == Category.id)
        .order_by(Category.id, Performer.order, Performer.id)
        .all()
    )
    return [
        PerformerRow(
            name=performer.name,
            club=performer.club,
            category_name=category_name,
            routine=performer.routine or ""
        )
        for performer, category_name in results
    ]
