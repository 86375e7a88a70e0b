import pytest

from models import Category, DisplayType, Performer, SettingKey
from core.display_manager import DisplayManager
from core.display_state import load_pointer
from core.exceptions import (
    InvalidCategory,
    MissingField,
    PerformerNotFound,
    StorageError,
)
from services import category_service, performer_service, settings_service
from services.csv_service import PerformerRow


def test_create_with_missing_category_writes_nothing(db):
    with pytest.raises(InvalidCategory):
        performer_service.create_performer(db, 1, "Ann", "Club A", 999)

    assert db.query(Performer).count() == 0


def test_create_requires_name_and_club(db):
    category = category_service.create_category(db, "Juniors")

    with pytest.raises(MissingField):
        performer_service.create_performer(db, 1, "Ann", " ", category.id)


def test_create_without_order_goes_last(db, lineup):
    performer = performer_service.create_performer(db, None, "Fay", "Club F", lineup["juniors"].id)

    assert performer.order == 8


def test_create_without_order_in_empty_category_starts_at_one(db):
    category = category_service.create_category(db, "Juniors")

    performer = performer_service.create_performer(db, None, "Ann", "Club A", category.id)

    assert performer.order == 1


def test_list_by_category_is_ordered_by_rank(db, lineup):
    names = [p.name for p in performer_service.list_performers_by_category(db, lineup["seniors"].id)]

    assert names == ["Eve", "Dee"]


def test_update(db, lineup):
    performer = performer_service.update_performer(
        db, lineup["ann"].id, 5, "Ann B.", "Club Z", lineup["seniors"].id, "Hoop"
    )

    assert performer.order == 5
    assert performer.name == "Ann B."
    assert performer.category_id == lineup["seniors"].id
    assert performer.routine == "Hoop"


def test_update_with_missing_category_leaves_row_unchanged(db, lineup):
    ann_id = lineup["ann"].id

    with pytest.raises(InvalidCategory):
        performer_service.update_performer(db, ann_id, 1, "Ann", "Club A", 999)

    performer = performer_service.get_performer(db, ann_id)
    assert performer.category_id == lineup["juniors"].id


def test_update_missing_performer(db, lineup):
    with pytest.raises(PerformerNotFound):
        performer_service.update_performer(db, 999, 1, "Ghost", "Club", lineup["juniors"].id)


def test_delete(db, lineup):
    cid_id = lineup["cid"].id

    assert performer_service.delete_performer(db, cid_id) is True
    assert performer_service.get_performer(db, cid_id) is None
    assert performer_service.delete_performer(db, cid_id) is False


def test_delete_current_performer_resets_pointer(db, lineup):
    ann_id, ben_id = lineup["ann"].id, lineup["ben"].id
    DisplayManager.set_category(db, lineup["juniors"].id)
    DisplayManager.switch_display_type(db, "performer")

    performer_service.delete_performer(db, ann_id)

    assert settings_service.get_setting_value(db, SettingKey.CURRENT_PERFORMER) == "0"
    with pytest.raises(PerformerNotFound):
        DisplayManager.get_current_view(db)

    DisplayManager.override_current_performer(db, ben_id)
    view = DisplayManager.get_current_view(db)
    assert view.performer.id == ben_id


def test_delete_other_performer_keeps_pointer(db, lineup):
    ann_id = lineup["ann"].id
    DisplayManager.set_category(db, lineup["juniors"].id)

    performer_service.delete_performer(db, lineup["cid"].id)

    assert load_pointer(db).performer_id == ann_id


def test_import_creates_single_category_with_sequential_ranks(db):
    DisplayManager.switch_display_type(db, "performer")
    rows = [
        PerformerRow(name="A", club="X", category_name="Cat1", routine=""),
        PerformerRow(name="B", club="Y", category_name="Cat1", routine=""),
    ]

    assert performer_service.import_performers(db, rows) == (1, 2)

    categories = category_service.list_categories(db)
    assert [c.name for c in categories] == ["Cat1"]
    performers = performer_service.list_performers_by_category(db, categories[0].id)
    assert [(p.name, p.order) for p in performers] == [("A", 1), ("B", 2)]
    assert load_pointer(db).mode == DisplayType.TITLE


def test_import_replaces_everything_and_resets_pointer(db, lineup):
    DisplayManager.set_category(db, lineup["juniors"].id)
    DisplayManager.switch_display_type(db, "performer")
    rows = [
        PerformerRow("Gus", "Club G", "Seniors"),
        PerformerRow("Hal", "Club H", "Minis"),
        PerformerRow("Ivy", "Club I", "Seniors"),
    ]

    performer_service.import_performers(db, rows)

    assert [c.name for c in category_service.list_categories(db)] == ["Seniors", "Minis"]
    assert db.query(Performer).count() == 3
    seniors = category_service.get_category_by_name(db, "Seniors")
    assert [(p.name, p.order) for p in performer_service.list_performers_by_category(db, seniors.id)] == [
        ("Gus", 1),
        ("Ivy", 2),
    ]
    pointer = load_pointer(db)
    assert (pointer.mode, pointer.category_id, pointer.performer_id) == (DisplayType.TITLE, 0, 0)


def test_failed_import_rolls_back(db, lineup):
    rows = [
        PerformerRow("Gus", "Club G", "Seniors"),
        PerformerRow(None, "Club H", "Seniors"),
    ]

    with pytest.raises(StorageError):
        performer_service.import_performers(db, rows)

    assert db.query(Performer).count() == 5
    assert {c.name for c in db.query(Category).all()} == {"Juniors", "Seniors"}


def test_export_after_import_round_trips(db):
    rows = [
        PerformerRow("Ann", "Smith, Jones", "Juniors", "Ribbon"),
        PerformerRow("Ben", 'The "Best" Club', "Seniors", ""),
        PerformerRow("Cid", "Club C", "Juniors", "Line one\nline two"),
    ]

    performer_service.import_performers(db, rows)
    exported = performer_service.export_performers(db)

    assert len(exported) == len(rows)
    assert sorted(exported, key=lambda r: r.name) == sorted(rows, key=lambda r: r.name)


def test_moving_current_performer_moves_display_category(db, lineup):
    dee_id, juniors_id = lineup["dee"].id, lineup["juniors"].id
    DisplayManager.override_current_performer(db, dee_id)
    DisplayManager.switch_display_type(db, "performer")

    performer_service.update_performer(db, dee_id, 9, "Dee", "Club D", juniors_id)

    view = DisplayManager.get_current_view(db)
    assert view.performer.id == dee_id
    assert view.category.id == juniors_id
    assert view.performer.category_id == view.category.id
    assert load_pointer(db).category_id == juniors_id


def test_moving_other_performer_keeps_display_category(db, lineup):
    seniors_id = lineup["seniors"].id
    DisplayManager.override_current_performer(db, lineup["dee"].id)

    performer_service.update_performer(db, lineup["eve"].id, 1, "Eve", "Club E", lineup["juniors"].id)

    assert load_pointer(db).category_id == seniors_id
