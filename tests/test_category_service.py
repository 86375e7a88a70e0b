import pytest

from models import Category, Performer
from core.display_manager import DisplayManager
from core.display_state import DisplayPointer, load_pointer
from core.exceptions import DuplicateCategoryName, MissingField
from services import category_service


def test_create_and_get(db):
    category = category_service.create_category(db, "  Juniors ")

    assert category.id is not None
    assert category.name == "Juniors"
    assert category_service.get_category(db, category.id).name == "Juniors"
    assert [c.name for c in category_service.list_categories(db)] == ["Juniors"]


def test_get_missing_returns_none(db):
    assert category_service.get_category(db, 999) is None


def test_duplicate_name_is_a_conflict(db):
    category_service.create_category(db, "Juniors")

    with pytest.raises(DuplicateCategoryName):
        category_service.create_category(db, "Juniors")

    assert db.query(Category).count() == 1


def test_blank_name_is_rejected(db):
    with pytest.raises(MissingField):
        category_service.create_category(db, "   ")


def test_rename(db):
    category = category_service.create_category(db, "Juniors")

    renamed = category_service.rename_category(db, category.id, "Juniors A")

    assert renamed.id == category.id
    assert category_service.get_category(db, category.id).name == "Juniors A"


def test_rename_missing_returns_none(db):
    assert category_service.rename_category(db, 42, "Anything") is None


def test_rename_to_existing_name_is_a_conflict(db):
    category_service.create_category(db, "Juniors")
    seniors = category_service.create_category(db, "Seniors")

    with pytest.raises(DuplicateCategoryName):
        category_service.rename_category(db, seniors.id, "Juniors")

    assert category_service.get_category(db, seniors.id).name == "Seniors"


def test_rename_to_own_name_is_allowed(db):
    category = category_service.create_category(db, "Juniors")

    assert category_service.rename_category(db, category.id, "Juniors").name == "Juniors"


def test_delete_cascades_to_performers(db, lineup):
    juniors_id = lineup["juniors"].id

    assert category_service.delete_category(db, juniors_id) is True

    assert category_service.get_category(db, juniors_id) is None
    assert db.query(Performer).filter(Performer.category_id == juniors_id).count() == 0
    assert db.query(Performer).count() == 2


def test_delete_missing_returns_false(db):
    assert category_service.delete_category(db, 999) is False


def test_delete_current_category_clears_pointer(db, lineup):
    DisplayManager.set_category(db, lineup["juniors"].id)
    DisplayManager.switch_display_type(db, "performer")

    category_service.delete_category(db, lineup["juniors"].id)

    assert load_pointer(db) == DisplayPointer()


def test_delete_other_category_keeps_pointer(db, lineup):
    DisplayManager.set_category(db, lineup["juniors"].id)

    category_service.delete_category(db, lineup["seniors"].id)

    pointer = load_pointer(db)
    assert pointer.category_id == lineup["juniors"].id
    assert pointer.performer_id == lineup["ann"].id
