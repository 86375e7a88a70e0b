import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import models  # noqa: F401
from database import Base, build_engine, get_db
from main import app
from services import category_service, performer_service
from services.settings_service import initialize_settings


@pytest.fixture
def engine():
    test_engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def db(engine):
    """每個測試一個全新的 in-memory 資料庫，已寫入預設設定"""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    initialize_settings(session)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def lineup(db):
    """
    兩個分類：
    - Juniors: Ann(1), Ben(3), Cid(7)
    - Seniors: Dee(2), Eve(1)（故意反序建立）
    """
    juniors = category_service.create_category(db, "Juniors")
    seniors = category_service.create_category(db, "Seniors")

    ann = performer_service.create_performer(db, 1, "Ann", "Club A", juniors.id)
    ben = performer_service.create_performer(db, 3, "Ben", "Club B", juniors.id, "Ribbon")
    cid = performer_service.create_performer(db, 7, "Cid", "Club C", juniors.id)
    dee = performer_service.create_performer(db, 2, "Dee", "Club D", seniors.id)
    eve = performer_service.create_performer(db, 1, "Eve", "Club E", seniors.id)

    return {
        "juniors": juniors,
        "seniors": seniors,
        "ann": ann,
        "ben": ben,
        "cid": cid,
        "dee": dee,
        "eve": eve,
    }
