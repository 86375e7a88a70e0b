from sqlalchemy import create_engine, event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache, wraps
from pathlib import Path
from typing import List
import logging

from core.exceptions import DisplayControllerException, StorageError

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    database_url: str = "sqlite:///./data/database.sqlite"
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]
    host: str = "0.0.0.0"
    port: int = 3000

    model_config = SettingsConfigDict(env_file=".env")


@lru_cache()
def get_settings():
    return Settings()


settings = get_settings()


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def build_engine(url: str, **kwargs):
    """
    建立 Engine

    SQLite 需要特殊設定：
    - connect_args={"check_same_thread": False}：FastAPI 會在不同執行緒處理請求
    - 每條連線開啟 WAL 與 foreign_keys
    """
    if _is_sqlite(url):
        kwargs.setdefault("connect_args", {"check_same_thread": False})

    new_engine = create_engine(url, pool_pre_ping=True, **kwargs)

    if _is_sqlite(url):
        @event.listens_for(new_engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return new_engine


engine = build_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def ensure_database_dir(url: str) -> None:
    """file-based SQLite 的資料夾不存在時先建立"""
    if not _is_sqlite(url):
        return
    database = make_url(url).database
    if not database or database == ":memory:":
        return
    directory = Path(database).parent
    if not directory.exists():
        logger.info(f"Creating database directory: {directory}")
        directory.mkdir(parents=True, exist_ok=True)


def init_db() -> None:
    """
    啟動時初始化資料庫

    流程：
    1. 確保 SQLite 資料夾存在
    2. 建立所有資料表
    3. 補上缺少的預設設定值
    """
    # 避免循環 import：models 依賴 Base
    import models  # noqa: F401
    from services.settings_service import initialize_settings

    ensure_database_dir(settings.database_url)
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        initialize_settings(db)
    finally:
        db.close()

    logger.info(f"Database initialized: {settings.database_url}")


def get_db():
    """
    FastAPI dependency：提供 Database Session

    使用 yield 確保 session 在請求結束後會被關閉
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def transactional(func):
    """
    Transaction decorator：確保資料庫操作的原子性

    使用方式：
        @transactional
        def some_business_logic(db: Session, ...):
            # 所有 DB 操作都在一個 transaction 內
            category = Category(...)
            db.add(category)
            # 不需要手動 commit，decorator 會處理

    如果函式內發生異常：
        - 自動 rollback
        - SQLAlchemy 的錯誤會轉成 StorageError，其他異常原樣重新拋出

    注意：
        - 第一個參數必須是 db: Session
        - 不要在函式內手動 commit（decorator 會處理）
        - 被裝飾的函式不要互相呼叫，否則內層 commit 會切斷外層 transaction
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        # 找出 db session（可能在 args 或 kwargs）
        db = None
        if args and isinstance(args[0], Session):
            db = args[0]
        elif 'db' in kwargs:
            db = kwargs['db']

        if db is None:
            raise ValueError(
                f"@transactional requires 'db: Session' as first argument, "
                f"but got args={args}, kwargs={kwargs}"
            )

        try:
            result = func(*args, **kwargs)
            db.commit()
            return result
        except DisplayControllerException as e:
            # 業務規則拒絕，不是系統錯誤
            logger.warning(f"{func.__name__} rejected: {e}")
            db.rollback()
            raise
        except SQLAlchemyError as e:
            logger.error(f"Transaction failed in {func.__name__}: {e}", exc_info=True)
            db.rollback()
            raise StorageError(f"{func.__name__} failed: {e}") from e
        except Exception as e:
            logger.error(f"Transaction failed in {func.__name__}: {e}", exc_info=True)
            db.rollback()
            raise

    return wrapper
