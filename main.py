from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from database import engine, init_db, settings
from api import categories, display, performers
from api import settings as settings_api

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: 建立資料表並補上預設設定值
    init_db()
    yield
    # Shutdown: 關閉連線池
    engine.dispose()
    logger.info("Database connection closed")


app = FastAPI(
    title="Competition Display API",
    description="Backend API for the competition display controller",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(settings_api.router)
app.include_router(categories.router)
app.include_router(performers.router)
app.include_router(display.router)


@app.get("/api/health")
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
