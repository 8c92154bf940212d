import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from app.api.routers import surveys, export
from app.config import get_data_dir, get_log_level
from app.db import init_db

logging.basicConfig(
    level=get_log_level(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(title="Site Survey API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/health")
def health():
    return {"ok": True}


# 初回起動時にDBスキーマを作成
@app.on_event("startup")
def on_startup():
    init_db()

app.include_router(surveys.router, prefix="/surveys", tags=["surveys"])
app.include_router(export.router,  prefix="/export",  tags=["export"])

# /data を静的配信（エクスポート取得用）
app.mount("/data", StaticFiles(directory=str(get_data_dir())), name="data")
