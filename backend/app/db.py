import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

# モデル定義側の Base（app.models.base）を利用してメタデータを統一
from app.models.base import Base
from app.config import get_database_url

logger = logging.getLogger(__name__)

# 1) DATABASE_URL が指定されていれば優先（例: postgresql+psycopg://...）
# 2) それ以外は data/app.db の SQLite
SQLALCHEMY_DATABASE_URL = get_database_url()
_is_sqlite = SQLALCHEMY_DATABASE_URL.startswith("sqlite")

_connect_args = {"check_same_thread": False} if _is_sqlite else {}

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args=_connect_args,
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# 旧スキーマに無いカラム: name -> DDL
_LATE_COLUMNS = {
    "has_wifi": "ALTER TABLE surveys ADD COLUMN has_wifi BOOLEAN NOT NULL DEFAULT 0",
    "completion_status": "ALTER TABLE surveys ADD COLUMN completion_status VARCHAR NOT NULL DEFAULT 'Uncompleted'",
    "created_at": "ALTER TABLE surveys ADD COLUMN created_at VARCHAR",
}


def init_db(bind=None) -> None:
    bind = bind or engine
    import app.models.survey  # noqa: F401
    Base.metadata.create_all(bind=bind)

    # SQLite 簡易マイグレーション（既存DBの不足カラムを追加）
    if bind.dialect.name == "sqlite":
        with bind.begin() as conn:
            cols = conn.exec_driver_sql("PRAGMA table_info(surveys)").fetchall()
            names = {row[1] for row in cols}
            for name, ddl in _LATE_COLUMNS.items():
                if name not in names:
                    logger.info("adding missing column surveys.%s", name)
                    conn.exec_driver_sql(ddl)


def get_db():
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()
