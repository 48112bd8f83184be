# shophub/data/database.py
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from shophub.utils.settings import DATABASE_URL, SQL_ECHO

Base = declarative_base()


def create_db_engine(url: str | None = None, echo: bool = SQL_ECHO) -> Engine:
    url = url or DATABASE_URL

    if url.startswith("sqlite"):
        #sqlite w pamieci: jedno polaczenie dzielone miedzy watki
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url in ("sqlite://", "sqlite+pysqlite://"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=echo, **kwargs)

    return create_engine(url, echo=echo, pool_pre_ping=True)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    #modele musza byc zaimportowane zanim create_all zobaczy tabele
    import shophub.data.models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
