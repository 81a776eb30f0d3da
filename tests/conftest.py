from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from contractpro.core.clock import fixed_clock
from contractpro.models import Base, Client, User

NOW = datetime(2024, 3, 15, 12, 0, 0)


def _build_session_factory() -> sessionmaker:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture
def session_factory() -> sessionmaker:
    return _build_session_factory()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def clock():
    return fixed_clock(NOW)


@pytest.fixture
def owner(db) -> User:
    user = User(name="Fran Lancer", email="fran@example.com", hashed_password="x", role="freelancer")
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def client_record(db, owner) -> Client:
    client = Client(user_id=owner.id, name="Ada", email="ada@acme.test", company="Acme")
    db.add(client)
    db.commit()
    return client


@pytest.fixture
def patch_db_session(monkeypatch, session_factory):
    """Point one or more route modules at the in-memory database."""

    @contextmanager
    def _get_db_session():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    def _apply(*modules) -> None:
        for module in modules:
            monkeypatch.setattr(module, "get_db_session", _get_db_session)

    return _apply
