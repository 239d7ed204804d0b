# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from itertools import count
from typing import Any

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from devspark.core.permissions import IGNORE_VISIBILITY, MANAGE_CHANNELS, MANAGE_TAGS
from devspark.core.security import create_access_token
from devspark.db.session import Base
from devspark.db.session import get_db as app_get_session
from devspark.main import app as fastapi_app
from devspark.models import Channel, Comment, Post, Tag, User, Visibility
from devspark.services.identity import Actor

TEST_DB_URL = "sqlite://"

_NAME_COUNTER = count(1)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    # Foreign keys stay unenforced here so tests can stage orphan rows for the sweep.
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def auth_headers(user: User) -> dict[str, str]:
    """Return authorization headers for ``user``."""
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture()
def headers_for() -> Callable[[User], dict[str, str]]:
    return auth_headers


@pytest.fixture()
def count_rows(db_session: Session) -> Callable[..., int]:
    """Count rows of a model matching criteria straight from the database."""

    def _count(model: Any, *criteria: Any) -> int:
        stmt = select(func.count()).select_from(model).where(*criteria)
        return int(db_session.scalar(stmt) or 0)

    return _count


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    def _make_user(
        display_name: str | None = None,
        permissions: tuple[str, ...] = (),
        banned: bool = False,
    ) -> User:
        user = User(
            display_name=display_name or f"user-{next(_NAME_COUNTER)}",
            permissions=list(permissions),
            banned=banned,
        )
        db_session.add(user)
        db_session.commit()
        return user

    return _make_user


@pytest.fixture()
def owner(make_user: Callable[..., User]) -> User:
    """A user without any permissions who owns the test content."""
    return make_user("Owner")


@pytest.fixture()
def stranger(make_user: Callable[..., User]) -> User:
    """A second user without any permissions."""
    return make_user("Stranger")


@pytest.fixture()
def admin(make_user: Callable[..., User]) -> User:
    """A user holding every elevated permission."""
    return make_user("Admin", permissions=(IGNORE_VISIBILITY, MANAGE_CHANNELS, MANAGE_TAGS))


@pytest.fixture()
def viewer(make_user: Callable[..., User]) -> User:
    """A user who may see everything but manage nothing."""
    return make_user("Viewer", permissions=(IGNORE_VISIBILITY,))


@pytest.fixture()
def banned_viewer(make_user: Callable[..., User]) -> User:
    """A banned user whose ignore-visibility grant must not apply."""
    return make_user("Banned", permissions=(IGNORE_VISIBILITY,), banned=True)


@pytest.fixture()
def owner_actor(owner: User) -> Actor:
    return Actor.from_user(owner)


@pytest.fixture()
def make_channel(db_session: Session) -> Callable[..., Channel]:
    def _make_channel(
        owner: User,
        name: str | None = None,
        visibility: Visibility = Visibility.PUBLIC,
    ) -> Channel:
        channel = Channel(
            owner_id=owner.id,
            name=name or f"channel-{next(_NAME_COUNTER)}",
            visibility=visibility,
        )
        db_session.add(channel)
        db_session.commit()
        return channel

    return _make_channel


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    def _make_post(
        channel: Channel,
        title: str | None = None,
        visibility: Visibility = Visibility.PUBLIC,
        owner_id: str | None = None,
        tag_ids: tuple[str, ...] = (),
    ) -> Post:
        post = Post(
            owner_id=owner_id or channel.owner_id,
            channel_id=channel.id,
            title=title or f"post-{next(_NAME_COUNTER)}",
            text="Test post content",
            visibility=visibility,
        )
        post.set_tag_ids(tag_ids)
        db_session.add(post)
        db_session.commit()
        return post

    return _make_post


@pytest.fixture()
def make_comment(db_session: Session) -> Callable[..., Comment]:
    def _make_comment(post: Post, author: User, body: str = "Nice post") -> Comment:
        comment = Comment(post_id=post.id, owner_id=author.id, body=body)
        db_session.add(comment)
        db_session.commit()
        return comment

    return _make_comment


@pytest.fixture()
def make_tag(db_session: Session) -> Callable[..., Tag]:
    def _make_tag(name: str | None = None) -> Tag:
        tag = Tag(name=name or f"tag-{next(_NAME_COUNTER)}")
        db_session.add(tag)
        db_session.commit()
        return tag

    return _make_tag


@pytest.fixture()
def public_channel(make_channel: Callable[..., Channel], owner: User) -> Channel:
    return make_channel(owner, name="Public Channel")


@pytest.fixture()
def private_channel(make_channel: Callable[..., Channel], owner: User) -> Channel:
    return make_channel(owner, name="Private Channel", visibility=Visibility.PRIVATE)


@pytest.fixture()
def owner_headers(owner: User) -> dict[str, str]:
    return auth_headers(owner)


@pytest.fixture()
def stranger_headers(stranger: User) -> dict[str, str]:
    return auth_headers(stranger)


@pytest.fixture()
def admin_headers(admin: User) -> dict[str, str]:
    return auth_headers(admin)
