# tests/conftest.py
import os
import sys
import asyncio
import json
from itertools import count

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import MultipleResultsFound, NoResultFound
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

sys.path.append(os.path.abspath("."))

from review_api.database import Base, get_db
from review_api import models
from main import app


# DB (SQLite in-memory for tests)
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
)


@pytest.fixture(scope="session", autouse=True)
def prepare_database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db_session():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        # services commit, so empty every table for the next test
        session.rollback()
        for table in reversed(Base.metadata.sorted_tables):
            session.execute(table.delete())
        session.commit()
        session.close()


# One event loop for the WHOLE pytest session
@pytest.fixture(scope="session")
def session_loop():
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    yield loop
    loop.close()


# Simple ASGI response/client
class SimpleResponse:
    def __init__(
        self, status_code: int, body: bytes, headers: list[tuple[bytes, bytes]]
    ):
        self.status_code = status_code
        self._body = body
        self.headers = {k.decode(): v.decode() for k, v in headers}

    @property
    def content(self) -> bytes:
        return self._body

    def json(self):
        return json.loads(self._body.decode())


class SimpleClient:
    """
    Calls the ASGI app directly on the shared session loop.

    - does NOT call asyncio.run()
    - does NOT close the loop
    """

    def __init__(self, app, loop):
        self.app = app
        self.loop = loop

    def request(self, method: str, path: str, json_body=None, raw=None, headers=None):
        headers = headers or {}
        body_bytes = b""

        if json_body is not None:
            body_bytes = json.dumps(json_body).encode()
            headers.setdefault("content-type", "application/json")
        elif raw is not None:
            body_bytes = raw
            headers.setdefault("content-type", "application/json")

        path, _, query = path.partition("?")
        raw_headers = [(k.lower().encode(), v.encode()) for k, v in headers.items()]
        scope = {
            "type": "http",
            "http_version": "1.1",
            "method": method.upper(),
            "path": path,
            "raw_path": path.encode(),
            "root_path": "",
            "scheme": "http",
            "headers": raw_headers,
            "query_string": query.encode(),
            "client": ("testclient", 5000),
            "server": ("testserver", 80),
        }

        async def receive():
            nonlocal body_bytes
            chunk, body_bytes = body_bytes, b""
            return {"type": "http.request", "body": chunk, "more_body": False}

        response_body = bytearray()
        response_status = 500
        response_headers: list[tuple[bytes, bytes]] = []

        async def send(message):
            nonlocal response_status, response_headers
            if message["type"] == "http.response.start":
                response_status = message["status"]
                response_headers = message.get("headers", [])
            elif message["type"] == "http.response.body":
                response_body.extend(message.get("body", b""))

        # ensure the loop is the current one
        asyncio.set_event_loop(self.loop)
        self.loop.run_until_complete(self.app(scope, receive, send))
        return SimpleResponse(response_status, bytes(response_body), response_headers)

    def get(self, path: str, headers=None):
        return self.request("GET", path, headers=headers)

    def post(self, path: str, json=None, raw=None, headers=None):
        return self.request("POST", path, json_body=json, raw=raw, headers=headers)

    def put(self, path: str, json=None, raw=None, headers=None):
        return self.request("PUT", path, json_body=json, raw=raw, headers=headers)

    def delete(self, path: str, headers=None):
        return self.request("DELETE", path, headers=headers)


# Client fixture: override DB dependency per test
@pytest.fixture()
def client(db_session, session_loop):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    c = SimpleClient(app, loop=session_loop)
    try:
        yield c
    finally:
        app.dependency_overrides.clear()


class InMemoryRepository:
    """Dictionary-backed stand-in for a repository, used by unit tests."""

    def __init__(self, fail_with=None, fail_on_commit=None):
        self.rows = {}
        self.ids = count(1)
        self.fail_with = fail_with
        self.fail_on_commit = fail_on_commit
        self.commits = 0
        self.rollbacks = 0

    def find_all(self):
        return list(self.rows.values())

    def find_by_id(self, entity_id):
        return self.rows.get(entity_id)

    def find_by_natural_key(self, *values):
        matches = [row for row in self.rows.values() if row.natural_key == values]
        if not matches:
            raise NoResultFound("No row was found")
        if len(matches) > 1:
            raise MultipleResultsFound("Multiple rows were found")
        return matches[0]

    def find_by_email(self, email):
        return self.find_by_natural_key(email)

    def find_by_phonenumber(self, phonenumber):
        return self.find_by_natural_key(phonenumber)

    def find_by_user_and_restaurant(self, user_id, restaurant_id):
        return self.find_by_natural_key(user_id, restaurant_id)

    def create(self, entity):
        if self.fail_with is not None:
            raise self.fail_with
        entity.id = next(self.ids)
        self.rows[entity.id] = entity
        return entity

    def update(self, entity):
        if self.fail_with is not None:
            raise self.fail_with
        self.rows[entity.id] = entity
        return entity

    def delete(self, entity):
        if entity.id is not None:
            self.rows.pop(entity.id, None)
        return entity

    def commit(self):
        if self.fail_on_commit is not None:
            raise self.fail_on_commit
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def add(self, entity):
        """Store ``entity`` directly, bypassing ``fail_with``."""
        entity.id = next(self.ids)
        self.rows[entity.id] = entity
        return entity


@pytest.fixture()
def memory_repository():
    return InMemoryRepository()


@pytest.fixture()
def failing_repository():
    """Build an in-memory repository whose writes, or commits, raise."""

    def build(error=None, on_commit=None):
        return InMemoryRepository(fail_with=error, fail_on_commit=on_commit)

    return build


@pytest.fixture()
def user_factory():
    def build(**overrides):
        fields = {
            "name": "Jack Doe",
            "email": "jack@mailinator.com",
            "phonenumber": "04475368829",
        }
        fields.update(overrides)
        return models.User(**fields)

    return build
