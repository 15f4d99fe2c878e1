import asyncio
import os
import tempfile

# settings se lee al importar app.*: el entorno de test va antes que cualquier import
_TMP = tempfile.mkdtemp(prefix="buzznest-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TMP, 'test.sqlite')}"
os.environ["MEDIA_DIR"] = os.path.join(_TMP, "media")
os.environ["SECRET_KEY"] = "test-secret"

import pytest
from fastapi.testclient import TestClient

from app.db.base import Base
from app.db.session import engine
from app.db import init_db  # noqa: F401  registra los modelos
from app.main import app


async def _reset_db():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


@pytest.fixture
def client():
    asyncio.run(_reset_db())
    with TestClient(app) as c:
        yield c


def signup(client, username="alice", email="alice@example.com", password="pass1"):
    res = client.post(
        "/signup",
        json={"username": username, "email": email, "password": password},
    )
    assert res.status_code == 201, res.text
    return res.json()["token"]


def auth(token):
    return {"Authorization": f"Bearer {token}"}


def upload(client, token, content="hello", filename="pic.png", mime="image/png"):
    return client.post(
        "/upload",
        headers=auth(token),
        data={"content": content},
        files={"file": (filename, b"\x89PNG\r\n\x1a\nfake", mime)},
    )


@pytest.fixture
def alice(client):
    return signup(client)


@pytest.fixture
def bob(client):
    return signup(client, username="bob", email="bob@example.com", password="pass2")
