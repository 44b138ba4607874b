from __future__ import annotations

from decimal import Decimal
from pathlib import Path

import pytest

from meeting_broker.clients.dynamodb import DynamoDBTokenStore
from meeting_broker.clients.sqlite_store import SQLiteTokenStore
from meeting_broker.clients.token_store import (
    InMemoryTokenStore,
    JSONFileTokenStore,
    TokenStore,
)
from meeting_broker.core.config import StorageSettings
from meeting_broker.core.errors import TokenStoreError
from meeting_broker.dependencies.clients import build_token_store
from meeting_broker.models.token import TokenRecord


class FakeDynamoTable:
    """Mimics the subset of the boto3 Table API the store uses."""

    def __init__(self) -> None:
        self.items: dict[str, dict] = {}

    def put_item(self, *, Item: dict) -> None:
        self.items[Item["branch"]] = {
            **Item,
            "expires_at": Decimal(Item["expires_at"]),
        }

    def get_item(self, *, Key: dict) -> dict:
        item = self.items.get(Key["branch"])
        return {"Item": item} if item else {}

    def scan(self, **kwargs) -> dict:
        return {"Items": [{"branch": branch} for branch in self.items]}


def _record(branch: str = "A", **overrides) -> TokenRecord:
    values = {
        "branch": branch,
        "access_token": "t1",
        "refresh_token": "r1",
        "expires_at": 1_735_725_600_000,
    }
    values.update(overrides)
    return TokenRecord(**values)


@pytest.fixture(params=["memory", "file", "sqlite", "dynamodb"])
def store(request, tmp_path: Path):
    if request.param == "memory":
        return InMemoryTokenStore()
    if request.param == "file":
        return JSONFileTokenStore(str(tmp_path / "tokens.json"))
    if request.param == "sqlite":
        return SQLiteTokenStore(str(tmp_path / "nested" / "tokens.db"))
    return DynamoDBTokenStore(StorageSettings(), table=FakeDynamoTable())


def test_missing_branch_reads_as_none(store) -> None:
    assert store.get("A") is None


def test_upsert_then_get(store) -> None:
    record = _record()
    store.upsert(record)
    assert store.get("A") == record


def test_upsert_replaces_the_whole_record(store) -> None:
    store.upsert(_record())
    replacement = _record(access_token="t2", refresh_token="r2", expires_at=1_735_729_200_000)

    store.upsert(replacement)

    assert store.get("A") == replacement
    assert store.list_branches() == ["A"]


def test_records_are_isolated_per_branch(store) -> None:
    store.upsert(_record("A"))
    store.upsert(_record("B", access_token="tb"))

    assert store.get("A").access_token == "t1"
    assert store.get("B").access_token == "tb"
    assert store.list_branches() == ["A", "B"]


def test_expires_at_survives_as_integer(store) -> None:
    store.upsert(_record())
    assert isinstance(store.get("A").expires_at, int)


def test_every_backend_satisfies_the_store_interface(store) -> None:
    assert isinstance(store, TokenStore)


def test_sqlite_store_persists_across_instances(tmp_path: Path) -> None:
    path = str(tmp_path / "tokens.db")
    SQLiteTokenStore(path).upsert(_record())

    assert SQLiteTokenStore(path).get("A") == _record()


def test_file_store_persists_across_instances(tmp_path: Path) -> None:
    path = tmp_path / "tokens.json"
    JSONFileTokenStore(str(path)).upsert(_record())

    assert JSONFileTokenStore(str(path)).get("A") == _record()
    assert not path.with_suffix(".json.tmp").exists()


def test_file_store_reports_corrupt_json(tmp_path: Path) -> None:
    path = tmp_path / "tokens.json"
    path.write_text("{'A': not json", encoding="utf-8")
    store = JSONFileTokenStore(str(path))

    with pytest.raises(TokenStoreError):
        store.get("A")
    with pytest.raises(TokenStoreError):
        store.list_branches()


def test_file_store_reports_malformed_record(tmp_path: Path) -> None:
    path = tmp_path / "tokens.json"
    path.write_text('{"A": {"branch": "A", "access_token": "t1"}}', encoding="utf-8")

    with pytest.raises(TokenStoreError):
        JSONFileTokenStore(str(path)).get("A")


def test_dynamodb_store_requires_table_name() -> None:
    with pytest.raises(ValueError):
        DynamoDBTokenStore(StorageSettings(DYNAMODB_TABLE_NAME=None))


@pytest.mark.parametrize(
    ("backend", "expected"),
    [
        ("memory", InMemoryTokenStore),
        ("file", JSONFileTokenStore),
        ("sqlite", SQLiteTokenStore),
    ],
)
def test_build_token_store_selects_backend(tmp_path: Path, backend, expected) -> None:
    settings = StorageSettings(
        TOKEN_STORE_BACKEND=backend, TOKEN_STORE_PATH=str(tmp_path / "tokens")
    )
    assert isinstance(build_token_store(settings), expected)
