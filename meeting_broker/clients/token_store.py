"""Token store interface plus in-memory and JSON-file backends."""

from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Dict, List, Optional, Protocol, runtime_checkable

from pydantic import ValidationError

from meeting_broker.core.errors import TokenStoreError
from meeting_broker.models.token import TokenRecord


@runtime_checkable
class TokenStore(Protocol):
    """Get-by-branch and upsert-by-branch over persisted token records."""

    def get(self, branch: str) -> Optional[TokenRecord]:
        ...

    def upsert(self, record: TokenRecord) -> None:
        ...

    def list_branches(self) -> List[str]:
        ...


class InMemoryTokenStore:
    """Process-local store, used for tests and throwaway deployments."""

    def __init__(self) -> None:
        self._records: Dict[str, TokenRecord] = {}

    def get(self, branch: str) -> Optional[TokenRecord]:
        return self._records.get(branch)

    def upsert(self, record: TokenRecord) -> None:
        self._records[record.branch] = record

    def list_branches(self) -> List[str]:
        return sorted(self._records)


class JSONFileTokenStore:
    """Keep every branch's record in a single JSON document on disk."""

    def __init__(self, path: str) -> None:
        self._path = Path(path)
        if self._path.parent and not self._path.parent.exists():
            self._path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def _read_all(self) -> Dict[str, dict]:
        if not self._path.exists():
            return {}
        raw = self._path.read_text(encoding="utf-8").strip()
        if not raw:
            return {}
        try:
            records = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise TokenStoreError(
                f"Token file {self._path} is not valid JSON."
            ) from exc
        if not isinstance(records, dict):
            raise TokenStoreError(f"Token file {self._path} must hold a JSON object.")
        return records

    def get(self, branch: str) -> Optional[TokenRecord]:
        with self._lock:
            data = self._read_all().get(branch)
        if data is None:
            return None
        try:
            return TokenRecord.model_validate(data)
        except ValidationError as exc:
            raise TokenStoreError(
                f"Stored record for branch {branch!r} is malformed."
            ) from exc

    def upsert(self, record: TokenRecord) -> None:
        with self._lock:
            records = self._read_all()
            records[record.branch] = record.to_item()
            tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(records, indent=2), encoding="utf-8")
            tmp_path.replace(self._path)

    def list_branches(self) -> List[str]:
        with self._lock:
            return sorted(self._read_all())


__all__ = ["InMemoryTokenStore", "JSONFileTokenStore", "TokenStore"]
