"""Persistence utilities for the expense tracker core services."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from .exceptions import StorageError


class JSONStorage:
    """Key-value storage keeping one JSON document per resource, with crash-safe writes."""

    def __init__(self, base_path: Path) -> None:
        self._base_path = Path(base_path)
        try:
            self._base_path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Unable to create data directory {self._base_path}") from exc

    def load(self, resource: str) -> Optional[Any]:
        """Return the decoded document, or None when the resource was never written."""
        path = self._base_path / resource
        if not path.exists():
            return None
        try:
            with path.open("r", encoding="utf-8") as handle:
                return json.load(handle)
        except json.JSONDecodeError as exc:
            raise StorageError(f"Corrupted JSON data in {path}") from exc
        except OSError as exc:
            raise StorageError(f"Unable to read from {path}") from exc

    def save(self, resource: str, payload: Any) -> None:
        path = self._base_path / resource
        temp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            with temp_path.open("w", encoding="utf-8") as handle:
                json.dump(payload, handle, indent=2, ensure_ascii=False)
                handle.flush()
            # Use replace for atomic move on POSIX; ensures crash-safe persistence.
            temp_path.replace(path)
        except (OSError, TypeError, ValueError) as exc:
            raise StorageError(f"Unable to write to {path}") from exc

    @property
    def base_path(self) -> Path:
        return self._base_path
