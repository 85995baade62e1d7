"""CSL-JSON item source."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Iterator

from .errors import ItemDataError


class ItemSource:
    """Store CSL-JSON items for lookup by id.

    Unknown ids come back as ``{"unprocessed-with-id": id}`` so the item
    renderer can emit its placeholder.
    """

    def __init__(self, items: Iterable[dict[str, Any]]) -> None:
        self._items = {str(item["id"]): item for item in items if "id" in item}

    @classmethod
    def from_file(cls, path: Path) -> ItemSource:
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as error:
            raise ItemDataError(f"Cannot read items from {path}: {error}") from error
        if not isinstance(payload, list) or not all(isinstance(item, dict) for item in payload):
            raise ItemDataError(f"{path} must contain a JSON list of objects.")
        return cls(payload)

    def get_item(self, key: str) -> dict[str, Any]:
        item = self._items.get(str(key))
        if item is None:
            return {"unprocessed-with-id": key}
        return dict(item)

    def __contains__(self, key: object) -> bool:
        return str(key) in self._items

    def __iter__(self) -> Iterator[dict[str, Any]]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)
