"""Key/value store for persisted JSON settings documents."""

import logging
from pathlib import Path
from typing import Protocol, TypeVar

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class SettingsStore(Protocol):
    """Protocol for reading and writing settings documents by key."""

    def read_json(self, key: str, model: type[ModelT]) -> ModelT | None:
        """
        Read a document.

        Args:
            key: Document key, e.g. ``vcs/git.json``
            model: Pydantic model to validate the document with

        Returns:
            Validated model, or None if the document is absent or unusable
        """
        ...

    def write_json(self, key: str, value: BaseModel) -> None:
        """Write a document, replacing any previous content."""
        ...


class JsonSettingsStore:
    """SettingsStore backed by JSON files below a root directory."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def path_for(self, key: str) -> Path:
        return self.root / key

    def read_json(self, key: str, model: type[ModelT]) -> ModelT | None:
        path = self.path_for(key)
        if not path.exists():
            return None

        try:
            return model.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            logger.warning(f"Ignoring unreadable settings document {path}: {e}")
            return None

    def write_json(self, key: str, value: BaseModel) -> None:
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(value.model_dump_json(indent=2), encoding="utf-8")
        logger.debug(f"Wrote settings document {path}")
