"""
Load content items from files and directories
"""

import json
import logging
from pathlib import Path
from typing import Iterable, List, Union

from pydantic import ValidationError

from domain.rag.ingestion.types import ContentItem
from core.exceptions import IngestionError

logger = logging.getLogger(__name__)

TEXT_SUFFIXES = {".md", ".txt", ".xeto"}
JSON_SUFFIX = ".json"


def _load_json(path: Path) -> List[ContentItem]:
    """A JSON file holds a list of items, or an object with an "items" list"""
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("items", [])
    if not isinstance(data, list):
        raise IngestionError(f"{path} must hold a list of content items")

    items = []
    for entry in data:
        item = ContentItem.model_validate(entry)
        if item.file_path is None:
            item.file_path = str(path)
        items.append(item)
    return items


def _load_text(path: Path) -> ContentItem:
    item = ContentItem(content=path.read_text(encoding="utf-8"), file_path=str(path))
    if path.suffix == ".xeto":
        # Xeto sources live in a directory named after their library
        item.library_name = path.parent.name
    return item


def _expand(paths: Iterable[Union[str, Path]]) -> List[Path]:
    files = []
    for path in map(Path, paths):
        if path.is_dir():
            files.extend(
                sorted(p for p in path.rglob("*") if p.suffix in TEXT_SUFFIXES | {JSON_SUFFIX})
            )
        elif path.is_file():
            files.append(path)
        else:
            raise IngestionError(f"No such file or directory: {path}")
    return files


def load_content_items(paths: Iterable[Union[str, Path]]) -> List[ContentItem]:
    """
    Load content items from files and directories.

    Directories are searched recursively for .json, .md, .txt and .xeto files.
    Text files become one item each; JSON files hold a list of items.

    Raises:
        IngestionError: If a path is missing or a file cannot be parsed
    """
    items: List[ContentItem] = []
    for path in _expand(paths):
        try:
            if path.suffix == JSON_SUFFIX:
                items.extend(_load_json(path))
            else:
                items.append(_load_text(path))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
            logger.error(f"Error loading {path}: {e}")
            raise IngestionError(f"Failed to load {path}: {e}")

    logger.info(f"Loaded {len(items)} content items")
    return items
