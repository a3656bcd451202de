"""File-based storage implementation.

The data file is a flat JSON object of string values, the same layout as the
browser's local storage: the vocabulary collection is JSON text stored under
STORAGE_KEY.
"""

import json
import logging
import os

from core.config import STORAGE_KEY, DEFAULT_DATA_FILENAME
from core.interfaces import VocabularyRepository
from core.models import VocabularySet
from core.schema import load_records

logger = logging.getLogger(__name__)


class FileStorage(VocabularyRepository):
    """File-based storage implementation."""

    def __init__(self, data_file: str = None, config_file: str = None):
        self.config_file = config_file or os.path.expanduser('~/.config/wordplay/config.json')
        # Project root is one level up from server/
        project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        self.data_file = data_file or os.path.join(project_root, DEFAULT_DATA_FILENAME)

    def load_config(self) -> dict:
        if not os.path.exists(self.config_file):
            raise FileNotFoundError(f"Config file not found at {self.config_file}")
        with open(self.config_file, 'r') as f:
            return json.load(f)

    def _load_items(self) -> dict:
        """Load the whole key-value file."""
        if not os.path.exists(self.data_file):
            return {}
        try:
            with open(self.data_file, 'r', encoding='utf-8') as f:
                items = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Error reading {self.data_file}: {e}")
            return {}
        if not isinstance(items, dict):
            logger.error(f"Ignoring {self.data_file}: expected a JSON object")
            return {}
        return items

    def _save_items(self, items: dict) -> None:
        with open(self.data_file, 'w', encoding='utf-8') as f:
            json.dump(items, f, indent=2, ensure_ascii=False)

    def get_item(self, key: str) -> str | None:
        return self._load_items().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._load_items()
        items[key] = value
        self._save_items(items)

    def load_sets(self) -> list[VocabularySet]:
        blob = self.get_item(STORAGE_KEY)
        if not blob:
            return []
        try:
            records = json.loads(blob)
        except (TypeError, ValueError) as e:
            logger.error(f"Error loading vocabulary sets: {e}")
            return []
        return load_records(records)

    def save_sets(self, sets: list[VocabularySet]) -> None:
        blob = json.dumps([s.to_dict() for s in sets], ensure_ascii=False)
        self.set_item(STORAGE_KEY, blob)
