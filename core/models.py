"""Domain models for wordplay application."""

import uuid
from datetime import datetime, timezone

from .config import MIN_TRANSLATIONS, LANGUAGE_LABELS


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def new_id() -> str:
    return uuid.uuid4().hex


def language_label(code: str) -> str:
    """Get display name for a language code."""
    return LANGUAGE_LABELS.get(code, code)


class VocabWord:
    """A word with its text in one or more languages."""

    def __init__(self, word_id: str, translations: dict, created_at: str = None):
        self.id = word_id
        self.translations = dict(translations)
        self.created_at = created_at or _now_iso()

    @property
    def languages(self) -> list[str]:
        """Languages with non-empty text, in insertion order."""
        return [lang for lang, text in self.translations.items() if text]

    def is_usable(self) -> bool:
        return len(self.languages) >= MIN_TRANSLATIONS

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'translations': dict(self.translations),
            'createdAt': self.created_at
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'VocabWord':
        translations = data.get('translations') or {}
        return cls(
            str(data['id']),
            {str(lang): str(text) for lang, text in translations.items() if text is not None},
            data.get('createdAt')
        )


class VocabularySet:
    """A named collection of words across a fixed list of languages."""

    def __init__(self, set_id: str, name: str, languages: list[str],
                 words: list[VocabWord] = None, created_at: str = None):
        self.id = set_id
        self.name = name
        self.languages = list(languages)
        self.words = list(words or [])
        self.created_at = created_at or _now_iso()

    def usable_words(self) -> list[VocabWord]:
        """Words with translations in at least two languages."""
        return [word for word in self.words if word.is_usable()]

    def summary(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'languages': list(self.languages),
            'word_count': len(self.words),
            'usable_word_count': len(self.usable_words())
        }

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'languages': list(self.languages),
            'words': [w.to_dict() for w in self.words],
            'createdAt': self.created_at
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'VocabularySet':
        """Build a set from a normalized record (see core.schema)."""
        return cls(
            str(data['id']),
            data.get('name', ''),
            data.get('languages', []),
            [VocabWord.from_dict(w) for w in data.get('words', [])],
            data.get('createdAt')
        )
