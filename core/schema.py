"""Schema adapter for persisted vocabulary sets.

Two record shapes exist in stored data:

* version 1: ``{sourceLanguage, targetLanguage, words: [{id, word, meaning}]}``
  (some exports carry ``sourceLanguages`` as a list instead)
* version 2: ``{languages, words: [{id, translations}]}``

Everything past this module only sees version 2 records.
"""

import logging

from .models import VocabularySet

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 2


def detect_version(record: dict) -> int:
    """Guess the schema version of a raw set record."""
    if isinstance(record.get('languages'), list):
        return 2
    if 'sourceLanguage' in record or 'sourceLanguages' in record or 'targetLanguage' in record:
        return 1
    return SCHEMA_VERSION


def _source_languages(record: dict) -> list[str]:
    sources = record.get('sourceLanguages')
    if isinstance(sources, list):
        return [s for s in sources if s]
    source = record.get('sourceLanguage')
    return [source] if source else []


def _union(*groups) -> list[str]:
    merged = []
    for group in groups:
        for lang in group:
            if lang and lang not in merged:
                merged.append(lang)
    return merged


def _migrate_word(word: dict, source: str | None, target: str | None) -> dict:
    """Turn a word/meaning entry into a translations entry. New-shape words pass through."""
    translations = dict(word.get('translations') or {})
    if source and word.get('word') and source not in translations:
        translations[source] = word['word']
    if target and word.get('meaning') and target not in translations:
        translations[target] = word['meaning']
    return {
        'id': word['id'],
        'translations': translations,
        'createdAt': word.get('createdAt')
    }


def migrate_record(record: dict) -> dict:
    """Normalize a raw set record to the current schema."""
    if detect_version(record) >= 2:
        source, target = None, None
        languages = list(record['languages'])
    else:
        sources = _source_languages(record)
        target = record.get('targetLanguage')
        source = sources[0] if sources else None
        languages = _union(sources, [target] if target else [])

    # Words can lag behind the set shape when a set was upgraded in place
    words = [_migrate_word(w, source, target) for w in record.get('words', [])]
    return {
        'id': record['id'],
        'name': record.get('name', ''),
        'languages': languages,
        'words': words,
        'createdAt': record.get('createdAt')
    }


def load_records(records) -> list[VocabularySet]:
    """Normalize and build sets from a decoded blob. Broken records are skipped."""
    if not isinstance(records, list):
        logger.warning(f"Expected a list of vocabulary sets, got {type(records).__name__}")
        return []

    sets = []
    for record in records:
        try:
            sets.append(VocabularySet.from_dict(migrate_record(record)))
        except (KeyError, TypeError, AttributeError) as e:
            logger.warning(f"Skipping malformed vocabulary set record: {e}")
    return sets
