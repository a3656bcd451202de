"""Sample vocabulary sets for trying out the games.

Usage: python -m scripts.seed_sets [data_file]
"""

import json
import sys

from core.config import STORAGE_KEY
from core.models import VocabularySet, VocabWord, new_id
from server.file_storage import FileStorage


def get_seed_sets() -> list[VocabularySet]:
    """Sets in the current schema."""
    animals = {
        'cat': {'english': 'cat', 'vietnamese': 'mèo', 'french': 'chat', 'spanish': 'gato'},
        'dog': {'english': 'dog', 'vietnamese': 'chó', 'french': 'chien', 'spanish': 'perro'},
        'bird': {'english': 'bird', 'vietnamese': 'chim', 'french': 'oiseau', 'spanish': 'pájaro'},
        'fish': {'english': 'fish', 'vietnamese': 'cá', 'french': 'poisson', 'spanish': 'pez'},
        'horse': {'english': 'horse', 'vietnamese': 'ngựa', 'french': 'cheval', 'spanish': 'caballo'},
        'cow': {'english': 'cow', 'vietnamese': 'bò', 'french': 'vache', 'spanish': 'vaca'},
        'pig': {'english': 'pig', 'vietnamese': 'lợn', 'french': 'cochon', 'spanish': 'cerdo'},
        'mouse': {'english': 'mouse', 'vietnamese': 'chuột', 'french': 'souris', 'spanish': 'ratón'},
    }
    colors = {
        'red': {'english': 'red', 'japanese': 'あか', 'german': 'rot'},
        'blue': {'english': 'blue', 'japanese': 'あお', 'german': 'blau'},
        'green': {'english': 'green', 'japanese': 'みどり', 'german': 'grün'},
        'white': {'english': 'white', 'japanese': 'しろ', 'german': 'weiß'},
        'black': {'english': 'black', 'japanese': 'くろ', 'german': 'schwarz'},
        # Only one translation so far: not playable
        'purple': {'english': 'purple'},
    }
    return [
        VocabularySet(new_id(), 'Animals', ['english', 'vietnamese', 'french', 'spanish'],
                      [VocabWord(new_id(), t) for t in animals.values()]),
        VocabularySet(new_id(), 'Colors', ['english', 'japanese', 'german'],
                      [VocabWord(new_id(), t) for t in colors.values()]),
    ]


def get_legacy_records() -> list[dict]:
    """A set in the old word/meaning shape, migrated when loaded."""
    pairs = [('hello', 'xin chào'), ('thank you', 'cảm ơn'), ('goodbye', 'tạm biệt'),
             ('yes', 'vâng'), ('no', 'không')]
    return [{
        'id': new_id(),
        'name': 'Basic Phrases',
        'sourceLanguage': 'english',
        'targetLanguage': 'vietnamese',
        'words': [{'id': new_id(), 'word': w, 'meaning': m} for w, m in pairs],
        'createdAt': '2024-01-01T00:00:00Z'
    }]


def main(argv: list[str]) -> int:
    storage = FileStorage(data_file=argv[1] if len(argv) > 1 else None)
    records = [s.to_dict() for s in get_seed_sets()] + get_legacy_records()
    storage.set_item(STORAGE_KEY, json.dumps(records, ensure_ascii=False))
    print(f"Seeded {len(records)} vocabulary sets into {storage.data_file}")
    return 0


if __name__ == '__main__':
    sys.exit(main(sys.argv))
