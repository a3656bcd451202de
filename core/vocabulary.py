"""Vocabulary sampling shared by the games."""

import random

from .interfaces import Notifier, VocabularyRepository
from .models import VocabularySet, VocabWord

ERROR_TITLE = 'Error'
NO_SET_SELECTED = 'Please select a vocabulary set'
SET_HAS_NO_WORDS = 'This vocabulary set has no words'
NO_USABLE_WORDS = 'No words with at least 2 translations were found'


class WordChallenge:
    """A single question: one translation shown, every other one accepted."""

    def __init__(self, word_id: str, question_text: str, question_language: str,
                 correct_answers: list[dict], attempts: int = 0):
        self.word_id = word_id
        self.question_text = question_text
        self.question_language = question_language
        self.correct_answers = correct_answers  # [{language, text}]
        self.attempts = attempts

    def is_correct(self, answer: str) -> bool:
        """Case-insensitive exact match against any accepted translation."""
        given = answer.lower()
        return any(given == item['text'].lower() for item in self.correct_answers)

    def to_dict(self) -> dict:
        return {
            'word_id': self.word_id,
            'question_text': self.question_text,
            'question_language': self.question_language,
            'correct_answers': [dict(a) for a in self.correct_answers],
            'attempts': self.attempts
        }


def make_challenge(word: VocabWord, rng: random.Random = None) -> WordChallenge:
    """Build a challenge from a usable word with a random prompt language."""
    rng = rng or random
    languages = word.languages
    question_language = rng.choice(languages)
    correct_answers = [
        {'language': lang, 'text': word.translations[lang]}
        for lang in languages if lang != question_language
    ]
    return WordChallenge(word.id, word.translations[question_language],
                         question_language, correct_answers)


def resolve_set(repository: VocabularyRepository, set_id: str | None,
                notifier: Notifier) -> tuple[VocabularySet, list[VocabWord]] | None:
    """Load the chosen set and its usable words.

    Precondition failures are reported through the notifier and give None.
    """
    if not set_id:
        notifier.notify(ERROR_TITLE, NO_SET_SELECTED, 'destructive')
        return None

    vocab_set = repository.get_set(set_id)
    if vocab_set is None or not vocab_set.words:
        notifier.notify(ERROR_TITLE, SET_HAS_NO_WORDS, 'destructive')
        return None

    usable = vocab_set.usable_words()
    if not usable:
        notifier.notify(ERROR_TITLE, NO_USABLE_WORDS, 'destructive')
        return None
    return vocab_set, usable
