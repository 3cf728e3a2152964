import random

import pytest

import wordsearch_engine as eng


def test_clean_word():
    assert eng.clean_word("  hello-World 2 ") == "HELLOWORLD"
    assert eng.clean_word(None) == ""
    assert eng.clean_word("123") == ""


def test_words_from_text_dedupes_in_typed_order():
    text = "cat\r\nDog\n\n  cat  \n123\nmo-use\nDOG"
    assert eng.words_from_text(text) == ["CAT", "DOG", "MOUSE"]


def test_words_from_text_empty():
    assert eng.words_from_text("") == []
    assert eng.words_from_text(None) == []


@pytest.mark.parametrize("level, count", [("easy", 10), ("medium", 15), ("Medium", 15), ("hard", 10), (None, 10)])
def test_required_word_count(level, count):
    assert eng.required_word_count(level) == count


def test_validate_words_messages():
    words = ["AB", "CD", "EF"]
    assert eng.validate_words(words[:2], 10, 3) == "Please enter 3 words (one per line)."
    assert eng.validate_words(words + ["GH"], 10, 3) == "Please enter exactly 3 words (remove extras)."
    assert eng.validate_words(["AB", "LONGWORD", "C"], 5, 3) == (
        '"LONGWORD" is longer than the grid (5). Increase grid size or shorten the word.'
    )
    assert eng.validate_words(["AB", "C", "EF"], 5, 3) == "Each word must be at least 2 letters."
    assert eng.validate_words(words, 5, 3) is None


def _settings(**kw):
    base = dict(size=10, allow_diagonals=False, words=("CAT", "DOG"), title="Pets", author="Sam")
    base.update(kw)
    return eng.PuzzleSettings(**base)


def test_generate_then_shuffle_keeps_settings():
    settings = _settings()
    first = eng.generate_session(settings, rng=random.Random(1))
    second = eng.shuffle_session(first, rng=random.Random(2))

    assert second.settings is settings
    assert second.shuffled is True
    assert first.shuffled is False
    assert first.result is not second.result
    assert sorted(p.word for p in second.result.placements) == ["CAT", "DOG"]


def test_session_value_is_frozen():
    session = eng.generate_session(_settings(), rng=random.Random(1))
    with pytest.raises(AttributeError):
        session.result = None


def test_status_message():
    ok = eng.generate_session(_settings(), rng=random.Random(3))
    assert eng.status_message(ok) == "Generated."
    assert eng.status_message(eng.shuffle_session(ok, rng=random.Random(4))) == "Shuffled."

    bad = eng.generate_session(_settings(size=5, words=("AAAAAAAAAA",)), rng=random.Random(3))
    assert eng.status_message(bad) == "Generated (with issues, see warning)."
    assert eng.status_message(eng.shuffle_session(bad)) == "Shuffled (with issues, see warning)."
