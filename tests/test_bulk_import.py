from jlpt_vocab.core import vocab_store
from jlpt_vocab.core.bulk_import import bulk_import, classify_lines
from jlpt_vocab.core.errors import StoreError
from jlpt_vocab.models import JLPTLevel

BOM = "\ufeff"
FORM_FEED = "\x0c"


def test_classify_lines_keeps_first_seen_order():
    words, repeats, errors = classify_lines("  猫\n\n犬\r\n猫\nhello\n鳥\n")
    assert words == ["猫", "犬", "鳥"]
    assert repeats == 1
    assert errors == ['"hello" - Not Japanese']


def test_intra_batch_duplicates_are_skipped(db):
    result = bulk_import(db, "食べる\n食べる\n飲む")
    assert result.success_count == 2
    assert result.skipped_count == 1
    assert result.errors == []
    assert vocab_store.count(db) == 2


def test_non_japanese_lines_are_errors_not_skips(db):
    result = bulk_import(db, "hello\n食べる")
    assert result.success_count == 1
    assert result.skipped_count == 0
    assert result.errors == ['"hello" - Not Japanese']


def test_words_already_in_the_store_are_skipped(db):
    vocab_store.insert(db, "水")
    result = bulk_import(db, "水\n火\n土")
    assert result.success_count == 2
    assert result.skipped_count == 1
    assert sorted(vocab_store.list_words(db)) == sorted(["水", "火", "土"])


def test_default_level_applies_to_the_whole_batch(db):
    bulk_import(db, "青\n赤", level=JLPTLevel.N4)
    assert {e.level for e in vocab_store.list_entries(db)} == {"N4"}


def test_empty_input_does_nothing(db):
    result = bulk_import(db, "\n   \n")
    assert result.success_count == 0
    assert result.skipped_count == 0
    assert result.errors == []


def test_batches_run_in_sequence(db, monkeypatch):
    seen = []
    real_find = vocab_store.find_existing_words

    def tracking_find(session, words):
        seen.append(list(words))
        return real_find(session, words)

    monkeypatch.setattr(vocab_store, "find_existing_words", tracking_find)

    words = [f"字{i}" for i in range(7)]
    result = bulk_import(db, "\n".join(words), batch_size=3)

    assert seen == [words[0:3], words[3:6], words[6:7]]
    assert result.success_count == 7


def test_failed_existence_check_only_loses_that_batch(db, monkeypatch):
    real_find = vocab_store.find_existing_words
    calls = {"n": 0}

    def flaky_find(session, words):
        calls["n"] += 1
        if calls["n"] == 2:
            raise StoreError("find_existing_words", "timeout")
        return real_find(session, words)

    monkeypatch.setattr(vocab_store, "find_existing_words", flaky_find)

    text = "\n".join(f"品{i}" for i in range(5))
    result = bulk_import(db, text, batch_size=2)

    assert result.success_count == 3
    assert result.errors == ["Batch 2-4: Failed to check duplicates"]
    assert vocab_store.count(db) == 3


def test_failed_insert_is_not_counted(db, monkeypatch):
    real_insert = vocab_store.insert_many

    def flaky_insert(session, words, level=None):
        if "花" in words:
            raise StoreError("insert_many", "disk full")
        return real_insert(session, words, level)

    monkeypatch.setattr(vocab_store, "insert_many", flaky_insert)

    result = bulk_import(db, "木\n森\n花\n草", batch_size=2)

    assert result.success_count == 2
    assert result.errors == ["Batch insert failed for 2 words"]
    assert sorted(vocab_store.list_words(db)) == sorted(["木", "森"])


def test_only_newlines_split_the_input():
    words, repeats, errors = classify_lines("猫" + FORM_FEED + "犬\n鳥")
    assert words == ["猫" + FORM_FEED + "犬", "鳥"]


def test_byte_order_mark_does_not_create_a_second_entry(db):
    vocab_store.insert(db, "食べる")
    result = bulk_import(db, BOM + "食べる\n飲む")
    assert result.success_count == 1
    assert result.skipped_count == 1
    assert sorted(vocab_store.list_words(db)) == sorted(["食べる", "飲む"])
