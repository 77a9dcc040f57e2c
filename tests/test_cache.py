from jlpt_vocab.core.cache import QueryCache


def test_complete_load_is_stored():
    cache = QueryCache()
    calls = []

    def loader():
        calls.append(1)
        return ["猫"], True

    assert cache.get_or_load("k", loader) == ["猫"]
    assert cache.get_or_load("k", loader) == ["猫"]
    assert len(calls) == 1


def test_incomplete_load_is_returned_but_not_stored():
    cache = QueryCache()
    results = iter([(["猫"], False), (["猫", "犬"], True)])

    assert cache.get_or_load("k", lambda: next(results)) == ["猫"]
    assert not cache.contains("k")
    assert cache.get_or_load("k", lambda: next(results)) == ["猫", "犬"]
    assert cache.contains("k")


def test_load_overtaken_by_invalidate_is_discarded():
    cache = QueryCache()

    def loader():
        value = ["before write"]
        # a write commits and invalidates while this read is still running
        cache.invalidate()
        return value, True

    assert cache.get_or_load("k", loader) == ["before write"]
    assert not cache.contains("k")
    assert cache.get_or_load("k", lambda: (["after write"], True)) == ["after write"]


def test_invalidate_single_key():
    cache = QueryCache()
    cache.get_or_load("a", lambda: (1, True))
    cache.get_or_load("b", lambda: (2, True))

    cache.invalidate("a")

    assert not cache.contains("a")
    assert cache.contains("b")
