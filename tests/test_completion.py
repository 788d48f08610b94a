from pegadmin.completion import filter_string_with_prefix


def test_filters_by_prefix():
    words = ["apple", "apricot", "banana"]
    assert filter_string_with_prefix(words, "ap") == ["apple", "apricot"]


def test_empty_prefix_keeps_all():
    words = ["lively", "steady"]
    assert filter_string_with_prefix(words, "") == words


def test_no_match():
    assert filter_string_with_prefix(["lively", "steady"], "x") == []


def test_accepts_iterables():
    result = filter_string_with_prefix(iter(["replica.a", "default_ttl"]), "replica")
    assert result == ["replica.a"]