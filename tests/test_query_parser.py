from query_parser import Query, QueryWord, parse_query, parse_query_word

STOP_WORDS = {"и", "в", "на"}


def test_parse_query_splits_plus_and_minus_words() -> None:
    query = parse_query("пушистый -хвост кот", STOP_WORDS)

    assert query == Query(plus_words={"пушистый", "кот"}, minus_words={"хвост"})


def test_parse_query_collapses_repeated_words() -> None:
    query = parse_query("кот кот -пёс -пёс", STOP_WORDS)

    assert query is not None
    assert query.plus_words == {"кот"}
    assert query.minus_words == {"пёс"}


def test_parse_query_drops_stop_words_including_minus_ones() -> None:
    query = parse_query("кот и -в", STOP_WORDS)

    assert query == Query(plus_words={"кот"}, minus_words=set())


def test_parse_query_empty_query_is_valid() -> None:
    assert parse_query("", STOP_WORDS) == Query()


def test_parse_query_rejects_double_minus() -> None:
    assert parse_query("--пушистый", STOP_WORDS) is None
    assert parse_query("кот --пёс", STOP_WORDS) is None


def test_parse_query_rejects_lone_minus() -> None:
    assert parse_query("-", STOP_WORDS) is None
    assert parse_query("кот - пёс", STOP_WORDS) is None


def test_parse_query_rejects_control_characters() -> None:
    assert parse_query("ко\x01т", STOP_WORDS) is None


def test_parse_query_word_marks_minus_and_stop() -> None:
    assert parse_query_word("-и", STOP_WORDS) == QueryWord("и", is_minus=True, is_stop=True)
    assert parse_query_word("кот", STOP_WORDS) == QueryWord("кот", is_minus=False, is_stop=False)


def test_parse_query_word_allows_inner_minus() -> None:
    assert parse_query_word("-иван-чай", STOP_WORDS) == QueryWord(
        "иван-чай", is_minus=True, is_stop=False
    )
