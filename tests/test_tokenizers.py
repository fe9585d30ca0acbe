"""Tests for the default tokenizer and frequency counting."""

from __future__ import annotations

from bayes_text_classifier.tokenizers import default_tokenizer, frequency_table


class TestDefaultTokenizer:
    """Tests for default_tokenizer."""

    def test_splits_on_whitespace(self) -> None:
        assert default_tokenizer("Chinese Beijing Chinese") == ["Chinese", "Beijing", "Chinese"]

    def test_punctuation_becomes_separator(self) -> None:
        assert default_tokenizer("amazing,awesome!!movie") == ["amazing", "awesome", "movie"]

    def test_no_empty_tokens_from_edge_punctuation(self) -> None:
        assert default_tokenizer("!!Yeah!!") == ["Yeah"]
        assert default_tokenizer("amazing, awesome movie!! Yeah!!") == [
            "amazing", "awesome", "movie", "Yeah",
        ]

    def test_keeps_digits_and_underscore(self) -> None:
        assert default_tokenizer("call_me at 555-1234") == ["call_me", "at", "555", "1234"]

    def test_preserves_case(self) -> None:
        assert default_tokenizer("Yay yay") == ["Yay", "yay"]

    def test_cyrillic_letters_are_word_characters(self) -> None:
        tokens = default_tokenizer("Надо купить сигареты. Надо!")
        assert tokens == ["Надо", "купить", "сигареты", "Надо"]

    def test_accented_latin(self) -> None:
        assert default_tokenizer("confidentialité, café") == ["confidentialité", "café"]

    def test_empty_and_whitespace(self) -> None:
        assert default_tokenizer("") == []
        assert default_tokenizer("   \n\t ") == []

    def test_only_punctuation(self) -> None:
        assert default_tokenizer("?!... ,;") == []


class TestFrequencyTable:
    """Tests for frequency_table."""

    def test_counts_occurrences(self) -> None:
        assert frequency_table(["a", "b", "a", "c", "a"]) == {"a": 3, "b": 1, "c": 1}

    def test_empty_sequence(self) -> None:
        assert frequency_table([]) == {}

    def test_first_occurrence_order(self) -> None:
        assert list(frequency_table(["z", "y", "z", "x"])) == ["z", "y", "x"]

    def test_accepts_generators(self) -> None:
        assert frequency_table(t for t in "abca") == {"a": 2, "b": 1, "c": 1}

    def test_cyrillic_counts_match_manual_tokenization(self) -> None:
        text = "Привет, мир! Привет всем. Мир?"
        table = frequency_table(default_tokenizer(text))
        assert table == {"Привет": 2, "мир": 1, "всем": 1, "Мир": 1}

    def test_total_equals_token_count(self) -> None:
        tokens = default_tokenizer("the cat and the hat and the bat")
        assert sum(frequency_table(tokens).values()) == len(tokens)
