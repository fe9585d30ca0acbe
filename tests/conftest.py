"""Shared test fixtures for bayes-text-classifier tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from bayes_text_classifier import NaiveBayes

SENTIMENT_EXAMPLES = [
    ("amazing, awesome movie!! Yeah!!", "positive"),
    ("Sweet, this is incredibly, amazing, perfect, great!!", "positive"),
    ("terrible, shitty thing. Damn. Sucks!!", "negative"),
    ("I dont really know what to make of this.", "neutral"),
]

TOPIC_EXAMPLES = [
    ("Chinese Beijing Chinese", "chinese"),
    ("Chinese Chinese Shanghai", "chinese"),
    ("Chinese Macao", "chinese"),
    ("Tokyo Japan Chinese", "japanese"),
]

# Every document carries its class keywords plus two unique filler words.
SPORTS_DOCS = [
    f"team goal match {a} {b}"
    for a, b in [
        ("striker", "stadium"), ("referee", "whistle"), ("keeper", "save"),
        ("league", "table"), ("coach", "tactics"), ("derby", "crowd"),
    ]
]
COOKING_DOCS = [
    f"recipe oven flour {a} {b}"
    for a, b in [
        ("butter", "sugar"), ("whisk", "eggs"), ("knead", "dough"),
        ("simmer", "sauce"), ("roast", "garlic"), ("bake", "bread"),
    ]
]


@pytest.fixture
def sentiment_examples() -> list[tuple[str, str]]:
    return list(SENTIMENT_EXAMPLES)


@pytest.fixture
def topic_examples() -> list[tuple[str, str]]:
    return list(TOPIC_EXAMPLES)


@pytest.fixture
def sentiment_classifier() -> NaiveBayes:
    """Classifier trained on a tiny sentiment corpus."""
    return NaiveBayes().learn_many(SENTIMENT_EXAMPLES)


@pytest.fixture
def topic_classifier() -> NaiveBayes:
    """Classifier trained on the classic Chinese/Japanese example."""
    return NaiveBayes().learn_many(TOPIC_EXAMPLES)


@pytest.fixture
def labeled_corpus() -> tuple[list[str], list[str]]:
    """Two cleanly separable classes for evaluation tests."""
    docs = SPORTS_DOCS + COOKING_DOCS
    labels = ["sports"] * len(SPORTS_DOCS) + ["cooking"] * len(COOKING_DOCS)
    return docs, labels


@pytest.fixture
def tsv_corpus(tmp_path: Path) -> Path:
    """Sentiment corpus written as category<TAB>text lines."""
    file = tmp_path / "sentiment.tsv"
    file.write_text(
        "\n".join(f"{category}\t{text}" for text, category in SENTIMENT_EXAMPLES) + "\n",
        encoding="utf-8",
    )
    return file


@pytest.fixture
def jsonl_corpus(tmp_path: Path, labeled_corpus) -> Path:
    """Separable corpus written as JSON lines."""
    docs, labels = labeled_corpus
    file = tmp_path / "topics.jsonl"
    file.write_text(
        "\n".join(
            json.dumps({"text": text, "category": label})
            for text, label in zip(docs, labels)
        ),
        encoding="utf-8",
    )
    return file
