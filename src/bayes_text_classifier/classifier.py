"""Incremental multinomial Naive Bayes text classifier.

Learns one labeled document at a time and keeps raw counts rather than
precomputed probabilities, so the model can be trained further at any
point, including after it has been saved and restored.

Features:
- Pluggable tokenizer (Unicode-aware default)
- Laplace (add-one) smoothed token probabilities
- Log-space scoring with deterministic tie-breaking
- Posterior probabilities via log-sum-exp
- Most informative tokens per category
- Lossless JSON persistence of the full model state
"""

from __future__ import annotations

import copy
import json
import logging
import math
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Optional

from .exceptions import ConfigurationError, DeserializationError, NotTrainedError
from .models import CategoryScore, ClassificationResult
from .tokenizers import Tokenizer, default_tokenizer, frequency_table

logger = logging.getLogger(__name__)

#: Fields of a serialized model. All of them are required on import.
STATE_KEYS: tuple[str, ...] = (
    "categories",
    "doc_count",
    "total_documents",
    "vocabulary",
    "vocabulary_size",
    "word_count",
    "word_frequency_count",
    "options",
)

#: Returned by ``categorize`` when no category has been learned yet.
NO_CATEGORY = None


class NaiveBayes:
    """Multinomial Naive Bayes classifier with Laplace smoothing.

    The model is a single mutable unit of state. ``learn`` folds a labeled
    document into the counts; ``categorize`` and the serialization methods
    only read them.

    Example::

        classifier = NaiveBayes()
        classifier.learn("Chinese Beijing Chinese", "chinese")
        classifier.learn("Tokyo Japan Chinese", "japanese")

        classifier.categorize("Chinese Chinese Tokyo")  # "chinese"

        # Persist and restore
        classifier.save("model.json")
        restored = NaiveBayes.load("model.json")

    Args:
        options: Optional configuration mapping. The only recognized key is
            ``tokenizer``, a callable turning text into a token sequence.
            Other keys are kept verbatim and persisted with the model.

    Raises:
        ConfigurationError: If ``options`` is not a mapping or the
            tokenizer is not callable.
    """

    def __init__(self, options: Optional[Mapping[str, Any]] = None) -> None:
        if options is not None and not isinstance(options, Mapping):
            raise ConfigurationError(
                f"NaiveBayes got invalid options: {options!r}. Pass in a mapping."
            )
        self._options: dict[str, Any] = dict(options or {})

        tokenizer = self._options.get("tokenizer") or default_tokenizer
        if not callable(tokenizer):
            raise ConfigurationError(
                f"Tokenizer must be callable, got {type(tokenizer).__name__}"
            )
        self._tokenizer: Tokenizer = tokenizer

        # Insertion-ordered sets; category order decides ties in categorize()
        self._categories: dict[str, None] = {}
        self._vocabulary: dict[str, None] = {}
        self._vocabulary_size = 0
        self._total_documents = 0

        # Per-category counters
        self._doc_count: dict[str, int] = {}
        self._word_count: dict[str, int] = {}
        self._word_frequency_count: dict[str, dict[str, int]] = {}

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(categories={len(self._categories)}, "
            f"vocabulary_size={self._vocabulary_size}, "
            f"total_documents={self._total_documents})"
        )

    # ------------------------------------------------------------------
    # Read-only views of the store
    # ------------------------------------------------------------------

    @property
    def options(self) -> dict[str, Any]:
        return dict(self._options)

    @property
    def tokenizer(self) -> Tokenizer:
        return self._tokenizer

    @property
    def categories(self) -> list[str]:
        """Known categories in registration order."""
        return list(self._categories)

    @property
    def vocabulary(self) -> list[str]:
        """Distinct tokens in first-seen order."""
        return list(self._vocabulary)

    @property
    def vocabulary_size(self) -> int:
        return self._vocabulary_size

    @property
    def total_documents(self) -> int:
        return self._total_documents

    @property
    def doc_count(self) -> dict[str, int]:
        return dict(self._doc_count)

    @property
    def word_count(self) -> dict[str, int]:
        return dict(self._word_count)

    @property
    def word_frequency_count(self) -> dict[str, dict[str, int]]:
        return {cat: dict(freqs) for cat, freqs in self._word_frequency_count.items()}

    @property
    def is_trained(self) -> bool:
        """Whether at least one category has been learned."""
        return bool(self._categories)

    # ------------------------------------------------------------------
    # Learning
    # ------------------------------------------------------------------

    def learn(self, text: str, category: str) -> "NaiveBayes":
        """Fold one labeled document into the model.

        The text is tokenized before any counter is touched, so a failing
        tokenizer leaves the model unchanged.

        Args:
            text: Raw document text. Empty text still counts as a document.
            category: Category label for the document.

        Returns:
            Self (for method chaining).
        """
        return self.learn_tokens(self._tokenizer(text), category)

    def learn_tokens(self, tokens: Iterable[str], category: str) -> "NaiveBayes":
        """Like ``learn`` but for text that is already tokenized."""
        table = frequency_table(tokens)

        self._initialize_category(category)
        self._doc_count[category] += 1
        self._total_documents += 1

        frequencies = self._word_frequency_count[category]
        for token, count in table.items():
            if token not in self._vocabulary:
                self._vocabulary[token] = None
                self._vocabulary_size += 1

            if token in frequencies:
                frequencies[token] += count
            else:
                frequencies[token] = count

            self._word_count[category] += count

        return self

    def learn_many(self, examples: Iterable[tuple[str, str]]) -> "NaiveBayes":
        """Learn a sequence of ``(text, category)`` pairs in order."""
        for text, category in examples:
            self.learn(text, category)
        return self

    def _initialize_category(self, category: str) -> None:
        if category in self._categories:
            return
        self._doc_count[category] = 0
        self._word_count[category] = 0
        self._word_frequency_count[category] = {}
        self._categories[category] = None
        logger.debug("Registered category %r", category)

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def token_probability(self, token: str, category: str) -> float:
        """Laplace-smoothed estimate of P(token | category).

        ``(count + 1) / (word_count[category] + vocabulary_size)``

        Raises:
            KeyError: If ``category`` has never been learned.
        """
        frequencies = self._word_frequency_count[category]
        count = frequencies[token] if token in frequencies else 0
        return (count + 1) / (self._word_count[category] + self._vocabulary_size)

    def scores(self, text: str) -> dict[str, float]:
        """Compute the log-probability of each category for a document.

        Returns:
            Dict of ``{category: log_probability}`` in registration order,
            empty if nothing has been learned.
        """
        return self.score_tokens(self._tokenizer(text))

    def score_tokens(self, tokens: Iterable[str]) -> dict[str, float]:
        """Like ``scores`` but for text that is already tokenized."""
        table = frequency_table(tokens)
        scores: dict[str, float] = {}
        for category in self._categories:
            log_probability = math.log(self._doc_count[category] / self._total_documents)

            # With an empty vocabulary every category shares the same
            # likelihood, so only the prior matters. The most frequent
            # category wins instead of the first registered one.
            if self._vocabulary_size:
                for token, count in table.items():
                    log_probability += count * math.log(
                        self.token_probability(token, category)
                    )

            scores[category] = log_probability
        return scores

    def categorize(self, text: str) -> Optional[str]:
        """Predict the most likely category for a document.

        Ties are won by the category that was registered first. If only
        empty documents have been learned, the category with the most
        documents wins rather than the first registered one.

        Args:
            text: Raw document text.

        Returns:
            The chosen category, or ``NO_CATEGORY`` (``None``) if no
            category has been learned yet.
        """
        return _argmax(self.scores(text))

    def categorize_tokens(self, tokens: Iterable[str]) -> Optional[str]:
        """Like ``categorize`` but for text that is already tokenized."""
        return _argmax(self.score_tokens(tokens))

    def probabilities(self, text: str) -> dict[str, float]:
        """Posterior probability of each category (log-sum-exp normalized)."""
        return _normalize(self.scores(text))

    def classify(self, text: str) -> ClassificationResult:
        """Classify a document and report the posterior for every category.

        Raises:
            NotTrainedError: If no category has been learned yet.
        """
        if not self.is_trained:
            raise NotTrainedError("Classifier has not learned any category yet.")

        log_scores = self.scores(text)
        proba = _normalize(log_scores)
        predicted = _argmax(log_scores)

        return ClassificationResult(
            predicted_class=predicted,
            confidence=proba[predicted],
            probabilities=proba,
            scores=[
                CategoryScore(category=cat, log_probability=lp, probability=proba[cat])
                for cat, lp in log_scores.items()
            ],
        )

    def most_informative_features(
        self,
        category: str,
        top_n: int = 20,
    ) -> list[tuple[str, float]]:
        """Return the tokens that most favour a given category.

        Measures how much more likely a token is under the target category
        than on average under the other categories.

        Args:
            category: Target category.
            top_n: Number of tokens to return.

        Returns:
            List of (token, log_likelihood_ratio) tuples, sorted by
            discriminative power (descending).

        Raises:
            NotTrainedError: If no category has been learned yet.
            ValueError: If ``category`` is unknown.
        """
        if not self.is_trained:
            raise NotTrainedError("Classifier has not learned any category yet.")
        if category not in self._categories:
            raise ValueError(f"Unknown category: {category}. Known: {self.categories}")
        if not self._vocabulary_size:
            return []

        others = [c for c in self._categories if c != category]

        ratios: list[tuple[str, float]] = []
        for token in self._vocabulary:
            target_lp = math.log(self.token_probability(token, category))
            if others:
                other_lps = [math.log(self.token_probability(token, c)) for c in others]
                target_lp -= sum(other_lps) / len(other_lps)
            ratios.append((token, round(target_lp, 4)))

        ratios.sort(key=lambda x: x[1], reverse=True)
        return ratios[:top_n]

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict:
        """Export the full model state.

        The tokenizer is not serializable and is left out of ``options``;
        pass it again to ``from_dict`` when restoring.
        """
        return {
            "categories": list(self._categories),
            "doc_count": dict(self._doc_count),
            "total_documents": self._total_documents,
            "vocabulary": list(self._vocabulary),
            "vocabulary_size": self._vocabulary_size,
            "word_count": dict(self._word_count),
            "word_frequency_count": copy.deepcopy(self._word_frequency_count),
            "options": {k: v for k, v in self._options.items() if k != "tokenizer"},
        }

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        tokenizer: Optional[Tokenizer] = None,
    ) -> "NaiveBayes":
        """Restore a model exported with ``to_dict``.

        Every field in ``STATE_KEYS`` must be present. Empty values (as
        exported by a model that never learned anything) are valid.

        Args:
            data: Exported model state.
            tokenizer: Tokenizer to use if the model was built with a
                custom one.

        Returns:
            A new NaiveBayes with the restored state.

        Raises:
            DeserializationError: If ``data`` or its ``options`` is not a
                mapping, or a required field is missing.
        """
        if not isinstance(data, Mapping):
            raise DeserializationError(
                f"Expected a mapping of model state, got {type(data).__name__}"
            )
        for key in STATE_KEYS:
            if key not in data:
                raise DeserializationError(
                    f"Serialized model is missing an expected property: {key}"
                )

        if not isinstance(data["options"], Mapping):
            raise DeserializationError(
                f"Serialized options must be a mapping, got {data['options']!r}"
            )
        options = dict(data["options"])
        if tokenizer is not None:
            options["tokenizer"] = tokenizer
        nb = cls(options)

        nb._categories = dict.fromkeys(data["categories"])
        nb._doc_count = dict(data["doc_count"])
        nb._total_documents = data["total_documents"]
        nb._vocabulary = dict.fromkeys(data["vocabulary"])
        nb._vocabulary_size = data["vocabulary_size"]
        nb._word_count = dict(data["word_count"])
        nb._word_frequency_count = copy.deepcopy(dict(data["word_frequency_count"]))

        logger.debug(
            "Restored model with %d categories and %d tokens",
            len(nb._categories),
            nb._vocabulary_size,
        )
        return nb

    def to_json(self, **kwargs: Any) -> str:
        """Serialize the model state to a JSON string."""
        return json.dumps(self.to_dict(), ensure_ascii=False, **kwargs)

    @classmethod
    def from_json(cls, json_str: str, tokenizer: Optional[Tokenizer] = None) -> "NaiveBayes":
        """Restore a model from a JSON string produced by ``to_json``.

        Raises:
            DeserializationError: If the string is not valid JSON or the
                state is incomplete.
        """
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as exc:
            raise DeserializationError(
                "NaiveBayes.from_json expects a valid JSON string."
            ) from exc
        return cls.from_dict(data, tokenizer=tokenizer)

    def save(self, path: str | Path) -> None:
        """Save the model state to a JSON file.

        Args:
            path: File path to save to.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, ensure_ascii=False, indent=2)

    @classmethod
    def load(cls, path: str | Path, tokenizer: Optional[Tokenizer] = None) -> "NaiveBayes":
        """Load a model from a JSON file written by ``save``."""
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_json(f.read(), tokenizer=tokenizer)


def _argmax(log_scores: dict[str, float]) -> Optional[str]:
    """First category with the strictly greatest score."""
    chosen = NO_CATEGORY
    max_log_probability = -math.inf
    for category, log_probability in log_scores.items():
        if chosen is NO_CATEGORY or log_probability > max_log_probability:
            chosen = category
            max_log_probability = log_probability
    return chosen


def _normalize(log_scores: dict[str, float]) -> dict[str, float]:
    """Turn log scores into probabilities summing to 1."""
    if not log_scores:
        return {}
    max_score = max(log_scores.values())
    exp_scores = {cat: math.exp(s - max_score) for cat, s in log_scores.items()}
    total = sum(exp_scores.values())
    return {cat: score / total for cat, score in exp_scores.items()}
