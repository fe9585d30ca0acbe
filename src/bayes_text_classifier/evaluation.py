"""Held-out evaluation of the incremental classifier.

``cross_validate`` deals the labeled documents into stratified folds,
trains a fresh ``NaiveBayes`` on all but one fold and scores the held-out
fold with ``categorize``. Documents the model cannot categorize (it has
learned nothing) are counted under ``NO_CATEGORY_LABEL``.
"""

from __future__ import annotations

import logging
import random
from collections import Counter
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Optional

from .classifier import NO_CATEGORY, NaiveBayes

logger = logging.getLogger(__name__)

NO_CATEGORY_LABEL = "<none>"


@dataclass
class ClassificationMetrics:
    """Scores of one held-out fold.

    Attributes:
        accuracy: Share of documents whose predicted category is correct.
        f1: F1 score per category, including ``NO_CATEGORY_LABEL`` when
            the model returned no category.
        macro_f1: Unweighted mean of ``f1``.
        weighted_f1: Mean of ``f1`` weighted by ``support``.
        confusion_matrix: ``{true: {predicted: count}}``, observed pairs only.
        support: Number of held-out documents per true category.
    """

    accuracy: float = 0.0
    f1: dict[str, float] = field(default_factory=dict)
    macro_f1: float = 0.0
    weighted_f1: float = 0.0
    confusion_matrix: dict[str, dict[str, int]] = field(default_factory=dict)
    support: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "accuracy": round(self.accuracy, 4),
            "macro_f1": round(self.macro_f1, 4),
            "weighted_f1": round(self.weighted_f1, 4),
            "f1": {category: round(score, 4) for category, score in self.f1.items()},
            "confusion_matrix": self.confusion_matrix,
            "support": self.support,
        }


def compute_metrics(
    y_true: Sequence[str],
    y_pred: Sequence[Optional[str]],
) -> ClassificationMetrics:
    """Score predicted categories against the true ones.

    Raises:
        ValueError: If the two sequences differ in length.
    """
    if len(y_true) != len(y_pred):
        raise ValueError("y_true and y_pred must have the same length")
    if not y_true:
        return ClassificationMetrics()

    pairs = Counter(
        (true, NO_CATEGORY_LABEL if pred is NO_CATEGORY else pred)
        for true, pred in zip(y_true, y_pred)
    )
    actual: Counter[str] = Counter()
    predicted: Counter[str] = Counter()
    confusion: dict[str, dict[str, int]] = {}
    for (true, pred), count in pairs.items():
        actual[true] += count
        predicted[pred] += count
        confusion.setdefault(true, {})[pred] = count

    # F1 = 2 * tp / (|predicted as c| + |actually c|)
    f1 = {
        category: 2 * pairs[(category, category)] / (actual[category] + predicted[category])
        for category in sorted(actual.keys() | predicted.keys())
    }
    total = len(y_true)
    correct = sum(count for (true, pred), count in pairs.items() if true == pred)

    return ClassificationMetrics(
        accuracy=correct / total,
        f1=f1,
        macro_f1=sum(f1.values()) / len(f1),
        weighted_f1=sum(f1[c] * n for c, n in actual.items()) / total,
        confusion_matrix=confusion,
        support=dict(actual),
    )


def stratified_k_fold(
    labels: Sequence[str],
    k: int = 5,
    seed: int = 42,
) -> list[tuple[list[int], list[int]]]:
    """Split document indices into ``k`` folds with similar label mix.

    The indices of each label are shuffled and dealt to the folds in turn,
    so every fold holds roughly ``1/k`` of every label.

    Returns:
        ``(train_indices, test_indices)`` per fold, indices ascending.

    Raises:
        ValueError: If ``k`` is smaller than 2.
    """
    if k < 2:
        raise ValueError(f"k must be at least 2, got {k}")

    by_label: dict[str, list[int]] = {}
    for index, label in enumerate(labels):
        by_label.setdefault(label, []).append(index)

    rng = random.Random(seed)
    buckets: list[list[int]] = [[] for _ in range(k)]
    for indices in by_label.values():
        rng.shuffle(indices)
        for position, index in enumerate(indices):
            buckets[position % k].append(index)

    everything = range(len(labels))
    folds = []
    for bucket in buckets:
        held_out = set(bucket)
        folds.append(([i for i in everything if i not in held_out], sorted(bucket)))
    return folds


def cross_validate(
    documents: Sequence[str],
    labels: Sequence[str],
    k: int = 5,
    seed: int = 42,
    options: Optional[Mapping[str, Any]] = None,
) -> list[ClassificationMetrics]:
    """Cross-validate a fresh ``NaiveBayes`` per fold.

    Args:
        documents: Raw texts.
        labels: Category of each text.
        k: Number of folds.
        seed: Seed for fold assignment.
        options: Options passed to every fold's ``NaiveBayes``.

    Returns:
        Metrics for each fold that holds out at least one document.

    Raises:
        ValueError: If documents and labels differ in length.
    """
    if len(documents) != len(labels):
        raise ValueError(
            f"documents ({len(documents)}) and labels ({len(labels)}) must have same length"
        )

    results: list[ClassificationMetrics] = []
    for fold, (train, test) in enumerate(stratified_k_fold(labels, k=k, seed=seed)):
        if not test:
            continue
        classifier = NaiveBayes(options).learn_many((documents[i], labels[i]) for i in train)
        metrics = compute_metrics(
            [labels[i] for i in test],
            [classifier.categorize(documents[i]) for i in test],
        )
        logger.debug("Fold %d: accuracy %.4f on %d documents", fold, metrics.accuracy, len(test))
        results.append(metrics)
    return results
