"""Result types returned by the classifier."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class CategoryScore:
    """Log-probability and normalized posterior for one category."""

    category: str
    log_probability: float
    probability: float

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "log_probability": round(self.log_probability, 6),
            "probability": round(self.probability, 4),
        }


@dataclass
class ClassificationResult:
    """Result of classifying a single document.

    Attributes:
        predicted_class: Category with the greatest log-probability.
        confidence: Posterior probability of ``predicted_class``.
        probabilities: Posterior probability per category, in
            registration order.
        scores: Per-category breakdown, in registration order.
    """

    predicted_class: str
    confidence: float
    probabilities: dict[str, float]
    scores: list[CategoryScore] = field(default_factory=list, repr=False)

    def ranked(self) -> list[CategoryScore]:
        """Scores sorted from most to least likely."""
        return sorted(self.scores, key=lambda s: s.log_probability, reverse=True)

    def to_dict(self) -> dict:
        return {
            "predicted_class": self.predicted_class,
            "confidence": round(self.confidence, 4),
            "probabilities": {
                k: round(v, 4) for k, v in sorted(
                    self.probabilities.items(),
                    key=lambda x: x[1],
                    reverse=True,
                )
            },
        }
