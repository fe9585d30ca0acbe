"""Exception hierarchy for the Naive Bayes text classifier."""

from __future__ import annotations


class BayesClassifierError(Exception):
    """Base class for all classifier errors."""


class ConfigurationError(BayesClassifierError, TypeError):
    """Raised when a classifier is constructed with invalid options."""


class DeserializationError(BayesClassifierError, ValueError):
    """Raised when a serialized model cannot be restored."""


class NotTrainedError(BayesClassifierError, RuntimeError):
    """Raised when an operation needs at least one learned category."""
