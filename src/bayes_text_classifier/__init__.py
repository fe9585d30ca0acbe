"""Bayes Text Classifier -- incremental multinomial Naive Bayes for text."""

__version__ = "0.1.0"

from .async_classifier import AsyncNaiveBayes
from .classifier import NO_CATEGORY, STATE_KEYS, NaiveBayes
from .corpus import LabeledDocument, load_corpus
from .evaluation import (
    ClassificationMetrics,
    compute_metrics,
    cross_validate,
    stratified_k_fold,
)
from .exceptions import (
    BayesClassifierError,
    ConfigurationError,
    DeserializationError,
    NotTrainedError,
)
from .models import CategoryScore, ClassificationResult
from .tokenizers import default_tokenizer, frequency_table

__all__ = [
    # Core
    "NaiveBayes",
    "AsyncNaiveBayes",
    "NO_CATEGORY",
    "STATE_KEYS",
    # Tokenization
    "default_tokenizer",
    "frequency_table",
    # Results
    "ClassificationResult",
    "CategoryScore",
    # Errors
    "BayesClassifierError",
    "ConfigurationError",
    "DeserializationError",
    "NotTrainedError",
    # Evaluation
    "ClassificationMetrics",
    "compute_metrics",
    "cross_validate",
    "stratified_k_fold",
    # Corpora
    "LabeledDocument",
    "load_corpus",
]
