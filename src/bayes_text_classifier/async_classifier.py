"""Asynchronous wrapper around :class:`NaiveBayes`.

Lets the classifier run inside an event loop with a tokenizer that may be
a coroutine function (e.g. one that calls a remote tokenization service).
All operations on one instance are serialized through an ``asyncio.Lock``,
so a ``learn`` never interleaves with another ``learn`` or with a read.
The arithmetic is delegated to an owned ``NaiveBayes``.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Iterable, Mapping
from typing import Any, Optional

from .classifier import NaiveBayes
from .exceptions import ConfigurationError
from .tokenizers import Tokenizer

_MODEL_OPTION_KEYS = ("tokenizer",)


class AsyncNaiveBayes:
    """Naive Bayes classifier with awaitable operations.

    Example::

        async def tokenize(text):
            return await service.tokenize(text)

        classifier = AsyncNaiveBayes({"tokenizer": tokenize})
        await classifier.learn("Chinese Beijing Chinese", "chinese")
        await classifier.categorize("Chinese Tokyo")

    The lock is created lazily for the running event loop and replaced
    when the instance is used from a different loop, so one instance may
    be driven by successive ``asyncio.run`` calls. Mutual exclusion holds
    within a loop only.

    Args:
        options: Same as for ``NaiveBayes``. ``tokenizer`` may be a plain
            function or a coroutine function.
    """

    def __init__(self, options: Optional[Mapping[str, Any]] = None) -> None:
        if options is not None and not isinstance(options, Mapping):
            raise ConfigurationError(
                f"AsyncNaiveBayes got invalid options: {options!r}. Pass in a mapping."
            )
        options = dict(options or {})
        tokenizer = options.get("tokenizer")
        if tokenizer is not None and not callable(tokenizer):
            raise ConfigurationError(
                f"Tokenizer must be callable, got {type(tokenizer).__name__}"
            )
        self._tokenizer = tokenizer

        # The wrapped model only ever sees pre-tokenized input.
        model_options = {k: v for k, v in options.items() if k not in _MODEL_OPTION_KEYS}
        self._model = NaiveBayes(model_options)
        self._lock: Optional[asyncio.Lock] = None
        self._lock_loop: Optional[asyncio.AbstractEventLoop] = None

    def _loop_lock(self) -> asyncio.Lock:
        # An asyncio.Lock binds to one event loop; keep one per running loop.
        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    @property
    def model(self) -> NaiveBayes:
        """The underlying synchronous model."""
        return self._model

    async def _tokens(self, text: str) -> list[str]:
        if self._tokenizer is None:
            return list(self._model.tokenizer(text))
        tokens = self._tokenizer(text)
        if inspect.isawaitable(tokens):
            tokens = await tokens
        return list(tokens)

    async def learn(self, text: str, category: str) -> "AsyncNaiveBayes":
        """Fold one labeled document into the model."""
        async with self._loop_lock():
            tokens = await self._tokens(text)
            self._model.learn_tokens(tokens, category)
        return self

    async def learn_many(self, examples: Iterable[tuple[str, str]]) -> "AsyncNaiveBayes":
        async with self._loop_lock():
            for text, category in examples:
                tokens = await self._tokens(text)
                self._model.learn_tokens(tokens, category)
        return self

    async def scores(self, text: str) -> dict[str, float]:
        async with self._loop_lock():
            tokens = await self._tokens(text)
            return self._model.score_tokens(tokens)

    async def categorize(self, text: str) -> Optional[str]:
        """Predict the most likely category, or ``None`` if untrained."""
        async with self._loop_lock():
            tokens = await self._tokens(text)
            return self._model.categorize_tokens(tokens)

    async def to_dict(self) -> dict:
        async with self._loop_lock():
            return self._model.to_dict()

    async def to_json(self, **kwargs: Any) -> str:
        async with self._loop_lock():
            return self._model.to_json(**kwargs)

    @classmethod
    def _wrap(cls, model: NaiveBayes, tokenizer: Optional[Tokenizer]) -> "AsyncNaiveBayes":
        instance = cls({"tokenizer": tokenizer} if tokenizer is not None else None)
        instance._model = model
        return instance

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        tokenizer: Optional[Tokenizer] = None,
    ) -> "AsyncNaiveBayes":
        """Restore from state exported by either classifier.

        ``tokenizer`` may be a plain function or a coroutine function.
        """
        return cls._wrap(NaiveBayes.from_dict(data), tokenizer)

    @classmethod
    def from_json(cls, json_str: str, tokenizer: Optional[Tokenizer] = None) -> "AsyncNaiveBayes":
        return cls._wrap(NaiveBayes.from_json(json_str), tokenizer)
