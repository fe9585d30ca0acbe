"""Loaders for labeled training corpora.

Supported formats:

- ``.jsonl``: one JSON object per line with ``text`` and ``category`` keys.
- ``.tsv`` / ``.txt``: ``category<TAB>text`` per line.

Blank lines are skipped in both formats.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

JSONL_EXTENSIONS = (".jsonl",)
TSV_EXTENSIONS = (".tsv", ".txt")


@dataclass
class LabeledDocument:
    """A single training example."""

    text: str
    category: str

    def as_pair(self) -> tuple[str, str]:
        return self.text, self.category


def load_corpus(path: str | Path) -> list[LabeledDocument]:
    """Read labeled documents from a corpus file.

    Args:
        path: Path to a ``.jsonl``, ``.tsv`` or ``.txt`` file.

    Returns:
        Documents in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the extension is unsupported or a line is malformed.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    suffix = path.suffix.lower()
    if suffix in JSONL_EXTENSIONS:
        parse_line = _parse_jsonl_line
    elif suffix in TSV_EXTENSIONS:
        parse_line = _parse_tsv_line
    else:
        raise ValueError(
            f"Unsupported corpus extension '{path.suffix}'. "
            f"Supported: {', '.join(JSONL_EXTENSIONS + TSV_EXTENSIONS)}"
        )

    documents: list[LabeledDocument] = []
    with open(path, "r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, 1):
            line = line.rstrip("\r\n")
            if not line.strip():
                continue
            try:
                documents.append(parse_line(line))
            except ValueError as exc:
                raise ValueError(f"{path.name}:{lineno}: {exc}") from exc
    return documents


def _parse_tsv_line(line: str) -> LabeledDocument:
    category, sep, text = line.partition("\t")
    if not sep or not category.strip():
        raise ValueError("expected 'category<TAB>text'")
    return LabeledDocument(text=text, category=category.strip())


def _parse_jsonl_line(line: str) -> LabeledDocument:
    try:
        record = json.loads(line)
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON ({exc.msg})") from exc
    if not isinstance(record, dict):
        raise ValueError("expected a JSON object")
    if not isinstance(record.get("text"), str) or not isinstance(record.get("category"), str):
        raise ValueError("expected string 'text' and 'category' fields")
    return LabeledDocument(text=record["text"], category=record["category"])
