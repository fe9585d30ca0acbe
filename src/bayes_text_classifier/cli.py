"""Command-line interface for the Naive Bayes text classifier.

Provides ``train``, ``categorize``, ``inspect`` and ``evaluate`` commands
with rich terminal output using the ``click`` and ``rich`` libraries.

Usage::

    bayes-text train reviews.tsv --model model.json
    bayes-text categorize model.json "awesome, cool, amazing!! Yay."
    bayes-text inspect model.json --top 10
    bayes-text evaluate reviews.tsv --folds 5
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import NoReturn

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .classifier import NaiveBayes
from .corpus import load_corpus
from .evaluation import cross_validate
from .exceptions import BayesClassifierError

console = Console()
logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )


def _fail(error: Exception) -> NoReturn:
    console.print(f"[bold red]Error:[/] {error}")
    sys.exit(1)


@click.group()
@click.version_option(package_name="bayes-text-classifier")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """Incremental Naive Bayes text classifier.

    Learn categories from labeled text, then categorize unseen text.
    """
    _configure_logging(verbose)


@main.command()
@click.argument("corpus", type=click.Path(exists=True, path_type=Path))
@click.option("--model", "-m", "model_path", type=click.Path(path_type=Path), required=True,
              help="Where to write the trained model (JSON).")
@click.option("--resume", is_flag=True,
              help="Continue training an existing model instead of starting fresh.")
def train(corpus: Path, model_path: Path, resume: bool) -> None:
    """Learn every labeled document in CORPUS (.tsv, .txt or .jsonl).

    Example: bayes-text train reviews.tsv --model model.json
    """
    try:
        documents = load_corpus(corpus)
        if resume and model_path.exists():
            classifier = NaiveBayes.load(model_path)
            logger.info("Resuming from %s (%d documents)", model_path, classifier.total_documents)
        else:
            classifier = NaiveBayes()

        with console.status("[bold blue]Learning documents...", spinner="dots"):
            classifier.learn_many(doc.as_pair() for doc in documents)
        classifier.save(model_path)
    except (OSError, ValueError, BayesClassifierError) as e:
        _fail(e)

    console.print(
        f"Learned [bold]{len(documents)}[/] documents; model has "
        f"{len(classifier.categories)} categories and "
        f"{classifier.vocabulary_size} tokens."
    )
    console.print(f"[dim]Model saved to {model_path}[/]")


@main.command()
@click.argument("model_path", metavar="MODEL", type=click.Path(exists=True, path_type=Path))
@click.argument("texts", metavar="TEXT...", nargs=-1, required=True)
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
def categorize(model_path: Path, texts: tuple[str, ...], output: str) -> None:
    """Categorize one or more TEXT arguments with a trained MODEL.

    Example: bayes-text categorize model.json "what a great movie"
    """
    try:
        classifier = NaiveBayes.load(model_path)
    except (OSError, BayesClassifierError) as e:
        _fail(e)

    rows = []
    for text in texts:
        rows.append({
            "text": text,
            "category": classifier.categorize(text),
            "probabilities": {
                k: round(v, 4) for k, v in classifier.probabilities(text).items()
            },
        })

    if output == "json":
        click.echo(json.dumps(rows, indent=2, ensure_ascii=False))
        return

    table = Table(title=f"Predictions — {model_path.name}", show_lines=True)
    table.add_column("Text", style="white", max_width=60)
    table.add_column("Category", style="cyan")
    table.add_column("Conf.", justify="center", width=7)

    for row in rows:
        category = row["category"]
        if category is None:
            table.add_row(row["text"], "[dim](no category)[/]", "-")
        else:
            table.add_row(row["text"], category, f"{row['probabilities'][category]:.0%}")

    console.print(table)


@main.command()
@click.argument("model_path", metavar="MODEL", type=click.Path(exists=True, path_type=Path))
@click.option("--top", "-t", default=10, show_default=True,
              help="Number of informative tokens to show per category.")
def inspect(model_path: Path, top: int) -> None:
    """Show statistics and the most informative tokens of a MODEL."""
    try:
        classifier = NaiveBayes.load(model_path)
    except (OSError, BayesClassifierError) as e:
        _fail(e)

    console.print(Panel(
        f"Documents: {classifier.total_documents} | "
        f"Categories: {len(classifier.categories)} | "
        f"Vocabulary: {classifier.vocabulary_size}",
        title=f"🧮 {model_path.name}",
        border_style="blue",
    ))

    if not classifier.is_trained:
        console.print("[dim]Model has not learned any category yet.[/]")
        return

    doc_count = classifier.doc_count
    word_count = classifier.word_count

    table = Table(title="Categories", show_lines=False)
    table.add_column("Category", style="cyan")
    table.add_column("Docs", justify="right")
    table.add_column("Tokens", justify="right")
    table.add_column("Top tokens", style="white", max_width=60)

    for category in classifier.categories:
        features = classifier.most_informative_features(category, top_n=top)
        table.add_row(
            category,
            str(doc_count[category]),
            str(word_count[category]),
            ", ".join(token for token, _ in features),
        )

    console.print(table)


@main.command()
@click.argument("corpus", type=click.Path(exists=True, path_type=Path))
@click.option("--folds", "-k", default=5, show_default=True, help="Number of folds.")
@click.option("--seed", default=42, show_default=True, help="Random seed for fold assignment.")
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
def evaluate(corpus: Path, folds: int, seed: int, output: str) -> None:
    """Cross-validate a fresh classifier on a labeled CORPUS."""
    try:
        documents = load_corpus(corpus)
        with console.status("[bold blue]Cross-validating...", spinner="dots"):
            results = cross_validate(
                [doc.text for doc in documents],
                [doc.category for doc in documents],
                k=folds,
                seed=seed,
            )
    except (OSError, ValueError) as e:
        _fail(e)

    if not results:
        _fail(ValueError("corpus is empty"))

    mean_accuracy = sum(m.accuracy for m in results) / len(results)
    mean_f1 = sum(m.macro_f1 for m in results) / len(results)

    if output == "json":
        click.echo(json.dumps({
            "folds": [m.to_dict() for m in results],
            "mean_accuracy": round(mean_accuracy, 4),
            "mean_macro_f1": round(mean_f1, 4),
        }, indent=2))
        return

    table = Table(title=f"Cross-validation — {corpus.name}")
    table.add_column("Fold", justify="right", width=6)
    table.add_column("Accuracy", justify="right")
    table.add_column("Macro F1", justify="right")
    table.add_column("Weighted F1", justify="right")

    for i, metrics in enumerate(results, 1):
        table.add_row(
            str(i),
            f"{metrics.accuracy:.2%}",
            f"{metrics.macro_f1:.4f}",
            f"{metrics.weighted_f1:.4f}",
        )

    console.print(table)
    console.print(f"Mean accuracy: [bold]{mean_accuracy:.2%}[/] | Mean macro F1: {mean_f1:.4f}")


if __name__ == "__main__":
    main()
