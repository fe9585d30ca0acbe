"""Tests for the bayes-text command line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from bayes_text_classifier import NaiveBayes
from bayes_text_classifier.cli import main


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def trained_model(tmp_path: Path, sentiment_classifier: NaiveBayes) -> Path:
    path = tmp_path / "sentiment.json"
    sentiment_classifier.save(path)
    return path


class TestTrain:
    """Tests for `bayes-text train`."""

    def test_train_writes_model(self, runner: CliRunner, tsv_corpus: Path, tmp_path: Path) -> None:
        model_path = tmp_path / "out" / "model.json"
        result = runner.invoke(main, ["train", str(tsv_corpus), "--model", str(model_path)])

        assert result.exit_code == 0, result.output
        assert "Learned" in result.output
        model = NaiveBayes.load(model_path)
        assert model.total_documents == 4
        assert model.categories == ["positive", "negative", "neutral"]

    def test_train_resume(self, runner: CliRunner, tsv_corpus: Path, tmp_path: Path) -> None:
        model_path = tmp_path / "model.json"
        runner.invoke(main, ["train", str(tsv_corpus), "-m", str(model_path)])
        result = runner.invoke(main, ["train", str(tsv_corpus), "-m", str(model_path), "--resume"])

        assert result.exit_code == 0, result.output
        assert NaiveBayes.load(model_path).total_documents == 8

    def test_train_without_resume_starts_fresh(
        self, runner: CliRunner, tsv_corpus: Path, tmp_path: Path
    ) -> None:
        model_path = tmp_path / "model.json"
        runner.invoke(main, ["train", str(tsv_corpus), "-m", str(model_path)])
        runner.invoke(main, ["train", str(tsv_corpus), "-m", str(model_path)])
        assert NaiveBayes.load(model_path).total_documents == 4

    def test_train_bad_corpus(self, runner: CliRunner, tmp_path: Path) -> None:
        corpus = tmp_path / "bad.tsv"
        corpus.write_text("no tab\n", encoding="utf-8")
        result = runner.invoke(main, ["train", str(corpus), "-m", str(tmp_path / "m.json")])
        assert result.exit_code == 1
        assert "Error" in result.output


class TestCategorize:
    """Tests for `bayes-text categorize`."""

    def test_json_output(self, runner: CliRunner, trained_model: Path) -> None:
        result = runner.invoke(main, [
            "categorize", str(trained_model), "awesome, cool, amazing!! Yay.", "-o", "json",
        ])
        assert result.exit_code == 0, result.output
        rows = json.loads(result.output)
        assert rows[0]["category"] == "positive"
        assert set(rows[0]["probabilities"]) == {"positive", "negative", "neutral"}

    def test_multiple_texts(self, runner: CliRunner, trained_model: Path) -> None:
        result = runner.invoke(main, [
            "categorize", str(trained_model), "amazing", "terrible", "--output", "json",
        ])
        rows = json.loads(result.output)
        assert [row["text"] for row in rows] == ["amazing", "terrible"]
        assert rows[1]["category"] == "negative"

    def test_rich_output(self, runner: CliRunner, trained_model: Path) -> None:
        result = runner.invoke(main, ["categorize", str(trained_model), "amazing"])
        assert result.exit_code == 0, result.output
        assert "positive" in result.output

    def test_untrained_model(self, runner: CliRunner, tmp_path: Path) -> None:
        model_path = tmp_path / "empty.json"
        NaiveBayes().save(model_path)

        result = runner.invoke(main, ["categorize", str(model_path), "hello", "-o", "json"])
        assert json.loads(result.output)[0]["category"] is None

        result = runner.invoke(main, ["categorize", str(model_path), "hello"])
        assert "no category" in result.output

    def test_corrupt_model(self, runner: CliRunner, tmp_path: Path) -> None:
        model_path = tmp_path / "broken.json"
        model_path.write_text('{"categories": []}', encoding="utf-8")
        result = runner.invoke(main, ["categorize", str(model_path), "hello"])
        assert result.exit_code == 1
        assert "missing" in result.output

    @pytest.mark.parametrize("command", ["categorize", "inspect"])
    def test_model_with_invalid_options(self, runner: CliRunner, tmp_path: Path, command: str) -> None:
        state = NaiveBayes().to_dict()
        state["options"] = "ab"
        model_path = tmp_path / "bad_options.json"
        model_path.write_text(json.dumps(state), encoding="utf-8")

        args = [command, str(model_path)] + (["hello"] if command == "categorize" else [])
        result = runner.invoke(main, args)
        assert result.exit_code == 1
        assert "Error" in result.output


class TestInspect:
    """Tests for `bayes-text inspect`."""

    def test_inspect(self, runner: CliRunner, trained_model: Path) -> None:
        result = runner.invoke(main, ["inspect", str(trained_model), "--top", "3"])
        assert result.exit_code == 0, result.output
        assert "Documents: 4" in result.output
        assert "negative" in result.output

    def test_inspect_untrained(self, runner: CliRunner, tmp_path: Path) -> None:
        model_path = tmp_path / "empty.json"
        NaiveBayes().save(model_path)
        result = runner.invoke(main, ["inspect", str(model_path)])
        assert result.exit_code == 0
        assert "not learned any category" in result.output


class TestEvaluate:
    """Tests for `bayes-text evaluate`."""

    def test_json_output(self, runner: CliRunner, jsonl_corpus: Path) -> None:
        result = runner.invoke(main, ["evaluate", str(jsonl_corpus), "-k", "3", "-o", "json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert len(data["folds"]) == 3
        assert data["mean_accuracy"] == 1.0

    def test_rich_output(self, runner: CliRunner, jsonl_corpus: Path) -> None:
        result = runner.invoke(main, ["evaluate", str(jsonl_corpus), "--folds", "3"])
        assert result.exit_code == 0, result.output
        assert "Mean accuracy" in result.output

    def test_empty_corpus(self, runner: CliRunner, tmp_path: Path) -> None:
        corpus = tmp_path / "empty.tsv"
        corpus.write_text("", encoding="utf-8")
        result = runner.invoke(main, ["evaluate", str(corpus)])
        assert result.exit_code == 1
