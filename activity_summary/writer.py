"""
Output writing module.

Two directories are involved: a scratch directory holding intermediate
artifacts of the current run (wiped at the start of every run), and the
summaries directory, which is never cleaned.
"""

import json
import logging
import re
from pathlib import Path
from typing import Dict, Iterable

from .models import FetchResult, ModelOutput

logger = logging.getLogger("activity-summary.writer")

UNSAFE_CHARS_RE = re.compile(r"[/\\:]")


def safe_model_name(model: str) -> str:
    """Model identifier usable as part of a file name."""
    return UNSAFE_CHARS_RE.sub("_", model)


class ScratchDir:
    """Intermediate artifacts kept for debugging until the next run."""

    def __init__(self, path: str) -> None:
        self.path = Path(path)

    def reset(self) -> None:
        """Create the directory and delete the files left by the previous run."""
        self.path.mkdir(parents=True, exist_ok=True)
        removed = 0
        for entry in self.path.iterdir():
            if entry.is_file() or entry.is_symlink():
                entry.unlink()
                removed += 1
        logger.debug("Cleared %d files from %s", removed, self.path)

    def write_text(self, name: str, text: str) -> Path:
        target = self.path / name
        with open(target, "w", encoding="utf-8") as f:
            f.write(text)
        return target

    def write_raw_results(self, results: Iterable[FetchResult]) -> None:
        """Dump each query kind as ``<kind>-raw.jsonl``, one item per line."""
        for result in results:
            lines = [json.dumps(item, separators=(",", ":")) for item in result.items]
            self.write_text(f"{result.kind}-raw.jsonl", "".join(line + "\n" for line in lines))

    def write_response(self, model: str, body: str) -> Path:
        return self.write_text(f"ai-response-{safe_model_name(model)}.json", body)


class SummaryWriter:
    """Persistent per-month summaries."""

    def __init__(self, path: str) -> None:
        self.path = Path(path)
        self.path.mkdir(parents=True, exist_ok=True)

    def model_output_path(self, month: str, model: str) -> Path:
        return self.path / f"{month}_{safe_model_name(model)}.txt"

    def canonical_path(self, month: str) -> Path:
        return self.path / f"{month}.txt"

    def write_model_output(self, month: str, output: ModelOutput) -> Path:
        return self._write(self.model_output_path(month, output.model), output.text)

    def write_canonical(self, month: str, text: str) -> Path:
        return self._write(self.canonical_path(month), text)

    def write_all(self, month: str, outputs: Dict[str, str]) -> Dict[str, Path]:
        return {model: self.write_model_output(month, ModelOutput(model, text)) for model, text in outputs.items()}

    @staticmethod
    def _write(target: Path, text: str) -> Path:
        with open(target, "w", encoding="utf-8") as f:
            f.write(text)
        logger.info("Wrote %s", target)
        return target
