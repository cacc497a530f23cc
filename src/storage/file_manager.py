# src/storage/file_manager.py

"""Writes price batches as JSON to a file or stdout."""

import json
import logging
import sys
from pathlib import Path
from typing import Any, TextIO

from src.models.price_record import PriceBatch

logger = logging.getLogger("price_tracker.storage")


class FileManager:
    """Handles writing JSON documents to disk or a stream."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream

    @staticmethod
    def dumps(data: Any) -> str:
        return json.dumps(data, ensure_ascii=False, indent=2)

    def write_json(
        self, data: Any, output_path: str | Path | None = None
    ) -> Path | None:
        """Write ``data`` as indented JSON.

        Writes to ``output_path`` when given and returns it; otherwise
        writes to stdout (or the stream passed at construction) and
        returns ``None``.
        """
        text = self.dumps(data)
        if output_path is None:
            out = self.stream or sys.stdout
            out.write(text)
            out.write("\n")
            return None

        filepath = Path(output_path)
        filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(text)
            f.write("\n")
        logger.info("Wrote %d bytes of JSON to %s", len(text), filepath)
        return filepath

    def write_batch(
        self, batch: PriceBatch, output_path: str | Path | None = None
    ) -> Path | None:
        """Write a PriceBatch in its wrapped ``{date, prices, fetched}`` form."""
        logger.debug(
            "Writing %d prices for %s", len(batch.prices), batch.date
        )
        return self.write_json(batch.to_dict(), output_path)
