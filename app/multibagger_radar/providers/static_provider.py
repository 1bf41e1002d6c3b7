from __future__ import annotations

import csv
import logging
from pathlib import Path

from pydantic import ValidationError

from app.multibagger_radar.core.settings import SAMPLE_STOCKS_PATH
from app.multibagger_radar.models.schemas import Stock
from app.multibagger_radar.providers.base import DataProvider

logger = logging.getLogger(__name__)

_TEXT_FIELDS = ("ticker", "name", "sector")


class StaticDataProvider(DataProvider):
    """Fixed equity snapshot read from a CSV file shipped with the app."""

    def __init__(self, stocks_file: Path | None = None):
        self.stocks_file = stocks_file or SAMPLE_STOCKS_PATH
        self._stocks: list[Stock] | None = None

    def get_stocks(self) -> list[Stock]:
        if self._stocks is None:
            self._stocks = self._load()
        return list(self._stocks)

    def _load(self) -> list[Stock]:
        rows: list[Stock] = []
        with self.stocks_file.open("r", encoding="utf-8") as f:
            reader = csv.DictReader(f)
            for line_no, row in enumerate(reader, start=2):
                # blank cells fall back to the model defaults
                record = {k.strip(): v.strip() for k, v in row.items() if k and v and v.strip()}
                try:
                    rows.append(Stock(**record))
                except ValidationError as exc:
                    logger.warning("Skipping %s line %d (%s): %s",
                                   self.stocks_file.name, line_no, record.get("ticker", "?"), exc)

        logger.info("Loaded %d stocks from %s", len(rows), self.stocks_file)
        return rows
