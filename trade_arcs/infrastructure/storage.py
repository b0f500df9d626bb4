import csv
import io
from pathlib import Path

import aiofiles

from trade_arcs.application.services.base import BaseTradeFlowSource
from trade_arcs.domain.exceptions import TradeDataException
from trade_arcs.domain.models.coordinates import TradeFlowRecord
from trade_arcs.logging_config import get_logger

logger = get_logger(__name__)

REQUIRED_COLUMNS = (
    "source_longitude",
    "source_latitude",
    "dest_longitude",
    "dest_latitude",
    "value",
)


class CsvTradeFlowSource(BaseTradeFlowSource):
    """Reads trade-flow records from a CSV file with a header row.

    Required columns: source_longitude, source_latitude, dest_longitude,
    dest_latitude, value. An optional `label` column is carried through.
    Coordinate ranges are not checked here; the interpolator does that per record.
    """

    def __init__(self, file_path: str | Path, encoding: str = "utf-8"):
        self.file_path = Path(file_path)
        self.encoding = encoding

    async def load(self) -> list[TradeFlowRecord]:
        async with aiofiles.open(self.file_path, "r", encoding=self.encoding) as f:
            content = await f.read()

        records = self.parse(content)
        logger.info(f"Loaded {len(records)} trade-flow record(s) from {self.file_path}")
        return records

    @staticmethod
    def parse(content: str) -> list[TradeFlowRecord]:
        """
        Parse CSV text into records.

        Raises:
            TradeDataException: If a required column is missing or a cell is not numeric.
        """
        reader = csv.DictReader(io.StringIO(content))
        header = [name.strip() for name in (reader.fieldnames or [])]
        missing = [name for name in REQUIRED_COLUMNS if name not in header]
        if missing:
            raise TradeDataException(f"Missing required column(s): {', '.join(missing)}")
        reader.fieldnames = header

        records = []
        for row in reader:
            if not any(str(cell).strip() for cell in row.values() if cell):
                continue  # blank line
            try:
                records.append(TradeFlowRecord.from_row(row))
            except (TypeError, ValueError) as e:
                raise TradeDataException(
                    f"Line {reader.line_num}: cannot read trade-flow record ({e})"
                ) from e
        return records
