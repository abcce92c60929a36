"""Render scraping sessions as JSON or a flat CSV summary."""

import csv
import io
import json
from typing import Any

from ..storage import ScrapingSession
from ..utils.logging import get_structured_logger
from .types import ExportError, ExportFormat, ExportPayload

logger = get_structured_logger(__name__)

EXPORT_BASENAME = "scraped-data"

CSV_HEADERS = [
    "ID",
    "URL",
    "Domain",
    "Status",
    "Scraped At",
    "Images Count",
    "Colors Count",
]


class ExportFormatter:
    """Formats a collection of sessions for download."""

    def export(
        self, sessions: list[ScrapingSession], export_format: str
    ) -> ExportPayload:
        """Render ``sessions`` in ``export_format`` ("json" or "csv")."""
        try:
            fmt = ExportFormat(export_format)
        except ValueError as e:
            raise ExportError(f"Invalid export format: {export_format}") from e

        if fmt is ExportFormat.JSON:
            payload = ExportPayload(
                content=self.to_json(sessions),
                media_type="application/json",
                filename=f"{EXPORT_BASENAME}.json",
            )
        else:
            payload = ExportPayload(
                content=self.to_csv(sessions),
                media_type="text/csv",
                filename=f"{EXPORT_BASENAME}.csv",
            )

        logger.info("Sessions exported", format=fmt.value, count=len(sessions))
        return payload

    def to_json(self, sessions: list[ScrapingSession]) -> str:
        """Full session records, as served by the API."""
        return json.dumps([session.to_dict() for session in sessions])

    def to_csv(self, sessions: list[ScrapingSession]) -> str:
        """One quoted summary row per session below a header row."""
        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")

        writer.writerow(CSV_HEADERS)
        for session in sessions:
            writer.writerow(self._csv_row(session))

        return buffer.getvalue().removesuffix("\n")

    @staticmethod
    def _csv_row(session: ScrapingSession) -> list[Any]:
        results = session.results
        return [
            session.id,
            session.url,
            session.domain,
            session.status.value,
            session.scraped_at.isoformat() if session.scraped_at else "",
            results.count("images") if results else 0,
            results.count("colors") if results else 0,
        ]
