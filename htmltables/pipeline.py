"""Pipeline orchestrator for HTML table extraction.

Fetches each source, skips documents that have not changed since the last
run, extracts their tables and stores them in the database.
"""

import logging
import traceback

from htmltables.database import Database
from htmltables.extractor import extract_all
from htmltables.sources import HtmlSource, source_hash
from htmltables.utils.html_text import plain_text

logger = logging.getLogger(__name__)


class Pipeline:
    """Orchestrates fetch, extraction and storage across sources."""

    def __init__(self, db: Database, clean_text: bool = False):
        self.db = db
        self.db.migrate()
        self.clean_text = clean_text

    def run(self, sources: list[HtmlSource], force: bool = False) -> dict:
        """Run the pipeline for the given sources.

        Args:
            sources: Sources to process.
            force: If True, extract even if the document hasn't changed.

        Returns:
            Summary dict with results per source name.
        """
        results = {}

        for source in sources:
            logger.info(f"=== Starting pipeline for {source.name} ===")
            try:
                result = self._run_source(source, force=force)
                results[source.name] = result
                logger.info(f"=== Completed {source.name}: {result['tables_extracted']} tables ===")
            except Exception as e:
                error_msg = f"{type(e).__name__}: {e}\n{traceback.format_exc()}"
                logger.error(f"Pipeline failed for {source.name}: {e}")
                results[source.name] = {
                    "status": "error",
                    "error": error_msg,
                    "tables_extracted": 0,
                }

        return results

    def _run_source(self, source: HtmlSource, force: bool = False) -> dict:
        html = source.fetch()
        # Cleaned and raw extractions of the same page are stored separately
        digest = source_hash(html + ("\0plain" if self.clean_text else ""))

        if not force:
            last = self.db.get_last_document(source.name)
            if last and last.get("source_hash") == digest:
                logger.info(
                    f"Source data unchanged for {source.name}, skipping. "
                    f"Use --force to override."
                )
                return {
                    "status": "skipped",
                    "reason": "source_unchanged",
                    "tables_extracted": 0,
                }

        tables = extract_all(html)
        if self.clean_text:
            tables = [plain_text(t) for t in tables]

        document_id = self.db.save_document(source.name, source.location, digest, tables)
        count = len(tables)

        return {
            "status": "completed",
            "document_id": document_id,
            "tables_extracted": count,
            "rows_extracted": sum(t.row_count for t in tables),
        }
