"""
Candidate Catalog - read access to parsed resume artifacts.

Records are assembled on every read and never cached. Fetches fan out over a
thread pool; one failed fetch marks that record with an error instead of
failing the whole listing.
"""
import json
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Set

from core.config_loader import IngestionConfig
from core.exceptions import IngestionError, ObjectNotFoundError
from etl.resume.naming import display_name_from_key
from storage.base import ObjectStore

logger = logging.getLogger(__name__)

STATUS_READY = "ready"
STATUS_MATERIALIZING = "materializing"


@dataclass
class CandidateRecord:
    """A parsed artifact as shown to readers.

    ``name`` is a display label derived from the key, not an identity.
    """
    name: str
    file_name: str
    content: str
    status: str = STATUS_READY
    error: Optional[str] = None


class CandidateCatalog:
    """Lists and reassembles previously persisted profiles."""

    def __init__(self, store: ObjectStore, config: Optional[IngestionConfig] = None):
        self.store = store
        self.config = config or IngestionConfig()

    def list_all(self) -> List[CandidateRecord]:
        """Return a record for every parsed artifact, sorted by key.

        Raises:
            StorageError: If the listing itself fails
        """
        prefix = self.config.parsed_prefix
        keys = [key for key in self.store.list(prefix) if not key.endswith("/")]
        if not keys:
            return []

        materializing = self._materializing_keys()
        workers = max(1, min(self.config.catalog_max_workers, len(keys)))

        with ThreadPoolExecutor(max_workers=workers) as executor:
            records = list(executor.map(lambda key: self._fetch(key, materializing), keys))

        failed = sum(1 for record in records if record.error)
        if failed:
            logger.warning(f"Candidate listing returned {failed}/{len(records)} records with errors")

        return sorted(records, key=lambda record: record.file_name)

    def get(self, file_name: str) -> CandidateRecord:
        """Return a single record.

        Raises:
            ObjectNotFoundError: Key missing or outside the parsed namespace
            StorageError: Any other storage failure
        """
        if not file_name.startswith(self.config.parsed_prefix) or file_name.endswith("/"):
            raise ObjectNotFoundError(file_name, stage="catalog")

        content = self.store.get(file_name).decode("utf-8")
        status = STATUS_MATERIALIZING if file_name in self._materializing_keys() else STATUS_READY
        return CandidateRecord(
            name=self._display_name(file_name),
            file_name=file_name,
            content=content,
            status=status,
        )

    def _display_name(self, key: str) -> str:
        return display_name_from_key(key, self.config.parsed_prefix, self.config.parsed_suffix)

    def _fetch(self, key: str, materializing: Set[str]) -> CandidateRecord:
        status = STATUS_MATERIALIZING if key in materializing else STATUS_READY
        try:
            content = self.store.get(key).decode("utf-8")
        except (IngestionError, UnicodeDecodeError) as e:
            logger.error(f"Failed to fetch {key}: {e}")
            return CandidateRecord(
                name=self._display_name(key),
                file_name=key,
                content="",
                status=status,
                error="Failed to fetch file content",
            )
        return CandidateRecord(
            name=self._display_name(key),
            file_name=key,
            content=content,
            status=status,
        )

    def _materializing_keys(self) -> Set[str]:
        """Parsed keys referenced by open ingestion claims."""
        keys: Set[str] = set()
        try:
            claim_keys = self.store.list(self.config.pending_prefix)
        except IngestionError as e:
            logger.warning(f"Could not list ingestion claims: {e}")
            return keys

        for claim in claim_keys:
            try:
                parsed = json.loads(self.store.get(claim)).get("parsed_key")
            except (IngestionError, ValueError, AttributeError) as e:
                logger.debug(f"Skipping unreadable claim {claim}: {e}")
                continue
            if parsed:
                keys.add(parsed)
        return keys
