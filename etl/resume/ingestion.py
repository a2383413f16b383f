"""
Resume Ingestion Pipeline - dedup, extract, validate, persist.

One call to ``submit`` handles one uploaded document synchronously:

    RECEIVED -> HASHED -> SHORT_CIRCUITED                       (already stored)
                       -> TEXT_EXTRACTED -> PROFILE_EXTRACTED
                       -> PERSISTED -> DONE                     (newly processed)

Any stage may fail; the raised IngestionError names the stage.

The raw artifact is the commit point of deduplication, so it is written after
the parsed artifact. A claim record under ``pending/`` marks a hash as being
processed: concurrent uploads of the same bytes poll for the first one's
result instead of calling the backend again, and the catalog reports parsed
artifacts whose claim is still open as "materializing".
"""
import json
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from core.config_loader import IngestionConfig
from core.exceptions import IngestionError, ObjectNotFoundError, StorageError, ValidationError
from etl.resume.fingerprint import generate_file_fingerprint
from etl.resume.naming import claim_key, parsed_key, raw_key
from etl.resume.parser import TextExtractor
from etl.resume.profile_extractor import ProfileExtractor
from etl.schema_models import ProfileSchema
from storage.base import ObjectStore

logger = logging.getLogger(__name__)

PARSED_CONTENT_TYPE = "text/plain; charset=utf-8"
CLAIM_CONTENT_TYPE = "application/json"
PARSED_KEY_METADATA = "parsed-key"
CONTENT_HASH_METADATA = "content-hash"


class IngestionStage(str, Enum):
    RECEIVED = "received"
    HASHED = "hashed"
    SHORT_CIRCUITED = "short_circuited"
    TEXT_EXTRACTED = "text_extracted"
    PROFILE_EXTRACTED = "profile_extracted"
    PERSISTED = "persisted"
    DONE = "done"


@dataclass
class IngestionResult:
    """Outcome of one submission.

    Attributes:
        uploaded: True if this call processed the document, False if it was
            already stored
        content_hash: SHA-256 of the uploaded bytes
        raw_key: Key of the raw document
        parsed_key: Key of the parsed artifact (None if an existing raw
            object carries no link to it)
        bucket: Name of the object store container
        profile: The validated profile, only for newly processed documents
        stages: Stages traversed, in order
    """
    uploaded: bool
    content_hash: str
    raw_key: str
    parsed_key: Optional[str]
    bucket: str
    profile: Optional[ProfileSchema] = None
    stages: List[IngestionStage] = field(default_factory=list)


class IngestionPipeline:
    """Orchestrates one resume upload end to end."""

    def __init__(
        self,
        store: ObjectStore,
        text_extractor: TextExtractor,
        profile_extractor: ProfileExtractor,
        config: Optional[IngestionConfig] = None,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.store = store
        self.text_extractor = text_extractor
        self.profile_extractor = profile_extractor
        self.config = config or IngestionConfig()
        if self.config.accepted_content_type != text_extractor.media_type:
            raise ValueError(
                f"accepted_content_type {self.config.accepted_content_type!r} cannot be read "
                f"by {type(text_extractor).__name__} ({text_extractor.media_type!r})"
            )
        self._clock = clock
        self._sleep = sleep

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def submit(self, content: bytes, content_type: Optional[str] = None) -> IngestionResult:
        """Ingest one document.

        Args:
            content: Raw document bytes
            content_type: Declared media type; must match the accepted type

        Returns:
            IngestionResult with ``uploaded`` distinguishing new from existing

        Raises:
            ValidationError: Wrong media type, or the extracted profile
                violates the schema
            ExtractionError: The document cannot be read as a PDF
            UpstreamServiceError: The LLM backend is unavailable
            StorageError: The object store failed
        """
        stages = [IngestionStage.RECEIVED]
        accepted = self.config.accepted_content_type
        if content_type is not None and content_type != accepted:
            raise ValidationError(
                f"Unsupported media type {content_type!r}; expected {accepted}", stage="receive"
            )

        fingerprint = generate_file_fingerprint(content)
        stages.append(IngestionStage.HASHED)
        raw = raw_key(fingerprint, self.config.raw_suffix)
        logger.info(f"Resume fingerprint: {fingerprint[:16]}...")

        existing = self._existing_result(fingerprint, raw, stages)
        if existing:
            return existing

        if not self._acquire_claim(fingerprint):
            existing = self._wait_for_peer(fingerprint, raw, stages)
            if existing:
                return existing
            logger.warning(f"Taking over ingestion claim for {fingerprint[:16]}...")
            self._write_claim(fingerprint)

        try:
            return self._process(content, fingerprint, raw, stages)
        except IngestionError as e:
            logger.error(f"Ingestion failed at stage {e.stage} for {fingerprint[:16]}...: {e}")
            raise

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def _existing_result(self, fingerprint: str, raw: str, stages: List[IngestionStage]) -> Optional[IngestionResult]:
        try:
            exists = self.store.exists(raw)
        except StorageError as e:
            e.stage = "dedup_check"
            raise

        if not exists:
            return None

        logger.info(f"Resume already processed ({fingerprint[:16]}...), skipping extraction")
        stages.append(IngestionStage.SHORT_CIRCUITED)
        return IngestionResult(
            uploaded=False,
            content_hash=fingerprint,
            raw_key=raw,
            parsed_key=self._linked_parsed_key(raw),
            bucket=self.store.bucket_name,
            stages=stages,
        )

    def _linked_parsed_key(self, raw: str) -> Optional[str]:
        try:
            return self.store.metadata(raw).get(PARSED_KEY_METADATA)
        except StorageError as e:
            # The raw key alone is a valid answer for an existing upload
            logger.warning(f"Could not read metadata for {raw}: {e}")
            return None

    def _process(self, content: bytes, fingerprint: str, raw: str, stages: List[IngestionStage]) -> IngestionResult:
        try:
            text = self.text_extractor.extract(content)
            stages.append(IngestionStage.TEXT_EXTRACTED)
            logger.info(f"Extracted {len(text)} chars of text")

            profile = self.profile_extractor.extract(text)
            stages.append(IngestionStage.PROFILE_EXTRACTED)
        except Exception:
            self._release_claim(fingerprint)
            raise

        parsed = parsed_key(
            profile.name,
            fingerprint,
            prefix=self.config.parsed_prefix,
            suffix=self.config.parsed_suffix,
            max_length=self.config.slug_max_length,
        )
        self._persist(content, profile, fingerprint, raw, parsed)
        stages.append(IngestionStage.PERSISTED)

        self._release_claim(fingerprint)
        stages.append(IngestionStage.DONE)
        logger.info(f"Stored {raw} and {parsed}")

        return IngestionResult(
            uploaded=True,
            content_hash=fingerprint,
            raw_key=raw,
            parsed_key=parsed,
            bucket=self.store.bucket_name,
            profile=profile,
            stages=stages,
        )

    def _persist(self, content: bytes, profile: ProfileSchema, fingerprint: str, raw: str, parsed: str) -> None:
        """Write the parsed artifact, then the raw document.

        If the raw write fails, the parsed artifact is deleted again; if that
        also fails, the claim record is left in place so the orphan stays
        visible as materializing until a re-upload overwrites it.
        """
        try:
            self._write_claim(fingerprint, parsed)
            self.store.put(parsed, profile.to_yaml().encode("utf-8"), PARSED_CONTENT_TYPE)
        except StorageError as e:
            e.stage = "persist_parsed"
            self._release_claim(fingerprint)
            raise

        try:
            self.store.put(
                raw,
                content,
                self.config.accepted_content_type,
                metadata={PARSED_KEY_METADATA: parsed, CONTENT_HASH_METADATA: fingerprint},
            )
        except StorageError as e:
            e.stage = "persist_raw"
            try:
                self.store.delete(parsed)
            except StorageError as cleanup_error:
                logger.error(f"Left orphaned parsed artifact {parsed}: {cleanup_error}")
                raise e
            self._release_claim(fingerprint)
            raise

    # ------------------------------------------------------------------
    # Claim handling
    # ------------------------------------------------------------------

    def _claim_body(self, fingerprint: str, parsed: Optional[str] = None) -> bytes:
        body: Dict[str, Any] = {
            "content_hash": fingerprint,
            "parsed_key": parsed,
            "claimed_at": self._clock(),
        }
        return json.dumps(body).encode("utf-8")

    def _write_claim(self, fingerprint: str, parsed: Optional[str] = None) -> None:
        key = claim_key(fingerprint, self.config.pending_prefix)
        self.store.put(key, self._claim_body(fingerprint, parsed), CLAIM_CONTENT_TYPE)

    def _read_claim(self, fingerprint: str) -> Optional[Dict[str, Any]]:
        key = claim_key(fingerprint, self.config.pending_prefix)
        try:
            return json.loads(self.store.get(key))
        except ObjectNotFoundError:
            return None
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning(f"Unreadable claim record {key}, treating as stale")
            return {}

    def _claim_is_stale(self, claim: Dict[str, Any]) -> bool:
        claimed_at = claim.get("claimed_at")
        if not isinstance(claimed_at, (int, float)):
            return True
        return self._clock() - claimed_at > self.config.claim_ttl_seconds

    def _acquire_claim(self, fingerprint: str) -> bool:
        """Try to become the only request processing this hash."""
        key = claim_key(fingerprint, self.config.pending_prefix)
        try:
            if self.store.put_if_absent(key, self._claim_body(fingerprint), CLAIM_CONTENT_TYPE):
                return True

            claim = self._read_claim(fingerprint)
            if claim is None:
                # Released between the two calls
                return self.store.put_if_absent(key, self._claim_body(fingerprint), CLAIM_CONTENT_TYPE)
            if self._claim_is_stale(claim):
                logger.warning(f"Stale ingestion claim for {fingerprint[:16]}..., taking over")
                self._write_claim(fingerprint)
                return True
        except StorageError as e:
            e.stage = "claim"
            raise

        logger.info(f"Resume {fingerprint[:16]}... is being processed by another request, waiting")
        return False

    def _wait_for_peer(self, fingerprint: str, raw: str, stages: List[IngestionStage]) -> Optional[IngestionResult]:
        """Poll until the claiming request stores the raw artifact or gives up."""
        deadline = self._clock() + self.config.claim_wait_seconds
        while self._clock() < deadline:
            self._sleep(self.config.claim_poll_interval_seconds)
            existing = self._existing_result(fingerprint, raw, stages)
            if existing:
                return existing
            if self._read_claim(fingerprint) is None:
                # Peer released its claim without storing anything (it failed)
                return None
        return None

    def _release_claim(self, fingerprint: str) -> None:
        key = claim_key(fingerprint, self.config.pending_prefix)
        try:
            self.store.delete(key)
        except StorageError as e:
            logger.warning(f"Failed to release ingestion claim {key}: {e}")
