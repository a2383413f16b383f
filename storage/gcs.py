"""
Google Cloud Storage backend.

Credentials come from a service account JSON document held in an environment
variable (private key newlines may be escaped as ``\\n``); without it the
client falls back to application-default credentials.
"""
import json
import logging
import os
from typing import Any, Dict, List, Optional

from google.api_core.exceptions import GoogleAPIError, NotFound, PreconditionFailed
from google.cloud import storage

from core.exceptions import ObjectNotFoundError, StorageError
from storage.base import ObjectStore

logger = logging.getLogger(__name__)


def load_service_account_from_env(env_name: str = "GOOGLE_SERVICE_ACCOUNT_JSON") -> Optional[Dict[str, Any]]:
    """Read a service account dict from the environment, or None if unset.

    Raises:
        StorageError: If the variable is set but is not valid JSON
    """
    raw = os.environ.get(env_name)
    if not raw:
        return None

    try:
        info = json.loads(raw)
    except json.JSONDecodeError as e:
        raise StorageError(f"{env_name} is not valid JSON: {e}", stage="configure")

    # Handle escaped newlines in env
    if info.get("private_key"):
        info["private_key"] = info["private_key"].replace("\\n", "\n")
    return info


def build_gcs_client(project: Optional[str] = None, credentials_env: str = "GOOGLE_SERVICE_ACCOUNT_JSON") -> storage.Client:
    """Create a storage client from env credentials or application defaults."""
    info = load_service_account_from_env(credentials_env)
    if info:
        return storage.Client.from_service_account_info(
            info, project=project or info.get("project_id")
        )
    logger.info(f"{credentials_env} not set, using application-default credentials")
    return storage.Client(project=project)


class GCSObjectStore(ObjectStore):
    """Object store backed by a single GCS bucket."""

    def __init__(self, client: storage.Client, bucket_name: str, cache_control: str = "no-cache"):
        if not bucket_name:
            raise StorageError("Bucket name not provided", stage="configure")
        self.client = client
        self.bucket_name = bucket_name
        self.cache_control = cache_control
        self.bucket = client.bucket(bucket_name)

    def _blob(self, key: str, metadata: Optional[Dict[str, str]] = None):
        blob = self.bucket.blob(key)
        merged = {"cacheControl": self.cache_control, **(metadata or {})}
        blob.cache_control = merged.pop("cacheControl")
        if merged:
            blob.metadata = merged
        return blob

    def exists(self, key: str) -> bool:
        try:
            return self.bucket.blob(key).exists()
        except (GoogleAPIError, OSError) as e:
            raise StorageError(f"Existence check failed for {key}: {e}")

    def put(self, key, data, content_type, metadata=None) -> None:
        blob = self._blob(key, metadata)
        try:
            blob.upload_from_string(data, content_type=content_type)
        except (GoogleAPIError, OSError) as e:
            raise StorageError(f"Upload failed for {key}: {e}")
        logger.debug(f"Uploaded gs://{self.bucket_name}/{key} ({len(data)} bytes)")

    def put_if_absent(self, key, data, content_type, metadata=None) -> bool:
        blob = self._blob(key, metadata)
        try:
            # Generation 0 means "only if no live object exists"
            blob.upload_from_string(data, content_type=content_type, if_generation_match=0)
        except PreconditionFailed:
            return False
        except (GoogleAPIError, OSError) as e:
            raise StorageError(f"Conditional upload failed for {key}: {e}")
        return True

    def get(self, key: str) -> bytes:
        try:
            return self.bucket.blob(key).download_as_bytes()
        except NotFound:
            raise ObjectNotFoundError(key)
        except (GoogleAPIError, OSError) as e:
            raise StorageError(f"Download failed for {key}: {e}")

    def metadata(self, key: str) -> Dict[str, str]:
        try:
            blob = self.bucket.get_blob(key)
        except (GoogleAPIError, OSError) as e:
            raise StorageError(f"Metadata lookup failed for {key}: {e}")
        if blob is None:
            raise ObjectNotFoundError(key)
        return dict(blob.metadata or {})

    def list(self, prefix: str = "") -> List[str]:
        try:
            return [blob.name for blob in self.client.list_blobs(self.bucket_name, prefix=prefix)]
        except (GoogleAPIError, OSError) as e:
            raise StorageError(f"Listing failed for prefix {prefix!r}: {e}")

    def delete(self, key: str) -> None:
        try:
            self.bucket.blob(key).delete()
        except NotFound:
            pass
        except (GoogleAPIError, OSError) as e:
            raise StorageError(f"Delete failed for {key}: {e}")
