from dataclasses import dataclass

from core.config_loader import AppConfig, LlmConfig, StorageConfig
from core.llm.interfaces import LLMProvider
from core.llm.openai_service import OpenAIService
from etl.resume.catalog import CandidateCatalog
from etl.resume.ingestion import IngestionPipeline
from etl.resume.parser import PdfTextExtractor, TextExtractor
from etl.resume.profile_extractor import ProfileExtractor
from storage.base import ObjectStore
from storage.memory import InMemoryObjectStore


@dataclass
class AppContext:
    """Application context container that holds all wired dependencies.

    Built once per process. The store and LLM clients are safe for
    concurrent use, so one context serves every request.
    """
    config: AppConfig
    store: ObjectStore
    ai_service: LLMProvider
    text_extractor: TextExtractor
    profile_extractor: ProfileExtractor
    pipeline: IngestionPipeline
    catalog: CandidateCatalog

    @classmethod
    def build(cls, config: AppConfig) -> "AppContext":
        """Build an AppContext from config.

        Args:
            config: Loaded application configuration

        Returns:
            Fully wired AppContext instance
        """
        store = cls._build_store(config.storage)
        ai_service = cls._build_ai_service(config.llm)
        return cls.from_components(config, store, ai_service)

    @classmethod
    def from_components(
        cls,
        config: AppConfig,
        store: ObjectStore,
        ai_service: LLMProvider,
        text_extractor: TextExtractor = None,
    ) -> "AppContext":
        """Wire the ingestion services around an existing store and LLM."""
        text_extractor = text_extractor or PdfTextExtractor()
        profile_extractor = ProfileExtractor(ai_service, repair_attempts=config.llm.repair_attempts)
        pipeline = IngestionPipeline(store, text_extractor, profile_extractor, config.ingestion)
        catalog = CandidateCatalog(store, config.ingestion)

        return cls(
            config=config,
            store=store,
            ai_service=ai_service,
            text_extractor=text_extractor,
            profile_extractor=profile_extractor,
            pipeline=pipeline,
            catalog=catalog,
        )

    @staticmethod
    def _build_store(storage_config: StorageConfig) -> ObjectStore:
        """Build the object store selected by ``storage.backend``."""
        if storage_config.backend == "memory":
            return InMemoryObjectStore(
                bucket_name=storage_config.bucket,
                cache_control=storage_config.cache_control,
            )

        # Imported lazily so the memory backend runs without GCP libraries configured
        from storage.gcs import GCSObjectStore, build_gcs_client

        client = build_gcs_client(storage_config.project, storage_config.credentials_env)
        return GCSObjectStore(client, storage_config.bucket, cache_control=storage_config.cache_control)

    @staticmethod
    def _build_ai_service(llm_config: LlmConfig) -> OpenAIService:
        """Build OpenAI service from LLM configuration."""
        model_config = {
            'extraction_model': llm_config.extraction_model,
            'extraction_temperature': llm_config.extraction_temperature,
            'max_retries': llm_config.max_retries,
            'retry_backoff_seconds': llm_config.retry_backoff_seconds,
            'retry_backoff_max_seconds': llm_config.retry_backoff_max_seconds,
            'request_timeout_seconds': llm_config.request_timeout_seconds,
        }

        return OpenAIService(
            base_url=llm_config.base_url,
            api_key=llm_config.api_key,
            model_config=model_config,
        )
