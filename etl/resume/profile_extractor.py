"""
Schema-validated profile extraction.

Builds the extraction prompt from ProfileSchema, calls the LLM backend and
accepts the answer only if it validates against the same schema. The backend
is trusted for availability (it retries transient failures itself) but never
for output shape.
"""
import logging

from core.exceptions import ValidationError
from core.llm.interfaces import LLMProvider
from core.llm.system_prompts import (
    PROFILE_EXTRACTION_SYSTEM_PROMPT,
    PROFILE_REPAIR_USER_MESSAGE,
)
from etl.schema_models import (
    PROFILE_SCHEMA,
    ProfileSchema,
    render_format_instructions,
    validate_profile,
)

logger = logging.getLogger(__name__)

MAX_REPAIR_ATTEMPTS = 3


class ProfileExtractor:
    """Turns resume text into a validated ProfileSchema.

    Args:
        llm: Backend used for the completion
        repair_attempts: How many times to re-prompt with validation errors
            after a schema violation. 0 (the default) fails on the first
            violation. Capped at MAX_REPAIR_ATTEMPTS.
    """

    def __init__(self, llm: LLMProvider, repair_attempts: int = 0):
        self.llm = llm
        self.repair_attempts = max(0, min(repair_attempts, MAX_REPAIR_ATTEMPTS))
        self.format_instructions = render_format_instructions()

    def build_user_message(self, text: str) -> str:
        return (
            f"{self.format_instructions}\n\n"
            f"<RESUME>\n{text}\n</RESUME>\n\n"
            "Extract the candidate profile from the resume above."
        )

    def extract(self, text: str) -> ProfileSchema:
        """Extract a profile from resume text.

        Raises:
            ValidationError: Empty input, or the model output violates the
                schema (after any configured repair attempts)
            UpstreamServiceError: Backend unavailable after retries
        """
        if not text or not text.strip():
            raise ValidationError("No resume text to extract from", stage="extract_profile")

        user_message = self.build_user_message(text)
        completion = self.llm.generate(PROFILE_EXTRACTION_SYSTEM_PROMPT, user_message, PROFILE_SCHEMA)

        attempt = 0
        while True:
            try:
                profile = validate_profile(completion)
            except ValidationError as e:
                if attempt >= self.repair_attempts:
                    logger.error(f"Profile extraction failed validation: {e}")
                    raise
                attempt += 1
                logger.warning(
                    f"Profile output failed validation, repair attempt {attempt}/{self.repair_attempts}: {e}"
                )
                completion = self.llm.generate(
                    PROFILE_EXTRACTION_SYSTEM_PROMPT,
                    user_message + "\n\n" + PROFILE_REPAIR_USER_MESSAGE.format(
                        errors="\n".join(f"- {err}" for err in (e.errors or [str(e)])),
                        previous=completion,
                    ),
                    PROFILE_SCHEMA,
                )
                continue

            logger.info(
                f"Extracted profile for {profile.name!r}: "
                f"{len(profile.experience or [])} experience, "
                f"{len(profile.education or [])} education, "
                f"{len(profile.skills)} skills"
            )
            return profile
