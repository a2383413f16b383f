"""
Pydantic models for the candidate profile extracted from resumes.

This module provides:
1. The single declarative ProfileSchema contract
2. Format instructions rendered from that contract for the LLM prompt
3. Strict validation of untrusted LLM output against the same contract

Both the prompt and the validator read ProfileSchema, so the field list is
declared exactly once.
"""
import json
import re
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    HttpUrl,
    TypeAdapter,
    field_validator,
)
from pydantic import ValidationError as PydanticValidationError

from core.exceptions import ValidationError

_HTTP_URL = TypeAdapter(HttpUrl)


# ============================================================================
# PROFILE SCHEMA MODELS
# ============================================================================

class ExperienceItem(BaseModel):
    """A single work experience entry."""
    model_config = ConfigDict(extra='ignore', str_strip_whitespace=True)

    title: Optional[str] = Field(default=None, description="Job title or role")
    company: Optional[str] = Field(default=None, description="Company or organization name")
    location: Optional[str] = Field(default=None, description="City, country or 'Remote'")
    startDate: Optional[str] = Field(default=None, description="Start of the role as written (e.g. 'Jan 2021')")
    endDate: Optional[str] = Field(default=None, description="End of the role as written, or 'Present'")
    description: Optional[str] = Field(default=None, description="Responsibilities and achievements")


class EducationItem(BaseModel):
    """A single education entry."""
    model_config = ConfigDict(extra='ignore', str_strip_whitespace=True)

    institute_name: Optional[str] = Field(default=None, description="School, college or university name")
    degree: Optional[str] = Field(default=None, description="Degree earned (e.g., 'Bachelor of Science')")
    field_of_study: Optional[str] = Field(default=None, description="Field or major")
    start_date: Optional[str] = Field(default=None, description="Start date as written")
    end_date: Optional[str] = Field(default=None, description="End or expected date as written")
    location: Optional[str] = Field(default=None, description="Location of the institute")
    is_ongoing: Optional[Union[bool, str]] = Field(
        default=None, description="Whether the program is still in progress"
    )


class ProjectItem(BaseModel):
    """A single project entry."""
    model_config = ConfigDict(extra='ignore', str_strip_whitespace=True)

    name: Optional[str] = Field(default=None, description="Project title")
    description: Optional[str] = Field(default=None, description="Project context and goals")
    techStack: List[str] = Field(default_factory=list, description="Technologies used in the project")
    link: str = Field(default="", description="Absolute http(s) URL of the project, or an empty string")

    @field_validator('techStack', mode='before')
    @classmethod
    def _null_tech_stack(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator('link', mode='before')
    @classmethod
    def _validate_link(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, str) and value.strip():
            # Validate, but keep the string exactly as extracted
            try:
                _HTTP_URL.validate_python(value.strip())
            except PydanticValidationError:
                raise ValueError("must be an absolute http(s) URL or an empty string")
            return value.strip()
        return value


class ProfileSchema(BaseModel):
    """Complete candidate profile extracted from a resume."""
    model_config = ConfigDict(extra='ignore', str_strip_whitespace=True)

    name: str = Field(min_length=1, description="Candidate's full name")
    email: EmailStr = Field(description="Candidate's email address")
    phone: Optional[str] = Field(default=None, description="Phone number as written")
    current_job_title: Optional[str] = Field(default=None, description="Title of the current role")
    current_company: Optional[str] = Field(default=None, description="Employer of the current role")
    summary: Optional[str] = Field(default=None, description="Professional summary or objective")
    portfolio_url: Optional[str] = Field(default=None, description="Personal website or portfolio")
    experience: Optional[List[ExperienceItem]] = Field(default=None, description="Work experience history, most recent first")
    education: Optional[List[EducationItem]] = Field(default=None, description="Educational background")
    skills: List[str] = Field(default_factory=list, description="Flat list of skills")
    projects: Optional[List[ProjectItem]] = Field(default=None, description="Notable projects")

    @field_validator('skills', mode='before')
    @classmethod
    def _null_skills(cls, value: Any) -> Any:
        return [] if value is None else value

    def to_yaml(self) -> str:
        """Serialize to the stable YAML body stored as the parsed artifact."""
        return yaml.safe_dump(
            self.model_dump(mode='json'),
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )


PROFILE_SCHEMA = {
    "name": "candidate_profile_v1",
    "strict": False,
    "schema": ProfileSchema.model_json_schema()
}


# ============================================================================
# FORMAT INSTRUCTIONS
# ============================================================================

FORMAT_INSTRUCTIONS_TEMPLATE = """The output should be formatted as a JSON instance that conforms to the JSON schema below.

Fields listed under "required" must always be present. Use null for unknown optional values and [] for empty lists.

Here is the output schema:
```json
{schema}
```"""


def _strip_titles(node: Any) -> Any:
    """Drop pydantic's auto-generated 'title' annotations to shorten the prompt."""
    if isinstance(node, list):
        return [_strip_titles(item) for item in node]
    if not isinstance(node, dict):
        return node

    stripped = {}
    for key, value in node.items():
        if key in ("properties", "$defs"):
            # Keys here are field/model names, one of which may itself be "title"
            stripped[key] = {name: _strip_titles(sub) for name, sub in value.items()}
        elif key == "title" and isinstance(value, str):
            continue
        else:
            stripped[key] = _strip_titles(value)
    return stripped


def render_format_instructions() -> str:
    """Render machine-readable format instructions from ProfileSchema."""
    schema = _strip_titles(PROFILE_SCHEMA["schema"])
    return FORMAT_INSTRUCTIONS_TEMPLATE.format(schema=json.dumps(schema, indent=2))


# ============================================================================
# VALIDATION
# ============================================================================

_FENCE_RE = re.compile(r"```(?:json|JSON)?\s*(.*?)```", re.DOTALL)
_DECODER = json.JSONDecoder()


def extract_json_text(text: str) -> str:
    """Pull the first JSON object out of a completion that may be fenced or wrapped in prose.

    Anything after the object, braces included, is ignored.
    """
    fenced = _FENCE_RE.search(text)
    candidate = fenced.group(1) if fenced else text

    start = candidate.find("{")
    if start == -1:
        raise ValidationError("Model output does not contain a JSON object", stage="extract_profile")
    try:
        _, end = _DECODER.raw_decode(candidate, start)
    except json.JSONDecodeError as e:
        raise ValidationError(
            f"Model output is not valid JSON: {e.msg} (line {e.lineno}, column {e.colno})",
            stage="extract_profile",
            errors=[f"<root>: {e.msg}"],
        )
    return candidate[start:end]


def _format_errors(exc: PydanticValidationError) -> List[str]:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "<root>"
        messages.append(f"{location}: {error.get('msg')}")
    return messages


def validate_profile_data(data: Dict[str, Any]) -> ProfileSchema:
    """Validate an already-decoded object against ProfileSchema.

    Raises:
        ValidationError: If any required field or format constraint fails
    """
    if not isinstance(data, dict):
        raise ValidationError(
            f"Expected a JSON object, got {type(data).__name__}", stage="extract_profile"
        )
    try:
        return ProfileSchema.model_validate(data)
    except PydanticValidationError as e:
        errors = _format_errors(e)
        raise ValidationError(
            f"Profile failed schema validation: {'; '.join(errors)}",
            stage="extract_profile",
            errors=errors,
        )


def validate_profile(text: str) -> ProfileSchema:
    """Parse raw model output and validate it against ProfileSchema.

    Raises:
        ValidationError: If the text holds no parseable JSON object or the
            object violates the schema
    """
    return validate_profile_data(json.loads(extract_json_text(text)))
