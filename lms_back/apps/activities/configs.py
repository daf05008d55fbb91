"""
Activity config schemas

Each activity kind carries its own typed config. Kinds this backend does not
know yet are kept as an opaque JSON object so newer clients keep working.
"""
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class ActivityConfig(BaseModel):
    """Known config variants reject unknown keys"""
    model_config = ConfigDict(extra="forbid")

    kind: ClassVar[str] = ""


class VideoConfig(ActivityConfig):
    kind: ClassVar[str] = "video"

    url: str = Field(..., min_length=1, description="Video source URL")
    duration_seconds: Optional[int] = Field(default=None, ge=0, description="Playback length")


class TextConfig(ActivityConfig):
    kind: ClassVar[str] = "text"

    body: str = Field(default="", description="Rich-text (HTML) content")


class QuizConfig(ActivityConfig):
    kind: ClassVar[str] = "quiz"

    time_limit_minutes: Optional[int] = Field(default=None, gt=0, description="Time limit")
    passing_score: Optional[float] = Field(default=None, ge=0, le=100, description="Pass mark (%)")
    max_attempts: Optional[int] = Field(default=None, ge=1, description="Attempts allowed")


class AssignmentConfig(ActivityConfig):
    kind: ClassVar[str] = "assignment"

    assignment_id: str = Field(..., min_length=1, description="Linked assignment ID")


class OpaqueConfig(BaseModel):
    """Config of a kind without a schema; stored untouched"""
    model_config = ConfigDict(extra="allow")

    kind: ClassVar[str] = "opaque"


CONFIG_VARIANTS = {
    variant.kind: variant
    for variant in (VideoConfig, TextConfig, QuizConfig, AssignmentConfig)
}


class ActivityConfigError(ValueError):

    def __init__(self, kind, messages):
        self.kind = kind
        self.messages = messages
        super().__init__(f"Invalid {kind} config: {'; '.join(messages)}")


def config_variant(kind):
    """Variant name used for ``kind``: the kind itself, or 'opaque'"""
    return kind if kind in CONFIG_VARIANTS else OpaqueConfig.kind


def parse_activity_config(kind, raw):
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ActivityConfigError(kind, ["config must be a JSON object"])

    variant = CONFIG_VARIANTS.get(kind, OpaqueConfig)
    try:
        return variant.model_validate(raw)
    except ValidationError as exc:
        messages = [
            f"{'.'.join(str(part) for part in error['loc']) or 'config'}: {error['msg']}"
            for error in exc.errors()
        ]
        raise ActivityConfigError(kind, messages) from exc


def dump_activity_config(config):
    if isinstance(config, OpaqueConfig):
        return config.model_dump()
    return config.model_dump(exclude_none=True)
