"""Extraction of optional quality suggestions from stored AI output.

The AI blob is an enrichment, not a dependency: anything absent or malformed
degrades to an empty suggestion rather than failing the review.
"""

from __future__ import annotations

from collections.abc import Mapping
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from listingreview.domain.model import AISuggestions, PathValidationNote

if TYPE_CHECKING:
    from listingreview.domain.model import ValidationHistoryEntry

log = getLogger(__name__)


def _text_or_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return None


def _bool_or_none(value: object) -> object:
    return value if isinstance(value, bool) else None


class AIOutputBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class PathValidationPayload(AIOutputBaseModel):
    is_valid: bool | None = Field(default=None, alias="isValid")
    issue: str | None = None
    confidence: str | None = None

    _normalize_flag = field_validator("is_valid", mode="before")(_bool_or_none)
    _normalize_text = field_validator("issue", "confidence", mode="before")(_text_or_none)


class QualityPayload(AIOutputBaseModel):
    name: str | None = None
    description: str | None = None
    closed_days: str | None = None
    path_validation: PathValidationPayload | None = Field(default=None, alias="pathValidation")

    _normalize_text = field_validator("name", "description", "closed_days", mode="before")(
        _text_or_none
    )

    @field_validator("path_validation", mode="before")
    @classmethod
    def _degrade_path_validation(cls, value: object) -> object:
        return _section_or_none(PathValidationPayload, value)


class AIOutputPayload(AIOutputBaseModel):
    quality: QualityPayload | None = None

    @field_validator("quality", mode="before")
    @classmethod
    def _degrade_quality(cls, value: object) -> object:
        return _section_or_none(QualityPayload, value)


def _section_or_none[TModel: BaseModel](model: type[TModel], value: object) -> TModel | None:
    if isinstance(value, model):
        return value
    if not isinstance(value, Mapping):
        return None
    try:
        return model.model_validate(value)
    except ValidationError:
        log.debug("Discarding malformed %s section", model.__name__)
        return None


def extract_ai_suggestions(raw: str | None) -> AISuggestions:
    """Decode optional suggestions from raw AI output text.

    Never raises: missing, blank or malformed input yields an empty
    ``AISuggestions``. A name suggestion is only present when the model judged
    the submitted name to need a correction.
    """

    if raw is None or not raw.strip():
        return AISuggestions()
    try:
        payload = AIOutputPayload.model_validate_json(raw)
    except ValidationError:
        log.debug("AI output is not a JSON object; ignoring suggestions")
        return AISuggestions()

    quality = payload.quality
    if quality is None:
        return AISuggestions()

    path_note: PathValidationNote | None = None
    if quality.path_validation is not None:
        pv = quality.path_validation
        path_note = PathValidationNote(
            is_valid=pv.is_valid,
            issue=pv.issue,
            confidence=pv.confidence,
        )

    return AISuggestions(
        name_suggestion=quality.name,
        description_suggestion=quality.description,
        closed_days_suggestion=quality.closed_days,
        path_validation=path_note,
    )


def suggestions_from_history(entry: ValidationHistoryEntry | None) -> AISuggestions:
    if entry is None:
        return AISuggestions()
    return extract_ai_suggestions(entry.raw_ai_output)
