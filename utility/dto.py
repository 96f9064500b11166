from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class Intensity(str, Enum):
    MILD = "mild"
    SPICY = "spicy"
    EXTRA_HOT = "extra-hot"


class TranslationRequest(BaseModel):
    input_text: str
    source_language: str = "en"  # e.g. "en"
    target_language: str = "es"  # e.g. "es"
    intensity: Intensity = Intensity.SPICY


class TranslationResponse(BaseModel):
    text: str
    outcome: str  # "result" | "error" | "result_with_error"
    error: Optional[str] = None
    error_message: str = ""
    latency_ms: float


class SessionUpdate(BaseModel):
    """Partial field edit coming from the form; unset fields are left alone."""
    input_text: Optional[str] = None
    source_language: Optional[str] = None
    target_language: Optional[str] = None
    intensity: Optional[Intensity] = None


class LanguageOptionOut(BaseModel):
    code: str
    display_name: str


class IntensityOptionOut(BaseModel):
    value: str
    label: str


class OptionsResponse(BaseModel):
    languages: list[LanguageOptionOut]
    intensities: list[IntensityOptionOut]


class SessionView(BaseModel):
    title: str
    input_text: str
    input_placeholder: str
    source_language: str
    target_language: str
    intensity: str
    languages: list[LanguageOptionOut]
    intensities: list[IntensityOptionOut]
    phase: str
    is_loading: bool
    submit_disabled: bool
    submit_label: str
    show_result: bool
    result_heading: str
    result_text: str
    show_error: bool
    error_title: str
    error_message: str
    dismiss_label: str


class SubmitResponse(BaseModel):
    outcome: str
    error: Optional[str] = None
    view: SessionView
