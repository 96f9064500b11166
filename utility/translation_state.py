from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from utility.dto import (
    Intensity,
    IntensityOptionOut,
    LanguageOptionOut,
    SessionUpdate,
    SessionView,
    TranslationRequest,
)
from utility.insult_prompts import INTENSITY_LABELS, LANGUAGES


class Phase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    RESOLVED = "resolved"


class ErrorKind(str, Enum):
    VALIDATION_ERROR = "validation_error"
    TRANSLATION_UNAVAILABLE = "translation_unavailable"
    SPICE_UNAVAILABLE = "spice_unavailable"
    TRANSLATION_FAILED = "translation_failed"

    @property
    def message(self) -> str:
        return ERROR_MESSAGES[self]


ERROR_MESSAGES = {
    ErrorKind.VALIDATION_ERROR: "Please enter some text to translate.",
    ErrorKind.TRANSLATION_UNAVAILABLE: "Could not get a basic translation. Please try again.",
    ErrorKind.SPICE_UNAVAILABLE: "Could not add spice to the translation, but here is the base translation.",
    ErrorKind.TRANSLATION_FAILED: "An error occurred during translation. Please try again later.",
}

SPICE_FALLBACK_NOTE = "(Could not add spice, AI is too polite today.)"


class OutcomeKind(str, Enum):
    RESULT = "result"
    ERROR = "error"
    RESULT_WITH_ERROR = "result_with_error"


@dataclass(frozen=True)
class Outcome:
    kind: OutcomeKind
    text: str = ""
    error: Optional[ErrorKind] = None

    @classmethod
    def result(cls, text: str) -> "Outcome":
        return cls(kind=OutcomeKind.RESULT, text=text)

    @classmethod
    def failure(cls, error: ErrorKind) -> "Outcome":
        return cls(kind=OutcomeKind.ERROR, error=error)

    @classmethod
    def partial(cls, text: str, error: ErrorKind) -> "Outcome":
        return cls(kind=OutcomeKind.RESULT_WITH_ERROR, text=text, error=error)

    @property
    def error_message(self) -> str:
        return self.error.message if self.error else ""


@dataclass(frozen=True)
class SessionState:
    """
    Everything the form shows. Never mutated in place: each transition
    below returns a new value.
    """
    input_text: str = ""
    source_language: str = "en"
    target_language: str = "es"
    intensity: Intensity = Intensity.SPICY
    result_text: str = ""
    error_message: str = ""
    error_visible: bool = False
    phase: Phase = Phase.IDLE

    @property
    def is_loading(self) -> bool:
        return self.phase == Phase.LOADING

    def to_request(self) -> TranslationRequest:
        return TranslationRequest(
            input_text=self.input_text,
            source_language=self.source_language,
            target_language=self.target_language,
            intensity=self.intensity,
        )


# --------------------------------------------------
# Transitions
# --------------------------------------------------
def update_fields(state: SessionState, update: SessionUpdate) -> SessionState:
    changes = update.model_dump(exclude_none=True)
    return replace(state, **changes) if changes else state


def begin_request(state: SessionState) -> SessionState:
    """Idle/Resolved -> Loading. Clears whatever the previous cycle left behind."""
    return replace(
        state,
        result_text="",
        error_message="",
        error_visible=False,
        phase=Phase.LOADING,
    )


def resolve(state: SessionState, outcome: Outcome) -> SessionState:
    """Loading -> Resolved, carrying the result, the error, or both."""
    return replace(
        state,
        result_text=outcome.text if outcome.kind != OutcomeKind.ERROR else "",
        error_message=outcome.error_message,
        error_visible=outcome.error is not None,
        phase=Phase.RESOLVED,
    )


def dismiss_error(state: SessionState) -> SessionState:
    if not state.error_visible:
        return state
    return replace(state, error_visible=False)


# --------------------------------------------------
# Rendering
# --------------------------------------------------
LANGUAGE_OPTIONS = [LanguageOptionOut(code=lang.code, display_name=lang.display_name) for lang in LANGUAGES]
INTENSITY_OPTIONS = [IntensityOptionOut(value=value, label=label) for value, label in INTENSITY_LABELS.items()]


def render_view(state: SessionState) -> SessionView:
    return SessionView(
        title="The Insulting Translator",
        input_text=state.input_text,
        input_placeholder="Type your brilliant thoughts here...",
        source_language=state.source_language,
        target_language=state.target_language,
        intensity=state.intensity.value,
        languages=LANGUAGE_OPTIONS,
        intensities=INTENSITY_OPTIONS,
        phase=state.phase.value,
        is_loading=state.is_loading,
        submit_disabled=state.is_loading,
        submit_label="Spicing it up..." if state.is_loading else "Translate & Insult!",
        show_result=bool(state.result_text),
        result_heading="Your Spiced Translation:",
        result_text=state.result_text,
        show_error=state.error_visible,
        error_title="Error!",
        error_message=state.error_message,
        dismiss_label="Close",
    )
