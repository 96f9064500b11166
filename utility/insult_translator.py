from __future__ import annotations

import time
from typing import Protocol

from utility.dto import Intensity, TranslationRequest
from utility.gemini_client import CompletionResult, CompletionText
from utility.insult_prompts import InsultPromptBuilder
from utility.session_manager import SessionData
from utility.translation_state import (
    SPICE_FALLBACK_NOTE,
    ErrorKind,
    Outcome,
    begin_request,
    resolve,
)


class Completer(Protocol):
    async def complete(self, prompt: str) -> CompletionResult: ...


class InsultTranslator:
    """
    Translate, then (unless mild) ask for the translation again with an insult
    worked in. The two completion calls are awaited one after the other; the
    second prompt is only built once the first answer is known.
    """

    def __init__(self, completer: Completer):
        self.completer = completer

    # -----------------------------
    # Stateful entry point
    # -----------------------------
    async def submit(self, session: SessionData) -> Outcome:
        """
        Drive one request cycle for a session: Loading on entry, Resolved on
        every exit path. Never raises for domain failures.
        """
        session.state = begin_request(session.state)
        outcome = Outcome.failure(ErrorKind.TRANSLATION_FAILED)
        try:
            outcome = await self.run(session.state.to_request(), tag=f"[{session.session_id}] ")
        finally:
            session.state = resolve(session.state, outcome)
        return outcome

    # -----------------------------
    # Stateless entry point
    # -----------------------------
    async def run(self, request: TranslationRequest, tag: str = "") -> Outcome:
        t0 = time.perf_counter()
        try:
            outcome = await self._translate_and_spice(request)
        except Exception as e:
            print(f"❌ {tag}Translation error: {type(e).__name__}: {e}")
            return Outcome.failure(ErrorKind.TRANSLATION_FAILED)

        error = f" ({outcome.error.value})" if outcome.error else ""
        print(f"⏱️ {tag}{outcome.kind.value}{error} in {time.perf_counter() - t0:.3f}s")
        return outcome

    async def _translate_and_spice(self, request: TranslationRequest) -> Outcome:
        if not request.input_text.strip():
            return Outcome.failure(ErrorKind.VALIDATION_ERROR)

        # Step 1: base translation
        translation_prompt = InsultPromptBuilder.build_translation_prompt(
            request.input_text, request.source_language, request.target_language
        )
        first = await self.completer.complete(translation_prompt)
        if not isinstance(first, CompletionText):
            return Outcome.failure(ErrorKind.TRANSLATION_UNAVAILABLE)

        base_translation = first.text
        if request.intensity == Intensity.MILD:
            return Outcome.result(base_translation)

        # Step 2: spice it up
        spice_prompt = InsultPromptBuilder.build_spice_prompt(base_translation, request.intensity)
        second = await self.completer.complete(spice_prompt)
        if isinstance(second, CompletionText):
            return Outcome.result(second.text)

        return Outcome.partial(
            f"{base_translation} {SPICE_FALLBACK_NOTE}",
            ErrorKind.SPICE_UNAVAILABLE,
        )
