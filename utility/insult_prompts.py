from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple

from utility.dto import Intensity


@dataclass(frozen=True)
class LanguageOption:
    code: str
    display_name: str


LANGUAGES: Tuple[LanguageOption, ...] = (
    LanguageOption("en", "English"),
    LanguageOption("es", "Spanish"),
    LanguageOption("fr", "French"),
    LanguageOption("de", "German"),
    LanguageOption("it", "Italian"),
    LanguageOption("pt", "Portuguese"),
    LanguageOption("ja", "Japanese"),
    LanguageOption("ko", "Korean"),
    LanguageOption("zh", "Chinese (Simplified)"),
    LanguageOption("ar", "Arabic"),
    LanguageOption("ru", "Russian"),
    LanguageOption("hi", "Hindi"),
)

INTENSITY_LABELS: Mapping[str, str] = MappingProxyType({
    Intensity.MILD.value: "Mild",
    Intensity.SPICY.value: "Spicy",
    Intensity.EXTRA_HOT.value: "Extra Hot",
})

# mild never reaches the spice step, so it has no instruction
INTENSITY_INSTRUCTIONS: Mapping[str, str] = MappingProxyType({
    Intensity.SPICY.value: "a slightly sarcastic, witty, or dismissive tone. Make it a subtle jab.",
    Intensity.EXTRA_HOT.value: (
        "a very cutting, rude, and dismissive insult. "
        "Be as harsh as possible without using vulgar language."
    ),
})

FALLBACK_INSTRUCTION = "a witty and clever insult."


class InsultPromptBuilder:
    """
    Stateless prompt construction for the translate-then-spice flow.
    Everything here is pure: same inputs, same prompt string.
    """

    LANG_MAP: Mapping[str, str] = MappingProxyType({lang.code: lang.display_name for lang in LANGUAGES})

    # --------------------------------------------------
    # Lookups
    # --------------------------------------------------
    @classmethod
    def is_supported(cls, code: str) -> bool:
        """Whether a language code is in the static table"""
        return code in cls.LANG_MAP

    @classmethod
    def language_name(cls, code: str) -> str:
        """Display name for a language code. Unknown codes are a caller bug."""
        try:
            return cls.LANG_MAP[code]
        except KeyError:
            raise ValueError(f"Unsupported language: {code}") from None

    @staticmethod
    def intensity_value(intensity) -> str:
        """Accept either the enum or its raw string value"""
        return intensity.value if isinstance(intensity, Intensity) else str(intensity)

    @classmethod
    def insult_instruction(cls, intensity) -> str:
        """Tone fragment for the spice prompt, with a generic fallback"""
        return INTENSITY_INSTRUCTIONS.get(cls.intensity_value(intensity), FALLBACK_INSTRUCTION)

    # --------------------------------------------------
    # Prompt construction
    # --------------------------------------------------
    @classmethod
    def build_translation_prompt(cls, input_text: str, source_language: str, target_language: str) -> str:
        return (
            f"Translate the following text from {cls.language_name(source_language)} "
            f"to {cls.language_name(target_language)}: '{input_text}'"
        )

    @classmethod
    def build_spice_prompt(cls, base_translation: str, intensity) -> str:
        return (
            f"Take the following translated text: '{base_translation}'. "
            f"Now, integrate {cls.insult_instruction(intensity)} "
            "The insult should be integrated naturally into the translated sentence, not just appended. "
            "If the original text is already negative, make the insult even more cutting. "
            "The output should only be the spiced translation, nothing else."
        )
