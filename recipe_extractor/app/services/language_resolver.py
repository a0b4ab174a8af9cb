"""Convert free-text language names to ISO 639-1 style codes."""

import re
from types import MappingProxyType
from typing import Optional

# Insertion order is the canonical order used to break ties in the fuzzy match.
LANGUAGE_CODES = MappingProxyType(
    {
        # Major languages
        "english": "en",
        "spanish": "es",
        "french": "fr",
        "german": "de",
        "italian": "it",
        "portuguese": "pt",
        "russian": "ru",
        "chinese": "zh",
        "japanese": "ja",
        "korean": "ko",
        "arabic": "ar",
        "hindi": "hi",
        "dutch": "nl",
        "swedish": "sv",
        "norwegian": "no",
        "danish": "da",
        "finnish": "fi",
        "polish": "pl",
        "czech": "cs",
        "hungarian": "hu",
        "greek": "el",
        "hebrew": "he",
        "thai": "th",
        "vietnamese": "vi",
        "turkish": "tr",
        "indonesian": "id",
        "malay": "ms",
        "filipino": "tl",
        "ukrainian": "uk",
        "romanian": "ro",
        "bulgarian": "bg",
        "croatian": "hr",
        "serbian": "sr",
        "slovak": "sk",
        "slovenian": "sl",
        "lithuanian": "lt",
        "latvian": "lv",
        "estonian": "et",
        "catalan": "ca",
        "basque": "eu",
        "galician": "gl",
        "irish": "ga",
        "welsh": "cy",
        "scottish": "gd",
        "icelandic": "is",
        "maltese": "mt",
        "luxembourgish": "lb",
        "albanian": "sq",
        "macedonian": "mk",
        "belarusian": "be",
        "georgian": "ka",
        "armenian": "hy",
        "azerbaijani": "az",
        "kazakh": "kk",
        "uzbek": "uz",
        "kyrgyz": "ky",
        "tajik": "tg",
        "turkmen": "tk",
        "mongolian": "mn",
        "tibetan": "bo",
        "burmese": "my",
        "khmer": "km",
        "lao": "lo",
        "bengali": "bn",
        "urdu": "ur",
        "punjabi": "pa",
        "gujarati": "gu",
        "marathi": "mr",
        "tamil": "ta",
        "telugu": "te",
        "kannada": "kn",
        "malayalam": "ml",
        "sinhalese": "si",
        "nepali": "ne",
        "persian": "fa",
        "farsi": "fa",
        "dari": "prs",
        "pashto": "ps",
        "kurdish": "ku",
        "swahili": "sw",
        "yoruba": "yo",
        "igbo": "ig",
        "hausa": "ha",
        "amharic": "am",
        "oromo": "om",
        "somali": "so",
        "zulu": "zu",
        "xhosa": "xh",
        "afrikaans": "af",
        # Alternative names and regional variants
        "mandarin": "zh",
        "cantonese": "yue",
        "simplified chinese": "zh",
        "traditional chinese": "zh",
        "mexican spanish": "es",
        "latin american spanish": "es",
        "castilian": "es",
        "brazilian portuguese": "pt",
        "european portuguese": "pt",
        "american english": "en",
        "british english": "en",
        "australian english": "en",
        "canadian english": "en",
        "canadian french": "fr",
        "quebec french": "fr",
        "swiss german": "de",
        "austrian german": "de",
    }
)

_ISO_CODE_RE = re.compile(r"^[a-z]{2}$")


def get_language_iso_code(language: Optional[str]) -> Optional[str]:
    """Resolve a language name ("Spanish", "brazilian portuguese") to a code.

    Exact names win. Two-letter input is taken as an existing code. Otherwise
    the longest table name that contains, or is contained in, the input is
    used, with table order breaking ties.
    """
    if not language:
        return None
    language_lower = language.lower().strip()
    if not language_lower:
        return None

    exact = LANGUAGE_CODES.get(language_lower)
    if exact:
        return exact

    # Before containment, so "es" stays "es" instead of matching "portuguese"
    if _ISO_CODE_RE.match(language_lower):
        return language_lower

    best_name: Optional[str] = None
    for name in LANGUAGE_CODES:
        if name in language_lower or language_lower in name:
            if best_name is None or len(name) > len(best_name):
                best_name = name
    if best_name is not None:
        return LANGUAGE_CODES[best_name]
    return None
