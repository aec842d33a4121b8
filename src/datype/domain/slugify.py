"""URL slug generation with transliteration for common non-ASCII scripts."""

from __future__ import annotations

import re
import unicodedata
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from datype.domain.errors import InvalidArgumentError, InvalidValueError

# Characters NFD decomposition does not reduce to ASCII.
TRANSLITERATIONS: dict[str, str] = {
    # Latin
    "æ": "ae", "ð": "d", "ø": "o", "þ": "th", "ß": "ss",
    "Æ": "AE", "Ð": "D", "Ø": "O", "Þ": "TH",
    "đ": "d", "ı": "i", "ł": "l", "œ": "oe",
    "Đ": "D", "Ł": "L", "Œ": "OE",
    # Cyrillic
    "а": "a", "б": "b", "в": "v", "г": "g", "д": "d", "е": "e", "ё": "yo",
    "ж": "zh", "з": "z", "и": "i", "й": "y", "к": "k", "л": "l", "м": "m",
    "н": "n", "о": "o", "п": "p", "р": "r", "с": "s", "т": "t", "у": "u",
    "ф": "f", "х": "h", "ц": "ts", "ч": "ch", "ш": "sh", "щ": "sch", "ъ": "",
    "ы": "y", "ь": "", "э": "e", "ю": "yu", "я": "ya",
    "А": "A", "Б": "B", "В": "V", "Г": "G", "Д": "D", "Е": "E", "Ё": "YO",
    "Ж": "ZH", "З": "Z", "И": "I", "Й": "Y", "К": "K", "Л": "L", "М": "M",
    "Н": "N", "О": "O", "П": "P", "Р": "R", "С": "S", "Т": "T", "У": "U",
    "Ф": "F", "Х": "H", "Ц": "TS", "Ч": "CH", "Ш": "SH", "Щ": "SCH", "Ъ": "",
    "Ы": "Y", "Ь": "", "Э": "E", "Ю": "YU", "Я": "YA",
    # Greek
    "α": "a", "β": "b", "γ": "g", "δ": "d", "ε": "e", "ζ": "z", "η": "h",
    "θ": "th", "ι": "i", "κ": "k", "λ": "l", "μ": "m", "ν": "n", "ξ": "x",
    "ο": "o", "π": "p", "ρ": "r", "σ": "s", "ς": "s", "τ": "t", "υ": "y",
    "φ": "f", "χ": "ch", "ψ": "ps", "ω": "w",
    "Α": "A", "Β": "B", "Γ": "G", "Δ": "D", "Ε": "E", "Ζ": "Z", "Η": "H",
    "Θ": "TH", "Ι": "I", "Κ": "K", "Λ": "L", "Μ": "M", "Ν": "N", "Ξ": "X",
    "Ο": "O", "Π": "P", "Ρ": "R", "Σ": "S", "Τ": "T", "Υ": "Y", "Φ": "F",
    "Χ": "CH", "Ψ": "PS", "Ω": "W",
    # Arabic-Indic digits
    "٠": "0", "١": "1", "٢": "2", "٣": "3", "٤": "4",
    "٥": "5", "٦": "6", "٧": "7", "٨": "8", "٩": "9",
    # Typographic punctuation
    "‘": "", "’": "", "“": "", "”": "", "…": "...",
    "–": "-", "—": "-", "•": "", "‚": "", "„": "",
    "‹": "", "›": "", "«": "", "»": "",
    # Currency and symbols
    "€": "euro", "£": "pound", "¥": "yen", "₽": "ruble", "$": "dollar",
    "¢": "cent", "©": "c", "®": "r", "™": "tm", "&": "and",
}  # fmt: skip

_TRANSLATION_TABLE = str.maketrans(TRANSLITERATIONS)
_COMBINING_MARKS = re.compile(r"[\u0300-\u036f]")
_STRICT_DISALLOWED = re.compile(r"[^a-zA-Z0-9\s]")
_NON_WORD = re.compile(r"[^\w\s-]", re.ASCII)
_WHITESPACE = re.compile(r"\s+")


class SlugifyOptions(BaseModel):
    """Options for :func:`slugify`."""

    model_config = {"frozen": True, "extra": "forbid"}

    separator: str = "-"
    lowercase: bool = True
    trim: bool = True
    replacements: dict[str, str] = Field(default_factory=dict)
    remove: bool = True
    strict: bool = False


def resolve_slugify_options(options: SlugifyOptions | None = None, **overrides: Any) -> SlugifyOptions:
    """Apply keyword *overrides* on top of *options* (or the defaults)."""
    if options is not None and not isinstance(options, SlugifyOptions):
        msg = f"Options must be SlugifyOptions, got {type(options).__name__}"
        raise InvalidArgumentError(msg)
    if not overrides:
        return options or SlugifyOptions()
    base = options.model_dump() if options is not None else {}
    try:
        return SlugifyOptions.model_validate({**base, **overrides})
    except ValidationError as exc:
        raise InvalidValueError(f"Invalid slugify options: {exc}") from exc


def slugify(text: str, options: SlugifyOptions | None = None, **overrides: Any) -> str:
    """Turn *text* into a URL-safe slug.

    Accents are stripped, common Latin, Cyrillic and Greek letters are
    transliterated, and runs of whitespace become a single *separator*.
    Custom ``replacements`` run before transliteration so they can override it.
    With ``strict`` only ASCII letters and digits survive.

    Examples:
        >>> slugify("Hello, World!")
        'hello-world'
        >>> slugify("Café in Москва")
        'cafe-in-moskva'
        >>> slugify("Hello World", separator="_")
        'hello_world'
    """
    if not isinstance(text, str):
        msg = f"Expected a string, got {type(text).__name__}"
        raise InvalidArgumentError(msg)
    opts = resolve_slugify_options(options, **overrides)
    if not text:
        return ""

    result = _COMBINING_MARKS.sub("", unicodedata.normalize("NFD", text))
    if opts.lowercase:
        result = result.lower()

    for source, replacement in opts.replacements.items():
        result = result.replace(source, replacement)

    if opts.strict:
        result = _STRICT_DISALLOWED.sub(" ", result)
    else:
        result = result.translate(_TRANSLATION_TABLE)
        if opts.remove:
            result = _NON_WORD.sub(" ", result)

    separator = opts.separator
    result = _WHITESPACE.sub(lambda _: separator, result)
    if separator:
        escaped = re.escape(separator)
        result = re.sub(f"(?:{escaped})+", lambda _: separator, result)
        if opts.trim:
            result = re.sub(f"^(?:{escaped})+|(?:{escaped})+$", "", result)
    return result
