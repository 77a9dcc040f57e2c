import re

from .errors import ValidationError

# Hiragana, Katakana, CJK unified ideographs, CJK extension A, half-width katakana
_JAPANESE_RE = re.compile(
    "[\u3040-\u309F\u30A0-\u30FF\u4E00-\u9FAF\u3400-\u4DBF\uFF65-\uFF9F]"
)


def is_japanese_text(text: str) -> bool:
    """True if the text holds at least one kana or kanji character."""
    return _JAPANESE_RE.search(text) is not None


# Whitespace plus a byte-order mark, which pasted files often start with
_TRIM_RE = re.compile(r"^[\s\ufeff]+|[\s\ufeff]+$")


def normalize(text: str) -> str:
    return _TRIM_RE.sub("", text)


def clean_word(raw: str) -> str:
    """
    Normalize a word and check it is storable.
    Raises ValidationError with a message safe to show the user.
    """
    word = normalize(raw or "")
    if not word:
        raise ValidationError("Word cannot be empty")
    if not is_japanese_text(word):
        raise ValidationError(
            f'"{word}" is not Japanese. Only Japanese characters '
            "(Kanji, Hiragana, Katakana) are accepted"
        )
    return word
