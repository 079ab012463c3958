"""Vietnamese text detection."""

import re


VIETNAMESE_CHARS = frozenset(
    "àáạảãâầấậẩẫăằắặẳẵ"
    "èéẹẻẽêềếệểễ"
    "ìíịỉĩ"
    "òóọỏõôồốộổỗơờớợởỡ"
    "ùúụủũưừứựửữ"
    "ỳýỵỷỹ"
    "đ"
)

# "100000đ" is an amount, not Vietnamese prose
_AMOUNT_DONG_SUFFIX = re.compile(r"(?<=[0-9])đ")


def contains_vietnamese(text: str) -> bool:
    """True if the text has any Vietnamese-specific letter."""
    text = _AMOUNT_DONG_SUFFIX.sub("", text)
    return any(ch.lower() in VIETNAMESE_CHARS for ch in text)


def is_vietnamese_language(language_code: str) -> bool:
    return language_code.lower().split("-")[0].split("_")[0] == "vi"
