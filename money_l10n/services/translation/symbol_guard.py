"""
Currency Symbol Guard

Machine translation may drop, move or "translate" a lone currency glyph.
All-caps ASCII placeholders come back untouched, so glyphs are swapped
out before translation and swapped back afterwards.

    protect("Spent $50 and 100000₫")
    -> ProtectedMessage(text="Spent USDCURRENCY50 and 100000VNDCURRENCY",
                        placeholder_map={"VNDCURRENCY": "₫", "USDCURRENCY": "$"})

If a placeholder didn't survive translation, restore() leaves the text
as it is and logs the anomaly. It never raises.
"""

import re
from typing import Optional

from money_l10n.audit import AuditLogger, get_audit_logger, get_logger
from money_l10n.models.events import LocalizationEventBuilder
from money_l10n.models.translation import ProtectedMessage


logger = get_logger(__name__)

# glyph -> placeholder, applied in this order
CURRENCY_PLACEHOLDERS: dict[str, str] = {
    "₫": "VNDCURRENCY",
    "$": "USDCURRENCY",
}


class SymbolGuard:
    """Protects currency glyphs across one translation call."""

    def __init__(
        self,
        placeholders: Optional[dict[str, str]] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._placeholders = dict(placeholders or CURRENCY_PLACEHOLDERS)
        self._audit_logger = audit_logger or get_audit_logger()

    def protect(self, text: str) -> ProtectedMessage:
        """
        Replace each glyph present in ``text`` with its placeholder.

        A glyph whose placeholder already appears in the text is left
        alone, otherwise restore() could not tell the two apart.
        """
        placeholder_map: dict[str, str] = {}
        protected = text
        for glyph, placeholder in self._placeholders.items():
            if glyph not in protected:
                continue
            if placeholder.lower() in text.lower():
                logger.debug("placeholder_collision", placeholder=placeholder)
                continue
            placeholder_map[placeholder] = glyph
            protected = protected.replace(glyph, placeholder)
        return ProtectedMessage(text=protected, placeholder_map=placeholder_map)

    def restore(self, text: str, placeholder_map: dict[str, str]) -> str:
        """
        Put the glyphs back.

        Matching is case-insensitive because some translators change the
        case of unknown words.
        """
        restored = text
        missing = []
        for placeholder, glyph in placeholder_map.items():
            pattern = re.compile(re.escape(placeholder), re.IGNORECASE)
            restored, count = pattern.subn(lambda _match: glyph, restored)
            if count == 0:
                missing.append(placeholder)

        if missing:
            self._audit_logger.log(
                LocalizationEventBuilder.placeholder_missing(missing, text)
            )
        return restored
