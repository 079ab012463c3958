"""
Translation Cache

Content-addressed: the key is a SHA-256 of the source text, so the same
source always maps to the same entry and duplicates collapse.

DESIGN DECISION: No TTL, no eviction, no invalidation. Entries are short
notification strings; a stale translation of identical source text is
still a correct translation.

Storage failures never reach the caller: a failed read is a miss,
a failed write is logged and dropped.
"""

import hashlib
from typing import Optional

from money_l10n.audit import AuditLogger, get_audit_logger
from money_l10n.models.events import LocalizationEventBuilder
from money_l10n.models.translation import CacheEntry
from money_l10n.services.storage import KeyValueStore, StorageError


class TranslationCache:
    """Caches translations in any KeyValueStore."""

    def __init__(
        self,
        store: KeyValueStore,
        key_prefix: str = "trans_",
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store
        self._key_prefix = key_prefix
        self._audit_logger = audit_logger or get_audit_logger()

    def key_for(self, source_text: str) -> str:
        """Stable cache key for a source string."""
        digest = hashlib.sha256(source_text.encode("utf-8")).hexdigest()
        return f"{self._key_prefix}{digest}"

    def get(self, source_text: str) -> Optional[str]:
        """Cached translation of ``source_text``, or None."""
        entry = self.get_entry(source_text)
        return entry.value if entry else None

    def get_entry(self, source_text: str) -> Optional[CacheEntry]:
        key = self.key_for(source_text)
        try:
            value = self._store.get(key)
        except StorageError as e:
            self._audit_logger.log(
                LocalizationEventBuilder.storage_error("get", key, str(e))
            )
            return None
        if value is None:
            return None
        return CacheEntry(key=key, value=value)

    def put(self, source_text: str, translated_text: str) -> None:
        """Remember a translation. Same key, same value: safe to repeat."""
        key = self.key_for(source_text)
        try:
            self._store.put(key, translated_text)
        except StorageError as e:
            self._audit_logger.log(
                LocalizationEventBuilder.storage_error("put", key, str(e))
            )
