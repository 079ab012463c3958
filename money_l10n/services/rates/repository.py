"""
Exchange Rate Repository

Serves the current USD -> VND rate and the user's display currency,
persisted in a KeyValueStore.

RATE LOOKUP, in order:
1. Stored rate younger than rate_cache_ttl_seconds
2. Fresh rate from the provider (then stored)
3. Stored rate of any age, if the provider fails
4. The configured fallback rate

DESIGN DECISION: get_exchange_rate() never raises for a provider or
storage failure. A stale rate shown with a logged warning beats a
screen that can't show money at all.

Stored keys:
    usd_to_vnd_rate   float, as text
    last_updated      ISO-8601 timestamp of the stored rate
    is_vnd            "true" / "false"
"""

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from money_l10n.audit import AuditLogger, get_audit_logger, get_logger
from money_l10n.config import CurrencySettings, get_settings
from money_l10n.models.currency import CurrencyPreference, ExchangeRate
from money_l10n.models.events import LocalizationEventBuilder
from money_l10n.services.currency import usd_to_vnd, vnd_to_usd
from money_l10n.services.rates.interface import ExchangeRateProvider, RateFetchError
from money_l10n.services.storage import KeyValueStore, StorageError


logger = get_logger(__name__)

RATE_KEY = "usd_to_vnd_rate"
LAST_UPDATED_KEY = "last_updated"
IS_VND_KEY = "is_vnd"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ExchangeRateRepository:
    """
    Cached exchange rates plus the display currency preference.

    Args:
        provider: Where fresh rates come from
        store: Persistent key-value storage
        settings: Currency settings (default: from environment)
        audit_logger: Where fetch and storage failures are reported
        clock: Returns the current aware UTC time (injectable for tests)
    """

    def __init__(
        self,
        provider: ExchangeRateProvider,
        store: KeyValueStore,
        settings: Optional[CurrencySettings] = None,
        audit_logger: Optional[AuditLogger] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._provider = provider
        self._store = store
        self._settings = settings or get_settings().currency
        self._audit_logger = audit_logger or get_audit_logger()
        self._clock = clock

    @property
    def provider(self) -> ExchangeRateProvider:
        return self._provider

    async def close(self) -> None:
        await self._provider.close()

    # =========================================================================
    # EXCHANGE RATE
    # =========================================================================

    @property
    def fallback_rate(self) -> ExchangeRate:
        return ExchangeRate(
            usd_to_vnd=self._settings.fallback_usd_to_vnd,
            fetched_at=self._clock(),
        )

    def _read(self, key: str) -> Optional[str]:
        try:
            return self._store.get(key)
        except StorageError as e:
            self._audit_logger.log(
                LocalizationEventBuilder.storage_error("get", key, str(e))
            )
            return None

    def _write(self, key: str, value: str) -> bool:
        try:
            self._store.put(key, value)
        except StorageError as e:
            self._audit_logger.log(
                LocalizationEventBuilder.storage_error("put", key, str(e))
            )
            return False
        return True

    def get_stored_rate(self) -> Optional[ExchangeRate]:
        """The last persisted rate, whatever its age, or None."""
        raw_rate = self._read(RATE_KEY)
        raw_updated = self._read(LAST_UPDATED_KEY)
        if raw_rate is None or raw_updated is None:
            return None

        try:
            fetched_at = datetime.fromisoformat(raw_updated)
            if fetched_at.tzinfo is None:
                fetched_at = fetched_at.replace(tzinfo=timezone.utc)
            return ExchangeRate(usd_to_vnd=float(raw_rate), fetched_at=fetched_at)
        except ValueError as e:
            # pydantic's ValidationError is a ValueError too
            logger.warning("stored_rate_invalid", rate=raw_rate, last_updated=raw_updated, error=str(e))
            return None

    def is_fresh(self, rate: ExchangeRate) -> bool:
        age = self._clock() - rate.fetched_at
        return age < timedelta(seconds=self._settings.rate_cache_ttl_seconds)

    def _store_rate(self, rate: ExchangeRate) -> None:
        if self._write(RATE_KEY, repr(rate.usd_to_vnd)):
            self._write(LAST_UPDATED_KEY, rate.fetched_at.isoformat())

    async def refresh_exchange_rate(self) -> ExchangeRate:
        """
        Fetch a rate from the provider and persist it.

        Raises:
            RateFetchError: If the provider fails
        """
        fetched = await self._provider.fetch_rate()
        # Stamp with our clock so freshness is measured on one timeline
        rate = ExchangeRate(usd_to_vnd=fetched.usd_to_vnd, fetched_at=self._clock())
        self._store_rate(rate)
        self._audit_logger.log(
            LocalizationEventBuilder.rate_fetched(
                rate.usd_to_vnd, type(self._provider).__name__
            )
        )
        return rate

    async def get_exchange_rate(self, force_refresh: bool = False) -> ExchangeRate:
        """
        Current USD -> VND rate.

        Args:
            force_refresh: Skip the freshness check and ask the provider

        Returns:
            The best rate available; never raises for provider failures
        """
        stored = self.get_stored_rate()
        if stored is not None and not force_refresh and self.is_fresh(stored):
            logger.debug("rate_cache_hit", usd_to_vnd=stored.usd_to_vnd)
            return stored

        try:
            return await self.refresh_exchange_rate()
        except RateFetchError as e:
            self._audit_logger.log(LocalizationEventBuilder.rate_fetch_failed(str(e)))

        if stored is not None:
            logger.info("using_stale_rate", usd_to_vnd=stored.usd_to_vnd, fetched_at=stored.fetched_at.isoformat())
            return stored

        fallback = self.fallback_rate
        self._audit_logger.log(
            LocalizationEventBuilder.rate_fallback_used(
                fallback.usd_to_vnd, "no stored exchange rate"
            )
        )
        return fallback

    async def convert_usd_to_vnd(self, usd_amount: float) -> float:
        rate = await self.get_exchange_rate()
        return usd_to_vnd(usd_amount, rate.usd_to_vnd)

    async def convert_vnd_to_usd(self, vnd_amount: float) -> float:
        rate = await self.get_exchange_rate()
        return vnd_to_usd(vnd_amount, rate.usd_to_vnd)

    # =========================================================================
    # CURRENCY PREFERENCE
    # =========================================================================

    def get_currency_preference(self) -> CurrencyPreference:
        """The stored display currency, or the configured default."""
        raw = self._read(IS_VND_KEY)
        if raw is None:
            return CurrencyPreference(is_vnd=self._settings.default_is_vnd)
        return CurrencyPreference(is_vnd=raw.strip().lower() == "true")

    def set_currency_preference(self, is_vnd: bool) -> CurrencyPreference:
        """
        Persist the display currency.

        Raises:
            StorageError: If the preference could not be saved
        """
        self._store.put(IS_VND_KEY, "true" if is_vnd else "false")
        logger.info("currency_preference_saved", is_vnd=is_vnd)
        return CurrencyPreference(is_vnd=is_vnd)
