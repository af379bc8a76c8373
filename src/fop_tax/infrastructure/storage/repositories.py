"""Repositories mapping domain models onto a key-value store.

Stored documents are JSON. Unreadable or invalid documents are logged and
replaced by an empty value so the application keeps working.
"""

import logging
from typing import Optional

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from fop_tax.core.calculators.social import create_default_esv_settings
from fop_tax.core.models.accumulated import AccumulatedData
from fop_tax.core.models.payment import Payment
from fop_tax.core.models.profile import FOPProfile
from fop_tax.core.models.social import ESVSettings
from fop_tax.infrastructure.storage.kv import KeyValueStore

log = logging.getLogger(__name__)

PAYMENTS_KEY = "fop-tax-payments"
PROFILE_KEY = "fop-profile"
ESV_SETTINGS_KEY = "fop-esv-settings"
ACCUMULATED_KEY_PREFIX = "fop-accumulated-data-"

_payments_adapter = TypeAdapter(list[Payment])
_esv_adapter = TypeAdapter(list[ESVSettings])


def accumulated_key(year: int) -> str:
    """Storage key of one year's accumulated data."""
    return f"{ACCUMULATED_KEY_PREFIX}{year}"


class PaymentRepository:
    """The complete payment list, stored under a single key."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def load_all(self) -> list[Payment]:
        raw = self.store.get(PAYMENTS_KEY)
        if not raw:
            return []
        try:
            return _payments_adapter.validate_json(raw)
        except PydanticValidationError as e:
            log.error("Error loading payments: %s", e)
            return []

    def save_all(self, payments: list[Payment]) -> None:
        self.store.set(PAYMENTS_KEY, _payments_adapter.dump_json(payments).decode("utf-8"))

    def clear(self) -> None:
        self.store.delete(PAYMENTS_KEY)


class AccumulatedDataRepository:
    """Accumulated data, one document per year."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def load(self, year: int) -> AccumulatedData:
        raw = self.store.get(accumulated_key(year))
        if not raw:
            return AccumulatedData.empty(year)
        try:
            return AccumulatedData.model_validate_json(raw)
        except PydanticValidationError as e:
            log.error("Error loading accumulated data for %s: %s", year, e)
            return AccumulatedData.empty(year)

    def save(self, data: AccumulatedData) -> None:
        self.store.set(accumulated_key(data.year), data.model_dump_json())

    def years(self) -> list[int]:
        """Years with stored data."""
        years = []
        for key in self.store.keys():
            suffix = key.removeprefix(ACCUMULATED_KEY_PREFIX)
            if suffix != key and suffix.isdigit():
                years.append(int(suffix))
        return sorted(years)


class ProfileRepository:
    """The taxpayer profile."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def load(self) -> Optional[FOPProfile]:
        raw = self.store.get(PROFILE_KEY)
        if not raw:
            return None
        try:
            return FOPProfile.model_validate_json(raw)
        except PydanticValidationError as e:
            log.error("Error loading FOP profile: %s", e)
            return None

    def save(self, profile: FOPProfile) -> None:
        self.store.set(PROFILE_KEY, profile.model_dump_json())


class ESVSettingsRepository:
    """ЄСВ schedules of all years, stored together under one key."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def load_all(self) -> list[ESVSettings]:
        raw = self.store.get(ESV_SETTINGS_KEY)
        if not raw:
            return []
        try:
            return _esv_adapter.validate_json(raw)
        except PydanticValidationError as e:
            log.error("Error loading ESV settings: %s", e)
            return []

    def load(self, year: int) -> ESVSettings:
        """Schedule of ``year``; a default one is created and stored if missing."""
        settings = next((s for s in self.load_all() if s.year == year), None)
        if settings is None:
            settings = create_default_esv_settings(year)
            self.save(settings)
        return settings

    def save(self, settings: ESVSettings) -> None:
        """Insert or replace the schedule of ``settings.year``."""
        others = [s for s in self.load_all() if s.year != settings.year]
        all_settings = sorted(others + [settings], key=lambda s: s.year)
        self.store.set(ESV_SETTINGS_KEY, _esv_adapter.dump_json(all_settings).decode("utf-8"))
