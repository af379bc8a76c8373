"""Full data export, import and maintenance of the local store."""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from fop_tax.core.models.accumulated import AccumulatedData
from fop_tax.core.models.payment import Payment
from fop_tax.core.models.profile import FOPProfile
from fop_tax.core.models.social import ESVSettings
from fop_tax.infrastructure.storage.kv import KEY_PREFIX, KeyValueStore
from fop_tax.infrastructure.storage.repositories import (
    AccumulatedDataRepository,
    ESVSettingsRepository,
    PaymentRepository,
    ProfileRepository,
)
from fop_tax.shared.exceptions import ImportDataError
from fop_tax.shared.formatters import format_file_size

log = logging.getLogger(__name__)

BACKUP_VERSION = "1.0"

_REQUIRED_PAYMENT_FIELDS = ("id", "date", "amount", "currency_code")


class BackupData(BaseModel):
    """Contents of a backup file."""

    version: str = Field(default=BACKUP_VERSION)
    export_date: datetime = Field(default_factory=datetime.now)
    payments: list[Payment] = Field(default_factory=list)
    profile: Optional[FOPProfile] = Field(default=None)
    esv_settings: list[ESVSettings] = Field(default_factory=list)
    accumulated_data: dict[str, AccumulatedData] = Field(
        default_factory=dict, description="Keyed by year"
    )


class ImportResult(BaseModel):
    """Outcome of reading a backup file."""

    success: bool
    errors: list[str] = Field(default_factory=list)
    imported: Optional[BackupData] = Field(default=None)


class StorageItem(BaseModel):
    """One stored document and its size."""

    key: str
    size: int


class StorageInfo(BaseModel):
    """Summary of the local store."""

    total_size: int = 0
    item_count: int = 0
    items: list[StorageItem] = Field(default_factory=list)

    @property
    def total_size_display(self) -> str:
        return format_file_size(self.total_size)


def export_all_data(store: KeyValueStore, now: Optional[datetime] = None) -> str:
    """Serialize every stored document into one backup JSON string."""
    accumulated = AccumulatedDataRepository(store)

    backup = BackupData(
        export_date=now or datetime.now(),
        payments=PaymentRepository(store).load_all(),
        profile=ProfileRepository(store).load(),
        esv_settings=ESVSettingsRepository(store).load_all(),
        accumulated_data={str(year): accumulated.load(year) for year in accumulated.years()},
    )
    return backup.model_dump_json(indent=2)


def validate_import_data(data: Any) -> list[str]:
    """Check the structure of parsed backup JSON.

    Returns:
        List of error messages (empty if the structure is usable)
    """
    if not isinstance(data, dict):
        return ["Некоректний формат файлу"]

    errors = []

    if not data.get("version"):
        errors.append("Відсутня інформація про версію файлу")

    payments = data.get("payments")
    if not isinstance(payments, list):
        errors.append("Відсутні або некоректні дані про платежі")
    else:
        for index, payment in enumerate(payments, start=1):
            if not isinstance(payment, dict) or any(
                not payment.get(field) for field in _REQUIRED_PAYMENT_FIELDS
            ):
                errors.append(f"Платіж {index}: відсутні обов'язкові поля")

    if "esv_settings" in data and not isinstance(data["esv_settings"], list):
        errors.append("Некоректні налаштування ЄСВ")

    return errors


def import_data_from_json(text: str) -> ImportResult:
    """Parse and validate a backup JSON string."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return ImportResult(
            success=False,
            errors=["Помилка читання файлу. Перевірте, що файл не пошкоджений."],
        )

    errors = validate_import_data(data)
    if errors:
        return ImportResult(success=False, errors=errors)

    try:
        imported = BackupData.model_validate(data)
    except PydanticValidationError as e:
        return ImportResult(
            success=False,
            errors=[
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            ],
        )

    return ImportResult(success=True, imported=imported)


def read_backup_file(path: Path) -> BackupData:
    """Read and validate a backup file.

    Raises:
        ImportDataError: If the file cannot be read or is invalid
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ImportDataError(f"Не вдалося прочитати файл {path}: {e}") from e

    result = import_data_from_json(text)
    if not result.success:
        raise ImportDataError("; ".join(result.errors))
    return result.imported


def apply_imported_data(
    store: KeyValueStore,
    imported: BackupData,
    replace_payments: bool = True,
    replace_profile: bool = True,
    replace_esv_settings: bool = True,
    replace_accumulated_data: bool = True,
) -> None:
    """Write the selected parts of a backup into the store."""
    if replace_payments:
        PaymentRepository(store).save_all(imported.payments)
        log.info("Imported %d payments", len(imported.payments))

    if replace_profile and imported.profile is not None:
        ProfileRepository(store).save(imported.profile)

    if replace_esv_settings:
        repo = ESVSettingsRepository(store)
        for settings in imported.esv_settings:
            repo.save(settings)

    if replace_accumulated_data:
        repo = AccumulatedDataRepository(store)
        for data in imported.accumulated_data.values():
            repo.save(data)


def clear_all_data(store: KeyValueStore) -> int:
    """Delete every application document; returns the number removed."""
    keys = [key for key in store.keys() if key.startswith(KEY_PREFIX)]
    for key in keys:
        store.delete(key)
    log.info("Cleared %d stored documents", len(keys))
    return len(keys)


def get_storage_info(store: KeyValueStore) -> StorageInfo:
    """Sizes of the stored documents, largest first."""
    items = [
        StorageItem(key=key, size=len((store.get(key) or "").encode("utf-8")))
        for key in store.keys()
        if key.startswith(KEY_PREFIX)
    ]
    items.sort(key=lambda item: item.size, reverse=True)
    return StorageInfo(
        total_size=sum(item.size for item in items),
        item_count=len(items),
        items=items,
    )
