"""Local persistence: key-value stores, repositories and backups."""

from fop_tax.infrastructure.storage.backup import (
    BackupData,
    ImportResult,
    StorageInfo,
    apply_imported_data,
    clear_all_data,
    export_all_data,
    get_storage_info,
    import_data_from_json,
    read_backup_file,
    validate_import_data,
)
from fop_tax.infrastructure.storage.kv import InMemoryStore, JsonFileStore, KeyValueStore
from fop_tax.infrastructure.storage.repositories import (
    AccumulatedDataRepository,
    ESVSettingsRepository,
    PaymentRepository,
    ProfileRepository,
)

__all__ = [
    "AccumulatedDataRepository",
    "BackupData",
    "ESVSettingsRepository",
    "ImportResult",
    "InMemoryStore",
    "JsonFileStore",
    "KeyValueStore",
    "PaymentRepository",
    "ProfileRepository",
    "StorageInfo",
    "apply_imported_data",
    "clear_all_data",
    "export_all_data",
    "get_storage_info",
    "import_data_from_json",
    "read_backup_file",
    "validate_import_data",
]
