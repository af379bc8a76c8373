"""Custom exceptions for FOP Tax Assistant."""


class FopTaxError(Exception):
    """Base exception for all FOP Tax Assistant errors."""

    pass


class ValidationError(FopTaxError):
    """Data validation error."""

    pass


class TaxOfficeCodeError(ValidationError):
    """Tax office code cannot be split into region and district."""

    pass


class StorageError(FopTaxError):
    """Error persisting data."""

    pass


class DeclarationError(FopTaxError):
    """Declaration cannot be generated.

    Carries the list of validation messages that blocked encoding.
    """

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = errors or []


class ImportDataError(FopTaxError):
    """Backup file cannot be read."""

    pass


class ReportGenerationError(FopTaxError):
    """Error generating report."""

    pass
