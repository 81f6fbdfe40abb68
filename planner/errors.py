class PayloadImportError(Exception):
    """Base class for import failures. State is never changed when raised."""

class PayloadValidationError(PayloadImportError):
    """Payload parsed but violates the import schema."""

class SourceUnavailableError(PayloadImportError):
    """Payload source could not be read or was empty."""

class MalformedPayloadError(PayloadImportError):
    """Payload is not parseable structured data."""
