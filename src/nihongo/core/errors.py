"""Error taxonomy shared by the stores, the session gate and the web layer.

Each error carries the HTTP status it is reported with; the handlers
registered in nihongo.web.api turn them into {"error": message} payloads.
"""


class NihongoError(Exception):
    """Base class for all domain errors."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class Unauthorized(NihongoError):
    """Raised when a protected route is hit without a valid session."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class NotFound(NihongoError):
    """Raised when a lookup by id has no match."""

    status_code = 404

    def __init__(self, entity: str, entity_id: int):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class InvalidArgument(NihongoError):
    """Raised for malformed request payloads the schemas cannot catch."""

    status_code = 400


class StorageError(NihongoError):
    """Any database failure, constraint violations included."""

    status_code = 500
