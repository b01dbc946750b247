# src/libs/lot-common/lot_common/exceptions.py

class CatalogReadError(Exception):
    """
    Raised when a read against the master-data catalog fails (connection
    loss, permission denied, malformed predicate).

    The message of the underlying driver error is preserved so the HTTP
    boundary can hand it to the client verbatim in the error envelope.
    """
    def __init__(self, message: str, operation: str = "read"):
        super().__init__(message)
        self.message = message
        self.operation = operation
