"""
Error taxonomy shared by services and the HTTP layer.

Every error carries a human-readable message and the HTTP status code the
API reports it with.
"""


class StorefrontError(Exception):
    """Base class for errors surfaced to API callers"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StorefrontError):
    """Malformed or missing request fields"""

    status_code = 400


class NotFoundError(StorefrontError):
    """Referenced entity does not exist"""

    status_code = 404


class InsufficientStockError(StorefrontError):
    """Requested quantity exceeds available stock"""

    status_code = 400

    def __init__(self, product_name: str):
        super().__init__(f"Insufficient stock for {product_name}")
        self.product_name = product_name


class InternalError(StorefrontError):
    """Persistence or connectivity failure while serving a request"""

    status_code = 500


class StoreUnavailableError(StorefrontError):
    """The store could not be reached, or no connection freed up in time"""

    status_code = 503
