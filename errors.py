"""
Error taxonomy shared by the workflows.

ValidationError  -> 400, message shown to the caller, nothing was written.
NotFoundError    -> 404, the product or file does not exist.
DependencyError  -> 500, database or QR failure; only the fixed phrase leaves the server.
"""


class StockAppError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StockAppError):
    status_code = 400


class NotFoundError(StockAppError):
    status_code = 404


class DependencyError(StockAppError):
    status_code = 500
