"""Error taxonomy. Every ApiError is rendered as ``{"error": message}``."""


class ApiError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingField(ApiError):
    status_code = 400
    default_message = "Required field is missing"


class InvalidRole(ApiError):
    status_code = 400
    default_message = "Invalid role. Use 'admin' or 'user'"


class BadUpload(ApiError):
    status_code = 400
    default_message = "File not uploaded or has wrong format"


class MissingToken(ApiError):
    status_code = 401
    default_message = "Access denied, token missing"


class InvalidToken(ApiError):
    status_code = 403
    default_message = "Invalid token"


class Forbidden(ApiError):
    status_code = 403
    default_message = "Access denied. Admins only."


class NotFound(ApiError):
    status_code = 404
    default_message = "File not found"


class PayloadTooLarge(ApiError):
    status_code = 413
    default_message = "Request body too large"


class StoreError(ApiError):
    status_code = 500
