"""Error taxonomy shared by the managers and the HTTP layer.

Managers raise these; ``main.py`` turns them into the
``{success: false, message}`` envelope with the matching status code.
"""


class ServiceError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    status_code = 400
    default_message = "Invalid request"


class BadRequest(ServiceError):
    status_code = 400
    default_message = "Bad request"


class Unauthorized(ServiceError):
    status_code = 401
    default_message = "Unauthorized"


class Forbidden(ServiceError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(ServiceError):
    status_code = 404
    default_message = "Not found"


class Conflict(ServiceError):
    status_code = 409
    default_message = "Conflict"


class UpstreamFailure(ServiceError):
    status_code = 500
    default_message = "Upstream service failed"


class InternalError(ServiceError):
    status_code = 500
