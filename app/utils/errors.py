class ApiError(Exception):
    status_code = 400

    def __init__(self, message, status_code=None, payload=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.payload = payload or {}

    def to_dict(self):
        body = dict(self.payload)
        body["message"] = self.message
        return body


class ValidationFailed(ApiError):
    status_code = 400


class Unauthorized(ApiError):
    status_code = 401


class Forbidden(ApiError):
    status_code = 403


class NotFound(ApiError):
    status_code = 404


class Conflict(ApiError):
    status_code = 409


class AssignmentConflict(ApiError):
    """Raised when a bulk assign targets retailers owned by another sales rep."""

    status_code = 400

    def __init__(self, conflicts):
        names = ", ".join(c["retailerName"] for c in conflicts)
        super().__init__(
            f"Some retailers are already assigned to another sales rep: {names}",
            payload={"conflicts": conflicts},
        )
        self.conflicts = conflicts
