class AppError(Exception):
    """Base app error."""


class ValidationError(AppError):
    def __init__(self, message: str, errors: dict[str, str] | None = None):
        super().__init__(message)
        self.errors = dict(errors or {})


class NotFoundError(AppError):
    pass


class AuthorizationError(AppError):
    pass


class StorageError(AppError):
    pass
