from rest_framework import status


class BudgetServiceError(Exception):
    """Failure outcome of a budget service operation.

    ``message`` is what the API caller gets to see; ``status_code`` is the
    HTTP status the boundary answers with.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInputError(BudgetServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Missing required fields"

    def __init__(self, message: str | None = None, errors: dict | None = None):
        self.errors = errors or {}
        super().__init__(message)


class ProjectNotFoundError(BudgetServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Project not found"


class ConflictError(BudgetServiceError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Project already exists"


class StorageError(BudgetServiceError):
    default_message = "Database error"


class ConversionFailedError(BudgetServiceError):
    default_message = "Currency conversion failed"
