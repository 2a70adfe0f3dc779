from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from budget.exceptions import BudgetServiceError


def error_body(status_code: int, error) -> dict:
    return {"status_code": status_code, "error": error, "success": False}


def exception_handler(exc, context):
    """Render every API error as ``{statusCode, error, success: false}``.

    Service errors carry their own status code and caller-facing message.
    DRF's own exceptions (malformed JSON, unsupported method) go through the
    default handler first so its headers are kept, then get reshaped.
    """
    if isinstance(exc, BudgetServiceError):
        return Response(
            error_body(exc.status_code, exc.message), status=exc.status_code
        )

    response = drf_exception_handler(exc, context)
    if response is None:
        return None

    detail = response.data
    if isinstance(detail, dict) and "detail" in detail:
        detail = detail["detail"]
    response.data = error_body(response.status_code, detail)
    return response
