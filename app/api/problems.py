from http import HTTPStatus

from fastapi.responses import JSONResponse


def problem_response(detail: str, status_code: int = 500, title: str | None = None) -> JSONResponse:
    """RFC 7807 problem detail, as returned for unexpected and database errors."""
    return JSONResponse(
        status_code=status_code,
        content={
            "type": "about:blank",
            "title": title or HTTPStatus(status_code).phrase,
            "status": status_code,
            "detail": detail,
        },
        media_type="application/problem+json",
    )
