"""
JSON envelope shared by the catalog endpoints: {success, data?, message?, error?}.
"""

from typing import Any

from fastapi.responses import JSONResponse


def ok(data: Any = None, message: str | None = None, **extra: Any) -> dict:
    body: dict = {"success": True}
    if data is not None:
        body["data"] = data
    if message:
        body["message"] = message
    body.update(extra)
    return body


def fail(status_code: int, message: str, error: str | None = None) -> JSONResponse:
    body: dict = {"success": False, "message": message}
    if error:
        body["error"] = error
    return JSONResponse(status_code=status_code, content=body)
