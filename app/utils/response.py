from typing import Any


def success_response(data: Any = None, message: str | None = None) -> dict:
    return {"status": "success", "data": data, "message": message}


def error_response(message: str, data: Any = None) -> dict:
    return {"status": "error", "data": data, "message": message}


def redirect_response(redirect: str, message: str | None = None, **records: Any) -> dict:
    """Envelope for a completed action: where the client goes next plus the touched record."""
    return success_response(data={"redirect": redirect, **records}, message=message)
