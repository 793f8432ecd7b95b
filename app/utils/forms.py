from typing import Any

from fastapi import Request

from app.utils.exceptions import AppException

# Form fields that may repeat (e.g. one checkbox per mechanic)
MULTI_VALUE_FIELDS = {"mechanic_ids"}


async def read_form(request: Request) -> dict[str, Any]:
    """Return the submitted fields from a JSON body or an HTML form post."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            raise AppException("Malformed JSON body", status_code=400)
        if not isinstance(body, dict):
            raise AppException("Expected a JSON object", status_code=400)
        return body

    form = await request.form()
    data: dict[str, Any] = {}
    for key in form.keys():
        values = form.getlist(key)
        data[key] = values if key in MULTI_VALUE_FIELDS else values[-1]
    return data
