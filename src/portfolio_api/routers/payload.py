"""Reading write-route bodies: multipart/urlencoded forms or JSON objects."""

import json
from typing import Any, Dict, Optional, Tuple

from fastapi import Request
from starlette.datastructures import UploadFile

from portfolio_api.adapters.storage import Attachment
from portfolio_api.errors import InvalidPayloadError

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


async def read_payload(
    request: Request,
    attachment_field: Optional[str] = None,
) -> Tuple[Dict[str, Any], Optional[Attachment]]:
    """
    Split a request body into text fields and an optional attachment.

    Only the file sent under `attachment_field` is kept; an empty file part
    (a form submitted without choosing a file) counts as no attachment.
    """
    content_type = request.headers.get("content-type", "")

    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        fields: Dict[str, Any] = {}
        attachment = None
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                if key == attachment_field and attachment is None:
                    data = await value.read()
                    if data:
                        attachment = Attachment(data=data, filename=value.filename, content_type=value.content_type)
                continue
            fields[key] = value
        return fields, attachment

    body = await request.body()
    if not body.strip():
        return {}, None
    try:
        payload = json.loads(body)
    except ValueError:
        raise InvalidPayloadError("Request body is not valid JSON") from None
    if not isinstance(payload, dict):
        raise InvalidPayloadError("Request body must be a JSON object")
    return payload, None
