"""
PaddyHub Backend: Request Body Decoding
=======================================

What:  FastAPI dependency that decodes a POST body into plain Python data.
Why:   The dashboard posts JSON, while older sheet integrations post
       url-encoded forms. Handlers get the same dict either way.

Decoding rules:
    application/json (or no content type)   → json.loads of the body
    application/x-www-form-urlencoded       → dict of form fields
    anything else                           → None (treated as "no data")

Form fields:
    "history[]=a&history[]=b" becomes {"history": ["a", "b"]}; a key repeated
    without brackets also becomes a list. Single keys stay strings.
"""

import json
import logging
from typing import Any, Dict, Optional

from fastapi import Request
from starlette.datastructures import FormData

from paddyhub.exceptions import ValidationError

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def form_to_dict(form: FormData) -> Dict[str, Any]:
    document: Dict[str, Any] = {}
    for key, value in form.multi_items():
        if key.endswith("[]"):
            document.setdefault(key[:-2], []).append(value)
        elif key in document:
            existing = document[key]
            if isinstance(existing, list):
                existing.append(value)
            else:
                document[key] = [existing, value]
        else:
            document[key] = value
    return document


async def read_payload(request: Request) -> Optional[Any]:
    """
    Decode the request body.

    Returns:
        The decoded value, or None for an empty or non-JSON/non-form body.

    Raises:
        ValidationError: The body claims to be JSON but does not parse (→ 400)
    """
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()

    if content_type == FORM_CONTENT_TYPE:
        return form_to_dict(await request.form())

    if content_type and not content_type.endswith("json"):
        logger.debug("Ignoring body with content type %s", content_type)
        return None

    body = await request.body()
    if not body.strip():
        return None
    try:
        return json.loads(body)
    except ValueError as e:
        raise ValidationError(
            message="Request body is not valid JSON",
            field="body",
            context={"reason": str(e)},
        )
