"""
Response mapping for the Shyft SDK.

Turns a raw httpx.Response into the typed ``result`` of the envelope, or into
one of StatusError, UnsuccessfulResponseError and DecodeError.
"""
import json
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from .exceptions import DecodeError, StatusError, UnsuccessfulResponseError
from .models import Response

logger = logging.getLogger(__name__)

# Keep error messages readable when the body is a large HTML error page
_MAX_LOGGED_BODY = 500


def _truncate(text: str) -> str:
    if len(text) <= _MAX_LOGGED_BODY:
        return text
    return text[:_MAX_LOGGED_BODY] + f"... [{len(text) - _MAX_LOGGED_BODY} more chars]"


def map_response(response: httpx.Response, payload_type: Any) -> Any:
    """
    Extract the envelope result from a response.

    Args:
        response: Final response returned by the retry policy
        payload_type: Expected type of ``result`` (a model or List[model])

    Returns:
        The validated ``result`` value; envelope metadata is discarded

    Raises:
        StatusError: If the status is not 2xx (body attached verbatim)
        UnsuccessfulResponseError: If a 2xx envelope carries success=false
        DecodeError: If the body is not JSON or does not match the envelope
    """
    body = response.text

    if not response.is_success:
        logger.error(f"API returned status {response.status_code}: {_truncate(body)}")
        raise StatusError(response.status_code, body)

    try:
        data = json.loads(body)
    except ValueError as exc:
        logger.error(f"Invalid JSON in API response: {exc}")
        raise DecodeError(f"Invalid JSON in API response: {exc}", body=body) from exc

    if isinstance(data, dict) and data.get("success") is False:
        api_message = str(data.get("message", ""))
        logger.error(f"API reported failure: {api_message}")
        raise UnsuccessfulResponseError(response.status_code, body, api_message)

    try:
        envelope = Response[payload_type].model_validate(data)
    except ValidationError as exc:
        logger.error(f"Unexpected response shape: {exc.error_count()} validation error(s)")
        raise DecodeError(f"Response does not match expected shape: {exc}", body=body) from exc

    # success may arrive as 0 or "false" and be coerced by validation
    if not envelope.success:
        logger.error(f"API reported failure: {envelope.message}")
        raise UnsuccessfulResponseError(response.status_code, body, envelope.message)

    return envelope.result
