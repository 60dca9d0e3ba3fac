"""Normalizes raw provider exchange results into CompleteOAuthResponse."""

from typing import Any, Dict, Mapping

from conduit.schemas.oauth import CompleteOAuthResponse

REQUEST_SUCCEEDED = "request_succeeded"
REQUEST_ERROR = "request_error"
_RESERVED_KEYS = (REQUEST_SUCCEEDED, REQUEST_ERROR)


def _string_form(value: Any) -> str:
    # Booleans use their JSON literal so a normalized response can be fed back in.
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def map_to_complete_oauth_response(result: Mapping[str, Any]) -> CompleteOAuthResponse:
    """Lift the reserved status keys out of ``result``; everything else is payload.

    ``request_succeeded`` counts as true only when its string form is exactly
    "true" and defaults to true when absent. Payload values are copied as-is.
    """
    request_succeeded = True
    if REQUEST_SUCCEEDED in result:
        request_succeeded = _string_form(result[REQUEST_SUCCEEDED]) == "true"

    request_error = None
    if result.get(REQUEST_ERROR) is not None:
        request_error = str(result[REQUEST_ERROR])

    auth_payload: Dict[str, Any] = {k: v for k, v in result.items() if k not in _RESERVED_KEYS}

    return CompleteOAuthResponse(
        request_succeeded=request_succeeded,
        request_error=request_error,
        auth_payload=auth_payload,
    )
