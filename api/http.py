import json
from typing import Optional, Tuple

from django.http import JsonResponse

from .exceptions import InvalidTokenError
from .tokens import decode_token


def json_body(request) -> Tuple[dict, JsonResponse]:
    try:
        body = request.body.decode("utf-8") if request.body else "{}"
        data = json.loads(body)
        if not isinstance(data, dict):
            raise ValueError("JSON body must be an object")
        return data, None
    except (json.JSONDecodeError, ValueError) as exc:
        return None, JsonResponse({"error": f"invalid_json: {exc}"}, status=400)


def form_or_json_body(request) -> Tuple[dict, JsonResponse]:
    """Multipart/urlencoded fields when present, else the JSON body."""
    if request.content_type in ("multipart/form-data", "application/x-www-form-urlencoded"):
        return request.POST.dict(), None
    return json_body(request)


def bearer_claims(request) -> Tuple[Optional[dict], Optional[JsonResponse]]:
    header = request.META.get("HTTP_AUTHORIZATION", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None, JsonResponse({"error": "missing_token"}, status=401)
    try:
        return decode_token(token.strip()), None
    except InvalidTokenError as exc:
        return None, JsonResponse({"error": "invalid_token", "message": str(exc)}, status=401)
