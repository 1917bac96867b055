import logging

from django.http import JsonResponse, HttpResponseNotAllowed
from django.views.decorators.csrf import csrf_exempt

from ..firebase_service import firestore_service
from ..http import json_body
from ..utils import format_timestamp

logger = logging.getLogger("api")


def _serialize_log(log: dict) -> dict:
    return {
        "id": log.get("id"),
        "caller": log.get("caller"),
        "receiver": log.get("receiver"),
        "timestamp": format_timestamp(log.get("timestamp")),
        "status": log.get("status"),
    }


@csrf_exempt
def call_logs(request):
    """
    GET lists every call log with caller/receiver resolved.
    POST appends a new record; records are never updated afterwards.
    """
    logger.info(f"[CALL/LOGS] {request.method} from {request.META.get('REMOTE_ADDR')}")

    if request.method == "GET":
        return _list_call_logs()
    if request.method == "POST":
        return _create_call_log(request)
    return HttpResponseNotAllowed(["GET", "POST"])


def _list_call_logs():
    try:
        logs = firestore_service.list_call_logs()
    except Exception as exc:
        return JsonResponse({"message": "Error fetching call logs", "error": str(exc)}, status=500)

    return JsonResponse([_serialize_log(log) for log in logs], safe=False)


def _create_call_log(request):
    data, error = json_body(request)
    if error:
        return error

    logger.info(f"[CALL/LOGS] Request data: {data}")

    caller_id = data.get("caller")
    receiver_id = data.get("receiver")
    status = data.get("status")

    if not all(isinstance(value, str) and value for value in (caller_id, receiver_id)):
        return JsonResponse({
            "error": "missing_fields",
            "required": ["caller", "receiver"],
        }, status=400)

    if status is not None and not isinstance(status, str):
        return JsonResponse({"error": "invalid_status"}, status=400)

    try:
        log = firestore_service.create_call_log(caller_id, receiver_id, status=status)
    except Exception as exc:
        return JsonResponse({"message": "Error creating call log", "error": str(exc)}, status=500)

    return JsonResponse(_serialize_log(log), status=201)
