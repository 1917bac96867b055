import logging

from django.http import JsonResponse, HttpResponseNotAllowed
from django.views.decorators.csrf import csrf_exempt

from ..firebase_service import firestore_service
from ..http import bearer_claims, json_body

logger = logging.getLogger("api")


@csrf_exempt
def contacts(request, user_id):
    """
    List (GET) or add to (POST {contact_id}) a user's contacts.
    Only the user named in the bearer token may touch their own list.
    """
    logger.info(f"[USERS/CONTACTS] {request.method} from {request.META.get('REMOTE_ADDR')}")

    if request.method not in ("GET", "POST"):
        return HttpResponseNotAllowed(["GET", "POST"])

    claims, error = bearer_claims(request)
    if error:
        return error
    if claims.get("id") != user_id:
        return JsonResponse({"error": "forbidden"}, status=403)

    contact_id = None
    if request.method == "POST":
        data, error = json_body(request)
        if error:
            return error
        contact_id = data.get("contact_id")
        if not contact_id or not isinstance(contact_id, str):
            return JsonResponse({"error": "missing_contact_id"}, status=400)
        if contact_id == user_id:
            return JsonResponse({"error": "cannot_add_self"}, status=400)

    try:
        user = firestore_service.get_user(user_id)
        if not user:
            return JsonResponse({"error": "user_not_found"}, status=404)

        if contact_id is not None:
            if not firestore_service.get_user(contact_id):
                return JsonResponse({"error": "contact_not_found"}, status=404)
            user["contacts"] = firestore_service.add_contact(user_id, contact_id)
            logger.info(f"[USERS/CONTACTS] {user_id} added {contact_id}")

        result = firestore_service.list_contacts(user)
    except Exception as exc:
        return JsonResponse({"message": "Error updating contacts", "error": str(exc)}, status=500)

    return JsonResponse({"userId": user_id, "contacts": result}, status=201 if contact_id else 200)
