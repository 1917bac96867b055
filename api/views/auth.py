import logging

from django.contrib.auth.hashers import check_password, make_password
from django.core.files.storage import default_storage
from django.http import JsonResponse, HttpResponseNotAllowed
from django.views.decorators.csrf import csrf_exempt

from ..constants import PROFILE_PICTURE_FIELD
from ..firebase_service import firestore_service
from ..http import form_or_json_body, json_body
from ..tokens import issue_token
from ..utils import normalize_email, public_user, upload_filename

logger = logging.getLogger("api")


def _save_profile_picture(upload) -> str:
    name = default_storage.save(upload_filename(upload.name), upload)
    return default_storage.url(name)


@csrf_exempt
def signup(request):
    """
    Register a user from multipart form fields (username, email, password) with
    an optional profilePicture file. Every failure is reported as a 500.
    """
    logger.info(f"[AUTH/SIGNUP] {request.method} from {request.META.get('REMOTE_ADDR')}")

    if request.method != "POST":
        return HttpResponseNotAllowed(["POST"])

    data, error = form_or_json_body(request)
    if error:
        return error

    try:
        username = (data.get("username") or "").strip()
        email = normalize_email(data.get("email"))
        password = data.get("password")
        missing = [
            name for name, value in (("username", username), ("email", email), ("password", password))
            if not value
        ]
        if missing:
            raise ValueError(f"missing fields: {', '.join(missing)}")

        profile_picture = ""
        upload = request.FILES.get(PROFILE_PICTURE_FIELD)
        if upload is not None:
            profile_picture = _save_profile_picture(upload)

        user = firestore_service.create_user(
            username=username,
            email=email,
            password_hash=make_password(password),
            profile_picture=profile_picture,
        )
    except Exception as exc:
        logger.error(f"[AUTH/SIGNUP] Failed: {exc}")
        return JsonResponse({"message": "Error signing up", "error": str(exc)}, status=500)

    logger.info(f"[AUTH/SIGNUP] Registered user {user['id']}")
    return JsonResponse({"message": "User registered successfully"}, status=201)


@csrf_exempt
def login(request):
    logger.info(f"[AUTH/LOGIN] {request.method} from {request.META.get('REMOTE_ADDR')}")

    if request.method != "POST":
        return HttpResponseNotAllowed(["POST"])

    data, error = json_body(request)
    if error:
        return error

    try:
        email = normalize_email(data.get("email"))
        user = firestore_service.find_user_by_email(email) if email else None
        if not user:
            return JsonResponse({"message": "User not found"}, status=400)

        if not check_password(data.get("password") or "", user.get("password")):
            logger.info(f"[AUTH/LOGIN] Invalid credentials for {user['id']}")
            return JsonResponse({"message": "Invalid credentials"}, status=400)

        token = issue_token(user)
    except Exception as exc:
        logger.error(f"[AUTH/LOGIN] Failed: {exc}")
        return JsonResponse({"message": "Error logging in", "error": str(exc)}, status=500)

    logger.info(f"[AUTH/LOGIN] Success: {user['id']}")
    return JsonResponse({"token": token, "user": public_user(user)})
