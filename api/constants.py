DEFAULT_CALL_STATUS = "ongoing"

# Multipart field carrying the optional avatar on signup
PROFILE_PICTURE_FIELD = "profilePicture"
