# Models are stored in Firebase Firestore, not Django DB.
# This file is kept for Django app structure compatibility.
#
# Firestore Collections:
# - users/{uid}: username, email, password hash, profilePicture, contacts
# - userEmails/{sha256(email)}: email uniqueness index
# - callLogs/{logId}: caller, receiver, timestamp, status
#
# See firebase_service.py for Firestore operations.
