import logging
import threading
from typing import Optional

import firebase_admin
from firebase_admin import auth, credentials
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import Settings, get_settings
from .errors import Unauthorized
from .models import User

# auto_error is off so a missing header surfaces as our own 401 body, not FastAPI's 403.
bearer_scheme = HTTPBearer(auto_error=False)

_init_lock = threading.Lock()


def init_firebase(settings: Settings) -> firebase_admin.App:
    """
    Initializes the Firebase Admin SDK once per process.

    Uses the service account file from `FIREBASE_CREDENTIALS` when set and
    Application Default Credentials otherwise.
    """
    with _init_lock:
        try:
            return firebase_admin.get_app()
        except ValueError:
            pass
        if settings.firebase_credentials:
            cred = credentials.Certificate(settings.firebase_credentials)
            app = firebase_admin.initialize_app(cred)
            logging.info(f"Firebase Admin SDK initialized for project: {cred.project_id}")
        else:
            app = firebase_admin.initialize_app()
            logging.info("Firebase Admin SDK initialized with default credentials")
        return app


def get_current_user(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> User:
    """
    Dependency to verify a Firebase ID token and resolve the calling user.

    Raises `Unauthorized` when the header is missing, the scheme is not
    Bearer, or Firebase rejects the token for any reason.
    """
    if creds is None or not creds.credentials:
        raise Unauthorized("Missing bearer token")

    try:
        init_firebase(settings)
        decoded_token = auth.verify_id_token(creds.credentials)
    except Exception as e:
        logging.warning(f"Token verification failed: {type(e).__name__}: {e}")
        raise Unauthorized("Invalid or expired token")

    uid = decoded_token.get("uid") or decoded_token.get("sub")
    if not uid:
        raise Unauthorized("Invalid or expired token")
    return User(uid=uid, email=decoded_token.get("email"))
