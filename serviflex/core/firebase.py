"""
Firebase app initialisation and Firestore client access.

The Firebase Admin app is initialised once at startup (from the lifespan
handler). Route handlers receive the Firestore AsyncClient through the
`get_db` dependency, which tests override with an in-memory fake.
"""

from typing import AsyncGenerator, Optional

import firebase_admin
from firebase_admin import credentials, firestore_async
from google.cloud.firestore import AsyncClient

from serviflex.core.config import settings
from serviflex.core.logging_config import get_logger

logger = get_logger(__name__)


def init_firebase() -> firebase_admin.App:
    """
    Initialise the default Firebase app if it has not been initialised yet.

    Credentials come from FIREBASE_CREDENTIALS_PATH when set, otherwise
    from Google application default credentials (GOOGLE_APPLICATION_CREDENTIALS,
    gcloud login, or the metadata server on Cloud Run).

    Returns:
        The default firebase_admin.App
    """
    try:
        app = firebase_admin.get_app()
        logger.info("Firebase Admin SDK already initialized")
        return app
    except ValueError:
        pass

    if settings.firebase_credentials_path:
        cred = credentials.Certificate(settings.firebase_credentials_path)
        logger.info(
            "Initializing Firebase from credentials file",
            extra={"credentials_path": settings.firebase_credentials_path},
        )
    else:
        cred = credentials.ApplicationDefault()
        logger.info("Initializing Firebase from application default credentials")

    app = firebase_admin.initialize_app(
        cred,
        {"projectId": settings.firebase_project_id},
    )
    logger.info(
        "Firebase Admin SDK initialized",
        extra={"project_id": settings.firebase_project_id},
    )
    return app


def close_firebase() -> None:
    """Tear down the default Firebase app, if any."""
    try:
        app = firebase_admin.get_app()
    except ValueError:
        return
    firebase_admin.delete_app(app)
    logger.info("Firebase Admin SDK shut down")


def get_firestore_client(app: Optional[firebase_admin.App] = None) -> AsyncClient:
    return firestore_async.client(app)


async def get_db() -> AsyncGenerator[AsyncClient, None]:
    """
    Dependency function providing the Firestore client for one request.

    Yields:
        Firestore AsyncClient bound to the default Firebase app
    """
    yield get_firestore_client()
