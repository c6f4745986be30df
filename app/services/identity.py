"""
Identity token verification backed by Firebase Authentication.
"""
from typing import Any, Dict, Optional

import firebase_admin
from firebase_admin import auth, credentials
from starlette.concurrency import run_in_threadpool

from app.core.config import settings
from app.core.logging import logger


class IdentityService:
    """
    Verifies Firebase ID tokens sent by the mobile client.

    The Firebase app is initialised on first use so importing this module
    never needs credentials.
    """

    def __init__(self):
        self._app: Optional[firebase_admin.App] = None

    def _get_app(self) -> firebase_admin.App:
        if self._app is None:
            try:
                self._app = firebase_admin.get_app()
            except ValueError:
                cred = (
                    credentials.Certificate(settings.FIREBASE_CREDENTIALS_PATH)
                    if settings.FIREBASE_CREDENTIALS_PATH
                    else None
                )
                options = (
                    {"projectId": settings.FIREBASE_PROJECT_ID}
                    if settings.FIREBASE_PROJECT_ID
                    else None
                )
                self._app = firebase_admin.initialize_app(cred, options)
                logger.info("Firebase app initialized")
        return self._app

    async def verify_token(self, token: str) -> Optional[Dict[str, Any]]:
        """
        Return the decoded token claims, or None if the token is not valid.
        The caller's uid is under the "uid" key.
        """
        try:
            app = self._get_app()
            # verify_id_token is blocking (it may fetch signing keys)
            return await run_in_threadpool(auth.verify_id_token, token, app=app)
        except Exception as e:
            logger.warning(
                "Token verification failed",
                extra={"error_type": type(e).__name__, "error_message": str(e)},
            )
            return None


# Global service instance
identity_service = IdentityService()
