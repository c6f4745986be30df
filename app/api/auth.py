"""
Auth API endpoints.
"""
from typing import Any, Dict
from fastapi import APIRouter, Depends

from app.api.deps import get_store, get_current_user
from app.core.middleware import get_request_id
from app.core.exceptions import DependencyFailureException
from app.core.logging import logger
from app.schemas.user import SyncUserRequest, SyncUserResponse, UserOutput
from app.services.store import EntityStore


router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/sync-user", response_model=SyncUserResponse)
async def sync_user(
    request: SyncUserRequest,
    store: EntityStore = Depends(get_store),
    user: Dict[str, Any] = Depends(get_current_user),
):
    """
    Create or update the caller's profile after sign-in.

    Fields missing from the body fall back to the token's name/email/picture
    claims, then to the stored value.

    Raises:
        401: Missing or invalid identity token
        503: Database unavailable
    """
    request_id = get_request_id()
    user_id = user["uid"]

    try:
        profile = await store.upsert_user(
            user_id,
            name=request.name or user.get("name"),
            email=request.email or user.get("email"),
            avatar=request.avatar or user.get("picture"),
        )
        await store.commit()
    except Exception as e:
        logger.error(
            f"Failed to sync user: {str(e)}",
            extra={"request_id": request_id, "user_id": user_id},
            exc_info=True,
        )
        raise DependencyFailureException(f"Database operation failed: {str(e)}")

    logger.info("User synced", extra={"request_id": request_id, "user_id": user_id})

    return SyncUserResponse(
        request_id=request_id,
        success=True,
        user=UserOutput.model_validate(profile),
    )
