"""
API dependencies for dependency injection.
"""
from typing import Any, AsyncGenerator, Dict, Optional
from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.db.database import AsyncSessionLocal
from app.core.exceptions import UnauthenticatedException
from app.services.identity import identity_service, IdentityService
from app.services.moderation import ModerationWorker
from app.services.store import EntityStore
from app.services.text_generation import text_generation_service


def get_session_factory() -> async_sessionmaker:
    """Session factory for work that outlives the request (background tasks)."""
    return AsyncSessionLocal


async def get_db(
    session_factory: async_sessionmaker = Depends(get_session_factory),
) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for getting async database sessions.
    Handlers commit explicitly; an escaping exception rolls back.
    """
    async with session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def get_store(db: AsyncSession = Depends(get_db)) -> EntityStore:
    return EntityStore(db)


def get_text_generator() -> Any:
    return text_generation_service


def get_identity_service() -> IdentityService:
    return identity_service


def get_moderation_worker(
    session_factory: async_sessionmaker = Depends(get_session_factory),
    text_generator: Any = Depends(get_text_generator),
) -> ModerationWorker:
    return ModerationWorker(session_factory=session_factory, text_generator=text_generator)


async def get_current_user(
    authorization: Optional[str] = Header(None),
    identity: IdentityService = Depends(get_identity_service),
) -> Dict[str, Any]:
    """
    Dependency for protected routes: resolves the caller from a Bearer ID token.

    Usage:
        @router.post("/endpoint")
        async def endpoint(user: dict = Depends(get_current_user)):
            uid = user["uid"]

    Raises:
        UnauthenticatedException: missing, malformed or rejected token
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise UnauthenticatedException("Missing bearer token")

    token = authorization[len("Bearer "):].strip()
    claims = await identity.verify_token(token) if token else None
    if not claims or not claims.get("uid"):
        raise UnauthenticatedException("Invalid identity token")

    return claims
