from __future__ import annotations

from typing import Optional

from fastapi import Header, HTTPException, status

from app.modules.study.sessions import StudySessionManager, study_manager


async def current_user_id(
    x_user_id: Optional[str] = Header(default=None),
) -> str:
    """Resolve the caller identity forwarded by the authentication provider.

    Sign-in and token issuance happen upstream; requests reach this service
    with the authenticated user's id in the ``X-User-Id`` header.
    """
    user_id = (x_user_id or "").strip()
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized"
        )
    return user_id


def get_study_manager() -> StudySessionManager:
    return study_manager
