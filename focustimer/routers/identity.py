"""
Caller identity. The identity provider in front of this API forwards the
authenticated user's id (and optionally profile fields) as headers.
"""
from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlmodel import Session

from focustimer.db import get_session
from focustimer.services import users as user_service


def require_user_id(
    db: Session = Depends(get_session),
    user_id: Optional[str] = Header(default=None, alias="X-User-Id"),
    user_name: Optional[str] = Header(default=None, alias="X-User-Name"),
    user_email: Optional[str] = Header(default=None, alias="X-User-Email"),
    user_image: Optional[str] = Header(default=None, alias="X-User-Image"),
) -> str:
    if not user_id or not user_id.strip():
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    user = user_service.ensure_user(
        db, user_id.strip(), name=user_name, email=user_email, image=user_image
    )
    return user.id
