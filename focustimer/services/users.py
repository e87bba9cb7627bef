import logging
from typing import Optional

from sqlmodel import Session

from focustimer.models import User

logger = logging.getLogger(__name__)


def ensure_user(
    db: Session,
    user_id: str,
    name: Optional[str] = None,
    email: Optional[str] = None,
    image: Optional[str] = None,
) -> User:
    """Return the user row for an authenticated id, provisioning it on first sight.

    Profile fields supplied by the identity provider overwrite stored ones;
    missing ones leave the stored value alone.
    """
    user = db.get(User, user_id)
    if user is None:
        user = User(id=user_id, name=name, email=email, image=image)
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info("Provisioned user %s", user_id)
        return user

    changed = False
    for field, value in (("name", name), ("email", email), ("image", image)):
        if value is not None and getattr(user, field) != value:
            setattr(user, field, value)
            changed = True
    if changed:
        db.add(user)
        db.commit()
        db.refresh(user)
    return user
