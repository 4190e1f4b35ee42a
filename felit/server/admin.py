"""Admin snapshot of every user and message."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from . import schemas
from .auth import require_admin
from .database import get_db
from .models import Message, User
from .sessions import SessionUser

router = APIRouter(tags=["admin"])


@router.get("/admin", response_model=schemas.AdminSnapshot)
def admin_snapshot(db: Session = Depends(get_db), _: SessionUser = Depends(require_admin)):
    users = db.query(User).order_by(User.username.asc()).all()
    rows = (
        db.query(Message, User)
        .join(User, Message.sender_id == User.id)
        .order_by(Message.created_at.desc(), Message.id.desc())
        .all()
    )
    return schemas.AdminSnapshot(
        users=[schemas.AdminUserOut.model_validate(user) for user in users],
        messages=[
            schemas.AdminMessageOut(
                id=msg.id,
                text=msg.text,
                timestamp=msg.created_at,
                sender=sender.username,
                is_admin=sender.is_admin,
            )
            for msg, sender in rows
        ],
    )
