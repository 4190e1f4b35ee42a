"""Message-related API routes."""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from . import schemas
from .auth import get_current_session
from .database import get_db
from .logging_config import configure_logging
from .models import Message, User
from .sessions import SessionUser

router = APIRouter(tags=["messages"])
logger = configure_logging()


@router.post("/send")
def send_message(
    payload: schemas.MessageCreate,
    db: Session = Depends(get_db),
    current: SessionUser = Depends(get_current_session),
):
    if not payload.text or not payload.text.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Bad Request")

    message = Message(sender_id=current.user_id, text=payload.text)
    db.add(message)
    db.commit()
    db.refresh(message)
    logger.info("MESSAGE_SENT sender_id=%s message_id=%s", current.user_id, message.id)
    return Response(status_code=status.HTTP_200_OK)


@router.get("/messages", response_model=List[schemas.MessageOut])
def list_messages(db: Session = Depends(get_db), _: SessionUser = Depends(get_current_session)):
    rows = (
        db.query(Message, User)
        .join(User, Message.sender_id == User.id)
        .order_by(Message.created_at.asc(), Message.id.asc())
        .all()
    )
    return [
        schemas.MessageOut(
            id=msg.id,
            text=msg.text,
            timestamp=msg.created_at,
            username=sender.username,
            is_admin=sender.is_admin,
        )
        for msg, sender in rows
    ]
