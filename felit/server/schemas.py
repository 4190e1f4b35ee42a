"""Pydantic schemas for request and response bodies."""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class LoginRequest(BaseModel):
    username: str
    password: str


class MessageCreate(BaseModel):
    text: Optional[str] = None


class MessageOut(BaseModel):
    id: int
    text: str
    timestamp: datetime
    username: str
    is_admin: bool


class AdminUserOut(BaseModel):
    id: int
    username: str
    is_admin: bool

    model_config = ConfigDict(from_attributes=True)


class AdminMessageOut(BaseModel):
    id: int
    text: str
    timestamp: datetime
    sender: str
    is_admin: bool


class AdminSnapshot(BaseModel):
    users: List[AdminUserOut]
    messages: List[AdminMessageOut]


class HealthOut(BaseModel):
    status: str = "ok"
