from ninja import Schema, Field
from uuid import UUID
from datetime import datetime


class TaskOut(Schema):
    id: UUID
    title: str
    description: str
    status: str
    createdAt: datetime = Field(..., alias="created_at")
    updatedAt: datetime = Field(..., alias="updated_at")


class MessageOut(Schema):
    message: str


class HealthOut(Schema):
    status: str
