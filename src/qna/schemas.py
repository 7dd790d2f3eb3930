"""
Request and record types exchanged with the repository layer.

Requests carry raw caller input (identifiers stay strings until the repository validates
them). Records are what the repositories hand back: plain pydantic values built from the
persisted row, so no ORM or driver type crosses the repository boundary.
"""
import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


# --- requests ---

class Question(BaseModel):
    title: str = Field(min_length=1)
    description: str


class Answer(BaseModel):
    question_uuid: str
    content: str


class QuestionId(BaseModel):
    question_uuid: str


class AnswerId(BaseModel):
    answer_uuid: str


# --- records ---

class QuestionDetail(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    question_uuid: uuid.UUID
    title: str
    description: str
    created_at: datetime


class AnswerDetail(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    answer_uuid: uuid.UUID
    question_uuid: uuid.UUID
    content: str
    created_at: datetime
