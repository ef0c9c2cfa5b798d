from typing import Annotated, List

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StringConstraints
from pydantic_core import PydanticCustomError

from exam_bank.models.orm import DESCRIPTION_MAX, EXAM_TITLE_MAX, SUBJECT_MAX, TITLE_MAX


def not_blank(value: str) -> str:
    """Whitespace-only counts as missing; the value itself is stored as sent."""
    if not value.strip():
        raise PydanticCustomError("blank_string", "Value must not be blank")
    return value


QuestionTitle = Annotated[str, StringConstraints(max_length=TITLE_MAX), AfterValidator(not_blank)]
ExamTitle = Annotated[str, StringConstraints(max_length=EXAM_TITLE_MAX), AfterValidator(not_blank)]
Subject = Annotated[str, StringConstraints(max_length=SUBJECT_MAX), AfterValidator(not_blank)]
Description = Annotated[str, StringConstraints(max_length=DESCRIPTION_MAX), AfterValidator(not_blank)]


# ---------- requests ----------

class AlternativeIn(BaseModel):
    description: Description
    correct: bool = False


class QuestionIn(BaseModel):
    title: QuestionTitle
    subject: Subject
    topics: List[str] = Field(default_factory=list)
    alternatives: List[AlternativeIn] = Field(..., min_length=2)


class ExamIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: ExamTitle
    subject: Subject
    question_ids: List[int] = Field(..., alias="questionIds", min_length=1)


# ---------- responses ----------

class ApiResponse(BaseModel):
    message: str
    success: bool = True


class CreatedResponse(BaseModel):
    id: int
    message: str = "Criado com sucesso"


class AlternativeOut(BaseModel):
    id: int
    description: str
    correct: bool


class QuestionListItem(BaseModel):
    id: int
    title: str
    subject: str
    topics: List[str] = []


class QuestionDetail(QuestionListItem):
    alternatives: List[AlternativeOut] = []


class ExamListItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    subject: str
    question_count: int = Field(alias="questionCount")


class ExamDetail(BaseModel):
    id: int
    title: str
    subject: str
    questions: List[QuestionDetail] = []
