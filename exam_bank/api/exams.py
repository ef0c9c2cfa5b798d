import logging
from typing import List

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from exam_bank.api.schemas import ApiResponse, CreatedResponse, ExamDetail, ExamIn, ExamListItem
from exam_bank.core.database import get_db
from exam_bank.core.exceptions import NotFoundError
from exam_bank.models.orm import Question
from exam_bank.services import views
from exam_bank.services.repository import ExamRepository, QuestionRepository
from exam_bank.services.validation import ensure_questions_exist, unique_ids

logger = logging.getLogger(__name__)

router = APIRouter()


def _not_found(exam_id: int) -> NotFoundError:
    return NotFoundError(f"Prova com ID {exam_id} não encontrada")


def _resolve_questions(db: Session, question_ids: List[int]) -> List[Question]:
    """Load the requested questions in input order, or reject if any is missing."""
    ids = unique_ids(question_ids)
    questions = QuestionRepository(db)
    ensure_questions_exist(ids, questions.existing_ids(ids))
    return questions.get_many(ids)


@router.get("", response_model=List[ExamListItem])
def list_exams(db: Session = Depends(get_db)):
    return views.exam_list(ExamRepository(db).list_with_counts())


@router.get("/{exam_id}", response_model=ExamDetail, responses={404: {"model": ApiResponse}})
def get_exam(exam_id: int, db: Session = Depends(get_db)):
    exam = ExamRepository(db).get_detail(exam_id)
    if not exam:
        raise _not_found(exam_id)
    return views.exam_detail(exam)


@router.post(
    "",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ApiResponse}},
)
def create_exam(payload: ExamIn, request: Request, response: Response, db: Session = Depends(get_db)):
    questions = _resolve_questions(db, payload.question_ids)
    exam = ExamRepository(db).add(payload.title, payload.subject, questions)
    db.commit()
    logger.info("Exam %s created with %d questions", exam.id, len(questions))
    response.headers["Location"] = str(request.url_for("get_exam", exam_id=exam.id))
    return CreatedResponse(id=exam.id, message="Prova criada com sucesso")


@router.put(
    "/{exam_id}",
    response_model=ApiResponse,
    responses={400: {"model": ApiResponse}, 404: {"model": ApiResponse}},
)
def update_exam(exam_id: int, payload: ExamIn, db: Session = Depends(get_db)):
    repo = ExamRepository(db)
    exam = repo.get(exam_id)
    if not exam:
        raise _not_found(exam_id)
    questions = _resolve_questions(db, payload.question_ids)
    repo.replace(exam, payload.title, payload.subject, questions)
    db.commit()
    logger.info("Exam %s updated", exam_id)
    return ApiResponse(message="Prova atualizada com sucesso")


@router.delete("/{exam_id}", response_model=ApiResponse, responses={404: {"model": ApiResponse}})
def delete_exam(exam_id: int, db: Session = Depends(get_db)):
    repo = ExamRepository(db)
    exam = repo.get(exam_id)
    if not exam:
        raise _not_found(exam_id)
    repo.delete(exam)
    db.commit()
    logger.info("Exam %s deleted", exam_id)
    return ApiResponse(message="Prova removida com sucesso")
