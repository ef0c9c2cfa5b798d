import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from exam_bank.api.schemas import ApiResponse, CreatedResponse, QuestionDetail, QuestionIn, QuestionListItem
from exam_bank.core.database import get_db
from exam_bank.core.exceptions import NotFoundError
from exam_bank.services import views
from exam_bank.services.repository import QuestionRepository
from exam_bank.services.validation import ensure_has_correct_alternative

logger = logging.getLogger(__name__)

router = APIRouter()


def _not_found(question_id: int) -> NotFoundError:
    return NotFoundError(f"Questão com ID {question_id} não encontrada")


@router.get("", response_model=List[QuestionListItem])
def list_questions(
    subject: Optional[str] = Query(None, description="Filtro por disciplina (contém, sem diferenciar maiúsculas)"),
    topic: Optional[str] = Query(None, description="Filtro por assunto (contém, sem diferenciar maiúsculas)"),
    db: Session = Depends(get_db),
):
    return [views.question_list_item(q) for q in QuestionRepository(db).list(subject=subject, topic=topic)]


@router.get("/{question_id}", response_model=QuestionDetail, responses={404: {"model": ApiResponse}})
def get_question(question_id: int, db: Session = Depends(get_db)):
    q = QuestionRepository(db).get_detail(question_id)
    if not q:
        raise _not_found(question_id)
    return views.question_detail(q)


@router.post(
    "",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ApiResponse}},
)
def create_question(payload: QuestionIn, request: Request, response: Response, db: Session = Depends(get_db)):
    ensure_has_correct_alternative(payload.alternatives)
    q = QuestionRepository(db).add(payload.title, payload.subject, payload.topics, payload.alternatives)
    db.commit()
    logger.info("Question %s created with %d alternatives", q.id, len(payload.alternatives))
    response.headers["Location"] = str(request.url_for("get_question", question_id=q.id))
    return CreatedResponse(id=q.id, message="Questão criada com sucesso")


@router.put(
    "/{question_id}",
    response_model=ApiResponse,
    responses={400: {"model": ApiResponse}, 404: {"model": ApiResponse}},
)
def update_question(question_id: int, payload: QuestionIn, db: Session = Depends(get_db)):
    repo = QuestionRepository(db)
    q = repo.get_detail(question_id)
    if not q:
        raise _not_found(question_id)
    ensure_has_correct_alternative(payload.alternatives)
    repo.replace(q, payload.title, payload.subject, payload.topics, payload.alternatives)
    db.commit()
    logger.info("Question %s updated", question_id)
    return ApiResponse(message="Questão atualizada com sucesso")


@router.delete("/{question_id}", response_model=ApiResponse, responses={404: {"model": ApiResponse}})
def delete_question(question_id: int, db: Session = Depends(get_db)):
    repo = QuestionRepository(db)
    q = repo.get(question_id)
    if not q:
        raise _not_found(question_id)
    repo.delete(q)
    db.commit()
    logger.info("Question %s deleted", question_id)
    return ApiResponse(message="Questão removida com sucesso")
