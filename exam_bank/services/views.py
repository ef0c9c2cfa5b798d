"""Outward shapes of stored entities: light list views, nested detail views."""
from typing import List, Tuple

from exam_bank.api.schemas import (
    AlternativeOut,
    ExamDetail,
    ExamListItem,
    QuestionDetail,
    QuestionListItem,
)
from exam_bank.models.orm import Exam, Question


def question_list_item(q: Question) -> QuestionListItem:
    return QuestionListItem(id=q.id, title=q.title, subject=q.subject, topics=list(q.topics or []))


def question_detail(q: Question) -> QuestionDetail:
    return QuestionDetail(
        id=q.id,
        title=q.title,
        subject=q.subject,
        topics=list(q.topics or []),
        alternatives=[AlternativeOut(id=a.id, description=a.description, correct=a.correct) for a in q.alternatives],
    )


def exam_list_item(exam: Exam, question_count: int) -> ExamListItem:
    return ExamListItem(id=exam.id, title=exam.title, subject=exam.subject, question_count=question_count)


def exam_list(rows: List[Tuple[Exam, int]]) -> List[ExamListItem]:
    return [exam_list_item(exam, count) for exam, count in rows]


def exam_detail(exam: Exam) -> ExamDetail:
    return ExamDetail(
        id=exam.id,
        title=exam.title,
        subject=exam.subject,
        questions=[question_detail(q) for q in exam.questions],
    )
