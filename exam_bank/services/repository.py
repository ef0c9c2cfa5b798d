from typing import Iterable, List, Optional, Protocol, Sequence, Tuple

from sqlalchemy import String, cast, func, select
from sqlalchemy.orm import Session, selectinload

from exam_bank.models.orm import Alternative, Exam, ExamQuestion, Question

# widest value an INTEGER primary key can hold
MAX_ID = 2**63 - 1


def storable(row_id: int) -> bool:
    return 0 < row_id <= MAX_ID


class AlternativeData(Protocol):
    description: str
    correct: bool


class QuestionRepository:
    """Storage access for questions, bound to one request's session."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, question_id: int) -> Optional[Question]:
        if not storable(question_id):
            return None
        return self.db.get(Question, question_id)

    def get_detail(self, question_id: int) -> Optional[Question]:
        if not storable(question_id):
            return None
        stmt = (
            select(Question)
            .options(selectinload(Question.alternatives))
            .where(Question.id == question_id)
        )
        return self.db.scalar(stmt)

    def list(self, subject: Optional[str] = None, topic: Optional[str] = None) -> List[Question]:
        stmt = select(Question).order_by(Question.id)
        if subject:
            stmt = stmt.where(func.lower(Question.subject, type_=String).contains(subject.lower(), autoescape=True))
        if topic:
            # matched against the stored JSON text of the whole list
            stmt = stmt.where(
                func.lower(cast(Question.topics, String), type_=String).contains(topic.lower(), autoescape=True)
            )
        return list(self.db.scalars(stmt).all())

    def existing_ids(self, ids: Iterable[int]) -> List[int]:
        ids = [i for i in ids if storable(i)]
        if not ids:
            return []
        return list(self.db.scalars(select(Question.id).where(Question.id.in_(ids))).all())

    def get_many(self, ids: Sequence[int]) -> List[Question]:
        """Questions for ``ids``, in the order the IDs were given."""
        stored = [i for i in ids if storable(i)]
        found = {q.id: q for q in self.db.scalars(select(Question).where(Question.id.in_(stored)))}
        return [found[i] for i in ids if i in found]

    def add(
        self,
        title: str,
        subject: str,
        topics: Sequence[str],
        alternatives: Iterable[AlternativeData],
    ) -> Question:
        q = Question(
            title=title,
            subject=subject,
            topics=list(topics),
            alternatives=[Alternative(description=a.description, correct=a.correct) for a in alternatives],
        )
        self.db.add(q)
        self.db.flush()
        return q

    def replace(
        self,
        q: Question,
        title: str,
        subject: str,
        topics: Sequence[str],
        alternatives: Iterable[AlternativeData],
    ) -> Question:
        q.title = title
        q.subject = subject
        q.topics = list(topics)
        # remove-all then insert-new: alternative ids are never carried over
        q.alternatives.clear()
        self.db.flush()
        q.alternatives = [Alternative(description=a.description, correct=a.correct) for a in alternatives]
        self.db.flush()
        return q

    def delete(self, q: Question) -> None:
        self.db.delete(q)
        self.db.flush()


class ExamRepository:
    """Storage access for exams and their question links."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, exam_id: int) -> Optional[Exam]:
        if not storable(exam_id):
            return None
        return self.db.get(Exam, exam_id)

    def get_detail(self, exam_id: int) -> Optional[Exam]:
        if not storable(exam_id):
            return None
        stmt = (
            select(Exam)
            .options(
                selectinload(Exam.question_links)
                .selectinload(ExamQuestion.question)
                .selectinload(Question.alternatives)
            )
            .where(Exam.id == exam_id)
        )
        return self.db.scalar(stmt)

    def list_with_counts(self) -> List[Tuple[Exam, int]]:
        stmt = (
            select(Exam, func.count(ExamQuestion.question_id))
            .outerjoin(ExamQuestion, ExamQuestion.exam_id == Exam.id)
            .group_by(Exam.id)
            .order_by(Exam.id)
        )
        return [(exam, int(count)) for exam, count in self.db.execute(stmt).all()]

    @staticmethod
    def _links(questions: Sequence[Question]) -> List[ExamQuestion]:
        return [ExamQuestion(question=q, position=pos) for pos, q in enumerate(questions)]

    def add(self, title: str, subject: str, questions: Sequence[Question]) -> Exam:
        exam = Exam(title=title, subject=subject, question_links=self._links(questions))
        self.db.add(exam)
        self.db.flush()
        return exam

    def replace(self, exam: Exam, title: str, subject: str, questions: Sequence[Question]) -> Exam:
        exam.title = title
        exam.subject = subject
        exam.question_links.clear()
        self.db.flush()
        exam.question_links = self._links(questions)
        self.db.flush()
        return exam

    def delete(self, exam: Exam) -> None:
        self.db.delete(exam)
        self.db.flush()
