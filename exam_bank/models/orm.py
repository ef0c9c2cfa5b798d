from typing import List

from sqlalchemy import Boolean, ForeignKey, Index, Integer, JSON, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

TITLE_MAX = 500
SUBJECT_MAX = 100
DESCRIPTION_MAX = 1000
EXAM_TITLE_MAX = 200


class Base(DeclarativeBase): pass


class Question(Base):
    __tablename__ = "questions"
    __table_args__ = (
        Index("idx_questions_subject", "subject"),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(TITLE_MAX), nullable=False)
    subject: Mapped[str] = mapped_column(String(SUBJECT_MAX), nullable=False)
    topics: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    alternatives: Mapped[List["Alternative"]] = relationship(
        back_populates="question",
        cascade="all, delete-orphan",
        order_by="Alternative.id",
    )
    exam_links: Mapped[List["ExamQuestion"]] = relationship(
        back_populates="question", cascade="all, delete-orphan"
    )

    @property
    def exams(self) -> List["Exam"]:
        return [link.exam for link in self.exam_links]

    def __repr__(self) -> str:
        return f"<Question(id={self.id}, subject={self.subject!r})>"


class Alternative(Base):
    __tablename__ = "alternatives"
    __table_args__ = (
        Index("idx_alternatives_question", "question_id"),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    question_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("questions.id", ondelete="CASCADE"), nullable=False
    )
    description: Mapped[str] = mapped_column(String(DESCRIPTION_MAX), nullable=False)
    correct: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    question: Mapped["Question"] = relationship(back_populates="alternatives")


class Exam(Base):
    __tablename__ = "exams"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(EXAM_TITLE_MAX), nullable=False)
    subject: Mapped[str] = mapped_column(String(SUBJECT_MAX), nullable=False)

    # questions are shared; only the link rows belong to the exam
    question_links: Mapped[List["ExamQuestion"]] = relationship(
        back_populates="exam",
        cascade="all, delete-orphan",
        order_by="ExamQuestion.position",
    )

    @property
    def questions(self) -> List["Question"]:
        return [link.question for link in self.question_links]

    def __repr__(self) -> str:
        return f"<Exam(id={self.id}, title={self.title!r})>"


class ExamQuestion(Base):
    __tablename__ = "exam_questions"
    __table_args__ = (
        Index("idx_eq_question", "question_id"),
    )

    exam_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("exams.id", ondelete="CASCADE"), primary_key=True
    )
    question_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("questions.id", ondelete="CASCADE"), primary_key=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)

    exam: Mapped["Exam"] = relationship(back_populates="question_links")
    question: Mapped["Question"] = relationship(back_populates="exam_links")
