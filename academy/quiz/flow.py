"""
Step-by-step state of one lead-quiz run.
"""

from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel

from academy.quiz.questions import QUIZ_QUESTIONS, LeadQuizQuestion
from academy.quiz.scoring import QuizResult, calculate_result


def progress_percentage(current: int, total: int) -> float:
    """Width of the progress bar: current/total*100, 0 for an empty quiz."""
    if total <= 0:
        return 0.0
    return current / total * 100


class ContactData(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""

    def is_valid(self) -> bool:
        return bool(self.name.strip()) and bool(self.email.strip()) and "@" in self.email


class QuizFlow:
    """
    Walks a participant through the questions.

    Answers are stored under the question id as a string. `next` on the
    last question scores the run and returns the result; everywhere else
    it advances and returns None.
    """

    def __init__(self, questions: Sequence[LeadQuizQuestion] = QUIZ_QUESTIONS):
        self.questions: List[LeadQuizQuestion] = list(questions)
        self.index = 0
        self.answers: Dict[str, Any] = {}
        self.contact = ContactData()

    @property
    def question(self) -> LeadQuizQuestion:
        return self.questions[self.index]

    @property
    def is_first(self) -> bool:
        return self.index == 0

    @property
    def is_last(self) -> bool:
        return self.index == len(self.questions) - 1

    @property
    def progress(self) -> float:
        return progress_percentage(self.index + 1, len(self.questions))

    def answer(self, value: Any) -> None:
        self.answers[self.question.key] = value

    def set_contact(self, field: str, value: str) -> None:
        if field not in ContactData.model_fields:
            raise ValueError(f"Unknown contact field: {field}")
        setattr(self.contact, field, value)

    def can_proceed(self) -> bool:
        """Whether the current step has what it needs to move on."""
        question = self.question
        current = self.answers.get(question.key)
        if question.type == "contact":
            return self.contact.is_valid()
        if question.type == "slider":
            return True
        if question.type == "multi":
            return bool(current)
        return current is not None

    def next(self) -> Optional[QuizResult]:
        if not self.is_last:
            self.index += 1
            return None
        return calculate_result(self.answers)

    def back(self) -> None:
        if not self.is_first:
            self.index -= 1
