"""
Lead-generation quiz.

Twelve questions, scored into a trader level and a plan recommendation.
"""

from academy.quiz.questions import QUIZ_QUESTIONS, LeadQuizQuestion, format_capital, get_question
from academy.quiz.scoring import QuizResult, Recommendation, calculate_result
from academy.quiz.flow import ContactData, QuizFlow, progress_percentage

__all__ = [
    "QUIZ_QUESTIONS",
    "LeadQuizQuestion",
    "format_capital",
    "get_question",
    "QuizResult",
    "Recommendation",
    "calculate_result",
    "ContactData",
    "QuizFlow",
    "progress_percentage",
]
