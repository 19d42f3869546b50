"""
Course services.

Catalogue, enrollment, lesson progress and course quizzes.
"""

from academy.services.courses.course_service import CourseService
from academy.services.courses.enrollment_service import EnrollmentService
from academy.services.courses.progress_service import ProgressService
from academy.services.courses.quiz_service import QuizService, round_half_up

__all__ = [
    "CourseService",
    "EnrollmentService",
    "ProgressService",
    "QuizService",
    "round_half_up",
]
