"""
Pydantic models for rows of the hosted backend's tables.

The backend owns the schema; these records only describe the columns the
academy reads. Unknown columns are ignored so schema additions on the
backend never break parsing.
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from academy.tiers import Tier, parse_tier

TierValue = Literal["starter", "academy", "elite"]
SubscriptionStatus = Literal["active", "past_due", "canceled", "trialing"]
CourseLevel = Literal["beginner", "intermediate", "advanced"]
LessonType = Literal["video", "article", "quiz", "live_session"]
ProgressStatus = Literal["not_started", "in_progress", "completed"]
StrategyType = Literal["hedging", "martingale", "custom"]
LicenseStatus = Literal["active", "inactive", "suspended"]
SessionType = Literal["group_call", "livestream", "webinar", "1to1"]
SessionStatus = Literal["scheduled", "live", "completed", "canceled"]
PostType = Literal["question", "discussion", "achievement", "setup_share"]
NotificationType = Literal[
    "course_update", "new_lesson", "live_session", "achievement", "payment", "system"
]


class Record(BaseModel):
    """Base for backend rows."""

    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        # nullable columns fall back to the field default
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


# =============================================================================
# Profiles
# =============================================================================

class Profile(Record):
    """Row of `profiles`, keyed by the auth user id."""
    id: str
    email: str
    full_name: Optional[str] = None
    telegram_user_id: Optional[int] = None
    whatsapp_number: Optional[str] = None
    tier: TierValue = "starter"
    stripe_customer_id: Optional[str] = None
    stripe_subscription_id: Optional[str] = None
    subscription_status: Optional[SubscriptionStatus] = None
    subscription_started_at: Optional[datetime] = None
    subscription_ends_at: Optional[datetime] = None
    telegram_queries_today: int = 0
    telegram_queries_reset_at: Optional[datetime] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("tier", mode="before")
    @classmethod
    def coerce_tier(cls, value: Any) -> str:
        return parse_tier(value).value

    @property
    def tier_enum(self) -> Tier:
        return Tier(self.tier)


class DashboardStats(BaseModel):
    """Aggregated learner stats for the dashboard."""
    user_id: str
    tier: str
    enrolled_courses_count: int
    completed_courses_count: int
    avg_completion_percentage: float
    total_lessons_watched: int = 0
    total_quizzes_taken: int = 0
    avg_quiz_score: float = 0


class UserPreferences(Record):
    """Row of `user_preferences`."""
    user_id: str
    email_notifications: bool = True
    telegram_notifications: bool = True
    weekly_report: bool = True
    trade_alerts: Optional[bool] = None
    language: Optional[str] = None
    theme: Optional[str] = None
    updated_at: Optional[datetime] = None


# =============================================================================
# Courses
# =============================================================================

class CourseCategory(Record):
    """Row of `course_categories` (or its embedded subset on a course)."""
    id: Optional[str] = None
    name: str
    slug: str
    description: Optional[str] = None
    icon: Optional[str] = None
    order_index: int = 0
    created_at: Optional[datetime] = None


class Course(Record):
    """Row of `courses`."""
    id: str
    category_id: Optional[str] = None
    title: str
    slug: str
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None
    tier_required: TierValue = "starter"
    level: CourseLevel = "beginner"
    duration_minutes: Optional[int] = None
    order_index: int = 0
    is_published: bool = False
    total_videos: int = 0
    total_quizzes: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    category: Optional[CourseCategory] = None

    @field_validator("tier_required", mode="before")
    @classmethod
    def coerce_tier(cls, value: Any) -> str:
        return parse_tier(value).value


class Lesson(Record):
    """Row of `lessons`."""
    id: str
    module_id: str
    title: str
    description: Optional[str] = None
    lesson_type: LessonType = "video"
    content_url: Optional[str] = None
    video_duration_seconds: Optional[int] = None
    article_content: Optional[str] = None
    is_free_preview: bool = False
    order_index: int = 0
    is_published: bool = False
    resources: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CourseModule(Record):
    """Row of `course_modules`, with its lessons when loaded."""
    id: str
    course_id: str
    title: str
    description: Optional[str] = None
    order_index: int = 0
    is_published: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    lessons: List[Lesson] = Field(default_factory=list)


class CourseDetails(Course):
    """A course with its published modules and lessons in order."""
    modules: List[CourseModule] = Field(default_factory=list)
    has_access: bool = True

    def locked(self) -> "CourseDetails":
        """
        Copy for a caller who may not open the course.

        Outline and metadata stay; lesson content is kept only on free
        previews.
        """
        modules = []
        for module in self.modules:
            lessons = [
                lesson if lesson.is_free_preview
                else lesson.model_copy(update={"content_url": None, "article_content": None, "resources": None})
                for lesson in module.lessons
            ]
            modules.append(module.model_copy(update={"lessons": lessons}))
        return self.model_copy(update={"modules": modules, "has_access": False})


# =============================================================================
# Enrollment & progress
# =============================================================================

class Enrollment(Record):
    """Row of `enrollments`."""
    id: str
    user_id: str
    course_id: str
    enrolled_at: Optional[datetime] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    completion_percentage: float = 0
    last_accessed_at: Optional[datetime] = None
    course: Optional[Course] = None


class LessonProgress(Record):
    """
    Row of `lesson_progress`.

    Progress for a lesson the user never opened is represented with the
    defaults: not_started, nothing watched.
    """
    id: Optional[str] = None
    user_id: Optional[str] = None
    lesson_id: Optional[str] = None
    enrollment_id: Optional[str] = None
    status: ProgressStatus = "not_started"
    watched_seconds: int = 0
    total_seconds: Optional[int] = None
    completed_at: Optional[datetime] = None
    last_position_seconds: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# =============================================================================
# Course quizzes
# =============================================================================

class QuizQuestion(Record):
    """Row of `quiz_questions`."""
    id: str
    quiz_id: str
    question_text: str
    question_type: str
    options: Optional[Any] = None
    correct_answer: str
    explanation: Optional[str] = None
    points: int = 1
    order_index: int = 0


class Quiz(Record):
    """Row of `quizzes`, with its questions when loaded."""
    id: str
    course_id: Optional[str] = None
    lesson_id: Optional[str] = None
    title: str
    description: Optional[str] = None
    passing_score: Optional[int] = None
    max_attempts: Optional[int] = None
    time_limit_minutes: Optional[int] = None
    questions: List[QuizQuestion] = Field(default_factory=list)


class QuizAttempt(Record):
    """Row of `quiz_attempts`."""
    id: str
    user_id: str
    quiz_id: str
    score: int
    total_points: int
    percentage: int
    passed: bool
    answers: Dict[str, Any] = Field(default_factory=dict)
    time_taken_seconds: Optional[int] = None
    attempt_number: int = 1
    created_at: Optional[datetime] = None


# =============================================================================
# Trading bot
# =============================================================================

class BotLicense(Record):
    """Row of `bot_licenses`."""
    id: str
    user_id: str
    license_key: str
    mt_account_number: Optional[str] = None
    broker: Optional[str] = None
    strategy_type: StrategyType = "hedging"
    status: LicenseStatus = "inactive"
    activated_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    download_count: int = 0
    last_downloaded_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# =============================================================================
# Live sessions
# =============================================================================

class LiveSession(Record):
    """Row of `live_sessions`."""
    id: str
    title: str
    description: Optional[str] = None
    session_type: SessionType = "group_call"
    tier_required: Literal["academy", "elite"] = "academy"
    scheduled_at: datetime
    duration_minutes: int = 60
    meeting_url: Optional[str] = None
    recording_url: Optional[str] = None
    replay_expires_at: Optional[datetime] = None
    max_participants: Optional[int] = None
    current_participants: int = 0
    status: SessionStatus = "scheduled"
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SessionRegistration(Record):
    """Row of `session_registrations`."""
    id: str
    user_id: str
    session_id: str
    attended: Optional[bool] = None
    joined_at: Optional[datetime] = None
    left_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


# =============================================================================
# Community
# =============================================================================

class PostAuthor(Record):
    """Embedded author subset of a profile."""
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None


class CommunityComment(Record):
    """Row of `community_comments`."""
    id: str
    post_id: str
    user_id: str
    content: str
    parent_comment_id: Optional[str] = None
    is_solution: Optional[bool] = None
    upvotes: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    author: Optional[PostAuthor] = None


class CommunityPost(Record):
    """Row of `community_posts`."""
    id: str
    user_id: str
    title: str
    content: str
    post_type: Optional[PostType] = None
    images: List[str] = Field(default_factory=list)
    upvotes: int = 0
    is_pinned: bool = False
    is_answered: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    author: Optional[PostAuthor] = None
    comments: Optional[List[CommunityComment]] = None


# =============================================================================
# Notifications
# =============================================================================

class Notification(Record):
    """Row of `notifications`."""
    id: str
    user_id: str
    title: str
    message: str
    notification_type: NotificationType = "system"
    link: Optional[str] = None
    is_read: bool = False
    read_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


# =============================================================================
# 5-day challenge
# =============================================================================

class ChallengeRegistration(Record):
    """Row of `challenge_registrations`, keyed by email."""
    id: Optional[str] = None
    email: str
    full_name: str
    completed_days: List[int] = Field(default_factory=list)
    current_day: int = 1
    registered_at: Optional[datetime] = None
    last_accessed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
