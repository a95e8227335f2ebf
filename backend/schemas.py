from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, Any
from datetime import datetime
import re

from text_utils import strip_surrogates

# Guidance Schemas
class GurbaniTuk(BaseModel):
    model_config = ConfigDict(frozen=True)
    gurmukhi: str
    transliteration: str
    translation: str
    source: str
    raag: Optional[str] = None


class GuidanceResponse(BaseModel):
    """Fully populated guidance, serialized with the generator's camelCase keys."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)
    gurbani_tuk: GurbaniTuk = Field(alias="gurbaniTuk")
    actions: list[str]
    ardaas: str
    explanation: str


class FeelingRequest(BaseModel):
    feeling: str
    category: Optional[str] = None  # difficulty | gratitude | growth | standard
    api_key: Optional[str] = None

    @field_validator("feeling")
    @classmethod
    def feeling_not_blank(cls, v: str) -> str:
        v = strip_surrogates(v)
        if not v.strip():
            raise ValueError("Please share how you are feeling")
        return v


class PromptPreviewResponse(BaseModel):
    category: str
    prompt: str


class SubmissionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    id: int
    user_id: Optional[int] = None
    feeling: str
    category: str
    guidance: GuidanceResponse
    seva_points: int
    created_at: Optional[datetime] = None


# User Schemas
class UserCreate(BaseModel):
    username: str
    display_name: Optional[str] = None


class UserSettings(BaseModel):
    language: str = "english"
    theme: str = "light"
    notifications: bool = True
    transliteration: bool = True


class UserSettingsUpdate(BaseModel):
    language: Optional[str] = None
    theme: Optional[str] = None
    notifications: Optional[bool] = None
    transliteration: Optional[bool] = None


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    username: str
    display_name: Optional[str] = None
    total_seva_points: int
    weekly_seva_points: int
    streak_days: int
    settings: Optional[dict[str, Any]] = None
    created_at: Optional[datetime] = None


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class DailyPoints(BaseModel):
    day: str
    date: str
    points: int


class DashboardResponse(BaseModel):
    total_seva_points: int
    weekly_seva_points: int
    weekly_goal: int
    progress_percent: float
    streak_days: int
    daily_points: list[DailyPoints]
    submissions: int
    todos_completed: int
    quizzes_taken: int


class PointsAwardResponse(BaseModel):
    awarded: int
    total_seva_points: int
    weekly_seva_points: int


# Spiritual To-Do Schemas
class TodoCreate(BaseModel):
    text: str
    source: Optional[str] = "manual"  # manual | rooh-check | hukamnama

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("To-do text is required")
        return v.strip()

    @field_validator("source")
    @classmethod
    def known_source(cls, v: Optional[str]) -> str:
        if v in (None, ""):
            return "manual"
        if v not in ("manual", "rooh-check", "hukamnama"):
            raise ValueError("source must be manual, rooh-check or hukamnama")
        return v


class TodoUpdate(BaseModel):
    text: Optional[str] = None
    completed: Optional[bool] = None


class TodoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    user_id: Optional[int] = None
    text: str
    completed: bool
    source: str
    created_at: Optional[datetime] = None


# Quiz Schemas
class QuizQuestion(BaseModel):
    id: str
    question: str
    options: list[str]


class QuizSubmission(BaseModel):
    answers: dict[str, str]


class QuizReviewItem(BaseModel):
    id: str
    question: str
    your_answer: Optional[str] = None
    correct_answer: str
    is_correct: bool


class QuizResultResponse(BaseModel):
    score: int
    total_questions: int
    seva_points: int
    message: str
    review: list[QuizReviewItem]


# Hukamnama Schemas
class AudioLinks(BaseModel):
    gurmukhi: str = ""
    english: str = ""
    punjabi: str = ""


class HukamnamaBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    gurmukhi: str
    transliteration: str
    translation: str
    explanation: str
    actions: list[str]
    source: str
    page_number: str = Field(alias="pageNumber")
    writer: str
    raag: str
    audio_links: AudioLinks = Field(alias="audioLinks")


class HukamnamaResponse(BaseModel):
    date: str
    hukamnama: HukamnamaBody


# Feedback / Reminder Schemas
FEEDBACK_TYPES = ("general", "bug", "feature", "content")
REMINDER_DAYS = ("everyday", "mon", "tue", "wed", "thu", "fri", "sat", "sun")
_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class FeedbackCreate(BaseModel):
    feedback_type: str = "general"
    content: str

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Feedback cannot be empty")
        return v.strip()

    @field_validator("feedback_type")
    @classmethod
    def known_type(cls, v: str) -> str:
        low = (v or "general").strip().lower()
        if low not in FEEDBACK_TYPES:
            raise ValueError(f"feedback_type must be one of: {', '.join(FEEDBACK_TYPES)}")
        return low


class FeedbackResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    feedback_type: str
    content: str
    seva_points: int = 0
    created_at: Optional[datetime] = None


class ReminderCreate(BaseModel):
    action: str
    time: str = "08:00"
    days: list[str] = ["everyday"]

    @field_validator("action")
    @classmethod
    def action_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Reminder action is required")
        return v.strip()

    @field_validator("time")
    @classmethod
    def valid_time(cls, v: str) -> str:
        if not _TIME_RE.match(v or ""):
            raise ValueError("time must be HH:MM (24h)")
        return v

    @field_validator("days")
    @classmethod
    def valid_days(cls, v: list[str]) -> list[str]:
        days = [d.strip().lower() for d in (v or []) if d and d.strip()]
        if not days:
            return ["everyday"]
        unknown = [d for d in days if d not in REMINDER_DAYS]
        if unknown:
            raise ValueError(f"unknown days: {', '.join(unknown)}")
        return days


class ReminderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    user_id: Optional[int] = None
    action: str
    time: str
    days: list[str]
    created_at: Optional[datetime] = None


# LLM proxy / stats
class GenerateRequest(BaseModel):
    prompt: str
    api_key: Optional[str] = None


class GenerateResponse(BaseModel):
    text: str
    success: bool = True


class StatsResponse(BaseModel):
    submissions: int
    todos: int
    quiz_results: int
    feedback: int
    reminders: int
