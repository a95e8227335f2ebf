from sqlalchemy import Column, Integer, String, Text, DateTime, Date, ForeignKey, Boolean, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from database import Base


DEFAULT_SETTINGS = {
    "language": "english",
    "theme": "light",
    "notifications": True,
    "transliteration": True,
}


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, index=True, nullable=False)
    display_name = Column(String(150), nullable=True)
    total_seva_points = Column(Integer, default=0, nullable=False)
    weekly_seva_points = Column(Integer, default=0, nullable=False)
    week_start = Column(Date, nullable=True)  # Monday of the week weekly points belong to
    streak_days = Column(Integer, default=0, nullable=False)
    last_check_in = Column(Date, nullable=True)
    settings = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    submissions = relationship("UserSubmission", back_populates="user", cascade="all, delete-orphan")
    todos = relationship("SpiritualTodo", back_populates="user", cascade="all, delete-orphan")
    quiz_results = relationship("QuizResult", back_populates="user", cascade="all, delete-orphan")
    reminders = relationship("Reminder", back_populates="user", cascade="all, delete-orphan")
    point_events = relationship("SevaPointEvent", back_populates="user", cascade="all, delete-orphan")


class UserSubmission(Base):
    __tablename__ = "user_submissions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    feeling = Column(Text, nullable=False)
    category = Column(String(32), nullable=False)  # difficulty | gratitude | growth | standard
    gurbani_tuk = Column(Text, nullable=False)
    transliteration = Column(Text, nullable=False)
    translation = Column(Text, nullable=False)
    source = Column(String(255), nullable=False)
    raag = Column(String(100), nullable=True)
    explanation = Column(Text, nullable=False)
    actions = Column(JSON, nullable=False)
    ardaas = Column(Text, nullable=False)
    seva_points = Column(Integer, default=0, nullable=False)
    user_agent = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    user = relationship("User", back_populates="submissions")


class SpiritualTodo(Base):
    __tablename__ = "spiritual_todos"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    text = Column(Text, nullable=False)
    completed = Column(Boolean, default=False, nullable=False)
    source = Column(String(32), default="manual", nullable=False)  # manual | rooh-check | hukamnama
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("User", back_populates="todos")


class QuizResult(Base):
    __tablename__ = "quiz_results"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    score = Column(Integer, nullable=False)
    total_questions = Column(Integer, nullable=False)
    seva_points = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="quiz_results")


class Feedback(Base):
    __tablename__ = "feedback"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    feedback_type = Column(String(32), nullable=False, default="general")
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Reminder(Base):
    __tablename__ = "reminders"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    action = Column(String(255), nullable=False)
    time = Column(String(5), nullable=False)  # HH:MM
    days = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="reminders")


class SevaPointEvent(Base):
    __tablename__ = "seva_point_events"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    reason = Column(String(32), nullable=False, index=True)  # rooh_check | hukamnama_read | quiz | ardaas | feedback
    points = Column(Integer, nullable=False)
    awarded_on = Column(Date, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="point_events")
