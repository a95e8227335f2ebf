"""Shared FastAPI dependencies used across route modules."""

from database import SessionLocal
from auth import get_current_user_factory, get_optional_user_factory
from hukamnama_service import HukamnamaService, hukamnama_service
from llm_service import LLMService, llm_service


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_llm_service() -> LLMService:
    return llm_service


def get_hukamnama_service() -> HukamnamaService:
    return hukamnama_service


get_current_user = get_current_user_factory(get_db)
get_optional_user = get_optional_user_factory(get_db)
