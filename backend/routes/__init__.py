from .users import router as users_router
from .guidance import router as guidance_router
from .todos import router as todos_router
from .quiz import router as quiz_router
from .hukamnama import router as hukamnama_router
from .community import router as community_router
from .llm import router as llm_router
from .system import router as system_router

__all__ = [
    "users_router",
    "guidance_router",
    "todos_router",
    "quiz_router",
    "hukamnama_router",
    "community_router",
    "llm_router",
    "system_router",
]
