"""Route handlers for Web API."""

from nihongo.web.routes.auth import router as auth_router
from nihongo.web.routes.chapters import router as chapters_router
from nihongo.web.routes.grammar import router as grammar_router
from nihongo.web.routes.health import router as health_router
from nihongo.web.routes.listening import router as listening_router
from nihongo.web.routes.pages import router as pages_router
from nihongo.web.routes.quizzes import router as quizzes_router
from nihongo.web.routes.reading import router as reading_router
from nihongo.web.routes.vocabulary import router as vocabulary_router

__all__ = [
    "auth_router",
    "chapters_router",
    "grammar_router",
    "health_router",
    "listening_router",
    "pages_router",
    "quizzes_router",
    "reading_router",
    "vocabulary_router",
]
