"""HTML page routes.

Pages are static files from the configured public directory. Admin
panels sit behind require_session_for_page and redirect to /login.
"""

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import FileResponse

from nihongo.config import load_app_config
from nihongo.web.auth import require_session_for_page

router = APIRouter(tags=["pages"], include_in_schema=False)

PUBLIC_PAGES = {
    "/": "index.html",
    "/quiz": "quiz.html",
    "/study": "study.html",
    "/login": "login.html",
}

ADMIN_PAGES = {
    "/dashboard": "dashboard.html",
    "/panel-vocabulary": "panel-vocabulary.html",
    "/panel-grammar": "panel-grammar.html",
    "/create-quiz": "create-quiz.html",
    "/panel-reading": "panel-reading.html",
    "/panel-listening": "panel-listening.html",
}


def _page(filename: str) -> FileResponse:
    path = load_app_config().web.public_dir / filename
    if not path.is_file():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Page '{filename}' not found",
        )
    return FileResponse(path, media_type="text/html")


def _public_page(filename: str):
    def handler():
        return _page(filename)

    return handler


def _admin_page(filename: str):
    def handler(request: Request):
        guard = require_session_for_page(request)
        if guard:
            return guard
        return _page(filename)

    return handler


for _path, _filename in PUBLIC_PAGES.items():
    router.add_api_route(_path, _public_page(_filename), methods=["GET"])

for _path, _filename in ADMIN_PAGES.items():
    router.add_api_route(_path, _admin_page(_filename), methods=["GET"])
