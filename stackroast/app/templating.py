"""Template rendering for the server-side pages."""

from pathlib import Path

from fastapi import Request
from fastapi.templating import Jinja2Templates
from starlette.responses import Response

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def _byline(name: str | None, anonymous: bool = False) -> str:
    if anonymous or not name:
        return "Anonymous"
    return name


templates.env.filters["byline"] = _byline


def render_template(
    request: Request, template_name: str, context: dict, status_code: int = 200
) -> Response:
    return templates.TemplateResponse(request, template_name, context, status_code=status_code)
