from pathlib import Path
from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from csrfkit.core.context import get_token_html
from csrfkit.core.csrf import require_csrf, settings_for
from csrfkit.services.auth import add_note, get_current_user, login, logout

router = APIRouter()
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))
csrf_required = require_csrf()


def _render(request: Request, template: str, context: dict):
    base = {
        "current_user": request.session.get(settings_for(request).session_identity_key),
        "csrf_field": get_token_html(request),
    }
    base.update(context)
    return templates.TemplateResponse(request, template, base)


@router.get("/")
def index(request: Request):
    return _render(request, "index.html", {"notes": request.session.get("notes", [])})


@router.post("/login", dependencies=[Depends(csrf_required)])
def login_submit(request: Request, username: str = Form(...)):
    login(request, username)
    return RedirectResponse("/", status_code=303)


@router.post("/logout", dependencies=[Depends(csrf_required)])
def logout_submit(request: Request):
    logout(request)
    return RedirectResponse("/", status_code=303)


@router.post("/notes", dependencies=[Depends(csrf_required)])
def create_note_web(
    request: Request,
    text: str = Form(...),
    _: str = Depends(get_current_user),
):
    add_note(request, text)
    return RedirectResponse("/", status_code=303)
