from fastapi import APIRouter, Depends, Request
from csrfkit.core.context import get_token
from csrfkit.core.csrf import require_csrf, settings_for
from csrfkit.schemas.api import NoteCreate, TokenOut
from csrfkit.services.auth import add_note, get_current_user, get_notes

router = APIRouter(prefix="/api")
csrf_required = require_csrf()


@router.get("/csrf", response_model=TokenOut)
def api_csrf_token(request: Request):
    settings = settings_for(request)
    return TokenOut(
        token=get_token(request),
        header_name=settings.header_name,
        form_field_name=settings.form_field_name,
    )


@router.get("/notes")
def api_notes(notes: list[str] = Depends(get_notes)):
    return {"notes": notes}


@router.post("/notes", status_code=201, dependencies=[Depends(csrf_required)])
def api_create_note(
    request: Request,
    payload: NoteCreate,
    _: str = Depends(get_current_user),
):
    notes = add_note(request, payload.text)
    return {"notes": notes}
