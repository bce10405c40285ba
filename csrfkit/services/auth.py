from fastapi import Depends, HTTPException, Request
from csrfkit.core.csrf import settings_for


def get_current_user(request: Request) -> str:
    user_id = request.session.get(settings_for(request).session_identity_key)
    if not user_id:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return str(user_id)


def login(request: Request, user_id: str) -> None:
    request.session[settings_for(request).session_identity_key] = user_id


def logout(request: Request) -> None:
    request.session.pop(settings_for(request).session_identity_key, None)
    request.session.pop("notes", None)


def get_notes(request: Request, _: str = Depends(get_current_user)) -> list[str]:
    return list(request.session.get("notes", []))


def add_note(request: Request, text: str) -> list[str]:
    notes = list(request.session.get("notes", []))
    notes.append(text)
    request.session["notes"] = notes
    return notes
