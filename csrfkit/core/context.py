"""Typed accessors for the CSRF values attached to a request."""

from __future__ import annotations

from typing import TYPE_CHECKING
from markupsafe import Markup
from starlette.requests import Request

if TYPE_CHECKING:
    from csrfkit.core.csrf import CSRF


def hidden_input(name: str, token: str) -> Markup:
    return Markup('<input type="hidden" name="{}" value="{}">').format(name, token)


def set_csrf(request: Request, csrf: CSRF) -> None:
    request.state.csrf = csrf
    request.state.csrf_token = csrf.token
    request.state.csrf_token_html = hidden_input(csrf.form_name, csrf.token)


def get_csrf(request: Request) -> CSRF | None:
    return getattr(request.state, "csrf", None)


def get_token(request: Request) -> str | None:
    return getattr(request.state, "csrf_token", None)


def get_token_html(request: Request) -> Markup | None:
    return getattr(request.state, "csrf_token_html", None)
