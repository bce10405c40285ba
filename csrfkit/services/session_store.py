from typing import Any
from starlette.requests import Request


class SessionStoreError(RuntimeError):
    pass


class SessionStore:
    def __init__(self, request: Request) -> None:
        self.request = request

    def _session(self) -> dict:
        try:
            return self.request.session
        except (AssertionError, KeyError) as exc:
            raise SessionStoreError("No session available; is SessionMiddleware installed?") from exc

    def get(self, key: str, default: Any = None) -> Any:
        return self._session().get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._session()[key] = value
