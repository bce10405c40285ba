import re

import pytest
from pydantic import ValidationError

from csrfkit.core.config import CSRFSettings, Settings, default_failure_handler


def test_csrf_defaults(monkeypatch):
    monkeypatch.delenv("CSRF_SECRET", raising=False)
    settings = CSRFSettings()
    assert settings.header_name == "X-CSRFToken"
    assert settings.form_field_name == "_csrf"
    assert settings.cookie_name == "_csrf"
    assert settings.cookie_path == "/"
    assert settings.cookie_domain is None
    assert settings.cookie_http_only is False
    assert settings.cookie_secure is False
    assert settings.session_identity_key == "uid"
    assert settings.previous_identity_key == "_old_uid"
    assert settings.set_cookie is True
    assert settings.set_header is False
    assert settings.reject_on_origin_header is False
    assert settings.on_validation_failure is default_failure_handler
    assert re.fullmatch(r"[0-9A-Za-z]{10}", settings.secret)


def test_each_instance_gets_its_own_random_secret(monkeypatch):
    monkeypatch.delenv("CSRF_SECRET", raising=False)
    assert CSRFSettings().secret != CSRFSettings().secret


def test_secret_from_environment(monkeypatch):
    monkeypatch.setenv("CSRF_SECRET", "from-env")
    assert CSRFSettings().secret == "from-env"


def test_explicit_values_win():
    settings = CSRFSettings(secret="abc", session_identity_key="user_id", cookie_name="xsrf")
    assert settings.secret == "abc"
    assert settings.previous_identity_key == "_old_user_id"
    assert settings.cookie_name == "xsrf"


def test_settings_are_immutable():
    settings = CSRFSettings(secret="abc")
    with pytest.raises(ValidationError):
        settings.secret = "other"


def test_default_failure_response():
    response = default_failure_handler(None)
    assert response.status_code == 400
    assert response.body == b"Invalid csrf token."


def test_app_settings_defaults():
    settings = Settings()
    assert settings.app_name
    assert settings.log_level
