import pytest

from auth import signed_token
from auth.errors import ConfigurationError
from auth.models import SessionUser
from auth.session import SESSION_MAX_AGE_SECONDS, SessionManager
from tests.oauth_helpers import SESSION_SECRET, cookie_value, make_request


def _session_request(value: str, *, scheme: str = "https"):
    return make_request(scheme=scheme, cookie=f"session={value}")


def _flip(char: str) -> str:
    return "A" if char != "A" else "B"


def test_create_cookie_attributes(user) -> None:
    cookie = SessionManager(SESSION_SECRET).create(user, make_request(scheme="https"))

    assert cookie.startswith("session=")
    assert f"Path=/; HttpOnly; SameSite=Lax; Max-Age={SESSION_MAX_AGE_SECONDS}" in cookie
    assert cookie.endswith("; Secure")
    assert SESSION_MAX_AGE_SECONDS == 604800


def test_create_cookie_not_secure_over_http(user) -> None:
    cookie = SessionManager(SESSION_SECRET).create(user, make_request(scheme="http"))

    assert "Secure" not in cookie


def test_create_signs_issued_at(user) -> None:
    manager = SessionManager(SESSION_SECRET, clock=lambda: 1700000000.9)
    value = cookie_value(manager.create(user, make_request()))

    payload = signed_token.decode(value, SESSION_SECRET)

    assert payload == {
        "id": "google-sub-1",
        "email": "ada@example.com",
        "name": "Ada Lovelace",
        "iat": 1700000000,
    }


def test_read_roundtrip(user) -> None:
    manager = SessionManager(SESSION_SECRET)
    value = cookie_value(manager.create(user, make_request()))

    assert manager.read(_session_request(value)) == user


def test_read_defaults_name_to_email() -> None:
    manager = SessionManager(SESSION_SECRET)
    nameless = SessionUser(id="1", email="grace@example.com", name="")
    value = cookie_value(manager.create(nameless, make_request()))

    restored = manager.read(_session_request(value))

    assert restored == SessionUser(id="1", email="grace@example.com", name="grace@example.com")


def test_read_defaults_name_when_claim_missing() -> None:
    value = signed_token.encode({"id": "1", "email": "grace@example.com"}, SESSION_SECRET)

    restored = SessionManager(SESSION_SECRET).read(_session_request(value))

    assert restored is not None
    assert restored.name == "grace@example.com"


def test_read_without_cookie() -> None:
    assert SessionManager(SESSION_SECRET).read(make_request()) is None


def test_read_rejects_mutated_signature(user) -> None:
    manager = SessionManager(SESSION_SECRET)
    value = cookie_value(manager.create(user, make_request()))
    payload, signature = value.split(".")

    for index in (0, len(signature) // 2, len(signature) - 1):
        mutated = signature[:index] + _flip(signature[index]) + signature[index + 1 :]
        assert manager.read(_session_request(f"{payload}.{mutated}")) is None


def test_read_rejects_mutated_payload(user) -> None:
    manager = SessionManager(SESSION_SECRET)
    value = cookie_value(manager.create(user, make_request()))
    payload, signature = value.split(".")

    for index in (0, len(payload) // 2, len(payload) - 1):
        mutated = payload[:index] + _flip(payload[index]) + payload[index + 1 :]
        assert manager.read(_session_request(f"{mutated}.{signature}")) is None


def test_read_rejects_other_secret(user) -> None:
    value = cookie_value(SessionManager(SESSION_SECRET).create(user, make_request()))

    other = SessionManager("a-different-secret-value")

    assert other.read(_session_request(value)) is None


@pytest.mark.parametrize("suffix", ["", ".", ".extra", "..x"])
def test_read_rejects_bad_separators(user, suffix: str) -> None:
    manager = SessionManager(SESSION_SECRET)
    payload, signature = cookie_value(manager.create(user, make_request())).split(".")

    assert manager.read(_session_request(payload + suffix)) is None
    assert manager.read(_session_request(f"{payload}.{signature}{suffix}x.")) is None
    assert manager.read(_session_request(f".{signature}")) is None


@pytest.mark.parametrize(
    "claims",
    [
        {"email": "a@example.com"},
        {"id": "", "email": "a@example.com"},
        {"id": "1"},
        {"id": "1", "email": ""},
        {"id": 1, "email": "a@example.com"},
        {"id": "1", "email": ["a@example.com"]},
    ],
)
def test_read_rejects_missing_claims(claims: dict) -> None:
    value = signed_token.encode(claims, SESSION_SECRET)

    assert SessionManager(SESSION_SECRET).read(_session_request(value)) is None


def test_read_ignores_unrelated_cookies(user) -> None:
    manager = SessionManager(SESSION_SECRET)
    value = cookie_value(manager.create(user, make_request()))
    request = make_request(cookie=f"oauth_state=abc; session={value}; theme=dark")

    assert manager.read(request) == user


@pytest.mark.parametrize("secret", [None, "", "fifteen-chars!!"])
def test_create_with_weak_secret_raises(user, secret) -> None:
    with pytest.raises(ConfigurationError):
        SessionManager(secret).create(user, make_request())


@pytest.mark.parametrize("secret", [None, "short"])
def test_read_with_weak_secret_raises(user, secret) -> None:
    value = cookie_value(SessionManager(SESSION_SECRET).create(user, make_request()))

    with pytest.raises(ConfigurationError):
        SessionManager(secret).read(_session_request(value))


@pytest.mark.parametrize("scheme,secure", [("https", True), ("http", False)])
def test_clear_expires_cookie(scheme: str, secure: bool) -> None:
    cookie = SessionManager(None).clear(make_request(scheme=scheme))

    assert cookie.startswith("session=;")
    assert "Max-Age=0" in cookie
    assert cookie.endswith("; Secure") is secure
