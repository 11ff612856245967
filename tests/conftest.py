import pytest

from auth.models import SessionUser


@pytest.fixture
def user() -> SessionUser:
    return SessionUser(id="google-sub-1", email="ada@example.com", name="Ada Lovelace")
