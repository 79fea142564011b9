from datetime import timedelta
from uuid import uuid4

from jose import jwt

from src.app.config import settings
from src.core.security import create_access_token, decode_token, get_token_subject


def test_access_token_subject():
    user_id = uuid4()
    token = create_access_token({"sub": str(user_id)})

    assert decode_token(token)["type"] == "access"
    assert get_token_subject(token) == user_id


def test_expired_token_rejected():
    token = create_access_token({"sub": str(uuid4())}, expires_delta=timedelta(minutes=-5))

    assert decode_token(token) is None
    assert get_token_subject(token) is None


def test_refresh_token_rejected():
    token = jwt.encode(
        {"sub": str(uuid4()), "type": "refresh"}, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM
    )

    assert get_token_subject(token) is None


def test_non_uuid_subject_rejected():
    assert get_token_subject(create_access_token({"sub": "42"})) is None


def test_garbage_token():
    assert get_token_subject("not-a-jwt") is None
