from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt
import pytest

from identity.domain.errors import InvalidToken, InvalidTokenType, TokenExpired
from identity.domain.services.token_policy import TokenPolicy
from identity.domain.value_objects.role import Role
from identity.infrastructure.adapters.jwt_service import JWTService

SECRET = "unit-test-secret-key-0123456789abcdef"
NOW = datetime(2030, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def codec() -> JWTService:
    return JWTService(secret_key=SECRET, policy=TokenPolicy(access_token_lifetime=timedelta(minutes=15)))


def test_access_token_carries_minimal_claims(codec):
    identity_id, tenant_id = uuid4(), uuid4()
    token, exp = codec.generate_access_token(identity_id, Role.TENANT_ADMIN, tenant_id, NOW)

    payload = jwt.decode(token, SECRET, algorithms=["HS256"], options={"verify_exp": False, "verify_iat": False})
    assert set(payload) == {"sub", "role", "tenant_id", "type", "iat", "exp"}
    assert payload["type"] == "access"
    assert exp == int(NOW.timestamp()) + 15 * 60

    claims = codec.verify_access_token(token, NOW)
    assert claims.subject_id == identity_id
    assert claims.role is Role.TENANT_ADMIN
    assert claims.tenant_id == tenant_id


def test_super_admin_token_has_null_tenant(codec):
    token, _ = codec.generate_access_token(uuid4(), Role.SUPER_ADMIN, None, NOW)
    assert codec.verify_access_token(token, NOW).tenant_id is None


def test_access_token_valid_through_exp_instant(codec):
    token, _ = codec.generate_access_token(uuid4(), Role.TENANT_OPERATOR, uuid4(), NOW)

    codec.verify_access_token(token, NOW + timedelta(minutes=15))
    with pytest.raises(TokenExpired):
        codec.verify_access_token(token, NOW + timedelta(minutes=15, seconds=1))


def test_fraction_of_a_second_past_exp_is_expired(codec):
    issued = NOW + timedelta(milliseconds=700)
    token, exp = codec.generate_access_token(uuid4(), Role.TENANT_OPERATOR, uuid4(), issued)
    assert exp == int(NOW.timestamp()) + 15 * 60

    with pytest.raises(TokenExpired):
        codec.verify_access_token(token, NOW + timedelta(minutes=15, milliseconds=200))


def test_token_type_is_enforced(codec):
    refresh, _ = codec.generate_refresh_token(uuid4(), uuid4(), NOW)
    access, _ = codec.generate_access_token(uuid4(), Role.TENANT_OPERATOR, uuid4(), NOW)

    with pytest.raises(InvalidTokenType):
        codec.verify_access_token(refresh, NOW)
    with pytest.raises(InvalidTokenType):
        codec.verify_refresh_token(access, NOW)


def test_invalid_token_type_is_an_invalid_token(codec):
    refresh, _ = codec.generate_refresh_token(uuid4(), uuid4(), NOW)
    with pytest.raises(InvalidToken):
        codec.verify_access_token(refresh, NOW)


def test_bad_signature_and_garbage(codec):
    token, _ = codec.generate_access_token(uuid4(), Role.TENANT_OPERATOR, uuid4(), NOW)
    other = JWTService(secret_key="another-secret-key-0123456789abcdef", policy=TokenPolicy())

    with pytest.raises(InvalidToken) as exc:
        other.verify_access_token(token, NOW)
    assert exc.value.code == "invalid_token"

    with pytest.raises(InvalidToken):
        codec.verify_access_token("not-a-jwt", NOW)


def test_missing_claims_are_rejected(codec):
    exp = int(NOW.timestamp()) + 60
    token = jwt.encode({"sub": str(uuid4()), "type": "access", "exp": exp}, SECRET, algorithm="HS256")
    with pytest.raises(InvalidToken) as exc:
        codec.verify_access_token(token, NOW)
    assert "Missing required claims" in exc.value.details["reason"]


def test_refresh_token_carries_jti(codec):
    identity_id, token_id = uuid4(), uuid4()
    token, exp = codec.generate_refresh_token(identity_id, token_id, NOW)

    claims = codec.verify_refresh_token(token, NOW)
    assert claims.token_id == token_id
    assert claims.subject_id == identity_id
    assert exp == int(NOW.timestamp()) + 7 * 24 * 3600


def test_policy_rejects_non_positive_lifetimes():
    with pytest.raises(ValueError):
        TokenPolicy(access_token_lifetime=timedelta(0))
