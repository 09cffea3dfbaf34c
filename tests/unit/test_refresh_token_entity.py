from datetime import datetime, timedelta, timezone
from uuid import uuid4

from identity.domain.entities.application import API_KEY_PREFIX, Application
from identity.domain.entities.refresh_token import RefreshToken, hash_token

NOW = datetime(2030, 1, 1, tzinfo=timezone.utc)


def test_record_stores_only_the_digest():
    record = RefreshToken.for_raw_token(
        token_id=uuid4(),
        identity_id=uuid4(),
        raw_token="raw.refresh.token",
        expires_at=NOW + timedelta(days=7),
        now=NOW,
    )
    assert record.token_hash == hash_token("raw.refresh.token")
    assert len(record.token_hash) == 64
    assert "raw.refresh.token" not in vars(record).values()
    assert record.matches("raw.refresh.token")
    assert not record.matches("other")


def test_usability():
    record = RefreshToken.for_raw_token(uuid4(), uuid4(), "t", NOW + timedelta(days=1), NOW)
    assert record.is_usable(NOW + timedelta(days=1))
    assert not record.is_usable(NOW + timedelta(days=1, seconds=1))

    record.revoke(NOW)
    assert record.revoked and record.revoked_at == NOW
    assert not record.is_usable(NOW)


def test_application_api_key_format():
    application = Application(name="Billing", url="https://billing.acme.com")
    assert application.api_key.startswith(API_KEY_PREFIX)
    assert len(application.api_key) == len(API_KEY_PREFIX) + 32
    assert application.api_key[len(API_KEY_PREFIX):].isalnum()

    old = application.api_key
    application.regenerate_api_key(None, NOW)
    assert application.api_key != old
