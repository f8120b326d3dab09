"""RefreshTokenService: one token per user, lazy expiry, revocation."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from complaints.models.refresh_token import RefreshToken
from complaints.repositories.refresh_token import RefreshTokenRepository
from complaints.services._shared.errors import NotFoundError, TokenRefreshError
from complaints.services.auth.refresh_tokens import EXPIRED_REASON, RefreshTokenService

TTL = timedelta(days=7)


@pytest.fixture()
def service(app) -> RefreshTokenService:
    return RefreshTokenService(refresh_ttl=TTL)


def _token_count(session, user_id: int) -> int:
    return session.scalar(
        select(func.count()).select_from(RefreshToken).where(RefreshToken.user_id == user_id)
    )


def test_create_issues_uuid_with_configured_ttl(service, alice, freeze_time):
    with freeze_time("2024-01-01T12:00:00"):
        view = service.create_refresh_token(alice.id)

    assert uuid.UUID(view.token).version == 4
    assert view.user_id == alice.id
    assert view.expiry_date == datetime(2024, 1, 8, 12, 0, tzinfo=UTC)


def test_second_token_replaces_the_first(service, session, alice):
    first = service.create_refresh_token(alice.id)
    second = service.create_refresh_token(alice.id)

    assert first.token != second.token
    assert service.find_by_token(first.token) is None
    assert service.find_by_token(second.token) == second
    assert _token_count(session, alice.id) == 1


def _racing_delete(monkeypatch, races: int) -> list[int]:
    """Make another login insert a token right after ours deleted the old one."""
    original = RefreshTokenRepository.delete_by_user_id
    calls: list[int] = []

    def delete_then_race(self, user_id):
        removed = original(self, user_id)
        calls.append(user_id)
        if len(calls) <= races:
            self.session.add(
                RefreshToken(
                    user_id=user_id,
                    token=f"rival-{len(calls)}",
                    expiry_date=datetime.now(UTC) + TTL,
                )
            )
            self.session.flush()
        return removed

    monkeypatch.setattr(RefreshTokenRepository, "delete_by_user_id", delete_then_race)
    return calls


def test_unique_collision_is_retried_once(service, session, alice, monkeypatch, caplog):
    calls = _racing_delete(monkeypatch, races=1)

    with caplog.at_level(logging.WARNING):
        view = service.create_refresh_token(alice.id)

    assert len(calls) == 2
    assert "retrying" in caplog.text
    assert _token_count(session, alice.id) == 1
    assert service.find_by_token(view.token) == view
    assert service.find_by_token("rival-1") is None


def test_second_collision_propagates(service, session, alice, monkeypatch):
    calls = _racing_delete(monkeypatch, races=2)

    with pytest.raises(IntegrityError):
        service.create_refresh_token(alice.id)

    assert len(calls) == 2
    assert _token_count(session, alice.id) == 0


def test_create_for_unknown_user_raises(service):
    with pytest.raises(NotFoundError):
        service.create_refresh_token(9999)


def test_find_by_token_ignores_blank_and_unknown(service):
    assert service.find_by_token("") is None
    assert service.find_by_token(str(uuid.uuid4())) is None


def test_verify_expiration_keeps_live_token(service, alice):
    view = service.create_refresh_token(alice.id)

    assert service.verify_expiration(view) is view


def test_verify_expiration_deletes_expired_token(service, session, alice, freeze_time):
    with freeze_time("2024-01-01"):
        view = service.create_refresh_token(alice.id)

    with freeze_time("2024-01-09"):
        with pytest.raises(TokenRefreshError) as excinfo:
            service.verify_expiration(view)

    assert excinfo.value.reason == EXPIRED_REASON
    assert str(excinfo.value) == f"Refresh Token Failed [{view.token}]: {EXPIRED_REASON}"
    assert service.find_by_token(view.token) is None
    assert _token_count(session, alice.id) == 0


def test_delete_by_user_id_counts_removed_rows(service, alice):
    service.create_refresh_token(alice.id)

    assert service.delete_by_user_id(alice.id) == 1
    assert service.delete_by_user_id(alice.id) == 0


def test_delete_by_user_id_for_unknown_user_raises(service):
    with pytest.raises(NotFoundError):
        service.delete_by_user_id(424242)
