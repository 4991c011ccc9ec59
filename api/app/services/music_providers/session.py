"""Spotify token refresh and user-scoped client construction.

Spotify issues short-lived access tokens (``expires_in`` seconds, usually an
hour). The refresh-token grant returns a new access token and only sometimes a
new refresh token; when it does not, the stored one stays valid. A refresh
token revoked by the user is answered with ``400 invalid_grant`` and is
dropped so later calls stop retrying it.
"""
from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping

import httpx
from sqlalchemy.orm import Session, object_session

from app.config.settings import settings
from app.crud.user import user_crud
from app.models.user import User
from app.services.music_providers.base import MusicProviderClient, ProviderAuthError
from app.services.music_providers.factory import get_music_provider
from app.utils.oauth_tokens import basic_auth_header, coerce_expires_at, expires_at_from_payload

logger = logging.getLogger(__name__)

TOKEN_REFRESH_TIMEOUT_SECONDS = 15
TOKEN_EXPIRY_SKEW_SECONDS = 60


@dataclass
class SpotifyTokenGrant:
    access_token: str
    refresh_token: str
    expires_at: datetime | None = None
    scope: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any], current_refresh_token: str) -> SpotifyTokenGrant | None:
        access_token = payload.get("access_token")
        if not isinstance(access_token, str) or not access_token.strip():
            return None
        token_type = payload.get("token_type")
        if isinstance(token_type, str) and token_type.lower() != "bearer":
            logger.warning("Spotify returned unexpected token type %s", token_type)
            return None
        rotated = payload.get("refresh_token")
        scope = payload.get("scope")
        return cls(
            access_token=access_token.strip(),
            refresh_token=rotated.strip() if isinstance(rotated, str) and rotated.strip() else current_refresh_token,
            expires_at=expires_at_from_payload(payload),
            scope=scope if isinstance(scope, str) else None,
        )


def _is_expired(token_expires_at: datetime | None) -> bool:
    expires_at = coerce_expires_at(token_expires_at)
    if not expires_at:
        return False
    return expires_at <= datetime.now(timezone.utc) + timedelta(seconds=TOKEN_EXPIRY_SKEW_SECONDS)


def _token_error_code(response: httpx.Response) -> str | None:
    try:
        payload = response.json() if response.content else None
    except ValueError:
        return None
    if isinstance(payload, dict) and isinstance(payload.get("error"), str):
        return payload["error"]
    return None


def _save_tokens(user: User, db: Session | None, updates: dict[str, Any]) -> None:
    db_session = db if db is not None else object_session(user)
    if db_session:
        user_crud.update(db_session, user, updates)
        return
    for key, value in updates.items():
        setattr(user, key, value)


async def _request_grant(refresh_token: str) -> httpx.Response | None:
    try:
        async with httpx.AsyncClient(timeout=TOKEN_REFRESH_TIMEOUT_SECONDS) as client:
            return await client.post(
                settings.SPOTIFY_TOKEN_URL,
                data={"grant_type": "refresh_token", "refresh_token": refresh_token},
                headers={
                    "Accept": "application/json",
                    "Authorization": basic_auth_header(settings.SPOTIFY_CLIENT_ID, settings.SPOTIFY_CLIENT_SECRET),
                },
            )
    except httpx.HTTPError:
        logger.exception("Spotify token refresh request failed")
        return None


async def refresh_spotify_access_token(user: User, db: Session | None = None) -> str | None:
    """Exchange the user's refresh token for a new access token and store it."""
    refresh_token = (user.refresh_token or "").strip()
    if not refresh_token:
        return None
    if not settings.SPOTIFY_CLIENT_ID or not settings.SPOTIFY_CLIENT_SECRET:
        logger.warning("Skipping Spotify token refresh because client credentials are missing")
        return None

    response = await _request_grant(refresh_token)
    if response is None:
        return None

    if not response.is_success:
        error_code = _token_error_code(response)
        logger.warning(
            "Spotify token refresh failed for user %s (status=%s, error=%s)",
            user.id,
            response.status_code,
            error_code or "-",
        )
        if error_code == "invalid_grant":
            _save_tokens(user, db, {"refresh_token": None})
        return None

    try:
        payload = response.json() if response.content else {}
    except ValueError:
        logger.warning("Spotify token refresh returned invalid JSON")
        return None
    grant = SpotifyTokenGrant.from_payload(payload, refresh_token) if isinstance(payload, dict) else None
    if grant is None:
        logger.warning("Spotify token refresh response did not include a bearer access token")
        return None

    _save_tokens(
        user,
        db,
        {
            "access_token": grant.access_token,
            "refresh_token": grant.refresh_token,
            "token_expires_at": grant.expires_at,
        },
    )
    logger.info(
        "Refreshed Spotify access token for user %s (refresh token %s)",
        user.id,
        "rotated" if grant.refresh_token != refresh_token else "kept",
    )
    return grant.access_token


class SpotifyClientWithRefresh:
    """Proxy that refreshes an expired token before a call and once after a 401/403."""

    def __init__(self, provider: str, user: User, db: Session | None = None) -> None:
        self._provider = provider.lower()
        self._user = user
        self._db = db if db is not None else object_session(user)
        self._client: MusicProviderClient = get_music_provider(self._provider, user.access_token or "")

    async def _refresh(self) -> bool:
        next_access_token = await refresh_spotify_access_token(self._user, self._db)
        if not next_access_token:
            return False
        self._client = get_music_provider(self._provider, next_access_token)
        return True

    def __getattr__(self, name: str):
        target = getattr(self._client, name)
        if not inspect.iscoroutinefunction(target):
            return target

        async def _wrapped(*args, **kwargs):
            if _is_expired(self._user.token_expires_at):
                await self._refresh()
            try:
                return await getattr(self._client, name)(*args, **kwargs)
            except ProviderAuthError:
                if not await self._refresh():
                    raise
                return await getattr(self._client, name)(*args, **kwargs)

        return _wrapped


def get_provider_client_for_user(provider: str, user: User, db: Session | None = None) -> SpotifyClientWithRefresh:
    """Build a refreshing client for a host with a stored access token."""
    if not user.access_token:
        raise ValueError("Missing provider access token")
    return SpotifyClientWithRefresh(provider, user, db=db)
