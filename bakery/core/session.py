"""
Bakery Pre-Order Service — Per-session cart and form store (Redis-backed)

Each browser session owns:
  session:{id}:cart        JSON list of cart lines
  session:{id}:form        JSON form draft
  session:{id}:submitting  "is submitting" flag (SET NX EX)

All keys share SESSION_TTL_SECONDS and are refreshed on every write, so an
abandoned session simply expires. Nothing here outlives the session.
"""
import json
import re
import uuid
from contextlib import asynccontextmanager

import redis.asyncio as aioredis
from fastapi import Request, Response

from bakery.core.config import Settings, get_settings
from bakery.core.redis_client import get_redis
from bakery.models.order import CartLine, OrderForm
from bakery.services.cart import Cart
from bakery.services.catalog import Catalog, get_catalog

SESSION_PREFIX = "session:"
SESSION_ID_PATTERN = re.compile(r"[A-Za-z0-9_-]{8,64}")


class SubmissionInProgressError(Exception):
    """Another submission for this session has not finished yet."""


class SessionStore:
    def __init__(self, redis: aioredis.Redis, session_id: str, catalog: Catalog, settings: Settings):
        self.redis = redis
        self.session_id = session_id
        self.catalog = catalog
        self.settings = settings

    def _key(self, name: str) -> str:
        return f"{SESSION_PREFIX}{self.session_id}:{name}"

    # ── Cart ──────────────────────────────────────────────────

    async def load_cart(self) -> Cart:
        raw = await self.redis.get(self._key("cart"))
        lines = [CartLine.model_validate(entry) for entry in json.loads(raw)] if raw else []
        return Cart(self.catalog, lines)

    async def save_cart(self, cart: Cart):
        await self.redis.setex(
            self._key("cart"),
            self.settings.SESSION_TTL_SECONDS,
            json.dumps([line.model_dump(mode="json") for line in cart.lines]),
        )

    # ── Form draft ────────────────────────────────────────────

    async def load_form(self) -> OrderForm:
        raw = await self.redis.get(self._key("form"))
        return OrderForm.model_validate_json(raw) if raw else OrderForm()

    async def save_form(self, form: OrderForm):
        await self.redis.setex(self._key("form"), self.settings.SESSION_TTL_SECONDS, form.model_dump_json())

    async def reset_form(self):
        await self.redis.delete(self._key("form"))

    # ── Submission guard ──────────────────────────────────────

    @asynccontextmanager
    async def submission_guard(self):
        """Hold the session's "is submitting" flag for the duration of the block."""
        key = self._key("submitting")
        acquired = await self.redis.set(key, "1", nx=True, ex=self.settings.SUBMISSION_LOCK_SECONDS)
        if not acquired:
            raise SubmissionInProgressError(self.session_id)
        try:
            yield
        finally:
            await self.redis.delete(key)


def resolve_session_id(request: Request, settings: Settings) -> str:
    candidate = request.headers.get(settings.SESSION_HEADER_NAME) or request.cookies.get(settings.SESSION_COOKIE_NAME)
    if candidate and SESSION_ID_PATTERN.fullmatch(candidate):
        return candidate
    return uuid.uuid4().hex


async def get_session(request: Request, response: Response) -> SessionStore:
    """
    FastAPI dependency. Reuses the caller's session id (header first, then
    cookie) or starts a new session, and echoes the id back in both.
    """
    settings = get_settings()
    session_id = resolve_session_id(request, settings)
    response.set_cookie(settings.SESSION_COOKIE_NAME, session_id, httponly=True, samesite="lax")
    response.headers[settings.SESSION_HEADER_NAME] = session_id
    return SessionStore(get_redis(), session_id, get_catalog(), settings)
