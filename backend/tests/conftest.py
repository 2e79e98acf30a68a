"""
Shared fixtures. Environment is set before any storefront import so the cached
Settings pick it up; every test talks to an in-memory Supabase fake.

Run from the repository root:

    pytest
"""

import os
import sys
import time
from datetime import datetime, timedelta, timezone

os.environ.setdefault("SUPABASE_URL", "https://fake.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("ADMIN_API_SECRET", "admin-secret")

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from fakes import FakeSupabaseClient
from storefront.main import app
from storefront.services.account_service import AccountService, get_account_service
from storefront.services.supabase_service import SupabaseService, get_supabase_service

T0 = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(T0)


@pytest.fixture
def fake() -> FakeSupabaseClient:
    return FakeSupabaseClient()


@pytest.fixture
def supabase(fake: FakeSupabaseClient) -> SupabaseService:
    return SupabaseService(client=fake, auth_client=fake)


@pytest.fixture
def accounts(supabase: SupabaseService, clock: FakeClock) -> AccountService:
    return AccountService(supabase, clock=clock)


@pytest.fixture
def client(supabase: SupabaseService, accounts: AccountService):
    app.dependency_overrides[get_supabase_service] = lambda: supabase
    app.dependency_overrides[get_account_service] = lambda: accounts
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_token(sub: str = "admin-1", email: str = "admin@example.com", ttl: int = 3600) -> str:
    claims = {
        "sub": sub,
        "email": email,
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(time.time()) + ttl,
    }
    return jwt.encode(claims, os.environ["SUPABASE_JWT_SECRET"], algorithm="HS256")


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token()}"}
