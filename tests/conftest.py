from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterator

import pytest

from src.cmstools.security import jwt as jwt_module
from src.cmstools.security.jwt import TokenService


os.environ.setdefault("CMSTOOLS_JWT_SECRET", "test-signing-key")

FIXED_NOW = 1_700_000_000.0


@dataclass
class FakeClock:
    """Wall clock replacement that tests can move explicitly."""

    now: float = FIXED_NOW

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def token_service(clock: FakeClock) -> TokenService:
    service = TokenService(clock=clock)
    service.configure(b"secret")
    return service


@pytest.fixture
def default_service_key() -> Iterator[None]:
    """Arm the process-wide service for a test and disarm it afterwards."""

    jwt_module.configure(b"secret")
    yield
    jwt_module.configure(b"")
