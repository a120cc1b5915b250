import asyncio
import sys
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Ensure project root is on sys.path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from presign_gateway.core.config import Settings
from presign_gateway.main import create_app
from presign_gateway.services.signer import (
    SigningOutcome,
    SigningSuccess,
    SigningTimeout,
    SigningToolError,
)

API_TOKEN = "test-token"


class FakeSigner:
    """Deterministic stand-in for ``mc share download``."""

    def __init__(self, outcome: SigningOutcome | None = None, delay: float = 0.0) -> None:
        self.outcome = outcome or SigningSuccess(output="")
        self.delay = delay
        self.calls: list[tuple[str, str]] = []

    def succeed(self, output: str) -> None:
        self.outcome = SigningSuccess(output=output)

    def fail(self, output: str, exit_status: int = 1) -> None:
        message = output.strip() or f"exit status {exit_status}"
        self.outcome = SigningToolError(output=output, exit_status=exit_status, message=message)

    def time_out(self) -> None:
        self.outcome = SigningTimeout(timeout_seconds=15.0)

    async def sign(self, target: str, expire: str) -> SigningOutcome:
        self.calls.append((target, expire))
        if self.delay:
            await asyncio.sleep(self.delay)
        return self.outcome


def make_settings(**overrides) -> Settings:
    values = {
        "api_token": API_TOKEN,
        "minio_alias": "myminio",
        "public_base_url": "",
        "minio_endpoint": "",
        "minio_access_key": "",
        "minio_secret_key": "",
        "_env_file": None,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings_overrides() -> dict:
    return {}


@pytest.fixture
def settings(settings_overrides) -> Settings:
    return make_settings(**settings_overrides)


@pytest.fixture
def fake_signer() -> FakeSigner:
    return FakeSigner()


@pytest.fixture
def app_instance(settings, fake_signer):
    return create_app(settings, signer=fake_signer)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {API_TOKEN}"}


@pytest_asyncio.fixture
async def client(app_instance):
    transport = ASGITransport(app=app_instance)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
