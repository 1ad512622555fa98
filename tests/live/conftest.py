"""Fixtures for live API tests.

These tests require real credentials set via environment variables:
- ABSTRACT_TOKEN: Abstract API token
- ABSTRACT_API_URL: Abstract API base URL
- ABSTRACT_ORGANIZATION_ID: organization to create throwaway projects in
- ABSTRACT_CLI_PATH: optional, enables the CLI transport checks

Values are read once at import time because the root conftest clears the
ABSTRACT_* variables before every test.
"""

import os
import time
import uuid

import pytest

LIVE_TOKEN = os.getenv("ABSTRACT_TOKEN")
LIVE_API_URL = os.getenv("ABSTRACT_API_URL")
LIVE_ORGANIZATION_ID = os.getenv("ABSTRACT_ORGANIZATION_ID")
LIVE_CLI_PATH = os.getenv("ABSTRACT_CLI_PATH")


@pytest.fixture
def live_settings() -> dict[str, str]:
    """Connection settings for a real Abstract account."""
    if not (LIVE_TOKEN and LIVE_API_URL and LIVE_ORGANIZATION_ID):
        pytest.skip(
            "Requires ABSTRACT_TOKEN, ABSTRACT_API_URL and ABSTRACT_ORGANIZATION_ID "
            "environment variables"
        )
    return {
        "auth_token": LIVE_TOKEN,
        "api_base_url": LIVE_API_URL,
        "organization_id": LIVE_ORGANIZATION_ID,
    }


@pytest.fixture
def live_cli_path() -> str:
    if not LIVE_CLI_PATH:
        pytest.skip("ABSTRACT_CLI_PATH environment variable not set")
    return LIVE_CLI_PATH


@pytest.fixture
def unique_test_name() -> str:
    """Generate a unique test resource name with timestamp.

    Format: abstract-sdk-test-{timestamp}-{uuid}
    """
    timestamp = int(time.time())
    unique_id = uuid.uuid4().hex[:8]
    return f"abstract-sdk-test-{timestamp}-{unique_id}"
