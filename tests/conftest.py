"""Shared fixtures for all tests."""

import json
import stat
import sys
import textwrap
from collections.abc import Generator
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def mock_env_clear(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Clear all Abstract-related environment variables for testing.

    This ensures tests don't accidentally use real credentials from the environment.
    """
    env_vars_to_clear = [
        "ABSTRACT_TOKEN",
        "ABSTRACT_API_URL",
        "ABSTRACT_CLI_PATH",
        "ABSTRACT_TRANSPORT_MODE",
    ]
    for var in env_vars_to_clear:
        monkeypatch.delenv(var, raising=False)
    yield


@pytest.fixture
def mock_token() -> str:
    """Mock Abstract API token for testing."""
    return "test_token_123456789"


def write_script(path: Path, body: str) -> str:
    """Write an executable Python script and return its path."""
    path.write_text(f"#!{sys.executable}\n" + textwrap.dedent(body))
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return str(path)


@pytest.fixture
def fake_cli(tmp_path: Path) -> str:
    """A stand-in for the Abstract CLI.

    ``projects info --id X`` prints a project, ``projects list`` prints a list,
    ``fail`` exits 1 with ``boom`` on stderr, ``empty`` prints nothing, and
    ``env`` echoes the token it received. Every invocation is appended to
    ``calls.jsonl`` next to the script.
    """
    calls = tmp_path / "calls.jsonl"
    return write_script(
        tmp_path / "abstract-cli",
        f"""
        import json, os, sys

        args = sys.argv[1:]
        with open({str(calls)!r}, "a") as fh:
            fh.write(json.dumps(args) + "\\n")

        if args[:2] == ["projects", "info"]:
            print(json.dumps({{"id": args[args.index("--id") + 1], "name": "From CLI"}}))
        elif args[:2] == ["projects", "list"]:
            print(json.dumps([{{"id": "p1", "sectionId": "s1"}}, {{"id": "p2"}}]))
        elif args[:1] == ["fail"]:
            sys.stderr.write("boom")
            sys.exit(1)
        elif args[:1] == ["empty"]:
            pass
        elif args[:1] == ["env"]:
            print(json.dumps({{"token": os.environ.get("ABSTRACT_TOKEN")}}))
        else:
            sys.stderr.write("unknown command")
            sys.exit(2)
        """,
    )


@pytest.fixture
def cli_calls(tmp_path: Path):
    """Return a function listing the argument vectors the fake CLI received."""

    def read() -> list[list[str]]:
        calls = tmp_path / "calls.jsonl"
        if not calls.exists():
            return []
        return [json.loads(line) for line in calls.read_text().splitlines()]

    return read


@pytest.fixture
def make_script(tmp_path: Path):
    """Return a factory writing executable Python scripts into tmp_path."""

    def make(name: str, body: str) -> str:
        return write_script(tmp_path / name, body)

    return make
