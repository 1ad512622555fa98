"""Tests for the clients with namespaced resource sub-clients."""

import asyncio
import json

import httpx
import pytest
import respx
from pydantic import ValidationError

from abstract_sdk import (
    AbstractClient,
    AsyncAbstractClient,
    ConfigurationError,
    HTTPStatusError,
    NewProject,
    ProcessExitError,
    RequestOptions,
    TransportMode,
    compute_signature,
)

API_BASE = "http://api.test"


@pytest.fixture
def api_mock():
    """Mock API for testing."""
    with respx.mock(assert_all_called=False, base_url=API_BASE) as mock:
        mock.get("/projects/123", name="project_info").mock(
            return_value=httpx.Response(200, json={"data": {"id": "123", "name": "Web"}})
        )
        mock.get("/projects", name="project_list").mock(
            return_value=httpx.Response(
                200,
                json={
                    "data": {
                        "projects": [
                            {"id": "1", "sectionId": "s1"},
                            {"id": "2", "sectionId": "s2"},
                        ]
                    },
                    "meta": {"nextOffset": None},
                },
            )
        )
        mock.post("/projects", name="project_create").mock(
            return_value=httpx.Response(201, json={"data": {"id": "new"}})
        )
        mock.put("/projects/123", name="project_update").mock(
            return_value=httpx.Response(200, json={"data": {"id": "123", "name": "Renamed"}})
        )
        mock.delete("/projects/123", name="project_delete").mock(
            return_value=httpx.Response(204)
        )
        mock.put("/projects/123/archive", name="project_archive").mock(
            return_value=httpx.Response(200, json={"data": {"id": "123", "archivedAt": "now"}})
        )
        mock.put("/projects/123/unarchive", name="project_unarchive").mock(
            return_value=httpx.Response(200, json={"data": {"id": "123", "archivedAt": None}})
        )
        mock.get("/projects/missing", name="project_missing").mock(
            return_value=httpx.Response(404, json={"error": {"message": "Project not found"}})
        )
        mock.get("/share_links/sh4re", name="share_info").mock(
            return_value=httpx.Response(200, json={"id": "sh4re", "kind": "project"})
        )
        mock.post("/share_links", name="share_create").mock(
            return_value=httpx.Response(200, json={"id": "sh4re"})
        )
        mock.get("/organizations/org/webhooks", name="webhook_list").mock(
            return_value=httpx.Response(200, json=[{"id": "wh1"}])
        )
        mock.post("/organizations/org/webhooks/subscribe", name="webhook_subscribe").mock(
            return_value=httpx.Response(200, json={"id": "wh1", "active": True})
        )
        mock.delete(
            "/organizations/org/webhooks/wh1/unsubscribe", name="webhook_delete"
        ).mock(return_value=httpx.Response(204))
        mock.post(
            "/organizations/org/webhooks/wh1/deliveries/d1/redeliver", name="webhook_redeliver"
        ).mock(return_value=httpx.Response(204))
        mock.get("/organizations/org/webhooks/events", name="webhook_events").mock(
            return_value=httpx.Response(200, json=[{"name": "project.created"}])
        )
        mock.get("/organizations/org/webhooks/wh1", name="webhook_info").mock(
            return_value=httpx.Response(200, json={"id": "wh1", "url": "https://example.com/hook"})
        )
        mock.post("/organizations/org/webhooks/wh1/ping", name="webhook_ping").mock(
            return_value=httpx.Response(204)
        )
        mock.get("/organizations/org/webhooks/wh1/deliveries", name="webhook_deliveries").mock(
            return_value=httpx.Response(200, json={"data": [{"id": "d1"}], "meta": {"total": 1}})
        )

        yield mock


class TestSyncClient:
    """Test synchronous AbstractClient with namespaced API."""

    def test_projects_info(self, api_mock, mock_token):
        with AbstractClient(api_base_url=API_BASE, auth_token=mock_token) as client:
            project = client.projects.info("123")

        assert project == {"id": "123", "name": "Web"}
        request = api_mock["project_info"].calls.last.request
        assert request.headers["authorization"] == f"Bearer {mock_token}"
        assert request.headers["abstract-api-version"] == "22"

    def test_projects_list_with_organization(self, api_mock):
        with AbstractClient(api_base_url=API_BASE) as client:
            projects = client.projects.list("org", filter="active")

        assert [p["id"] for p in projects] == ["1", "2"]
        url = api_mock["project_list"].calls.last.request.url
        assert url.params["organizationId"] == "org"
        assert url.params["filter"] == "active"

    def test_projects_list_filters_by_section(self, api_mock):
        with AbstractClient(api_base_url=API_BASE) as client:
            projects = client.projects.list("org", section_id="s2")

        assert projects == [{"id": "2", "sectionId": "s2"}]

    def test_projects_create_sends_about(self, api_mock):
        with AbstractClient(api_base_url=API_BASE) as client:
            created = client.projects.create(
                "org", NewProject(name="New Project", description="Design system")
            )

        assert created == {"id": "new"}
        body = json.loads(api_mock["project_create"].calls.last.request.content)
        assert body["about"] == "Design system"
        assert body["organizationId"] == "org"
        assert body["name"] == "New Project"

    def test_projects_update_accepts_mapping(self, api_mock):
        with AbstractClient(api_base_url=API_BASE) as client:
            updated = client.projects.update("123", {"name": "Renamed"})

        assert updated["name"] == "Renamed"

    def test_projects_delete(self, api_mock):
        with AbstractClient(api_base_url=API_BASE) as client:
            assert client.projects.delete("123") is None

        assert api_mock["project_delete"].called

    def test_projects_archive_and_unarchive(self, api_mock):
        with AbstractClient(api_base_url=API_BASE) as client:
            assert client.projects.archive("123")["archivedAt"] == "now"
            assert client.projects.unarchive("123")["archivedAt"] is None

    def test_http_error_is_typed(self, api_mock):
        with AbstractClient(api_base_url=API_BASE) as client:
            with pytest.raises(HTTPStatusError) as exc_info:
                client.projects.info("missing")

        assert exc_info.value.status_code == 404
        assert "Project not found" in str(exc_info.value)
        assert exc_info.value.transient is False

    def test_shares_info_accepts_url(self, api_mock):
        with AbstractClient(api_base_url=API_BASE) as client:
            share = client.shares.info("https://share.goabstract.com/sh4re")

        assert share["id"] == "sh4re"
        request = api_mock["share_info"].calls.last.request
        assert request.headers["abstract-api-version"] == "13"

    def test_shares_create_sets_commit_sha(self, api_mock):
        with AbstractClient(api_base_url=API_BASE) as client:
            client.shares.create("org", {"kind": "commit", "projectId": "p", "sha": "abc"})

        body = json.loads(api_mock["share_create"].calls.last.request.content)
        assert body["commitSha"] == "abc"
        assert body["organizationId"] == "org"

    def test_webhooks_create_wraps_subscription(self, api_mock):
        with AbstractClient(api_base_url=API_BASE) as client:
            webhook = client.webhooks.create(
                "org", {"url": "https://example.com/hook", "events": ["project.created"]}
            )

        assert webhook["id"] == "wh1"
        body = json.loads(api_mock["webhook_subscribe"].calls.last.request.content)
        assert body["subscription"]["url"] == "https://example.com/hook"
        assert body["subscription"]["events"] == ["project.created"]

    def test_webhooks_delete_and_redeliver(self, api_mock):
        with AbstractClient(api_base_url=API_BASE) as client:
            client.webhooks.delete("org", "wh1")
            client.webhooks.redeliver("org", "wh1", "d1")

        assert api_mock["webhook_delete"].called
        assert api_mock["webhook_redeliver"].called

    def test_webhooks_read_operations(self, api_mock):
        with AbstractClient(api_base_url=API_BASE) as client:
            assert client.webhooks.info("org", "wh1")["url"] == "https://example.com/hook"
            assert client.webhooks.events("org") == [{"name": "project.created"}]
            assert client.webhooks.deliveries("org", "wh1") == [{"id": "d1"}]
            assert client.webhooks.ping("org", "wh1") is None

        assert api_mock["webhook_ping"].called

    def test_webhooks_update_sends_id_in_subscription(self, api_mock):
        with AbstractClient(api_base_url=API_BASE) as client:
            client.webhooks.update(
                "org", {"id": "wh1", "url": "https://example.com/hook", "active": False}
            )

        body = json.loads(api_mock["webhook_subscribe"].calls.last.request.content)
        assert body["subscription"]["id"] == "wh1"
        assert body["subscription"]["active"] is False

    def test_webhooks_update_sends_only_given_fields(self, api_mock):
        with AbstractClient(api_base_url=API_BASE) as client:
            client.webhooks.update("org", {"id": "wh1", "url": "https://example.com/hook"})

        body = json.loads(api_mock["webhook_subscribe"].calls.last.request.content)
        assert body == {"subscription": {"id": "wh1", "url": "https://example.com/hook"}}

    def test_projects_update_sends_only_given_fields(self, api_mock):
        with AbstractClient(api_base_url=API_BASE) as client:
            client.projects.update("123", NewProject(description="Tokens"))

        body = json.loads(api_mock["project_update"].calls.last.request.content)
        assert body == {"description": "Tokens", "about": "Tokens"}

    @pytest.mark.parametrize(
        "call",
        [
            lambda c: c.webhooks.update("org", {"id": "wh1", "active": False}),
            lambda c: c.webhooks.create("org", {"events": "not-a-list"}),
            lambda c: c.shares.create("org", {"kind": "galaxy"}),
            lambda c: c.projects.create("org", {"visibility": "everyone"}),
        ],
        ids=["webhook_update", "webhook_create", "share_create", "project_create"],
    )
    def test_invalid_payload_is_configuration_error(self, api_mock, call):
        with AbstractClient(api_base_url=API_BASE) as client:
            with pytest.raises(ConfigurationError) as exc_info:
                call(client)

        assert isinstance(exc_info.value.__cause__, ValidationError)
        assert not api_mock["webhook_subscribe"].called
        assert not api_mock["share_create"].called
        assert not api_mock["project_create"].called

    def test_default_headers_override_version_and_per_call_wins(self, api_mock):
        with AbstractClient(
            api_base_url=API_BASE,
            default_headers={"Abstract-Api-Version": "99", "X-Trace": "client"},
        ) as client:
            client.projects.info("123", RequestOptions(headers={"x-trace": "call"}))

        request = api_mock["project_info"].calls.last.request
        assert request.headers["abstract-api-version"] == "99"
        assert request.headers["x-trace"] == "call"


class TestCLIMode:
    """Test the same resources routed through the CLI transport."""

    def test_projects_info_runs_cli(self, fake_cli, cli_calls):
        with respx.mock(base_url=API_BASE, assert_all_called=False) as mock:
            route = mock.get("/projects/123").mock(return_value=httpx.Response(200, json={}))
            with AbstractClient(transport_mode="cli", cli_executable_path=fake_cli) as client:
                project = client.projects.info("123")

        assert project == {"id": "123", "name": "From CLI"}
        assert cli_calls() == [["projects", "info", "--id", "123"]]
        assert not route.called

    def test_projects_list_runs_cli(self, fake_cli, cli_calls):
        with AbstractClient(transport_mode="cli", cli_executable_path=fake_cli) as client:
            projects = client.projects.list("org", section_id="s1")

        assert projects == [{"id": "p1", "sectionId": "s1"}]
        assert cli_calls() == [["projects", "list", "--organization-id", "org"]]

    def test_api_only_operation_rejected_in_cli_mode(self, fake_cli, cli_calls):
        with AbstractClient(transport_mode="cli", cli_executable_path=fake_cli) as client:
            with pytest.raises(ConfigurationError):
                client.webhooks.list("org")

        assert cli_calls() == []

    def test_verify_resolves_locally_in_cli_mode(self, fake_cli, cli_calls):
        payload = {"event": "project.created", "id": "p1"}
        signature = compute_signature(payload, "secret")
        with AbstractClient(transport_mode="cli", cli_executable_path=fake_cli) as client:
            assert client.webhooks.verify(payload, signature, "secret") is True
            assert client.webhooks.verify(payload, signature, "other") is False

        assert cli_calls() == []

    def test_token_is_passed_in_environment(self, make_script):
        cli = make_script(
            "token-cli",
            """
            import json, os
            print(json.dumps({"id": os.environ.get("ABSTRACT_TOKEN")}))
            """,
        )
        with AbstractClient(
            transport_mode="cli", cli_executable_path=cli, auth_token="tok"
        ) as client:
            assert client.projects.info("x") == {"id": "tok"}

    def test_per_call_override_to_cli(self, fake_cli, cli_calls):
        with respx.mock(base_url=API_BASE, assert_all_called=False) as mock:
            route = mock.get("/projects/123").mock(
                return_value=httpx.Response(200, json={"data": {"id": "123", "name": "API"}})
            )
            with AbstractClient(api_base_url=API_BASE, cli_executable_path=fake_cli) as client:
                via_cli = client.projects.info("123", {"transport_mode": "cli"})
                via_api = client.projects.info("123")

                assert client.config.mode is TransportMode.API

        assert via_cli["name"] == "From CLI"
        assert via_api["name"] == "API"
        assert route.call_count == 1
        assert len(cli_calls()) == 1

    def test_cli_failure_is_not_retried_over_api(self, make_script):
        cli = make_script(
            "failing-cli",
            """
            import sys
            sys.stderr.write("boom")
            sys.exit(1)
            """,
        )
        with respx.mock(base_url=API_BASE, assert_all_called=False) as mock:
            route = mock.get("/projects/123").mock(return_value=httpx.Response(200, json={}))
            with AbstractClient(
                api_base_url=API_BASE, cli_executable_path=cli, transport_mode="cli"
            ) as client:
                with pytest.raises(ProcessExitError) as exc_info:
                    client.projects.info("123")

        assert exc_info.value.exit_code == 1
        assert exc_info.value.stderr == "boom"
        assert not route.called


class TestAsyncClient:
    """Test asynchronous AsyncAbstractClient with namespaced API."""

    @pytest.mark.asyncio
    async def test_projects_info(self, api_mock):
        async with AsyncAbstractClient(api_base_url=API_BASE) as client:
            project = await client.projects.info("123")

        assert project == {"id": "123", "name": "Web"}

    @pytest.mark.asyncio
    async def test_projects_create(self, api_mock):
        async with AsyncAbstractClient(api_base_url=API_BASE) as client:
            created = await client.projects.create("org", {"name": "New"})

        assert created == {"id": "new"}

    @pytest.mark.asyncio
    async def test_webhooks_list(self, api_mock):
        async with AsyncAbstractClient(api_base_url=API_BASE) as client:
            webhooks = await client.webhooks.list("org")

        assert webhooks == [{"id": "wh1"}]

    @pytest.mark.asyncio
    async def test_shares_info(self, api_mock):
        async with AsyncAbstractClient(api_base_url=API_BASE) as client:
            share = await client.shares.info("sh4re")

        assert share["kind"] == "project"

    @pytest.mark.asyncio
    async def test_projects_info_runs_cli(self, fake_cli, cli_calls):
        async with AsyncAbstractClient(
            transport_mode="cli", cli_executable_path=fake_cli
        ) as client:
            project = await client.projects.info("123")

        assert project["name"] == "From CLI"
        assert cli_calls() == [["projects", "info", "--id", "123"]]

    @pytest.mark.asyncio
    async def test_concurrent_calls_with_mixed_transports(self, api_mock, fake_cli, cli_calls):
        async with AsyncAbstractClient(
            api_base_url=API_BASE, cli_executable_path=fake_cli
        ) as client:
            via_api, via_cli, via_api_again = await asyncio.gather(
                client.projects.info("123"),
                client.projects.info("123", RequestOptions(transport_mode=TransportMode.CLI)),
                client.projects.info("123"),
            )

        assert via_api["name"] == "Web"
        assert via_api_again["name"] == "Web"
        assert via_cli["name"] == "From CLI"
        assert api_mock["project_info"].call_count == 2
        assert len(cli_calls()) == 1

    @pytest.mark.asyncio
    async def test_verify(self):
        payload = {"id": "p1"}
        async with AsyncAbstractClient(api_base_url=API_BASE) as client:
            ok = await client.webhooks.verify(payload, compute_signature(payload, "k"), "k")

        assert ok is True
