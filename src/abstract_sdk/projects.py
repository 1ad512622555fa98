"""Projects API client.

A project is a container for files and belongs to an organization. ``info``
and ``list`` also run over the CLI transport; the remaining operations are
API only.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal

from ._core.config import RequestOptionsLike
from ._core.operation import OperationDescriptor
from ._core.resource import BaseResource
from ._http.headers import API_VERSION_HEADER
from ._internal.blocking import run_blocking
from .models import NewProject, payload_body

HEADERS = {API_VERSION_HEADER: "22"}

ProjectFilter = Literal["active", "archived"]
ProjectInput = NewProject | Mapping[str, Any]


class BaseProjectsClient(BaseResource):
    """Base projects client with shared async business logic."""

    async def _info(self, project_id: str, options: RequestOptionsLike = None) -> Any:
        return await self._request(
            OperationDescriptor(
                "GET",
                ("projects", project_id),
                headers=HEADERS,
                cli_args=("projects", "info", "--id", project_id),
            ),
            options,
        )

    async def _list(
        self,
        organization_id: str | None = None,
        *,
        filter: ProjectFilter | None = None,
        section_id: str | None = None,
        options: RequestOptionsLike = None,
    ) -> list[dict[str, Any]]:
        cli_args = ["projects", "list"]
        if organization_id:
            cli_args += ["--organization-id", organization_id]
        if filter:
            cli_args += ["--filter", filter]

        data = await self._request(
            OperationDescriptor(
                "GET",
                ("projects",),
                query={
                    "organizationId": organization_id,
                    "filter": filter,
                    "sectionId": section_id,
                },
                headers=HEADERS,
                cli_args=cli_args,
            ),
            options,
        )
        projects = data.get("projects", []) if isinstance(data, dict) else data or []
        if section_id:
            return [p for p in projects if p.get("sectionId") == section_id]
        return projects

    async def _create(
        self,
        organization_id: str,
        project: ProjectInput,
        options: RequestOptionsLike = None,
    ) -> Any:
        body = {"organizationId": organization_id, **payload_body(NewProject, project)}
        return await self._request(
            OperationDescriptor("POST", ("projects",), body=body, headers=HEADERS),
            options,
        )

    async def _update(
        self,
        project_id: str,
        project: ProjectInput,
        options: RequestOptionsLike = None,
    ) -> Any:
        return await self._request(
            OperationDescriptor(
                "PUT",
                ("projects", project_id),
                body=payload_body(NewProject, project),
                headers=HEADERS,
            ),
            options,
        )

    async def _delete(self, project_id: str, options: RequestOptionsLike = None) -> None:
        await self._request(
            OperationDescriptor("DELETE", ("projects", project_id), headers=HEADERS),
            options,
        )

    async def _archive(self, project_id: str, options: RequestOptionsLike = None) -> Any:
        return await self._request(
            OperationDescriptor("PUT", ("projects", project_id, "archive"), headers=HEADERS),
            options,
        )

    async def _unarchive(self, project_id: str, options: RequestOptionsLike = None) -> Any:
        return await self._request(
            OperationDescriptor("PUT", ("projects", project_id, "unarchive"), headers=HEADERS),
            options,
        )


class ProjectsClient(BaseProjectsClient):
    def info(self, project_id: str, options: RequestOptionsLike = None) -> Any:
        return run_blocking(self._info(project_id, options))

    def list(
        self,
        organization_id: str | None = None,
        *,
        filter: ProjectFilter | None = None,
        section_id: str | None = None,
        options: RequestOptionsLike = None,
    ) -> list[dict[str, Any]]:
        return run_blocking(
            self._list(organization_id, filter=filter, section_id=section_id, options=options)
        )

    def create(
        self,
        organization_id: str,
        project: ProjectInput,
        options: RequestOptionsLike = None,
    ) -> Any:
        return run_blocking(self._create(organization_id, project, options))

    def update(
        self,
        project_id: str,
        project: ProjectInput,
        options: RequestOptionsLike = None,
    ) -> Any:
        return run_blocking(self._update(project_id, project, options))

    def delete(self, project_id: str, options: RequestOptionsLike = None) -> None:
        return run_blocking(self._delete(project_id, options))

    def archive(self, project_id: str, options: RequestOptionsLike = None) -> Any:
        return run_blocking(self._archive(project_id, options))

    def unarchive(self, project_id: str, options: RequestOptionsLike = None) -> Any:
        return run_blocking(self._unarchive(project_id, options))


class AsyncProjectsClient(BaseProjectsClient):
    async def info(self, project_id: str, options: RequestOptionsLike = None) -> Any:
        return await self._info(project_id, options)

    async def list(
        self,
        organization_id: str | None = None,
        *,
        filter: ProjectFilter | None = None,
        section_id: str | None = None,
        options: RequestOptionsLike = None,
    ) -> list[dict[str, Any]]:
        return await self._list(
            organization_id, filter=filter, section_id=section_id, options=options
        )

    async def create(
        self,
        organization_id: str,
        project: ProjectInput,
        options: RequestOptionsLike = None,
    ) -> Any:
        return await self._create(organization_id, project, options)

    async def update(
        self,
        project_id: str,
        project: ProjectInput,
        options: RequestOptionsLike = None,
    ) -> Any:
        return await self._update(project_id, project, options)

    async def delete(self, project_id: str, options: RequestOptionsLike = None) -> None:
        return await self._delete(project_id, options)

    async def archive(self, project_id: str, options: RequestOptionsLike = None) -> Any:
        return await self._archive(project_id, options)

    async def unarchive(self, project_id: str, options: RequestOptionsLike = None) -> Any:
        return await self._unarchive(project_id, options)


__all__ = ["BaseProjectsClient", "ProjectsClient", "AsyncProjectsClient"]
