"""GitHub adapter implementation."""

import logging
from typing import Dict, List, Optional

import httpx
from pydantic import BaseModel, NonNegativeInt

from provider_adapters.base_adapter import BaseAdapter, CapabilityHandler, WireModel
from provider_adapters.config import Settings
from provider_adapters.models import AdapterCapability, AdapterCategory, AdapterConfig


logger = logging.getLogger(__name__)


class Issue(BaseModel):
    body: str
    number: int
    title: str


class Repository(BaseModel):
    description: str
    name: str
    owner: str


class User(BaseModel):
    avatar_url: str
    id: int
    login: str


class _GitHubIssue(WireModel):
    body: str
    number: NonNegativeInt
    title: str


class _GitHubUser(WireModel):
    avatar_url: str
    id: NonNegativeInt
    login: str


class _GitHubRepository(WireModel):
    description: str
    name: str
    owner: _GitHubUser


class GitHubAdapter(BaseAdapter):
    """Adapter for the GitHub REST API (v3)."""

    AUTH_SCHEME = "Bearer"
    DEFAULT_HEADERS = {"Accept": "application/vnd.github.v3+json"}
    BASE_URL_SETTING = "GITHUB_API_BASE"

    def __init__(
        self,
        config: AdapterConfig,
        client: Optional[httpx.AsyncClient] = None,
        settings: Optional[Settings] = None
    ):
        config.category = AdapterCategory.INTEGRATION
        super().__init__(config, client=client, settings=settings)

    def get_capabilities(self) -> List[AdapterCapability]:
        """Return GitHub adapter capabilities."""
        token = {"type": "string", "description": "Personal access token"}
        issue_format = {"body": "string", "number": "integer", "title": "string"}
        return [
            AdapterCapability(
                name="create_issue",
                description="Open an issue in a repository",
                category="issues",
                parameters={
                    "token": token,
                    "owner": {"type": "string", "description": "Repository owner"},
                    "repo": {"type": "string", "description": "Repository name"},
                    "title": {"type": "string", "description": "Issue title"},
                    "body": {"type": "string", "description": "Issue body"}
                },
                required_parameters=["token", "owner", "repo", "title", "body"],
                response_format=issue_format
            ),
            AdapterCapability(
                name="update_issue",
                description="Update the title and body of an issue",
                category="issues",
                parameters={
                    "token": token,
                    "owner": {"type": "string", "description": "Repository owner"},
                    "repo": {"type": "string", "description": "Repository name"},
                    "number": {"type": "integer", "description": "Issue number"},
                    "title": {"type": "string", "description": "Issue title"},
                    "body": {"type": "string", "description": "Issue body"}
                },
                required_parameters=["token", "owner", "repo", "number", "title", "body"],
                response_format=issue_format
            ),
            AdapterCapability(
                name="create_repository",
                description="Create a public repository for the authenticated user",
                category="repositories",
                parameters={
                    "token": token,
                    "name": {"type": "string", "description": "Repository name"},
                    "description": {"type": "string", "description": "Repository description"}
                },
                required_parameters=["token", "name", "description"],
                response_format={"description": "string", "name": "string", "owner": "string"}
            ),
            AdapterCapability(
                name="delete_repository",
                description="Delete a repository",
                category="repositories",
                parameters={
                    "token": token,
                    "owner": {"type": "string", "description": "Repository owner"},
                    "repo": {"type": "string", "description": "Repository name"}
                },
                required_parameters=["token", "owner", "repo"],
                response_format={"type": "boolean"}
            ),
            AdapterCapability(
                name="get_user",
                description="Get the authenticated user",
                category="users",
                parameters={"token": token},
                required_parameters=["token"],
                response_format={"avatar_url": "string", "id": "integer", "login": "string"}
            ),
        ]

    def _capability_handlers(self) -> Dict[str, CapabilityHandler]:
        return {
            "create_issue": lambda p: self.create_issue(
                p["token"], p["owner"], p["repo"], p["title"], p["body"]
            ),
            "update_issue": lambda p: self.update_issue(
                p["token"], p["owner"], p["repo"], p["number"], p["title"], p["body"]
            ),
            "create_repository": lambda p: self.create_repository(p["token"], p["name"], p["description"]),
            "delete_repository": lambda p: self.delete_repository(p["token"], p["owner"], p["repo"]),
            "get_user": lambda p: self.get_user(p["token"]),
        }

    async def create_issue(self, token: str, owner: str, repo: str, title: str, body: str) -> Issue:
        response = await self._send(
            "POST",
            f"/repos/{owner}/{repo}/issues",
            token,
            json_body={"title": title, "body": body}
        )
        issue = self._decode(response, _GitHubIssue)

        logger.info(f"GitHub issue #{issue.number} created in {owner}/{repo}")
        return Issue(body=issue.body, number=issue.number, title=issue.title)

    async def update_issue(
        self,
        token: str,
        owner: str,
        repo: str,
        number: int,
        title: str,
        body: str
    ) -> Issue:
        response = await self._send(
            "PATCH",
            f"/repos/{owner}/{repo}/issues/{number}",
            token,
            json_body={"title": title, "body": body}
        )
        issue = self._decode(response, _GitHubIssue)

        logger.info(f"GitHub issue #{issue.number} updated in {owner}/{repo}")
        return Issue(body=issue.body, number=issue.number, title=issue.title)

    async def create_repository(self, token: str, name: str, description: str) -> Repository:
        response = await self._send(
            "POST",
            "/user/repos",
            token,
            json_body={"name": name, "description": description, "private": False}
        )
        repository = self._decode(response, _GitHubRepository)

        logger.info(f"GitHub repository {repository.owner.login}/{repository.name} created")
        return Repository(
            description=repository.description,
            name=repository.name,
            owner=repository.owner.login
        )

    async def delete_repository(self, token: str, owner: str, repo: str) -> bool:
        """Delete a repository. Only a 204 counts as deleted."""
        response = await self._send("DELETE", f"/repos/{owner}/{repo}", token)
        deleted = response.status_code == 204

        if deleted:
            logger.info(f"GitHub repository {owner}/{repo} deleted")
        else:
            logger.warning(f"GitHub repository {owner}/{repo} not deleted (status {response.status_code})")
        return deleted

    async def get_user(self, token: str) -> User:
        response = await self._send("GET", "/user", token)
        user = self._decode(response, _GitHubUser)

        return User(avatar_url=user.avatar_url, id=user.id, login=user.login)
