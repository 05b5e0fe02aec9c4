#!/usr/bin/env python3
"""GitHub API wrapper for creating repos and renaming branches."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Optional
from urllib.parse import urlparse

import github
import requests

if TYPE_CHECKING:
    from github.Repository import Repository

from config import CloneMethod
from logging_utils import Logger
from utils import full_name

EXIT_EXECUTION_ERROR = 1

PUBLIC_API_URL = "https://api.github.com"


class GitHubClient:
    """Wrapper around the GitHub API for the destination organization."""

    def __init__(
        self,
        api_url: str,
        token: str,
        clone_method: CloneMethod = CloneMethod.HTTPS,
        push_method: CloneMethod = CloneMethod.SSH,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.token = token
        self.clone_method = clone_method
        self.push_method = push_method
        self.api: Optional[github.Github] = None

    def connect(self, org_name: str) -> None:
        """Authenticate and check that ``org_name`` is usable with this token."""
        Logger.info(f"init github API: {self.api_url}")
        try:
            auth = github.Auth.Token(self.token)
            if self.api_url != PUBLIC_API_URL:
                self.api = github.Github(base_url=self.api_url, auth=auth)
            else:
                self.api = github.Github(auth=auth)
            self._preflight_org_access(org_name)
        except github.BadCredentialsException:
            Logger.error("authentication failed (github): invalid token")
            sys.exit(EXIT_EXECUTION_ERROR)
        except github.GithubException as e:
            Logger.error(f"github error: {e}")
            sys.exit(EXIT_EXECUTION_ERROR)

    def _get_api_headers(self) -> dict:
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self.token}",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def _check_org_visibility(self, org_name: str, headers: dict) -> None:
        """Check if organization exists and is visible to the token."""
        org_url = f"{self.api_url}/orgs/{org_name}"
        try:
            r_org = requests.get(org_url, headers=headers, timeout=30)
        except requests.RequestException as e:
            Logger.error(f"failed to contact github api: {e}")
            sys.exit(EXIT_EXECUTION_ERROR)

        if r_org.status_code == 401:
            Logger.error(
                "unauthorized (401): token invalid or not authorized for GitHub API"
            )
            sys.exit(EXIT_EXECUTION_ERROR)
        if r_org.status_code == 403:
            Logger.error(
                "forbidden (403): token lacks permission to access the organization. "
                "Possible causes: missing read:org scope, "
                "fine-grained token not granted to the org, "
                "or SAML SSO not authorized for this token."
            )
            sys.exit(EXIT_EXECUTION_ERROR)
        if r_org.status_code == 404:
            Logger.error(
                f"not found (404): organization '{org_name}' does not "
                "exist or is not visible to this token."
            )
            sys.exit(EXIT_EXECUTION_ERROR)
        if r_org.status_code != 200:
            Logger.warn(
                f"unexpected response checking org visibility: {r_org.status_code}"
            )

    def _check_org_membership(self, org_name: str, headers: dict) -> None:
        """Report membership state and role; never fatal."""
        mem_url = f"{self.api_url}/user/memberships/orgs/{org_name}"
        try:
            r_mem = requests.get(mem_url, headers=headers, timeout=30)
        except requests.RequestException:
            Logger.warn("could not check org membership (request error)")
            return

        if r_mem.status_code != 200:
            Logger.warn(
                f"could not read membership in '{org_name}' ({r_mem.status_code}); "
                "repository creation may fail"
            )
            return

        data = r_mem.json()
        state = data.get("state")  # active, pending
        role = data.get("role")  # admin, member
        Logger.info(f"org membership: state={state}, role={role}")
        if state != "active":
            Logger.warn("membership not active for destination organization")
        elif role != "admin":
            Logger.warn(
                "membership role is not admin; repo creation may be "
                "restricted by org settings"
            )

    def _preflight_org_access(self, org_name: str) -> None:
        headers = self._get_api_headers()
        self._check_org_visibility(org_name, headers)
        self._check_org_membership(org_name, headers)

    def _require_api(self) -> github.Github:
        if self.api is None:
            Logger.error("github API not initialized")
            sys.exit(EXIT_EXECUTION_ERROR)
        return self.api

    def repo_exists(self, repo_full_name: str) -> bool:
        """Return whether ``owner/name`` exists; errors other than 404 propagate."""
        api = self._require_api()
        try:
            api.get_repo(repo_full_name)
            return True
        except github.GithubException as e:
            if e.status == 404:
                return False
            raise

    def create_repo(
        self,
        org_name: str,
        name: str,
        description: str,
        private: bool = True,
    ) -> "Repository":
        api = self._require_api()
        org = api.get_organization(org_name)
        repo = org.create_repo(
            name=name,
            description=description,
            private=private,
            auto_init=False,
        )
        Logger.info(f"created repo: {full_name(org_name, name)}")
        return repo

    def rename_branch(self, repo_full_name: str, old: str, new: str) -> None:
        api = self._require_api()
        repo = api.get_repo(repo_full_name)
        repo.rename_branch(old, new)
        Logger.info(f"renamed branch '{old}' to '{new}' on {repo_full_name}")

    def _git_base_url(self) -> str:
        """Return base URL for Git operations derived from API endpoint."""
        parsed = urlparse(self.api_url)
        if parsed.netloc == "api.github.com":
            return "https://github.com"

        base_path = parsed.path.rstrip("/")
        if base_path.endswith("/api/v3"):
            base_path = base_path[: -len("/api/v3")]
        base = f"{parsed.scheme}://{parsed.netloc}"
        if base_path:
            base += base_path
        return base

    def _git_hostname(self) -> str:
        parsed = urlparse(self.api_url)
        if parsed.netloc == "api.github.com":
            return "github.com"
        return parsed.netloc

    def _git_url(self, method: CloneMethod, org_name: str, name: str) -> str:
        if method == CloneMethod.SSH:
            return f"git@{self._git_hostname()}:{org_name}/{name}.git"
        return f"{self._git_base_url()}/{org_name}/{name}.git"

    def source_url(self, org_name: str, name: str) -> str:
        """Remote URL to clone from."""
        return self._git_url(self.clone_method, org_name, name)

    def destination_url(self, org_name: str, name: str) -> str:
        """Remote URL to push to."""
        return self._git_url(self.push_method, org_name, name)

    def web_url(self, org_name: str, name: str) -> str:
        return f"{self._git_base_url()}/{org_name}/{name}"
