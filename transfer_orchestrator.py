#!/usr/bin/env python3
"""Orchestrates the transfer of repositories between GitHub organizations."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

import github

if TYPE_CHECKING:
    from github.Repository import Repository

from config import Config
from exceptions import PushError, TransferError, WorkspaceError
from git_commands import GitCommands
from github_client import GitHubClient
from logging_utils import Logger
from utils import derive_destination_name, full_name

# Exit codes
EXIT_SUCCESS = 0
EXIT_EXECUTION_ERROR = 1

REMOTE_NAME = "upstream"
OLD_DEFAULT_BRANCH = "master"
NEW_DEFAULT_BRANCH = "main"


class JobState(Enum):
    PENDING = "pending"
    SKIPPED = "skipped"
    CLONED = "cloned"
    CREATED = "created"
    PUSHED = "pushed"
    RENAMED = "renamed"
    DONE = "done"
    FAILED = "failed"


@dataclass
class TransferJob:
    """One repository to move; ``destination_name`` is fixed at planning time."""
    source_org: str
    destination_org: str
    repo_name: str
    destination_name: str
    state: JobState = JobState.PENDING
    clone_dir: Optional[str] = None

    @property
    def source_full_name(self) -> str:
        return full_name(self.source_org, self.repo_name)

    @property
    def destination_full_name(self) -> str:
        return full_name(self.destination_org, self.destination_name)


@dataclass
class TransferSummary:
    skipped: List[TransferJob] = field(default_factory=list)
    transferred: List[TransferJob] = field(default_factory=list)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    @property
    def transferred_count(self) -> int:
        return len(self.transferred)


class TransferOrchestrator:
    def __init__(
        self,
        cfg: Config,
        client: Optional[GitHubClient] = None,
        git: Optional[GitCommands] = None,
    ) -> None:
        self.cfg = cfg
        self.source_org = cfg.transfer.source_org
        self.destination_org = cfg.transfer.destination_org
        self.repos = list(cfg.transfer.repos)
        self.prepend_prefix = cfg.naming.prepend_prefix
        self.workspace = cfg.git.workspace
        self.client = client or GitHubClient(
            cfg.github.api_url,
            cfg.github.token,
            clone_method=cfg.git.clone_method,
            push_method=cfg.git.push_method,
        )
        self.git = git or GitCommands(cfg.github.token)
        self.summary = TransferSummary()

    @property
    def source_org_dir(self) -> str:
        return os.path.join(self.workspace, self.source_org)

    def derive_destination_name(self, repo_name: str) -> str:
        return derive_destination_name(
            repo_name, self.destination_org, self.prepend_prefix
        )

    def plan_job(self, repo_name: str) -> TransferJob:
        return TransferJob(
            source_org=self.source_org,
            destination_org=self.destination_org,
            repo_name=repo_name,
            destination_name=self.derive_destination_name(repo_name),
        )

    def repository_exists(self, destination_name: str) -> bool:
        return self.client.repo_exists(full_name(self.destination_org, destination_name))

    def clone(self, job: TransferJob) -> None:
        url = self.client.source_url(job.source_org, job.repo_name)
        job.clone_dir = self.git.clone(url, self.source_org_dir, job.repo_name)
        job.state = JobState.CLONED

    def create_destination_repository(self, job: TransferJob) -> "Repository":
        description = (
            f"Private repo of {self.client.web_url(job.source_org, job.repo_name)}"
        )
        repo = self.client.create_repo(
            job.destination_org,
            job.destination_name,
            description=description,
            private=True,
        )
        job.state = JobState.CREATED
        return repo

    def push(self, job: TransferJob) -> None:
        repo_dir = job.clone_dir or os.path.join(self.source_org_dir, job.repo_name)
        url = self.client.destination_url(job.destination_org, job.destination_name)
        self.git.add_remote(repo_dir, REMOTE_NAME, url)
        self.git.push_all(repo_dir, REMOTE_NAME, url)
        job.state = JobState.PUSHED

    def set_default_branch_to_main(self, job: TransferJob) -> None:
        self.client.rename_branch(
            job.destination_full_name, OLD_DEFAULT_BRANCH, NEW_DEFAULT_BRANCH
        )
        job.state = JobState.RENAMED

    def transfer(self, job: TransferJob) -> None:
        """Clone, create, push and rename, in that order."""
        Logger.info(
            f"transferring '{job.repo_name}' from '{job.source_org}' "
            f"to '{job.destination_org}'"
        )
        Logger.info(f"1. cloning repository '{job.source_full_name}'")
        self.clone(job)
        Logger.info(
            f"2. creating private repository '{job.destination_name}' "
            f"in '{job.destination_org}'"
        )
        self.create_destination_repository(job)
        Logger.info(f"3. pushing '{job.repo_name}' to '{job.destination_full_name}'")
        self.push(job)
        Logger.info(f"4. renaming default branch to '{NEW_DEFAULT_BRANCH}'")
        self.set_default_branch_to_main(job)
        job.state = JobState.DONE
        Logger.success(
            f"repository '{job.repo_name}' transferred to '{job.destination_full_name}' "
            f"as private with '{NEW_DEFAULT_BRANCH}' as the default branch"
        )

    def _ensure_workspace(self) -> None:
        if os.path.isdir(self.workspace):
            return
        Logger.info(f"creating workspace directory at {self.workspace}")
        try:
            os.makedirs(self.workspace, exist_ok=True)
        except OSError as e:
            raise WorkspaceError(f"failed to create workspace directory: {e}") from e

    def _process_repo(self, repo_name: str, idx: int, total: int) -> TransferJob:
        job = self.plan_job(repo_name)
        if self.repository_exists(job.destination_name):
            job.state = JobState.SKIPPED
            Logger.warn(
                f"[{idx}/{total}] repository '{job.destination_name}' exists in "
                f"'{self.destination_org}', skipping"
            )
            self.summary.skipped.append(job)
            return job

        Logger.info(
            f"[{idx}/{total}] repository '{job.destination_name}' does not exist in "
            f"'{self.destination_org}', creating it"
        )
        try:
            self.transfer(job)
        except Exception:
            job.state = JobState.FAILED
            Logger.error(f"transfer of '{job.repo_name}' failed")
            raise
        self.summary.transferred.append(job)
        return job

    def _dry_run(self) -> int:
        total = len(self.repos)
        for idx, repo_name in enumerate(self.repos, start=1):
            job = self.plan_job(repo_name)
            if self.repository_exists(job.destination_name):
                Logger.info(
                    f"[{idx}/{total}] would skip: {job.destination_full_name} exists"
                )
            else:
                Logger.info(
                    f"[{idx}/{total}] would transfer: {job.source_full_name} -> "
                    f"{job.destination_full_name}"
                )
        Logger.info("dry-run completed")
        return EXIT_SUCCESS

    def report(self) -> None:
        Logger.info(
            f"{self.summary.skipped_count} repositories exist in "
            f"'{self.destination_org}'."
        )
        Logger.info(
            f"{self.summary.transferred_count} repositories have been successfully "
            f"transferred from '{self.source_org}' to '{self.destination_org}'."
        )
        Logger.info("All repositories have been processed.")

    def run(self) -> int:
        try:
            if self.cfg.transfer.dry_run:
                self.client.connect(self.destination_org)
                return self._dry_run()

            self._ensure_workspace()
            self.client.connect(self.destination_org)

            total = len(self.repos)
            for idx, repo_name in enumerate(self.repos, start=1):
                self._process_repo(repo_name, idx, total)

            self.report()
            return EXIT_SUCCESS
        except SystemExit as e:
            return int(e.code) if isinstance(e.code, int) else EXIT_EXECUTION_ERROR
        except github.GithubException as e:
            Logger.error(f"an error occurred: {e}")
            return EXIT_EXECUTION_ERROR
        except PushError as e:
            if e.branches_pushed:
                Logger.error(f"branches were pushed but tags were not: {e}")
            else:
                Logger.error(f"push failed: {e}")
            return EXIT_EXECUTION_ERROR
        except TransferError as e:
            Logger.error(str(e))
            return EXIT_EXECUTION_ERROR
        except Exception as e:
            Logger.error(f"an unexpected error occurred: {e}")
            return EXIT_EXECUTION_ERROR
