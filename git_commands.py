#!/usr/bin/env python3
"""Local git invocations used to move repository content."""

from __future__ import annotations

import os
import subprocess
import tempfile
from typing import Dict, List, Optional

from exceptions import GitCommandError, PushError
from logging_utils import Logger
from security import SecurityValidator

CLONE_TIMEOUT_S = 300
PUSH_TIMEOUT_S = 600
REMOTE_TIMEOUT_S = 60


class GitCommands:
    """Runs git as a subprocess and turns failures into GitCommandError."""

    def __init__(self, token: str) -> None:
        self.token = token

    def _create_askpass_script(self, username: str, password: str) -> str:
        """Create a temporary askpass script for secure credential injection."""
        fd, path = tempfile.mkstemp(prefix="got_askpass_", text=True)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as script:
                script.write("#!/bin/sh\n")
                script.write("case \"$1\" in\n")
                script.write(f"  *Username*) echo '{username}' ;;\n")
                script.write(f"  *Password*) echo '{password}' ;;\n")
                script.write("  *) exit 1 ;;\n")
                script.write("esac\n")
            os.chmod(path, 0o700)
        except Exception:
            os.unlink(path)
            raise
        return path

    @staticmethod
    def _cleanup_askpass_script(path: Optional[str]) -> None:
        if not path:
            return
        try:
            if os.path.exists(path):
                os.remove(path)
        except OSError as error:
            Logger.warn(f"failed to clean up temporary credential helper: {error}")

    def _run(
        self,
        args: List[str],
        *,
        cwd: Optional[str] = None,
        url: Optional[str] = None,
        timeout: int,
    ) -> subprocess.CompletedProcess:
        """Run ``git <args>``; HTTPS urls get the token through GIT_ASKPASS."""
        cmd = ["git", *args]
        env: Dict[str, str] = os.environ.copy()
        askpass_script: Optional[str] = None
        try:
            if url and url.startswith("https://") and self.token:
                askpass_script = self._create_askpass_script(
                    "x-access-token", self.token
                )
                env.update(
                    {
                        "GIT_ASKPASS": askpass_script,
                        "GIT_TERMINAL_PROMPT": "0",
                    }
                )
            return subprocess.run(
                cmd,
                cwd=cwd,
                check=True,
                capture_output=True,
                text=True,
                timeout=timeout,
                env=env,
            )
        except subprocess.TimeoutExpired:
            Logger.security_event("GIT_TIMEOUT", f"{' '.join(cmd)} timed out")
            raise GitCommandError(cmd, None)
        except subprocess.CalledProcessError as e:
            safe_stderr = SecurityValidator.sanitize_for_logging(e.stderr or "")
            raise GitCommandError(cmd, e.returncode, safe_stderr)
        finally:
            self._cleanup_askpass_script(askpass_script)

    def clone(self, url: str, parent_dir: str, name: str) -> str:
        """Clone ``url`` into ``parent_dir/name`` and return that path."""
        os.makedirs(parent_dir, exist_ok=True)
        self._run(["clone", url, name], cwd=parent_dir, url=url, timeout=CLONE_TIMEOUT_S)
        return os.path.join(parent_dir, name)

    def add_remote(self, repo_dir: str, remote: str, url: str) -> None:
        self._run(["remote", "add", remote, url], cwd=repo_dir, timeout=REMOTE_TIMEOUT_S)

    def push(self, repo_dir: str, remote: str, url: str, refs_flag: str) -> None:
        """Push ``--all`` branches or ``--tags`` to ``remote``."""
        self._run(
            ["push", refs_flag, remote],
            cwd=repo_dir,
            url=url,
            timeout=PUSH_TIMEOUT_S,
        )

    def push_all(self, repo_dir: str, remote: str, url: str) -> None:
        """Push every branch and then every tag.

        Both pushes must succeed. A failed tag push after a successful branch
        push is reported with ``branches_pushed=True``.
        """
        try:
            self.push(repo_dir, remote, url, "--all")
        except GitCommandError as e:
            raise PushError(e.cmd, e.returncode, e.stderr) from e
        try:
            self.push(repo_dir, remote, url, "--tags")
        except GitCommandError as e:
            raise PushError(e.cmd, e.returncode, e.stderr, branches_pushed=True) from e
