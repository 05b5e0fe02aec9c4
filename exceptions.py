#!/usr/bin/env python3
"""Exception classes for git-org-transfer."""

from __future__ import annotations

from typing import Optional, Sequence


class TransferError(Exception):
    """Base exception for transfer errors."""


class WorkspaceError(TransferError):
    """Raised when the local workspace cannot be prepared."""


class GitCommandError(TransferError):
    """Raised when a git invocation exits non-zero or times out."""

    def __init__(
        self,
        cmd: Sequence[str],
        returncode: Optional[int],
        stderr: str = "",
    ) -> None:
        self.cmd = list(cmd)
        self.returncode = returncode
        self.stderr = stderr
        if returncode is None:
            status = "timed out"
        else:
            status = f"exited with status {returncode}"
        message = f"'{' '.join(self.cmd)}' {status}"
        if stderr:
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)


class PushError(GitCommandError):
    """Raised when pushing to the destination fails.

    ``branches_pushed`` is True when the branch push went through and only
    the tag push failed, leaving the destination without tags.
    """

    def __init__(
        self,
        cmd: Sequence[str],
        returncode: Optional[int],
        stderr: str = "",
        *,
        branches_pushed: bool = False,
    ) -> None:
        super().__init__(cmd, returncode, stderr)
        self.branches_pushed = branches_pushed
