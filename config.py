#!/usr/bin/env python3
"""Configuration dataclasses for git-org-transfer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class CloneMethod(Enum):
    """Enumeration for git clone/push methods."""
    HTTPS = "https"
    SSH = "ssh"


@dataclass
class GitHubConfig:
    """GitHub API configuration."""
    api_url: str
    token: str


@dataclass
class NamingConfig:
    """Destination repository naming configuration."""
    prepend_prefix: bool = True


@dataclass
class GitOperationConfig:
    """Git operation configuration."""
    workspace: str
    clone_method: CloneMethod = CloneMethod.HTTPS
    push_method: CloneMethod = CloneMethod.SSH


@dataclass
class TransferConfig:
    """Which repositories move where."""
    source_org: str
    destination_org: str
    repos: List[str] = field(default_factory=list)
    dry_run: bool = False


@dataclass
class Config:
    """Main configuration for an organization transfer."""
    github: GitHubConfig
    transfer: TransferConfig
    naming: NamingConfig
    git: GitOperationConfig
