#!/usr/bin/env python3
"""
git-org-transfer - Move a list of repositories from one GitHub organization
to another.

Each repository is cloned into a local workspace, recreated as a private
repository in the destination organization, pushed with all branches and
tags, and its 'master' branch renamed to 'main'. Repositories whose
destination name already exists are skipped.

Usage:
  GITHUB_TOKEN=<token> git-org-transfer <source_org> <destination_org>
"""

from __future__ import annotations

import sys
from typing import NoReturn

from argument_parser import parse_arguments
from transfer_orchestrator import TransferOrchestrator


def main() -> NoReturn:
    cfg = parse_arguments()
    orchestrator = TransferOrchestrator(cfg)
    sys.exit(orchestrator.run())


if __name__ == "__main__":
    main()
