#!/usr/bin/env python3
"""Utility functions for git-org-transfer."""


def last_hyphen_segment(name: str) -> str:
    """Return the part of ``name`` after its last hyphen.

    Names without a hyphen are returned unchanged. Trailing hyphens are
    ignored, so 'foo-bar-' yields 'bar'.
    """
    return name.rstrip("-").rsplit("-", 1)[-1]


def derive_destination_name(
    repo_name: str, destination_org: str, prepend_prefix: bool
) -> str:
    """Map a source repository name to its name in the destination org.

    Example: ('puppet-foo', 'bar', True) -> 'bar-foo'
             ('puppet-foo', 'bar', False) -> 'puppet-foo'
    """
    if not prepend_prefix:
        return repo_name
    return f"{destination_org}-{last_hyphen_segment(repo_name)}"


def full_name(org: str, name: str) -> str:
    return f"{org}/{name}"
