"""Tests for repository naming helpers."""

from __future__ import annotations

import pytest

from utils import derive_destination_name, full_name, last_hyphen_segment


@pytest.mark.parametrize(
    ('name', 'expected'),
    [
        ('puppet-foo', 'foo'),
        ('puppet-module-foo', 'foo'),
        ('foo', 'foo'),
        ('foo-bar-', 'bar'),
    ],
)
def test_last_hyphen_segment(name: str, expected: str) -> None:
    assert last_hyphen_segment(name) == expected


def test_prefix_enabled() -> None:
    assert derive_destination_name('puppet-foo', 'bar', True) == 'bar-foo'


def test_prefix_disabled_keeps_name() -> None:
    assert derive_destination_name('puppet-foo', 'bar', False) == 'puppet-foo'


def test_prefix_enabled_without_hyphen() -> None:
    assert derive_destination_name('stdlib', 'puppetlabs', True) == 'puppetlabs-stdlib'


def test_full_name() -> None:
    assert full_name('bar', 'bar-foo') == 'bar/bar-foo'
