"""Tests for GitHubClient helper functionality."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import github
import pytest

from config import CloneMethod
from github_client import GitHubClient


def _make_client(
    api_url: str = 'https://api.github.com',
    clone_method: CloneMethod = CloneMethod.HTTPS,
    push_method: CloneMethod = CloneMethod.SSH,
) -> GitHubClient:
    client = GitHubClient(api_url, 'token-value', clone_method, push_method)
    client.api = MagicMock()
    return client


def test_urls_for_public_host() -> None:
    client = _make_client()
    assert client.source_url('src', 'demo') == 'https://github.com/src/demo.git'
    assert client.destination_url('dst', 'demo') == 'git@github.com:dst/demo.git'
    assert client.web_url('src', 'demo') == 'https://github.com/src/demo'


def test_urls_for_enterprise_host() -> None:
    """Enterprise API URLs map to the git host without /api/v3."""
    client = _make_client(
        'https://github.acme.com/api/v3',
        clone_method=CloneMethod.SSH,
        push_method=CloneMethod.HTTPS,
    )
    assert client.source_url('src', 'demo') == 'git@github.acme.com:src/demo.git'
    assert client.destination_url('dst', 'demo') == 'https://github.acme.com/dst/demo.git'


def test_repo_exists_true() -> None:
    client = _make_client()
    assert client.repo_exists('dst/demo') is True
    client.api.get_repo.assert_called_once_with('dst/demo')


def test_repo_exists_false_on_404() -> None:
    client = _make_client()
    client.api.get_repo.side_effect = github.UnknownObjectException(
        404, {'message': 'Not Found'}, None
    )
    assert client.repo_exists('dst/missing') is False


def test_repo_exists_propagates_other_errors() -> None:
    client = _make_client()
    client.api.get_repo.side_effect = github.GithubException(
        500, {'message': 'Server Error'}, None
    )
    with pytest.raises(github.GithubException):
        client.repo_exists('dst/demo')


def test_create_repo_is_private_in_org() -> None:
    client = _make_client()
    org = client.api.get_organization.return_value

    repo = client.create_repo('dst', 'dst-demo', description='Private repo of x')

    client.api.get_organization.assert_called_once_with('dst')
    org.create_repo.assert_called_once_with(
        name='dst-demo',
        description='Private repo of x',
        private=True,
        auto_init=False,
    )
    assert repo is org.create_repo.return_value


def test_rename_branch() -> None:
    client = _make_client()
    client.rename_branch('dst/demo', 'master', 'main')

    client.api.get_repo.assert_called_once_with('dst/demo')
    client.api.get_repo.return_value.rename_branch.assert_called_once_with('master', 'main')


def test_rename_branch_missing_master_raises() -> None:
    client = _make_client()
    client.api.get_repo.return_value.rename_branch.side_effect = github.GithubException(
        404, {'message': 'Branch not found'}, None
    )
    with pytest.raises(github.GithubException):
        client.rename_branch('dst/demo', 'master', 'main')


def test_uninitialized_api_exits() -> None:
    client = GitHubClient('https://api.github.com', 'token-value')
    with pytest.raises(SystemExit) as excinfo:
        client.repo_exists('dst/demo')
    assert excinfo.value.code == 1


@patch('github_client.requests.get')
def test_connect_exits_when_org_not_visible(mock_get: MagicMock) -> None:
    mock_get.return_value = MagicMock(status_code=404)
    client = GitHubClient('https://api.github.com', 'token-value')

    with pytest.raises(SystemExit) as excinfo:
        client.connect('missing-org')

    assert excinfo.value.code == 1
    mock_get.assert_called_once()
    assert mock_get.call_args.args[0] == 'https://api.github.com/orgs/missing-org'


@patch('github_client.requests.get')
def test_connect_warns_on_non_admin_membership(mock_get: MagicMock, capsys) -> None:
    org_response = MagicMock(status_code=200)
    membership = MagicMock(status_code=200)
    membership.json.return_value = {'state': 'active', 'role': 'member'}
    mock_get.side_effect = [org_response, membership]
    client = GitHubClient('https://api.github.com', 'token-value')

    client.connect('dst')

    assert client.api is not None
    assert 'role is not admin' in capsys.readouterr().out


@pytest.mark.parametrize('status', [401, 403])
@patch('github_client.requests.get')
def test_connect_exits_on_unauthorized_or_forbidden(mock_get: MagicMock, status: int) -> None:
    mock_get.return_value = MagicMock(status_code=status)
    client = GitHubClient('https://api.github.com', 'token-value')

    with pytest.raises(SystemExit) as excinfo:
        client.connect('dst')

    assert excinfo.value.code == 1
    # Membership is not checked once the org lookup failed
    mock_get.assert_called_once()
