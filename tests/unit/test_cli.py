"""Tests for the command line entry point."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from shipyard import cli
from shipyard.common.exception.exceptions import InvalidRepositoryError, ReferenceNotFoundError


def _repository():
    repository = MagicMock()
    repository.clone = AsyncMock()
    repository.references = AsyncMock(return_value=["refs/heads/master", "refs/tags/1.0.0"])
    repository.get_authorization = AsyncMock(return_value="Bearer tok_abc")
    return repository


class TestMain:
    """Test cli.main function."""

    def test_clone(self, capsys):
        repository = _repository()
        with patch.object(cli, "create_github_repository", return_value=repository) as mock_create:
            code = cli.main(["clone", "https://github.com/acme/widget", "/tmp/out", "--reference", "refs/tags/1.0.0"])

        assert code == 0
        mock_create.assert_called_once_with("https://github.com/acme/widget")
        repository.clone.assert_awaited_once_with("/tmp/out", "refs/tags/1.0.0")
        assert capsys.readouterr().out.strip() == "/tmp/out"

    def test_references(self, capsys):
        with patch.object(cli, "create_github_repository", return_value=_repository()):
            code = cli.main(["references", "https://github.com/acme/widget"])

        assert code == 0
        assert capsys.readouterr().out.splitlines() == ["refs/heads/master", "refs/tags/1.0.0"]

    def test_auth_header(self, capsys):
        with patch.object(cli, "create_github_repository", return_value=_repository()):
            code = cli.main(["auth-header", "https://github.com/acme/widget"])

        assert code == 0
        assert capsys.readouterr().out.strip() == "Bearer tok_abc"

    def test_auth_header_without_credentials(self, capsys):
        repository = _repository()
        repository.get_authorization = AsyncMock(return_value=None)
        with patch.object(cli, "create_github_repository", return_value=repository):
            code = cli.main(["auth-header", "https://github.com/acme/widget"])

        assert code == 1
        assert capsys.readouterr().out == ""

    def test_invalid_url_exits_non_zero(self):
        with patch.object(cli, "create_github_repository", side_effect=InvalidRepositoryError("bad")):
            assert cli.main(["references", "https://gitlab.com/acme/widget"]) == 1

    def test_operation_error_exits_non_zero(self):
        repository = _repository()
        repository.clone.side_effect = ReferenceNotFoundError("refs/tags/9.9.9")
        with patch.object(cli, "create_github_repository", return_value=repository):
            assert cli.main(["clone", "https://github.com/acme/widget", "/tmp/out"]) == 1

    def test_command_required(self):
        with pytest.raises(SystemExit):
            cli.main([])
