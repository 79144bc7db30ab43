"""Tests for GitHubAppJWTGenerator."""

from unittest.mock import patch

import jwt
import pytest

from shipyard.common.exception.exceptions import SigningError
from shipyard.services.github.auth.jwt_generator import GitHubAppJWTGenerator


class TestGenerateJwt:
    """Test GitHubAppJWTGenerator.generate_jwt function."""

    def test_generate_jwt_claims(self, rsa_key_pair):
        """Test the assertion is RS256 signed, issued by the app and valid for 60 seconds."""
        private_pem, public_pem = rsa_key_pair
        generator = GitHubAppJWTGenerator(app_id="1234", private_key=private_pem)

        with patch("shipyard.services.github.auth.jwt_generator.time.time", return_value=1_700_000_000.7):
            token = generator.generate_jwt()

        assert jwt.get_unverified_header(token)["alg"] == "RS256"
        claims = jwt.decode(
            token,
            public_pem,
            algorithms=["RS256"],
            options={"verify_exp": False, "verify_iat": False},
        )
        assert claims == {"iat": 1_700_000_000, "exp": 1_700_000_060, "iss": "1234"}

    def test_private_key_loaded_from_path(self, rsa_key_pair, tmp_path):
        """Test the key file is read once and reused."""
        private_pem, public_pem = rsa_key_pair
        key_file = tmp_path / "app.pem"
        key_file.write_text(private_pem)
        generator = GitHubAppJWTGenerator(app_id="1234", private_key_path=str(key_file))

        first = generator.generate_jwt()
        key_file.unlink()
        second = generator.generate_jwt()

        for token in (first, second):
            claims = jwt.decode(token, public_pem, algorithms=["RS256"])
            assert claims["iss"] == "1234"

    def test_missing_key_file(self, tmp_path):
        """Test an unreadable key file surfaces as SigningError."""
        generator = GitHubAppJWTGenerator(app_id="1234", private_key_path=str(tmp_path / "missing.pem"))

        with pytest.raises(SigningError):
            generator.generate_jwt()

    def test_empty_key_file(self, tmp_path):
        key_file = tmp_path / "empty.pem"
        key_file.write_text("")
        generator = GitHubAppJWTGenerator(app_id="1234", private_key_path=str(key_file))

        with pytest.raises(SigningError):
            generator.generate_jwt()

    def test_missing_key_path(self):
        """Test a missing key path configuration surfaces as SigningError."""
        with patch("shipyard.services.github.auth.jwt_generator.GITHUB_APP_PRIVATE_KEY_PATH", None):
            generator = GitHubAppJWTGenerator(app_id="1234")

        with pytest.raises(SigningError):
            generator.generate_jwt()

    def test_missing_app_id(self, rsa_key_pair):
        with patch("shipyard.services.github.auth.jwt_generator.GITHUB_APP_ID", None):
            generator = GitHubAppJWTGenerator(private_key=rsa_key_pair[0])

        with pytest.raises(SigningError):
            generator.generate_jwt()

    def test_invalid_key(self):
        """Test a key that is not a PEM private key fails signing."""
        generator = GitHubAppJWTGenerator(app_id="1234", private_key="not a key")

        with pytest.raises(SigningError):
            generator.generate_jwt()
