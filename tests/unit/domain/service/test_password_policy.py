"""Unit tests for PasswordPolicy."""

from ubos.config import PasswordPolicySettings
from ubos.domain.service import PasswordPolicy
from tests.conftest import STRONG_PASSWORD


class TestPasswordPolicy:
    """Tests for password strength rules."""

    def test_strong_password_passes(self):
        assert PasswordPolicy().violations(STRONG_PASSWORD) == []

    def test_reports_every_violation(self):
        """A weak password should list each broken rule."""
        violations = PasswordPolicy().violations("abc")

        assert "Password must be at least 8 characters" in violations
        assert "Password must contain at least one uppercase letter" in violations
        assert "Password must contain at least one digit" in violations
        assert "Password must contain at least one special character" in violations
        assert "Password must contain at least one lowercase letter" not in violations

    def test_too_long(self):
        violations = PasswordPolicy().violations("Aa1!" * 40)

        assert violations == ["Password must be at most 128 characters"]

    def test_relaxed_settings(self):
        """Disabled rules should not be enforced."""
        policy = PasswordPolicy(
            PasswordPolicySettings(
                min_length=4,
                require_uppercase=False,
                require_digit=False,
                require_special=False,
            )
        )

        assert policy.violations("abcd") == []
