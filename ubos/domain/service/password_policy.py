"""Password policy checks for invitation acceptance."""

import re

from ubos.config import PasswordPolicySettings

from .base import Service

SPECIAL_CHARS = r"!@#$%^&*()_+\-=\[\]{};':\"\\|,.<>\/?`~"


class PasswordPolicy(Service):
    """Validates password strength.

    Default policy:
    - Minimum 8 characters
    - At least one uppercase letter
    - At least one lowercase letter
    - At least one digit
    - At least one special character
    """

    def __init__(self, settings: PasswordPolicySettings | None = None) -> None:
        """Initialize password policy.

        Args:
            settings: Policy configuration, defaults applied when omitted
        """
        self.settings = settings or PasswordPolicySettings()

    def violations(self, password: str) -> list[str]:
        """List every rule the password breaks.

        Args:
            password: Candidate password

        Returns:
            Human-readable messages, empty when the password is acceptable
        """
        rules = self.settings
        errors: list[str] = []

        if len(password) < rules.min_length:
            errors.append(f"Password must be at least {rules.min_length} characters")
        if len(password) > rules.max_length:
            errors.append(f"Password must be at most {rules.max_length} characters")
        if rules.require_uppercase and not re.search(r"[A-Z]", password):
            errors.append("Password must contain at least one uppercase letter")
        if rules.require_lowercase and not re.search(r"[a-z]", password):
            errors.append("Password must contain at least one lowercase letter")
        if rules.require_digit and not re.search(r"\d", password):
            errors.append("Password must contain at least one digit")
        if rules.require_special and not re.search(f"[{SPECIAL_CHARS}]", password):
            errors.append("Password must contain at least one special character")

        return errors
