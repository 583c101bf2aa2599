import re

from django.core.exceptions import ValidationError

SPECIAL_CHARACTERS = '!@#$%^&*(),.?":{}|<>'


class PasswordPolicyValidator:
    """
    Password validator enforcing the platform's password policy.

    Installed through `AUTH_PASSWORD_VALIDATORS`, so it runs whenever
    `django.contrib.auth.password_validation.validate_password` is called (registration, admin
    user creation, password change). A valid password:

    - is between `min_length` and `max_length` characters long,
    - contains at least one uppercase letter,
    - contains at least one special character.
    """

    def __init__(self, min_length=8, max_length=16):
        self.min_length = min_length
        self.max_length = max_length
        self.special_re = re.compile('[' + re.escape(SPECIAL_CHARACTERS) + ']')

    def validate(self, password, user=None):
        errors = []
        if not self.min_length <= len(password) <= self.max_length:
            errors.append(ValidationError(
                f"Password must be between {self.min_length} and {self.max_length} characters.",
                code='password_length',
            ))
        if not any(char.isupper() for char in password):
            errors.append(ValidationError(
                "Password must contain at least one uppercase letter.",
                code='password_no_upper',
            ))
        if not self.special_re.search(password):
            errors.append(ValidationError(
                "Password must contain at least one special character.",
                code='password_no_special',
            ))
        if errors:
            raise ValidationError(errors)

    def get_help_text(self):
        return (
            f"Your password must be {self.min_length}-{self.max_length} characters long and "
            "contain at least one uppercase letter and one special character."
        )
