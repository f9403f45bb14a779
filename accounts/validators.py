import re

from django.core.exceptions import ValidationError


class MixedCharacterPasswordValidator:
    """
    Require at least one lowercase letter, one uppercase letter and one digit.
    """

    message = 'Password must contain at least one lowercase letter, one uppercase letter, and one number'

    def validate(self, password, user=None):
        if not (
            re.search(r'[a-z]', password)
            and re.search(r'[A-Z]', password)
            and re.search(r'\d', password)
        ):
            raise ValidationError(self.message, code='password_mixed_characters')

    def get_help_text(self):
        return self.message


SCRIPT_BLOCK_REGEX = re.compile(r'<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>', re.IGNORECASE)


def strip_script_tags(value):
    """Remove ``<script>...</script>`` blocks from user-submitted text."""
    if not isinstance(value, str):
        return value
    return SCRIPT_BLOCK_REGEX.sub('', value).strip()
