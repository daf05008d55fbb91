"""
Common field validators

Reusable field validators shared by the menu and activity serializers.
"""
import re
from rest_framework import serializers


class ValidationPatterns:
    """Regex patterns used by the validators below"""

    # site-relative path (/courses, /admin/users?tab=1)
    RELATIVE_URL = r'^/[^\s]*$'

    # in-page anchor (#pricing)
    ANCHOR_URL = r'^#[^\s]*$'

    # absolute http(s) URL
    ABSOLUTE_URL = r'^https?://[^\s/$.?#][^\s]*$'

    # icon token: emoji, font-icon class name (mdi-home, fa fa-book) etc.
    ICON = r'^[^\n\r\t]{1,50}$'


def validate_required_text(value, field_name='value'):
    """
    Non-blank string check.

    Args:
        value: raw input
        field_name: name used in the error message

    Returns:
        the value with surrounding whitespace removed

    Raises:
        serializers.ValidationError: value is missing or blank
    """
    if value is None or not str(value).strip():
        raise serializers.ValidationError(f'{field_name} is required.')
    return str(value).strip()


def validate_navigation_url(value):
    """
    Menu navigation target.

    Blank is allowed (group headers without a link). Otherwise it must be a
    site-relative path, an anchor or an absolute http(s) URL.
    """
    if not value:
        return ''

    value = value.strip()
    for pattern in (ValidationPatterns.RELATIVE_URL, ValidationPatterns.ANCHOR_URL, ValidationPatterns.ABSOLUTE_URL):
        if re.match(pattern, value):
            return value

    raise serializers.ValidationError(
        'URL must be a relative path (/courses), an anchor (#top) or an http(s) URL.'
    )


def validate_icon(value):
    if not value:
        return ''

    value = value.strip()
    if not re.match(ValidationPatterns.ICON, value):
        raise serializers.ValidationError('Icon must be a single-line token of at most 50 characters.')
    return value

