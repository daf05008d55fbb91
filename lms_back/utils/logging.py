import re

SENSITIVE_KEYS = ('password', 'token', 'access', 'refresh', 'secret', 'key')


def mask_email(email):
    """user@example.com -> us**@example.com"""
    if not email or '@' not in email:
        return email
    prefix, domain = email.split('@', 1)
    masked_prefix = prefix[:2] + '*' * max(len(prefix) - 2, 0)
    return f"{masked_prefix}@{domain}"


def mask_query_string(path):
    """Mask sensitive query parameter values in a request path"""
    if '?' not in path:
        return path
    pattern = r'(?i)([?&](?:' + '|'.join(SENSITIVE_KEYS) + r')=)[^&]*'
    return re.sub(pattern, r'\1********', path)
