import time
import logging
import re
from django.utils.deprecation import MiddlewareMixin

from apps.common.utils import get_client_ip
from utils.logging import mask_email, mask_query_string

logger = logging.getLogger('access')


# paths that never produce an access-log line
ACCESS_LOG_EXCLUDE_PATTERNS = [
    r'^/health',
    r'^/static',
    r'^/media',
    r'^/__debug__',
]

# HTTP method -> action
METHOD_ACTION_MAP = {
    'GET': 'VIEW',
    'HEAD': 'VIEW',
    'OPTIONS': 'VIEW',
    'POST': 'CREATE',
    'PUT': 'UPDATE',
    'PATCH': 'UPDATE',
    'DELETE': 'DELETE',
}


def should_log_access(path):
    for pattern in ACCESS_LOG_EXCLUDE_PATTERNS:
        if re.match(pattern, path):
            return False
    return True


def get_user_label(request):
    user = getattr(request, 'user', None)
    if user is None or not user.is_authenticated:
        return 'Anonymous'
    return mask_email(str(user))


class AccessLogMiddleware(MiddlewareMixin):
    """One access-log line per request on the 'access' logger"""

    def process_request(self, request):
        request.start_time = time.monotonic()

    def process_response(self, request, response):
        path = request.get_full_path()
        if not should_log_access(path.split('?')[0]):
            return response

        duration = time.monotonic() - getattr(request, 'start_time', time.monotonic())
        action = METHOD_ACTION_MAP.get(request.method, 'VIEW')

        message = (
            f"{get_client_ip(request)} {get_user_label(request)} {action} "
            f"{request.method} {mask_query_string(path)} {response.status_code} ({duration:.3f}s)"
        )

        if response.status_code >= 400:
            logger.warning(message)
        else:
            logger.info(message)

        return response
