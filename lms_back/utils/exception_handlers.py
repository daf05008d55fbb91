from rest_framework.views import exception_handler
from rest_framework.response import Response
from rest_framework.exceptions import ValidationError
from django.utils import timezone
from .exceptions import LMSException
import logging

logger = logging.getLogger(__name__)


def _first_error(errors):
    """First message found in a nested ValidationError payload"""
    if isinstance(errors, dict):
        for value in errors.values():
            return _first_error(value)
        return ''
    if isinstance(errors, list):
        for value in errors:
            message = _first_error(value)
            if message:
                return message
        return ''
    return str(errors)


def custom_exception_handler(exc, context):
    """DRF default handler wrapped into the {"error": {...}} envelope"""

    if isinstance(exc, LMSException):
        logger.warning(f"LMS Exception: {exc.code} - {exc.message}", extra={
            'code': exc.code,
            'detail': exc.detail_info,
            'field': exc.field,
            'view': context.get('view'),
        })
        return Response(exc.get_full_details(), status=exc.status_code)

    # DRF built-in exceptions (ValidationError, NotFound, NotAuthenticated, ...)
    response = exception_handler(exc, context)

    if response is not None:
        data = response.data
        message = data.get('detail') if isinstance(data, dict) else None
        error_detail = {
            'error': {
                'code': 'ERR_500' if response.status_code >= 500 else f'ERR_{response.status_code}',
                'message': str(message or 'The request could not be processed.'),
                'timestamp': timezone.now().isoformat(),
            }
        }

        if isinstance(exc, ValidationError):
            error_detail['error']['code'] = 'ERR_101'
            error_detail['error']['message'] = 'The submitted data is invalid.'
            if isinstance(data, dict):
                for field, errors in data.items():
                    if field != 'detail':
                        error_detail['error']['field'] = field
                        error_detail['error']['detail'] = _first_error(errors)
                        break
            else:
                error_detail['error']['detail'] = _first_error(data)

        response.data = error_detail
        logger.warning(f"DRF Exception: {error_detail['error']['code']} - {error_detail['error']['message']}")
        return response

    # anything else is a 500
    logger.error(f"Unexpected Exception: {str(exc)}", exc_info=True, extra={
        'view': context.get('view'),
    })

    return Response({
        'error': {
            'code': 'ERR_500',
            'message': 'An internal server error occurred. Please contact the administrator.',
            'timestamp': timezone.now().isoformat(),
        }
    }, status=500)
