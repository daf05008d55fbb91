from rest_framework.exceptions import APIException
from rest_framework import status
from django.utils import timezone


class LMSException(APIException):
    """Base exception for the LMS API, rendered by custom_exception_handler"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_code = 'ERR_500'
    default_detail = 'An internal server error occurred.'

    def __init__(self, code=None, message=None, detail=None, field=None, status_code=None):
        super().__init__(detail=message or self.default_detail)
        self.code = code or self.default_code
        self.message = message or self.default_detail
        self.detail_info = detail
        self.field = field
        if status_code:
            self.status_code = status_code

    def get_full_details(self):
        error_detail = {
            'code': self.code,
            'message': self.message,
            'timestamp': timezone.now().isoformat(),
        }
        if self.detail_info:
            error_detail['detail'] = self.detail_info
        if self.field:
            error_detail['field'] = self.field
        return {'error': error_detail}


class ValidationException(LMSException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_code = 'ERR_101'
    default_detail = 'The submitted data is invalid.'


class ResourceNotFoundException(LMSException):
    status_code = status.HTTP_404_NOT_FOUND
    default_code = 'ERR_201'
    default_detail = 'The requested resource was not found.'


