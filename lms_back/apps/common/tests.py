from unittest import mock

from django.db import DatabaseError
from django.test import RequestFactory, SimpleTestCase, TestCase
from rest_framework import status
from rest_framework.test import APIClient

from utils.logging import mask_email, mask_query_string
from .utils import get_client_ip


class HealthCheckTest(TestCase):

    def setUp(self):
        self.client = APIClient()

    def test_healthy(self):
        response = self.client.get('/health/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], 'healthy')
        self.assertEqual(response.data['database'], 'connected')

    def test_database_down(self):
        with mock.patch('apps.common.views.connection') as connection:
            connection.cursor.side_effect = DatabaseError('down')
            response = self.client.get('/health/')

        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(response.data['status'], 'unhealthy')


class ClientIpTest(SimpleTestCase):

    def test_forwarded_for_wins(self):
        request = RequestFactory().get('/', HTTP_X_FORWARDED_FOR='10.0.0.1, 172.16.0.1', REMOTE_ADDR='127.0.0.1')

        self.assertEqual(get_client_ip(request), '10.0.0.1')

    def test_remote_addr(self):
        request = RequestFactory().get('/', REMOTE_ADDR='192.168.1.5')

        self.assertEqual(get_client_ip(request), '192.168.1.5')


class MaskingTest(SimpleTestCase):

    def test_mask_email(self):
        self.assertEqual(mask_email('student@example.com'), 'st*****@example.com')
        self.assertEqual(mask_email('admin1'), 'admin1')

    def test_mask_query_string(self):
        self.assertEqual(
            mask_query_string('/api/menu/?token=abc123&page=2'),
            '/api/menu/?token=********&page=2',
        )
        self.assertEqual(mask_query_string('/api/menu/'), '/api/menu/')

