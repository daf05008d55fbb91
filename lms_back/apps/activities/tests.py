from django.contrib.auth import get_user_model
from django.test import SimpleTestCase
from rest_framework import status
from rest_framework.test import APITestCase, APIClient

from .configs import (
    ActivityConfigError,
    AssignmentConfig,
    OpaqueConfig,
    QuizConfig,
    TextConfig,
    VideoConfig,
    config_variant,
    dump_activity_config,
    parse_activity_config,
)
from .models import Activity


class ActivityConfigTest(SimpleTestCase):
    """kind -> config variant"""

    def test_known_variants(self):
        self.assertIsInstance(parse_activity_config('video', {'url': 'https://cdn.lms.io/intro.mp4'}), VideoConfig)
        self.assertIsInstance(parse_activity_config('text', {'body': '<p>Hi</p>'}), TextConfig)
        self.assertIsInstance(parse_activity_config('quiz', {'passing_score': 70}), QuizConfig)
        self.assertIsInstance(parse_activity_config('assignment', {'assignment_id': '65f0c2'}), AssignmentConfig)

    def test_unknown_kind_is_opaque(self):
        raw = {'provider': 'h5p', 'embed': {'id': 42}}

        config = parse_activity_config('interactive', raw)

        self.assertIsInstance(config, OpaqueConfig)
        self.assertEqual(dump_activity_config(config), raw)
        self.assertEqual(config_variant('interactive'), 'opaque')
        self.assertEqual(config_variant('quiz'), 'quiz')

    def test_missing_required_field(self):
        with self.assertRaises(ActivityConfigError) as ctx:
            parse_activity_config('assignment', {})

        self.assertEqual(ctx.exception.kind, 'assignment')
        self.assertTrue(ctx.exception.messages[0].startswith('assignment_id'))

    def test_unknown_key_on_known_kind(self):
        with self.assertRaises(ActivityConfigError):
            parse_activity_config('video', {'url': '/v.mp4', 'autoplay': True})

    def test_range_checks(self):
        with self.assertRaises(ActivityConfigError):
            parse_activity_config('quiz', {'passing_score': 120})
        with self.assertRaises(ActivityConfigError):
            parse_activity_config('video', {'url': '/v.mp4', 'duration_seconds': -1})

    def test_config_must_be_object(self):
        with self.assertRaises(ActivityConfigError):
            parse_activity_config('text', ['not', 'an', 'object'])

    def test_none_is_empty_config(self):
        self.assertEqual(dump_activity_config(parse_activity_config('text', None)), {'body': ''})

    def test_dump_drops_unset_optionals(self):
        config = parse_activity_config('quiz', {'max_attempts': 3})

        self.assertEqual(dump_activity_config(config), {'max_attempts': 3})


class ActivityAPITest(APITestCase):

    def setUp(self):
        User = get_user_model()
        self.instructor = User.objects.create_user(username='instructor1', password='testpass123', is_staff=True)
        self.student = User.objects.create_user(username='student1', password='testpass123')

        self.video = Activity.objects.create(
            kind='video', title='Welcome', order=0, config={'url': '/media/welcome.mp4'}
        )
        self.hidden = Activity.objects.create(
            kind='text', title='Draft notes', order=1, is_hidden=True, config={'body': ''}
        )

        self.client = APIClient()

    def test_list_requires_authentication(self):
        response = self.client.get('/api/activities/')

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_student_does_not_see_hidden(self):
        self.client.force_authenticate(user=self.student)

        response = self.client.get('/api/activities/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item['title'] for item in response.data['results']], ['Welcome'])

    def test_instructor_sees_hidden(self):
        self.client.force_authenticate(user=self.instructor)

        response = self.client.get('/api/activities/')

        self.assertEqual(response.data['count'], 2)

    def test_filter_by_kind(self):
        self.client.force_authenticate(user=self.instructor)

        response = self.client.get('/api/activities/?kind=text')

        self.assertEqual([item['title'] for item in response.data['results']], ['Draft notes'])

    def test_create_quiz(self):
        self.client.force_authenticate(user=self.instructor)
        data = {
            'kind': 'Quiz',
            'title': 'Week 1 check',
            'config': {'time_limit_minutes': 15, 'passing_score': 60},
        }

        response = self.client.post('/api/activities/', data, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['kind'], 'quiz')
        self.assertEqual(response.data['variant'], 'quiz')
        self.assertEqual(response.data['created_by'], self.instructor.pk)
        self.assertEqual(response.data['config'], {'time_limit_minutes': 15, 'passing_score': 60.0})

    def test_create_invalid_config(self):
        self.client.force_authenticate(user=self.instructor)
        data = {'kind': 'assignment', 'title': 'Essay', 'config': {}}

        response = self.client.post('/api/activities/', data, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error']['field'], 'config')
        self.assertFalse(Activity.objects.filter(title='Essay').exists())

    def test_create_unknown_kind_keeps_config(self):
        self.client.force_authenticate(user=self.instructor)
        data = {'kind': 'scorm', 'title': 'Package', 'config': {'package_url': '/scorm/1.zip', 'version': '2004'}}

        response = self.client.post('/api/activities/', data, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['variant'], 'opaque')
        self.assertEqual(response.data['config'], {'package_url': '/scorm/1.zip', 'version': '2004'})

    def test_student_cannot_create(self):
        self.client.force_authenticate(user=self.student)

        response = self.client.post('/api/activities/', {'kind': 'text', 'title': 'x'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_kind_change_revalidates_config(self):
        self.client.force_authenticate(user=self.instructor)

        response = self.client.patch(f'/api/activities/{self.video.pk}/', {'kind': 'assignment'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.video.refresh_from_db()
        self.assertEqual(self.video.kind, 'video')

    def test_partial_update_title_only(self):
        self.client.force_authenticate(user=self.instructor)

        response = self.client.patch(f'/api/activities/{self.video.pk}/', {'title': 'Welcome!'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.video.refresh_from_db()
        self.assertEqual(self.video.title, 'Welcome!')
        self.assertEqual(self.video.config, {'url': '/media/welcome.mp4'})

    def test_delete(self):
        self.client.force_authenticate(user=self.instructor)

        response = self.client.delete(f'/api/activities/{self.video.pk}/')

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Activity.objects.filter(pk=self.video.pk).exists())

    def test_typed_config_property(self):
        self.assertEqual(self.video.typed_config.url, '/media/welcome.mp4')
        self.assertEqual(self.video.variant, 'video')
