"""
Tests for user accounts and profile management

Covers:
- Custom user manager (email as username)
- JWT login
- Reading and updating /api/users/me/
- Public profiles at /api/users/{id}/
"""
from django.core.cache import cache
from django.test import TestCase
from django.contrib.auth import get_user_model
from rest_framework.test import APITestCase, APIClient
from rest_framework import status

User = get_user_model()


class UserManagerTests(TestCase):

    def test_create_user_with_email(self):
        user = User.objects.create_user(
            email='Worker@Example.com', password='testpass123', name='Ana'
        )

        self.assertEqual(user.email, 'Worker@example.com')
        self.assertTrue(user.check_password('testpass123'))
        self.assertFalse(user.is_staff)
        self.assertTrue(user.is_active)

    def test_email_is_required(self):
        with self.assertRaises(ValueError):
            User.objects.create_user(email='', password='testpass123', name='Ana')

    def test_create_superuser(self):
        admin = User.objects.create_superuser(
            email='admin@example.com', password='testpass123', name='Admin'
        )

        self.assertTrue(admin.is_staff)
        self.assertTrue(admin.is_superuser)

    def test_display_name_falls_back_to_email(self):
        user = User(email='nameless@example.com', name='')
        self.assertEqual(user.display_name, 'nameless@example.com')


class LoginTests(APITestCase):

    def setUp(self):
        cache.clear()
        self.client = APIClient()
        self.user = User.objects.create_user(
            email='client@test.com', password='testpass123', name='Juan'
        )

    def test_login_returns_token_pair(self):
        response = self.client.post(
            '/api/auth/login/',
            {'email': 'client@test.com', 'password': 'testpass123'},
            format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('access', response.data)
        self.assertIn('refresh', response.data)

    def test_login_with_wrong_password(self):
        response = self.client.post(
            '/api/auth/login/',
            {'email': 'client@test.com', 'password': 'wrong'},
            format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_access_token_authenticates_requests(self):
        login = self.client.post(
            '/api/auth/login/',
            {'email': 'client@test.com', 'password': 'testpass123'},
            format='json'
        )
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['access']}")

        response = self.client.get('/api/users/me/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['email'], 'client@test.com')


class UserProfileUpdateTests(APITestCase):
    """Profile data shown to the other party of an order"""

    def setUp(self):
        cache.clear()
        self.client = APIClient()
        self.user = User.objects.create_user(
            email='worker@test.com',
            password='testpass123',
            name='Carlos'
        )
        self.profile_url = '/api/users/me/'

    def test_get_profile(self):
        self.client.force_authenticate(user=self.user)
        response = self.client.get(self.profile_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['name'], 'Carlos')
        self.assertEqual(response.data['skills'], [])
        self.assertNotIn('password', response.data)

    def test_update_profile(self):
        self.client.force_authenticate(user=self.user)
        response = self.client.patch(
            self.profile_url,
            {
                'designation': 'Illustrator',
                'skills': [' logos ', 'branding', ''],
                'avatar': 'https://cdn.example.com/avatars/carlos.png'
            },
            format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.user.refresh_from_db()
        self.assertEqual(self.user.designation, 'Illustrator')
        self.assertEqual(self.user.skills, ['logos', 'branding'])

    def test_email_cannot_be_changed(self):
        self.client.force_authenticate(user=self.user)
        self.client.patch(self.profile_url, {'email': 'hacker@test.com'}, format='json')

        self.user.refresh_from_db()
        self.assertEqual(self.user.email, 'worker@test.com')

    def test_skills_must_be_strings(self):
        self.client.force_authenticate(user=self.user)
        response = self.client.patch(self.profile_url, {'skills': ['logos', 3]}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('skills', response.data)

    def test_profile_requires_authentication(self):
        response = self.client.get(self.profile_url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class PublicProfileTests(APITestCase):
    """Profiles other users open from a gig page"""

    def setUp(self):
        cache.clear()
        self.client = APIClient()
        self.user = User.objects.create_user(
            email='worker@test.com',
            password='testpass123',
            name='Carlos',
            designation='Illustrator'
        )

    def test_public_profile_is_readable_anonymously(self):
        response = self.client.get(f'/api/users/{self.user.id}/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {
            'id': self.user.id,
            'name': 'Carlos',
            'avatar': '',
            'designation': 'Illustrator',
        })

    def test_private_fields_are_not_exposed(self):
        response = self.client.get(f'/api/users/{self.user.id}/')

        for field in ('email', 'skills', 'password'):
            self.assertNotIn(field, response.data)

    def test_unknown_or_inactive_user_is_not_found(self):
        self.user.is_active = False
        self.user.save(update_fields=['is_active'])

        self.assertEqual(
            self.client.get(f'/api/users/{self.user.id}/').status_code,
            status.HTTP_404_NOT_FOUND
        )
        self.assertEqual(
            self.client.get(f'/api/users/{self.user.id + 100}/').status_code,
            status.HTTP_404_NOT_FOUND
        )
