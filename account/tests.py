import importlib
import os
from unittest import mock

from django.test import TestCase
from rest_framework.test import APITestCase
from rest_framework import status

from .models import Profile, User
from .services.emails import EmailService


class UserModelTest(TestCase):
    """Test User and Profile models"""

    def test_create_user_uses_email_as_username(self):
        user = User.objects.create_user(email='Ada@Example.com', password='testpass123')
        self.assertEqual(user.username, 'Ada@example.com')
        self.assertTrue(user.check_password('testpass123'))
        self.assertFalse(user.is_onboarded)

    def test_create_user_requires_email(self):
        with self.assertRaises(ValueError):
            User.objects.create_user(email='', password='testpass123')

    def test_profile_display_name(self):
        user = User.objects.create_user(email='ada@example.com', password='testpass123')
        profile = Profile.objects.create(
            user=user, user_type='business',
            full_name='Ada Obi', business_name='Ada Fabrics'
        )
        self.assertTrue(user.is_onboarded)
        self.assertEqual(profile.display_name, 'Ada Fabrics')


class RegistrationAPITest(APITestCase):
    """Test registration and login"""

    def test_register(self):
        """Test that registration returns the user and JWT tokens"""
        response = self.client.post('/api/auth/register/', {
            'email': 'Ada@Example.com',
            'password': 'SecurePass123',
            'password_confirm': 'SecurePass123',
            'first_name': 'Ada',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['user']['email'], 'ada@example.com')
        self.assertFalse(response.data['user']['is_onboarded'])
        self.assertIn('access', response.data['tokens'])
        self.assertIn('refresh', response.data['tokens'])

    def test_register_duplicate_email(self):
        User.objects.create_user(email='ada@example.com', password='testpass123')
        response = self.client.post('/api/auth/register/', {
            'email': 'ada@example.com',
            'password': 'SecurePass123',
            'password_confirm': 'SecurePass123',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('email', response.data)

    def test_register_password_mismatch(self):
        response = self.client.post('/api/auth/register/', {
            'email': 'ada@example.com',
            'password': 'SecurePass123',
            'password_confirm': 'SecurePass124',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('password', response.data)

    def test_login(self):
        """Test that the access token authenticates later requests"""
        User.objects.create_user(email='ada@example.com', password='testpass123')

        response = self.client.post('/api/auth/login/', {
            'email': 'ada@example.com',
            'password': 'testpass123',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access']}")
        response = self.client.get('/api/auth/me/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['email'], 'ada@example.com')

    def test_login_wrong_password(self):
        User.objects.create_user(email='ada@example.com', password='testpass123')
        response = self.client.post('/api/auth/login/', {
            'email': 'ada@example.com',
            'password': 'wrongpass',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class OnboardingAPITest(APITestCase):
    """Test onboarding and profile endpoints"""

    def setUp(self):
        self.user = User.objects.create_user(
            email='test@example.com',
            password='testpass123'
        )
        self.client.force_authenticate(user=self.user)

    def test_onboard_individual(self):
        response = self.client.post('/api/auth/onboarding/', {
            'user_type': 'individual',
            'full_name': '  Ada Obi ',
            'business_name': 'Ignored Ltd',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['full_name'], 'Ada Obi')
        self.assertIsNone(response.data['business_name'])
        self.assertEqual(Profile.objects.get(user=self.user).user_type, 'individual')

    def test_onboard_business_requires_name(self):
        response = self.client.post('/api/auth/onboarding/', {
            'user_type': 'business',
            'full_name': 'Ada Obi',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('business_name', response.data)

    def test_onboard_business(self):
        response = self.client.post('/api/auth/onboarding/', {
            'user_type': 'business',
            'full_name': 'Ada Obi',
            'business_name': 'Ada Fabrics',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['display_name'], 'Ada Fabrics')

    def test_onboard_invalid_type(self):
        response = self.client.post('/api/auth/onboarding/', {
            'user_type': 'cooperative',
            'full_name': 'Ada Obi',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('user_type', response.data)

    def test_onboard_twice(self):
        Profile.objects.create(user=self.user, user_type='individual', full_name='Ada Obi')
        response = self.client.post('/api/auth/onboarding/', {
            'user_type': 'business',
            'full_name': 'Ada Obi',
            'business_name': 'Ada Fabrics',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_profile_before_onboarding(self):
        response = self.client.get('/api/auth/profile/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertTrue(response.data['onboarding_required'])

    def test_profile_update(self):
        Profile.objects.create(user=self.user, user_type='individual', full_name='Ada Obi')

        response = self.client.get('/api/auth/profile/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['user_type'], 'individual')

        # Switching to business without a name is rejected
        response = self.client.patch('/api/auth/profile/', {'user_type': 'business'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.patch('/api/auth/profile/', {
            'user_type': 'business',
            'business_name': 'Ada Fabrics',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(Profile.objects.get(user=self.user).user_type, 'business')


class ChangePasswordAPITest(APITestCase):

    def setUp(self):
        self.user = User.objects.create_user(
            email='test@example.com',
            password='testpass123'
        )
        self.client.force_authenticate(user=self.user)

    def test_change_password(self):
        response = self.client.post('/api/auth/change-password/', {
            'old_password': 'testpass123',
            'new_password': 'N3w-Secure-Pass!',
            'new_password_confirm': 'N3w-Secure-Pass!',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password('N3w-Secure-Pass!'))

    def test_wrong_old_password(self):
        response = self.client.post('/api/auth/change-password/', {
            'old_password': 'notmypassword',
            'new_password': 'N3w-Secure-Pass!',
            'new_password_confirm': 'N3w-Secure-Pass!',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['status'], 'error')
        self.assertEqual(response.data['message'], 'Old password is incorrect.')

    def test_new_passwords_must_match(self):
        response = self.client.post('/api/auth/change-password/', {
            'old_password': 'testpass123',
            'new_password': 'N3w-Secure-Pass!',
            'new_password_confirm': 'Different-Pass!9',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['message'], 'New passwords do not match.')


class EmailServiceTest(TestCase):

    def test_send_without_api_key(self):
        with self.settings(RESEND_API_KEY=''):
            self.assertFalse(EmailService.send('ada@example.com', 'Hi', '<p>Hi</p>'))

    @mock.patch('account.services.emails.resend.Emails.send')
    def test_send(self, mocked_send):
        mocked_send.return_value = {'id': 'email_123'}
        with self.settings(RESEND_API_KEY='re_test'):
            self.assertTrue(EmailService.send('ada@example.com', 'Hi', '<p>Hi</p>'))
        mocked_send.assert_called_once()

    @mock.patch('account.services.emails.resend.Emails.send', side_effect=Exception('boom'))
    def test_send_failure(self, mocked_send):
        with self.settings(RESEND_API_KEY='re_test'):
            self.assertFalse(EmailService.send('ada@example.com', 'Hi', '<p>Hi</p>'))


class SettingsTest(TestCase):

    def test_debug_is_off_by_default(self):
        from taxbuddy import settings as project_settings

        env = {k: v for k, v in os.environ.items() if k != 'DJANGO_DEBUG'}
        with mock.patch.dict(os.environ, env, clear=True):
            self.assertFalse(importlib.reload(project_settings).DEBUG)
        with mock.patch.dict(os.environ, {'DJANGO_DEBUG': 'true'}):
            self.assertTrue(importlib.reload(project_settings).DEBUG)
        importlib.reload(project_settings)
