from django.urls import reverse
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.test import APITestCase

from ratings_app.models import Rating
from stores_app.models import Store
from user_auth_app.models import User


class MyStoresTests(APITestCase):
    """
    Test suite for `GET /api/users/my-stores`.
    """

    def setUp(self):
        self.owner = User.objects.create_user(
            email='owner@example.com', password='Secret@123',
            name='Store Owner With Long Name', role=User.Role.STORE_OWNER
        )
        self.user = User.objects.create_user(
            email='user@example.com', password='Secret@123', name='Normal User With Long Name'
        )
        self.store_b = Store.objects.create(
            name='B Store', email='b@stores.com', address='2 Road', owner=self.owner
        )
        self.store_a = Store.objects.create(
            name='A Store', email='a@stores.com', address='1 Road', owner=self.owner
        )
        Store.objects.create(name='Foreign Store', email='f@stores.com', address='3 Road')
        Rating.objects.create(user=self.user, store=self.store_a, rating=2)

        self.url = reverse('my-stores')

    def test_owner_sees_only_own_stores_sorted_by_name(self):
        self.client.force_authenticate(user=self.owner)
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        stores = response.data['stores']
        self.assertEqual([store['name'] for store in stores], ['A Store', 'B Store'])
        self.assertEqual(stores[0]['average_rating'], '2.0')
        self.assertEqual(stores[0]['total_ratings'], 1)
        self.assertEqual(stores[1]['average_rating'], '0.0')
        self.assertNotIn('user_rating', stores[0])

    def test_normal_user_is_forbidden(self):
        self.client.force_authenticate(user=self.user)
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class MyRatingsTests(APITestCase):
    """
    Test suite for `GET /api/users/my-ratings`.
    """

    def setUp(self):
        self.user = User.objects.create_user(
            email='user@example.com', password='Secret@123', name='Normal User With Long Name'
        )
        self.other = User.objects.create_user(
            email='other@example.com', password='Secret@123', name='Another User With Long Name'
        )
        self.store = Store.objects.create(name='Rated', email='r@stores.com', address='Road 9')
        Rating.objects.create(user=self.user, store=self.store, rating=4)
        Rating.objects.create(user=self.other, store=self.store, rating=1)
        self.client.force_authenticate(user=self.user)

    def test_lists_only_own_ratings_with_store_details(self):
        response = self.client.get(reverse('my-ratings'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        ratings = response.data['ratings']
        self.assertEqual(len(ratings), 1)
        self.assertEqual(ratings[0]['rating'], 4)
        self.assertEqual(ratings[0]['store_id'], self.store.pk)
        self.assertEqual(ratings[0]['store_name'], 'Rated')
        self.assertEqual(ratings[0]['store_address'], 'Road 9')


class ProfileUpdateTests(APITestCase):
    """
    Test suite for `PUT /api/users/profile`.
    """

    def setUp(self):
        self.user = User.objects.create_user(
            email='user@example.com', password='Secret@123',
            name='Normal User With Long Name', address='Old Address 1'
        )
        self.client.force_authenticate(user=self.user)
        self.url = reverse('profile-update')

    def test_update_name_only_keeps_address(self):
        response = self.client.put(self.url, {'name': 'A Completely New Long Name'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['user']['name'], 'A Completely New Long Name')
        self.user.refresh_from_db()
        self.assertEqual(self.user.name, 'A Completely New Long Name')
        self.assertEqual(self.user.address, 'Old Address 1')

    def test_update_address(self):
        response = self.client.put(self.url, {'address': 'New Address 22'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.user.refresh_from_db()
        self.assertEqual(self.user.address, 'New Address 22')

    def test_short_name_is_rejected(self):
        response = self.client.put(self.url, {'name': 'Too Short'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('name', response.data)

    def test_long_address_is_rejected(self):
        response = self.client.put(self.url, {'address': 'x' * 401}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_empty_body_is_rejected(self):
        response = self.client.put(self.url, {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_email_and_role_cannot_be_changed(self):
        response = self.client.put(self.url, {
            'address': 'Somewhere Else 5',
            'email': 'changed@example.com',
            'role': 'admin',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.user.refresh_from_db()
        self.assertEqual(self.user.email, 'user@example.com')
        self.assertEqual(self.user.role, User.Role.USER)


class PasswordChangeTests(APITestCase):
    """
    Test suite for `PUT /api/users/password`.

    Uses real bearer tokens so that token rotation can be observed.
    """

    def setUp(self):
        self.user = User.objects.create_user(
            email='user@example.com', password='Secret@123', name='Normal User With Long Name'
        )
        self.token = Token.objects.create(user=self.user)
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {self.token.key}')
        self.url = reverse('password-change')

    def test_change_password_rotates_token(self):
        response = self.client.put(self.url, {
            'currentPassword': 'Secret@123',
            'newPassword': 'Changed#456',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password('Changed#456'))

        new_key = response.data['token']
        self.assertNotEqual(new_key, self.token.key)
        self.assertFalse(Token.objects.filter(key=self.token.key).exists())

        # The old token no longer authenticates, the new one does.
        response = self.client.get(reverse('current-user'))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {new_key}')
        response = self.client.get(reverse('current-user'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_wrong_current_password_is_rejected(self):
        response = self.client.put(self.url, {
            'currentPassword': 'Wrong@123',
            'newPassword': 'Changed#456',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password('Secret@123'))

    def test_weak_new_password_is_rejected(self):
        response = self.client.put(self.url, {
            'currentPassword': 'Secret@123',
            'newPassword': 'alllowercase1',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('newPassword', response.data)
