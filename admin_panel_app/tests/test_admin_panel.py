from unittest.mock import patch

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from ratings_app.models import Rating
from stores_app.models import Store
from user_auth_app.models import User


def make_user(email, role=User.Role.USER, name='Admin Panel Test Person', address=''):
    return User.objects.create_user(
        email=email, password='Secret@123', name=name, role=role, address=address
    )


# ====================================================================
# CLASS 1: Dashboard
# ====================================================================
class DashboardTests(APITestCase):
    """
    Test suite for `GET /api/admin/dashboard`.
    """

    def setUp(self):
        self.admin = make_user('admin@example.com', role=User.Role.ADMIN)
        self.user = make_user('user@example.com')
        self.store = Store.objects.create(name='Only Store', email='s@stores.com', address='Road')
        Rating.objects.create(user=self.user, store=self.store, rating=5)
        self.url = reverse('admin-dashboard')

    def test_admin_gets_counts(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            response.data, {'stats': {'totalUsers': 2, 'totalStores': 1, 'totalRatings': 1}}
        )

    def test_non_admin_is_forbidden(self):
        self.client.force_authenticate(user=self.user)
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_unauthenticated_is_rejected(self):
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


# ====================================================================
# CLASS 2: User management
# ====================================================================
class AdminUserTests(APITestCase):
    """
    Test suite for `/api/admin/users`.
    """

    def setUp(self):
        self.admin = make_user(
            'admin@example.com', role=User.Role.ADMIN, name='Zed The Administrator Person'
        )
        self.owner = make_user(
            'owner@example.com', role=User.Role.STORE_OWNER, name='Olivia Store Owner Person',
            address='12 Market Street'
        )
        self.user = make_user(
            'user@example.com', name='Bob Regular User Person', address='4 Quiet Lane'
        )
        self.client.force_authenticate(user=self.admin)
        self.list_url = reverse('admin-user-list')

    def detail_url(self, pk):
        return reverse('admin-user-detail', kwargs={'pk': pk})

    # --- Listing ---

    def test_list_is_sorted_by_name(self):
        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        names = [user['name'] for user in response.data['users']]
        self.assertEqual(names, sorted(names))
        self.assertEqual(len(names), 3)
        self.assertNotIn('password', response.data['users'][0])

    def test_filter_by_role(self):
        response = self.client.get(self.list_url, {'role': 'store_owner'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([user['email'] for user in response.data['users']], ['owner@example.com'])

    def test_unknown_role_filter_is_rejected(self):
        response = self.client.get(self.list_url, {'role': 'superhero'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_search_matches_address(self):
        response = self.client.get(self.list_url, {'search': 'market'})
        self.assertEqual([user['email'] for user in response.data['users']], ['owner@example.com'])

    def test_sort_by_email_desc(self):
        response = self.client.get(self.list_url, {'sortBy': 'email', 'sortOrder': 'desc'})
        emails = [user['email'] for user in response.data['users']]
        self.assertEqual(emails, ['user@example.com', 'owner@example.com', 'admin@example.com'])

    def test_non_admin_cannot_list_users(self):
        self.client.force_authenticate(user=self.owner)
        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    # --- Create ---

    def test_create_user_with_role(self):
        payload = {
            'name': 'A Newly Created Store Owner',
            'email': 'new.owner@example.com',
            'password': 'Secret@123',
            'address': '1 New Road',
            'role': 'store_owner',
        }
        response = self.client.post(self.list_url, payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['user']['role'], 'store_owner')

        created = User.objects.get(email='new.owner@example.com')
        self.assertNotEqual(created.password, 'Secret@123')
        self.assertTrue(created.check_password('Secret@123'))

    def test_create_with_duplicate_email_conflicts(self):
        payload = {
            'name': 'Somebody With A Long Name',
            'email': 'user@example.com',
            'password': 'Secret@123',
        }
        response = self.client.post(self.list_url, payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(User.objects.filter(email='user@example.com').count(), 1)

    def test_create_with_invalid_fields_is_rejected(self):
        payload = {
            'name': 'Short',
            'email': 'not-an-email',
            'password': 'weak',
            'role': 'emperor',
        }
        response = self.client.post(self.list_url, payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        for field in ('name', 'email', 'password', 'role'):
            self.assertIn(field, response.data)

    # --- Detail ---

    def test_store_owner_detail_includes_average_of_owned_stores(self):
        store_a = Store.objects.create(
            name='Owned A', email='a@stores.com', address='A Road', owner=self.owner
        )
        store_b = Store.objects.create(
            name='Owned B', email='b@stores.com', address='B Road', owner=self.owner
        )
        Rating.objects.create(user=self.user, store=store_a, rating=5)
        Rating.objects.create(user=self.admin, store=store_a, rating=4)
        Rating.objects.create(user=self.user, store=store_b, rating=3)

        response = self.client.get(self.detail_url(self.owner.pk))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['user']['email'], 'owner@example.com')
        self.assertEqual(response.data['user']['average_rating'], '4.0')

    def test_store_owner_without_ratings_reports_zero_average(self):
        response = self.client.get(self.detail_url(self.owner.pk))
        self.assertEqual(response.data['user']['average_rating'], '0.0')

    def test_other_roles_have_no_average(self):
        response = self.client.get(self.detail_url(self.user.pk))
        self.assertIsNone(response.data['user']['average_rating'])

    def test_missing_user_returns_404(self):
        response = self.client.get(self.detail_url(9999))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    # --- Update ---

    def test_update_user_role_and_keep_own_email(self):
        response = self.client.patch(
            self.detail_url(self.user.pk),
            {'role': 'store_owner', 'email': 'user@example.com'},
            format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.user.refresh_from_db()
        self.assertEqual(self.user.role, User.Role.STORE_OWNER)

    def test_update_to_taken_email_conflicts(self):
        response = self.client.patch(
            self.detail_url(self.user.pk), {'email': 'owner@example.com'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_update_cannot_change_password(self):
        response = self.client.patch(
            self.detail_url(self.user.pk), {'password': 'Another#987'}, format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password('Secret@123'))

    def test_store_owner_with_stores_cannot_be_demoted(self):
        store = Store.objects.create(
            name='Kept Store', email='kept@stores.com', address='K Road', owner=self.owner
        )

        response = self.client.patch(
            self.detail_url(self.owner.pk), {'role': 'user'}, format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('role', response.data)
        self.owner.refresh_from_db()
        store.refresh_from_db()
        self.assertEqual(self.owner.role, User.Role.STORE_OWNER)
        self.assertEqual(store.owner.role, User.Role.STORE_OWNER)

    def test_store_owner_without_stores_can_be_demoted(self):
        response = self.client.patch(
            self.detail_url(self.owner.pk), {'role': 'user'}, format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.owner.refresh_from_db()
        self.assertEqual(self.owner.role, User.Role.USER)

    def test_duplicate_email_caught_by_database_conflicts(self):
        """
        When two creates pass the email check at the same time, the unique constraint rejects the
        second insert and the response is still 409.
        """
        payload = {
            'name': 'Somebody With A Long Name',
            'email': 'user@example.com',
            'password': 'Secret@123',
        }
        with patch(
            'user_auth_app.api.serializers.ensure_email_available',
            side_effect=lambda queryset, email, *args, **kwargs: email,
        ):
            response = self.client.post(self.list_url, payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(User.objects.filter(email='user@example.com').count(), 1)

    # --- Delete ---

    def test_delete_user_removes_their_ratings(self):
        store = Store.objects.create(name='Some Store', email='x@stores.com', address='X Road')
        Rating.objects.create(user=self.user, store=store, rating=2)

        response = self.client.delete(self.detail_url(self.user.pk))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(User.objects.filter(pk=self.user.pk).exists())
        self.assertFalse(Rating.objects.filter(store=store).exists())

    def test_delete_missing_user_returns_404(self):
        response = self.client.delete(self.detail_url(9999))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


# ====================================================================
# CLASS 3: Store management
# ====================================================================
class AdminStoreTests(APITestCase):
    """
    Test suite for `/api/admin/stores`.
    """

    def setUp(self):
        self.admin = make_user('admin@example.com', role=User.Role.ADMIN)
        self.owner = make_user(
            'owner@example.com', role=User.Role.STORE_OWNER, name='Olivia Store Owner Person'
        )
        self.store = Store.objects.create(
            name='Owned Store', email='owned@stores.com', address='1 Road', owner=self.owner
        )
        Store.objects.create(name='Free Store', email='free@stores.com', address='2 Road')
        Rating.objects.create(user=self.admin, store=self.store, rating=3)
        self.list_url = reverse('admin-store-list')

    def test_listing_includes_owner_and_aggregates(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        stores = {store['name']: store for store in response.data['stores']}
        self.assertEqual(stores['Owned Store']['owner_id'], self.owner.pk)
        self.assertEqual(stores['Owned Store']['owner_name'], 'Olivia Store Owner Person')
        self.assertEqual(stores['Owned Store']['average_rating'], '3.0')
        self.assertEqual(stores['Owned Store']['total_ratings'], 1)
        self.assertIsNone(stores['Free Store']['owner_id'])
        self.assertIsNone(stores['Free Store']['owner_name'])

    def test_store_owner_cannot_use_admin_listing(self):
        self.client.force_authenticate(user=self.owner)
        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_creates_store(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(self.list_url, {
            'name': 'Brand New Store',
            'email': 'brand.new@stores.com',
            'address': '3 Road',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(Store.objects.filter(email='brand.new@stores.com').exists())

    def test_admin_deletes_store(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.delete(
            reverse('admin-store-detail', kwargs={'pk': self.store.pk})
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(Store.objects.filter(pk=self.store.pk).exists())
        self.assertFalse(Rating.objects.exists())
