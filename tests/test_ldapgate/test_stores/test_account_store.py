########################### Standard Pytest Imports ############################
import pytest
################################################################################
from datetime import timedelta
from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from django.utils import timezone as tz
from ldapgate.models import Account
from ldapgate.stores.account import DjangoAccountStore

User = get_user_model()


@pytest.fixture
def f_account_store() -> DjangoAccountStore:
	return DjangoAccountStore("test", {"create_accounts": True})


@pytest.mark.django_db
class TestDjangoAccountStore:
	@staticmethod
	def test_create_account(f_account_store: DjangoAccountStore):
		account = f_account_store.create_account("alice", "test")
		assert account.pk
		assert account.user.username == "alice"
		assert not account.user.has_usable_password()
		assert f_account_store.find_active_account("alice", "test") == account

	@staticmethod
	def test_create_account_refuses_existing_user(f_account_store: DjangoAccountStore):
		admins = Group.objects.create(name="LocalAdmins")
		user = User.objects.create_user(username="admin", password="localpw")
		user.groups.add(admins)

		assert f_account_store.create_account("admin", "test") is None
		assert not Account.objects.exists()
		user.refresh_from_db()
		assert user.check_password("localpw")
		assert list(user.groups.all()) == [admins]

	@staticmethod
	def test_create_account_same_identifier_other_provider(f_account_store: DjangoAccountStore):
		account = f_account_store.create_account("alice", "test")
		assert f_account_store.create_account("alice", "other") is None
		assert Account.objects.get() == account
		assert User.objects.filter(username="alice").count() == 1

	@staticmethod
	def test_create_account_disabled():
		store = DjangoAccountStore("test", {"create_accounts": False})
		assert store.create_account("alice", "test") is None
		assert not Account.objects.exists()

	@staticmethod
	def test_create_account_refuses_inactive(f_account_store: DjangoAccountStore):
		Account.objects.create(
			account_identifier="alice",
			authentication_provider_name="test",
			is_active=False,
		)
		assert f_account_store.find_active_account("alice", "test") is None
		assert f_account_store.create_account("alice", "test") is None

	@staticmethod
	def test_create_account_refuses_expired(f_account_store: DjangoAccountStore):
		Account.objects.create(
			account_identifier="alice",
			authentication_provider_name="test",
			expiration_date=tz.now() - timedelta(days=1),
		)
		assert f_account_store.find_active_account("alice", "test") is None
		assert f_account_store.create_account("alice", "test") is None

	@staticmethod
	def test_find_active_account_by_provider(f_account_store: DjangoAccountStore):
		f_account_store.create_account("alice", "test")
		assert f_account_store.find_active_account("alice", "other") is None

	@staticmethod
	def test_update_account_syncs_groups(f_account_store: DjangoAccountStore):
		editor = Group.objects.create(name="Editor")
		admin = Group.objects.create(name="Admin")
		account = f_account_store.create_account("alice", "test")

		account.set_roles(["Editor", "Admin", "Missing"])
		f_account_store.update_account(account)
		assert set(account.user.groups.all()) == {editor, admin}

		account.set_roles(["Editor"])
		f_account_store.update_account(account)
		assert list(account.user.groups.all()) == [editor]
		account.refresh_from_db()
		assert account.roles == ["Editor"]
