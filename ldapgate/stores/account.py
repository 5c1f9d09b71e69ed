################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: ldapgate.stores.account
# Contains the Django backed Account Store

# ---------------------------------- IMPORTS --------------------------------- #
from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from django.db import transaction
from typing import Mapping
from ldapgate.models.account import Account
import logging
################################################################################

logger = logging.getLogger(__name__)


class DjangoAccountStore:
	def __init__(self, provider_name: str = None, provider_settings: Mapping = None):
		self.provider_name = provider_name
		provider_settings = provider_settings or {}
		self.create_accounts = bool(provider_settings.get("create_accounts", True))

	def find_active_account(self, identifier: str, provider_name: str) -> Account | None:
		return (
			Account.objects.active()
			.select_related("user")
			.filter(
				account_identifier=identifier,
				authentication_provider_name=provider_name,
			)
			.first()
		)

	def create_account(self, identifier: str, provider_name: str) -> Account | None:
		"""
		Returns None if new accounts may not be created for this provider, or
		if the username is already held by another user.
		"""
		if not self.create_accounts:
			logger.warning(
				"Account creation is disabled for provider %s, refusing %s.",
				provider_name,
				identifier,
			)
			return None
		existing = Account.objects.filter(
			account_identifier=identifier,
			authentication_provider_name=provider_name,
		).first()
		if existing is not None:
			logger.warning(
				"Account %s for provider %s exists but is %s.",
				identifier,
				provider_name,
				"expired" if existing.is_expired else "inactive",
			)
			return None

		User = get_user_model()
		with transaction.atomic():
			if User.objects.filter(**{User.USERNAME_FIELD: identifier}).exists():
				logger.warning(
					"User %s already exists, refusing account for provider %s.",
					identifier,
					provider_name,
				)
				return None
			user = User(**{User.USERNAME_FIELD: identifier})
			user.set_unusable_password()
			user.save()
			account = Account.objects.create(
				account_identifier=identifier,
				authentication_provider_name=provider_name,
				user=user,
			)
		logger.info("Created account %s for provider %s.", identifier, provider_name)
		return account

	def update_account(self, account: Account) -> None:
		"""Persists the account and mirrors its roles onto the user's groups"""
		with transaction.atomic():
			account.save()
			if account.user is not None:
				account.user.groups.set(
					Group.objects.filter(name__in=account.role_identifiers())
				)
