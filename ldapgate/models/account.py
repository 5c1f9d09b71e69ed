################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: ldapgate.models.account
# Contains the Model for directory authenticated Accounts
#
# --------------------------------- IMPORTS ---------------------------------- #
from django.conf import settings
from django.contrib.auth.hashers import make_password, check_password
from django.db import models
from django.utils import timezone as tz
from django.utils.translation import gettext_lazy as _

from ldapgate.models.base import BaseModel
from ldapgate.auth.types import AuthStatus
# ---------------------------------------------------------------------------- #


class AccountManager(models.Manager):
	def active(self):
		"""Active accounts that have not expired yet"""
		return self.get_queryset().filter(
			models.Q(expiration_date__isnull=True)
			| models.Q(expiration_date__gt=tz.now()),
			is_active=True,
		)


class Account(BaseModel):
	objects = AccountManager()

	id = models.BigAutoField(primary_key=True)
	account_identifier = models.CharField(_("Account identifier"), max_length=255)
	authentication_provider_name = models.CharField(
		_("Authentication provider"), max_length=128
	)
	dn = models.CharField(_("distinguishedName"), max_length=512, null=True, blank=True)
	roles = models.JSONField(_("Roles"), default=list, blank=True)
	# One-way verifier, only set when stand-in authentication is enabled
	credentials_source = models.CharField(
		_("Credentials verifier"), max_length=256, null=True, blank=True
	)
	is_active = models.BooleanField(_("Active"), default=True)
	expiration_date = models.DateTimeField(_("Expiration date"), null=True, blank=True)
	failed_authentication_count = models.PositiveIntegerField(default=0)
	last_successful_authentication_date = models.DateTimeField(null=True, blank=True)
	user = models.OneToOneField(
		settings.AUTH_USER_MODEL,
		on_delete=models.CASCADE,
		null=True,
		blank=True,
		related_name="ldap_account",
	)

	class Meta:
		verbose_name = _("Account")
		verbose_name_plural = _("Accounts")
		constraints = [
			models.UniqueConstraint(
				fields=["account_identifier", "authentication_provider_name"],
				name="account_identifier_provider_unique",
			)
		]

	def __str__(self):
		return f"{self.account_identifier} ({self.authentication_provider_name})"

	@property
	def is_expired(self) -> bool:
		return self.expiration_date is not None and self.expiration_date <= tz.now()

	def set_roles(self, roles: list[str]) -> None:
		"""Replaces every role of the account"""
		self.roles = list(dict.fromkeys(roles))

	def role_identifiers(self) -> list[str]:
		return list(self.roles or [])

	def set_credentials_verifier(self, raw_password: str) -> None:
		self.credentials_source = make_password(raw_password)

	def check_credentials_verifier(self, raw_password: str) -> bool:
		if not self.credentials_source or not raw_password:
			return False
		return check_password(raw_password, self.credentials_source)

	def authentication_attempted(self, status: AuthStatus) -> None:
		if status == AuthStatus.AUTHENTICATION_SUCCESSFUL:
			self.last_successful_authentication_date = tz.now()
			self.failed_authentication_count = 0
		elif status == AuthStatus.WRONG_CREDENTIALS:
			self.failed_authentication_count += 1
		else:
			raise ValueError(f"Invalid authentication status {status}.")
