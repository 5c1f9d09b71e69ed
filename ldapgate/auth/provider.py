################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: ldapgate.auth.provider
# Contains:
# - LDAP Authentication Provider, orchestrating directory authentication,
#   account resolution, role mapping and stand-in authentication.

# ---------------------------------- IMPORTS --------------------------------- #
from django_python3_ldap.utils import import_func
from typing import Mapping
from ldapgate.auth.types import AuthOutcome, AuthStatus, UsernamePasswordToken
from ldapgate.config.options import ConnectionOptions
from ldapgate.config.settings import get_default_provider_name, get_provider_settings
from ldapgate.exceptions import ldap as exc_ldap
from ldapgate.exceptions.auth import UnsupportedTokenError
from ldapgate.exceptions.settings import ConfigurationError
from ldapgate.ldap.client import DirectoryClient
from ldapgate.ldap.types.entry import DirectoryEntry
from ldapgate.roles.mapping import RoleMapper, RoleMappingConfig
from ldapgate.type_hints.collaborators import (
	AccountProtocol,
	AccountStore,
	ProfileStore,
	RoleRegistry,
)
import logging
################################################################################

logger = logging.getLogger(__name__)


class LdapProvider:
	"""
	Authenticates username and password tokens against one configured
	directory server.

	Every call to authenticate uses a new Directory Client and makes one
	connect, bind and search attempt. Directory errors are turned into an
	AuthOutcome here; only configuration errors reach the caller.
	"""

	def __init__(self, name: str, provider_settings: Mapping):
		self.name = name
		self.settings = provider_settings
		self.options = ConnectionOptions.from_settings(provider_settings)
		self.role_mapping = RoleMappingConfig.from_settings(provider_settings.get("roles"))
		self.allow_standin_authentication = bool(
			provider_settings.get("allow_standin_authentication", False)
		)
		self.account_store: AccountStore = self._load_collaborator("account_store", required=True)
		self.role_registry: RoleRegistry | None = self._load_collaborator("role_registry")
		self.profile_store: ProfileStore | None = self._load_collaborator("profile_store")

	@classmethod
	def from_settings(cls, name: str = None) -> "LdapProvider":
		if name is None:
			name = get_default_provider_name()
		return cls(name, get_provider_settings(name))

	def _load_collaborator(self, key: str, required=False):
		path = self.settings.get(key)
		if not path:
			if required:
				raise ConfigurationError(
					data={"message": f"LDAP Provider {self.name} requires {key}."}
				)
			return None
		try:
			factory = import_func(path)
		except (ImportError, AttributeError) as ex:
			raise ConfigurationError(
				data={"message": f"Could not import {key} ({path}) for LDAP Provider {self.name}."}
			) from ex
		return factory(self.name, self.settings)

	def get_client(self) -> DirectoryClient:
		return DirectoryClient(self.options)

	def get_role_mapper(self) -> RoleMapper:
		return RoleMapper(self.role_mapping, self.role_registry)

	def authenticate(self, token: UsernamePasswordToken) -> AuthOutcome:
		if not isinstance(token, UsernamePasswordToken):
			raise UnsupportedTokenError(
				data={"message": f"LDAP Provider {self.name} cannot authenticate {type(token).__name__}."}
			)
		if not token.has_credentials:
			return AuthOutcome(status=AuthStatus.NO_CREDENTIALS_GIVEN)

		username = token.username
		with self.get_client() as client:
			if not client.is_server_online():
				return self._authenticate_standin(token)

			try:
				entry = client.authenticate_user(username, token.password)
			except ConfigurationError:
				raise
			except exc_ldap.ConnectError as ex:
				logger.error("LDAP Provider %s could not connect: %s", self.name, ex.message)
				return self._authenticate_standin(token)
			except (exc_ldap.UserNotFound, exc_ldap.BindError) as ex:
				logger.info("LDAP authentication for %s failed: %s", username, ex.message)
				return self._wrong_credentials(username)
			except exc_ldap.SearchError as ex:
				logger.error("LDAP user search for %s failed: %s", username, ex.message)
				return self._wrong_credentials(username)

			return self._authentication_successful(client, token, entry)

	def _authentication_successful(
		self,
		client: DirectoryClient,
		token: UsernamePasswordToken,
		entry: DirectoryEntry,
	) -> AuthOutcome:
		username = token.username
		account = self.account_store.find_active_account(username, self.name)
		is_new_account = account is None
		if is_new_account:
			account = self.account_store.create_account(username, self.name)
			if account is None:
				logger.warning(
					"LDAP user %s authenticated but no account could be created.", username
				)
				return AuthOutcome(status=AuthStatus.WRONG_CREDENTIALS, account_identifier=username)

		roles = self.get_role_mapper().evaluate(
			entry,
			group_dns=self._get_groups_of_user(client, entry),
			group_membership=self._get_group_membership(client, username),
		)
		account.set_roles(roles)
		if self.allow_standin_authentication:
			account.set_credentials_verifier(token.password)
		account.authentication_attempted(AuthStatus.AUTHENTICATION_SUCCESSFUL)
		self.account_store.update_account(account)

		if self.profile_store is not None:
			if is_new_account:
				self.profile_store.create_profile(account, entry)
			else:
				self.profile_store.update_profile(account, entry)

		logger.info("LDAP user %s authenticated with roles %s", username, roles)
		return AuthOutcome(
			status=AuthStatus.AUTHENTICATION_SUCCESSFUL,
			account_identifier=username,
			roles=tuple(roles),
			entry=entry,
			account=account,
		)

	def _get_groups_of_user(self, client: DirectoryClient, entry: DirectoryEntry) -> list[str]:
		try:
			return client.get_groups_of_user(entry.dn)
		except (exc_ldap.SearchError, exc_ldap.ConnectError) as ex:
			logger.error("LDAP group search for %s failed: %s", entry.dn, ex.message)
			return []

	def _get_group_membership(self, client: DirectoryClient, username: str) -> dict[str, str]:
		try:
			return client.get_group_membership(username)
		except (exc_ldap.SearchError, exc_ldap.ConnectError) as ex:
			logger.error("LDAP group membership search for %s failed: %s", username, ex.message)
			return {}

	def _record_attempt(self, account: AccountProtocol, status: AuthStatus) -> None:
		account.authentication_attempted(status)
		self.account_store.update_account(account)

	def _wrong_credentials(self, username: str) -> AuthOutcome:
		account = self.account_store.find_active_account(username, self.name)
		if account is not None:
			self._record_attempt(account, AuthStatus.WRONG_CREDENTIALS)
		return AuthOutcome(status=AuthStatus.WRONG_CREDENTIALS, account_identifier=username)

	def _authenticate_standin(self, token: UsernamePasswordToken) -> AuthOutcome:
		"""Verifies the token against the cached verifier of an existing account"""
		username = token.username
		if not self.allow_standin_authentication:
			logger.error(
				"LDAP server for provider %s is unavailable and stand-in authentication is disabled.",
				self.name,
			)
			return AuthOutcome(status=AuthStatus.WRONG_CREDENTIALS, account_identifier=username)

		account = self.account_store.find_active_account(username, self.name)
		if account is None:
			logger.warning("No account %s available for stand-in authentication.", username)
			return AuthOutcome(status=AuthStatus.WRONG_CREDENTIALS, account_identifier=username)

		if not account.check_credentials_verifier(token.password):
			logger.info("Stand-in authentication for %s failed.", username)
			self._record_attempt(account, AuthStatus.WRONG_CREDENTIALS)
			return AuthOutcome(status=AuthStatus.WRONG_CREDENTIALS, account_identifier=username)

		self._record_attempt(account, AuthStatus.AUTHENTICATION_SUCCESSFUL)
		logger.warning("LDAP user %s authenticated with stand-in credentials.", username)
		return AuthOutcome(
			status=AuthStatus.AUTHENTICATION_SUCCESSFUL,
			account_identifier=username,
			roles=tuple(account.role_identifiers()),
			account=account,
			standin=True,
		)


def get_provider(name: str = None) -> LdapProvider:
	return LdapProvider.from_settings(name)
