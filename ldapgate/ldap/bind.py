################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: ldapgate.ldap.bind
# Contains:
# - Bind Strategies for plain LDAP and Active Directory servers
# - Bind Strategy selection by connection type

# ---------------------------------- IMPORTS --------------------------------- #
from abc import ABC, abstractmethod
import ldap3
from ldap3.core.exceptions import (
	LDAPException,
	LDAPCommunicationError,
	LDAPStartTLSError,
	LDAPInvalidCredentialsResult,
	LDAPBindError,
)
from ldapgate.config.options import ConnectionOptions
from ldapgate.ldap.constants import ConnectionType, BindMode
from ldapgate.ldap.filter import format_dn, has_placeholder
from ldapgate.exceptions import ldap as exc_ldap
import logging
################################################################################

logger = logging.getLogger(__name__)


class BindStrategy(ABC):
	"""
	Binds an already open ldap3 Connection.

	With user credentials the strategy binds as the user. Without them it
	falls back to the configured service account, then to an anonymous
	bind if the settings permit one.
	"""

	connection_type: ConnectionType = None

	def __init__(self, connection: ldap3.Connection, options: ConnectionOptions):
		self.connection = connection
		self.options = options

	def bind(self, username: str = None, password: str = None) -> None:
		if username and password:
			self.bind_with_credentials(username, password)
		elif self.options.bind_password is not None:
			self.bind_with_dn(self.options.bind_dn, self.options.bind_password)
		elif self.options.bind_mode == BindMode.ANONYMOUS:
			self.bind_anonymously()
		else:
			raise exc_ldap.NoBindStrategyApplicable

	@abstractmethod
	def bind_with_credentials(self, username: str, password: str) -> None: ...

	def verify_credentials(self, dn: str, password: str) -> None:
		"""Re-bind as a located user to confirm their password."""
		if not dn or not password:
			# An empty password would be an unauthenticated bind
			raise exc_ldap.InvalidCredentials(
				data={"message": f'Could not verify credentials for dn: "{dn}"'}
			)
		try:
			self.bind_with_dn(dn, password)
		except exc_ldap.InvalidCredentials as ex:
			raise exc_ldap.InvalidCredentials(
				data={"message": f'Could not verify credentials for dn: "{dn}"'}
			) from ex

	def filter_username(self, username: str) -> str:
		"""Username as used in directory search filters"""
		return username

	def bind_with_dn(self, user: str, password: str) -> None:
		self._rebind(
			user=user,
			password=password,
			authentication=ldap3.SIMPLE,
		)

	def bind_anonymously(self) -> None:
		self._rebind(authentication=ldap3.ANONYMOUS)

	def _rebind(self, **kwargs) -> None:
		user = kwargs.get("user")
		try:
			result = self.connection.rebind(read_server_info=False, **kwargs)
		except (LDAPCommunicationError, LDAPStartTLSError) as ex:
			raise exc_ldap.ConnectError(
				data={"message": f"LDAP connection lost during bind: {ex}"}
			) from ex
		except (LDAPInvalidCredentialsResult, LDAPBindError) as ex:
			raise exc_ldap.InvalidCredentials(
				data={"message": f"LDAP bind rejected for {user or 'anonymous'}: {ex}"}
			) from ex
		except LDAPException as ex:
			raise exc_ldap.BindError(
				data={"message": f"Could not bind to LDAP server. Error was: {ex}"}
			) from ex
		if not result:
			raise exc_ldap.InvalidCredentials(
				data={"message": f"LDAP bind rejected for {user or 'anonymous'}."}
			)
		logger.debug("LDAP bind for %s succeeded", user or "anonymous")


class PlainBind(BindStrategy):
	"""Bind to an OpenLDAP-like server with a DN template"""

	connection_type = ConnectionType.PLAIN

	def bind_with_credentials(self, username: str, password: str) -> None:
		template = self.options.direct_bind_template
		if not has_placeholder(template):
			raise exc_ldap.NoBindStrategyApplicable(
				data={"message": "No DN template available for a direct user bind."}
			)
		self.bind_with_dn(format_dn(template, username), password)


class ActiveDirectoryBind(BindStrategy):
	"""Bind to an Active Directory server, optionally prefixing a domain"""

	connection_type = ConnectionType.ACTIVE_DIRECTORY

	def normalize_username(self, username: str) -> str:
		domain = self.options.domain
		suffix = self.options.username_suffix
		if domain and "\\" not in username:
			username = f"{domain}\\{username}"
		if suffix and "@" not in username:
			username = f"{username}@{suffix}"
		return username

	def bind_with_credentials(self, username: str, password: str) -> None:
		self.bind_with_dn(self.normalize_username(username), password)

	def filter_username(self, username: str) -> str:
		if not self.options.domain or not self.options.ignore_domain:
			# Backslashes are escaped once the value reaches the filter
			return username
		return username.split("\\")[-1]


BIND_STRATEGIES: dict[ConnectionType, type[BindStrategy]] = {
	PlainBind.connection_type: PlainBind,
	ActiveDirectoryBind.connection_type: ActiveDirectoryBind,
}


def get_bind_strategy_class(connection_type: ConnectionType) -> type[BindStrategy]:
	try:
		return BIND_STRATEGIES[connection_type]
	except KeyError:
		raise exc_ldap.UnknownBindStrategy(
			data={"message": f"No Bind Strategy for connection type {connection_type}."}
		)
