################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: ldapgate.ldap.client
# Contains:
# - Directory Client owning one LDAP connection per authentication attempt
# - User and group lookups

# ---------------------------------- IMPORTS --------------------------------- #
# LDAP
import ldap3
from ldap3.core.exceptions import (
	LDAPException,
	LDAPCommunicationError,
	LDAPStartTLSError,
	LDAPSizeLimitExceededResult,
	LDAPNoSuchObjectResult,
)
from ldapgate.ldap.bind import BindStrategy, get_bind_strategy_class
from ldapgate.ldap.constants import (
	BindMode,
	LDAP_CONNECTION_OPTIONS,
	LDAP_SEARCH_OPTIONS,
	LDAP_SERVER_OPTIONS,
	USER_SEARCH_SIZE_LIMIT,
)
from ldapgate.ldap.filter import format_filter, format_dn, has_placeholder
from ldapgate.ldap.types.entry import DirectoryEntry, entries_from_response
from ldapgate.config.options import ConnectionOptions
from ldapgate.exceptions import ldap as exc_ldap
from ldapgate.utils.network import net_port_test

# Libs
from enum import Enum
from uuid import uuid4
import logging
################################################################################

logger = logging.getLogger(__name__)


class ClientState(Enum):
	UNCONNECTED = "unconnected"
	CONNECTED = "connected"
	BOUND = "bound"


class DirectoryClient(object):
	"""
	Owns one connection to the directory server for the lifetime of a
	single authentication attempt. Not meant to be shared across attempts.
	"""

	connection: ldap3.Connection | None
	bind_strategy: BindStrategy | None
	log_debug_prefix = "[DEBUG - DirectoryClient] | "

	def __init__(self, options: ConnectionOptions):
		self.options = options
		self.uuid = uuid4()
		self.connection = None
		self.bind_strategy = None
		self.state = ClientState.UNCONNECTED

	def __enter__(self) -> "DirectoryClient":
		return self

	def __exit__(self, exc_type, exc_value, traceback) -> None:
		self.close()

	def __log_init__(self):
		logger.debug("%sHost: %s", self.log_debug_prefix, self.options.host)
		logger.debug("%sPort: %s", self.log_debug_prefix, self.options.port)
		logger.debug("%sType: %s", self.log_debug_prefix, self.options.connection_type.value)
		logger.debug("%sBind Mode: %s", self.log_debug_prefix, self.options.bind_mode.value)
		logger.debug("%sUse SSL: %s", self.log_debug_prefix, self.options.use_ssl)
		logger.debug("%sUse TLS: %s", self.log_debug_prefix, self.options.use_tls)

	def _option_kwargs(self, option_map: dict) -> dict:
		return {
			option_map[k]: v
			for k, v in self.options.ldap_options.items()
			if k in option_map
		}

	def connect(self) -> None:
		"""Open the connection and select the Bind Strategy. No-op if connected."""
		if self.state != ClientState.UNCONNECTED:
			return
		strategy_class = get_bind_strategy_class(self.options.connection_type)
		self.__log_init__()

		server_args = {
			"port": self.options.port,
			"use_ssl": self.options.use_ssl,
			"get_info": ldap3.NONE,
			"connect_timeout": self.options.connect_timeout,
		}
		server_args.update(self._option_kwargs(LDAP_SERVER_OPTIONS))
		connection_args = {
			"raise_exceptions": True,
			"read_only": True,
			"receive_timeout": self.options.receive_timeout,
		}
		connection_args.update(self._option_kwargs(LDAP_CONNECTION_OPTIONS))

		try:
			server = ldap3.Server(self.options.host, **server_args)
			c = ldap3.Connection(server, **connection_args)
			c.open(read_server_info=False)
			if self.options.use_tls:
				logger.debug("Starting TLS (LDAP Use TLS: %s)", self.options.use_tls)
				c.start_tls(read_server_info=False)
		except (LDAPCommunicationError, LDAPStartTLSError) as ex:
			raise exc_ldap.ConnectError(
				data={"message": f"LDAP Connection to {self.options.host} failed: {ex}"}
			) from ex
		except LDAPException as ex:
			raise exc_ldap.ConnectError(
				data={"message": f"LDAP Connection creation failed: {ex}"}
			) from ex

		self.connection = c
		self.bind_strategy = strategy_class(c, self.options)
		self.state = ClientState.CONNECTED
		logger.info("Connection %s opened.", self.uuid)

	def close(self) -> None:
		if self.connection is not None:
			try:
				self.connection.unbind()
			except LDAPException as ex:
				logger.warning("Connection %s did not close cleanly: %s", self.uuid, ex)
			logger.info("Connection %s closed.", self.uuid)
		self.connection = None
		self.bind_strategy = None
		self.state = ClientState.UNCONNECTED

	def bind(self, username: str = None, password: str = None) -> None:
		self.connect()
		self.bind_strategy.bind(username, password)
		self.state = ClientState.BOUND

	def is_server_online(self) -> bool:
		"""Advisory reachability probe, never raises."""
		online = net_port_test(
			self.options.host,
			self.options.port,
			timeout=self.options.probe_timeout,
		)
		if not online:
			logger.warning(
				"LDAP server %s:%s is unreachable.", self.options.host, self.options.port
			)
		return online

	def _validate_bound(self) -> None:
		if self.state != ClientState.BOUND:
			raise exc_ldap.DirectoryNotBound

	def search(self, search_base: str, search_filter: str, attributes=None, **kwargs) -> list[DirectoryEntry]:
		self._validate_bound()
		search_args = self._option_kwargs(LDAP_SEARCH_OPTIONS)
		search_args.update(kwargs)
		try:
			self.connection.search(
				search_base=search_base,
				search_filter=search_filter,
				search_scope=ldap3.SUBTREE,
				attributes=attributes if attributes else ldap3.NO_ATTRIBUTES,
				**search_args,
			)
		except (LDAPCommunicationError, LDAPStartTLSError) as ex:
			raise exc_ldap.ConnectError(
				data={"message": f"LDAP connection lost during search: {ex}"}
			) from ex
		except LDAPException as ex:
			raise exc_ldap.SearchError(
				data={"message": f"Error during LDAP search ({search_filter}): {ex}"}
			) from ex
		return entries_from_response(self.connection.response)

	def get_search_base(self, username: str) -> str:
		"""Search base, with the placeholder replaced if the template has one"""
		if has_placeholder(self.options.base_dn):
			return format_dn(self.options.base_dn, username)
		return self.options.base_dn

	def find_user(self, username: str) -> DirectoryEntry:
		"""Returns the only entry matching the account filter"""
		filtered_username = self.bind_strategy.filter_username(username)
		search_filter = format_filter(self.options.account_filter, filtered_username)
		attributes = list(self.options.attributes) if self.options.attributes else ldap3.ALL_ATTRIBUTES
		try:
			entries = self.search(
				self.get_search_base(filtered_username),
				search_filter,
				attributes=attributes,
				size_limit=USER_SEARCH_SIZE_LIMIT,
			)
		except exc_ldap.SearchError as ex:
			if isinstance(ex.__cause__, (LDAPSizeLimitExceededResult, LDAPNoSuchObjectResult)):
				raise exc_ldap.UserNotFound(
					data={"message": f"LDAP user lookup for {username} failed: {ex.__cause__}"}
				) from ex
			raise
		if len(entries) != 1:
			raise exc_ldap.UserNotFound(
				data={
					"message": f"LDAP user lookup for {username} returned "
					f"{len(entries)} entries, expected exactly one."
				}
			)
		return entries[0]

	def authenticate_user(self, username: str, password: str) -> DirectoryEntry:
		"""
		Binds, locates the user entry and confirms the user's password.

		With a service account or anonymous bind the located DN is re-bound
		with the user password before the entry is returned.
		"""
		self.connect()
		if self.options.uses_search_bind:
			self.bind()
		else:
			self.bind(username, password)

		entry = self.find_user(username)
		if self.options.uses_search_bind:
			self.bind_strategy.verify_credentials(entry.dn, password)
			if self.options.bind_mode == BindMode.ANONYMOUS:
				# Anonymous binds may not see every attribute
				entry = self.find_user(username)
		logger.info("LDAP user lookup for %s succeeded", username)
		return entry

	def get_groups_of_user(self, dn: str) -> list[str]:
		"""Returns the DNs of all groups matching the member_of filter"""
		if not self.options.member_of_filter:
			logger.debug("No member_of filter configured, skipping group lookup.")
			return []
		entries = self.search(
			self.options.group_search_base,
			format_filter(self.options.member_of_filter, dn),
		)
		return list(dict.fromkeys(e.dn for e in entries))

	def get_group_membership(self, username: str) -> dict[str, str]:
		"""Legacy lookup: group identifier -> group common name"""
		if not self.options.membership_filter:
			return {}
		dn_attribute = self.options.group_dn_attribute
		cn_attribute = self.options.group_cn_attribute
		filtered_username = self.bind_strategy.filter_username(username)
		entries = self.search(
			self.options.group_search_base,
			format_filter(self.options.membership_filter, filtered_username),
			attributes=[a for a in (dn_attribute, cn_attribute) if a != "dn"] or None,
		)
		groups = {}
		for e in entries:
			group_id = e.dn if dn_attribute == "dn" else e.get_first(dn_attribute)
			if group_id:
				groups[group_id] = e.get_first(cn_attribute, "")
		return groups
