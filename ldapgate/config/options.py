################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: ldapgate.config.options
# Contains the immutable Connection Options owned by a Directory Client

# ---------------------------------- IMPORTS --------------------------------- #
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping
from ldapgate.ldap.constants import (
	ConnectionType,
	BindMode,
	CONNECTION_TYPE_ALIASES,
	LDAP_OPTIONS,
)
from ldapgate.ldap.filter import has_placeholder
from ldapgate.exceptions.settings import ConfigurationError
from ldapgate.exceptions.ldap import UnknownBindStrategy
################################################################################


def parse_connection_type(value) -> ConnectionType:
	if isinstance(value, ConnectionType):
		return value
	try:
		return CONNECTION_TYPE_ALIASES[str(value).strip().lower()]
	except KeyError:
		raise UnknownBindStrategy(
			data={"message": f"Unknown LDAP connection type: {value}."}
		)


@dataclass(frozen=True)
class ConnectionOptions:
	host: str
	base_dn: str
	account_filter: str
	port: int = 389
	connection_type: ConnectionType = ConnectionType.PLAIN
	bind_mode: BindMode = BindMode.DIRECT
	# Service account DN, or the direct bind template when user_dn is unset
	bind_dn: str | None = None
	bind_password: str | None = None
	user_dn: str | None = None
	member_of_filter: str | None = None
	membership_filter: str | None = None
	group_base_dn: str | None = None
	group_dn_attribute: str = "dn"
	group_cn_attribute: str = "cn"
	ignore_domain: bool = True
	domain: str | None = None
	username_suffix: str | None = None
	attributes: tuple[str, ...] | None = None
	ldap_options: Mapping = field(default_factory=lambda: MappingProxyType({}))
	use_ssl: bool = False
	use_tls: bool = False
	connect_timeout: int = 5
	receive_timeout: int = 10
	probe_timeout: int = 5

	def __post_init__(self):
		if not self.host:
			raise ConfigurationError(data={"message": "LDAP host is required."})
		if not self.base_dn:
			raise ConfigurationError(data={"message": "LDAP base_dn is required."})
		if not self.account_filter:
			raise ConfigurationError(
				data={"message": "LDAP account filter (filter.account) is required."}
			)
		if not has_placeholder(self.account_filter):
			raise ConfigurationError(
				data={"message": "LDAP account filter must contain a placeholder (%s or ?)."}
			)
		for k, v in (
			("filter.member_of", self.member_of_filter),
			("group.membership_filter", self.membership_filter),
		):
			if v and not has_placeholder(v):
				raise ConfigurationError(
					data={"message": f"LDAP {k} must contain a placeholder (%s or ?)."}
				)
		if (
			(self.member_of_filter or self.membership_filter)
			and not self.group_base_dn
			and has_placeholder(self.base_dn)
		):
			raise ConfigurationError(
				data={"message": "A base_dn template requires group.base_dn for group searches."}
			)
		if self.bind_mode == BindMode.SERVICE_ACCOUNT and not self.bind_dn:
			raise ConfigurationError(
				data={"message": "A service account bind requires bind.dn."}
			)
		if (
			self.bind_mode == BindMode.DIRECT
			and self.connection_type == ConnectionType.PLAIN
			and not has_placeholder(self.direct_bind_template)
		):
			raise ConfigurationError(
				data={
					"message": "A direct bind requires a user.dn or bind.dn "
					"template with a placeholder."
				}
			)
		if not isinstance(self.ldap_options, Mapping):
			raise ConfigurationError(data={"message": "LDAP ldap_options must be a dictionary."})
		unknown_options = set(self.ldap_options.keys()) - LDAP_OPTIONS
		if unknown_options:
			raise ConfigurationError(
				data={"message": f"Unknown LDAP options: {', '.join(sorted(unknown_options))}."}
			)
		object.__setattr__(self, "ldap_options", MappingProxyType(dict(self.ldap_options)))

	@property
	def direct_bind_template(self) -> str | None:
		"""user.dn is preferred, bind.dn is the legacy location"""
		return self.user_dn or self.bind_dn

	@property
	def group_search_base(self) -> str:
		return self.group_base_dn or self.base_dn

	@property
	def uses_search_bind(self) -> bool:
		"""Whether users are searched before their own credentials are verified"""
		return self.bind_mode in (BindMode.ANONYMOUS, BindMode.SERVICE_ACCOUNT)

	@classmethod
	def from_settings(cls, provider_settings: Mapping) -> "ConnectionOptions":
		_bind = provider_settings.get("bind") or {}
		_user = provider_settings.get("user") or {}
		_filter = provider_settings.get("filter") or {}
		_group = provider_settings.get("group") or {}
		for k, v in (("bind", _bind), ("user", _user), ("filter", _filter), ("group", _group)):
			if not isinstance(v, Mapping):
				raise ConfigurationError(data={"message": f"LDAP {k} settings must be a dictionary."})

		if _bind.get("password") is not None:
			bind_mode = BindMode.SERVICE_ACCOUNT
		elif _bind.get("anonymous"):
			bind_mode = BindMode.ANONYMOUS
		else:
			bind_mode = BindMode.DIRECT

		attributes = provider_settings.get("attributes")
		if attributes is not None:
			attributes = tuple(attributes)

		return cls(
			host=provider_settings.get("host"),
			port=int(provider_settings.get("port") or 389),
			connection_type=parse_connection_type(provider_settings.get("type", "plain")),
			bind_mode=bind_mode,
			bind_dn=_bind.get("dn"),
			bind_password=_bind.get("password"),
			user_dn=_user.get("dn"),
			base_dn=provider_settings.get("base_dn"),
			account_filter=_filter.get("account"),
			member_of_filter=_filter.get("member_of"),
			ignore_domain=bool(_filter.get("ignore_domain", True)),
			membership_filter=_group.get("membership_filter"),
			group_base_dn=_group.get("base_dn"),
			group_dn_attribute=_group.get("dn") or "dn",
			group_cn_attribute=_group.get("cn") or "cn",
			domain=provider_settings.get("domain"),
			username_suffix=provider_settings.get("username_suffix"),
			attributes=attributes,
			ldap_options=provider_settings.get("ldap_options") or {},
			use_ssl=bool(provider_settings.get("use_ssl", False)),
			use_tls=bool(provider_settings.get("use_tls", False)),
			connect_timeout=provider_settings.get("connect_timeout", 5),
			receive_timeout=provider_settings.get("receive_timeout", 10),
			probe_timeout=provider_settings.get("probe_timeout", 5),
		)
