################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: ldapgate.roles.mapping
# Contains:
# - Role Mapping configuration parsed from provider settings
# - Role Mapping evaluation for a located directory entry

# ---------------------------------- IMPORTS --------------------------------- #
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Iterable, Mapping
from ldapgate.ldap.types.entry import DirectoryEntry
from ldapgate.exceptions.settings import ConfigurationError
from ldapgate.exceptions.auth import RoleNotFound
from ldapgate.type_hints.collaborators import RoleRegistry
import logging
import re
################################################################################

logger = logging.getLogger(__name__)

REGEX_DELIMITED = re.compile(r"^/(?P<pattern>.*)/(?P<flags>[a-zA-Z]*)$", re.DOTALL)
REGEX_FLAGS = {
	"i": re.IGNORECASE,
	"m": re.MULTILINE,
	"s": re.DOTALL,
	"x": re.VERBOSE,
}


def _as_str_tuple(value, setting_key: str) -> tuple[str, ...]:
	if value is None:
		return ()
	if isinstance(value, (str, bytes)):
		return (value.decode() if isinstance(value, bytes) else value,)
	if isinstance(value, (list, tuple, set, frozenset)):
		return tuple(dict.fromkeys(str(v) for v in value))
	raise ConfigurationError(
		data={"message": f"Role setting {setting_key} must be a string or a list of strings."}
	)


def _as_mapping(value, setting_key: str) -> Mapping:
	if value is None:
		return {}
	if not isinstance(value, Mapping):
		raise ConfigurationError(
			data={"message": f"Role setting {setting_key} must be a dictionary."}
		)
	return value


@dataclass(frozen=True)
class RoleMappingConfig:
	default: tuple[str, ...] = ()
	user_mapping: Mapping[str, frozenset[str]] = field(
		default_factory=lambda: MappingProxyType({})
	)
	group_mapping: Mapping[str, frozenset[str]] = field(
		default_factory=lambda: MappingProxyType({})
	)
	# role -> attribute name -> conditions
	property_mapping: Mapping[str, Mapping[str, tuple[str, ...]]] = field(
		default_factory=lambda: MappingProxyType({})
	)

	@classmethod
	def from_settings(cls, roles_settings: Mapping | None) -> "RoleMappingConfig":
		roles_settings = _as_mapping(roles_settings, "roles")

		user_mapping = {
			str(role): frozenset(_as_str_tuple(dns, f"roles.user_mapping.{role}"))
			for role, dns in _as_mapping(
				roles_settings.get("user_mapping"), "roles.user_mapping"
			).items()
		}
		group_mapping = {
			str(role): frozenset(_as_str_tuple(dns, f"roles.group_mapping.{role}"))
			for role, dns in _as_mapping(
				roles_settings.get("group_mapping"), "roles.group_mapping"
			).items()
		}
		property_mapping = {}
		for role, attributes in _as_mapping(
			roles_settings.get("property_mapping"), "roles.property_mapping"
		).items():
			_key = f"roles.property_mapping.{role}"
			property_mapping[str(role)] = MappingProxyType({
				str(attr): _as_str_tuple(conditions, f"{_key}.{attr}")
				for attr, conditions in _as_mapping(attributes, _key).items()
			})

		return cls(
			default=_as_str_tuple(roles_settings.get("default"), "roles.default"),
			user_mapping=MappingProxyType(user_mapping),
			group_mapping=MappingProxyType(group_mapping),
			property_mapping=MappingProxyType(property_mapping),
		)


@lru_cache(maxsize=256)
def compile_condition(condition: str) -> re.Pattern | None:
	"""
	Compiles a property condition as a regular expression.

	Accepts bare patterns as well as delimited ones with trailing flags
	(/^senior/i). Returns None if the condition is not a valid pattern.
	"""
	pattern = condition
	flags = 0
	m = REGEX_DELIMITED.match(condition)
	if m and all(f in REGEX_FLAGS for f in m.group("flags")):
		pattern = m.group("pattern")
		for f in m.group("flags"):
			flags |= REGEX_FLAGS[f]
	try:
		return re.compile(pattern, flags)
	except re.error:
		logger.debug("Role condition %s is not a valid regular expression.", condition)
		return None


def condition_matches(condition: str, value: str) -> bool:
	if value == condition:
		return True
	compiled = compile_condition(condition)
	return bool(compiled and compiled.search(value))


class RoleMapper:
	"""
	Computes the roles of a directory user.

	Categories are evaluated in order (default, property, user, group) and
	roles accumulate across them. If a registry is given every role is
	looked up once per evaluation and unknown ones are skipped.
	"""

	def __init__(self, config: RoleMappingConfig, registry: RoleRegistry = None):
		self.config = config
		self.registry = registry

	def evaluate(
		self,
		entry: DirectoryEntry,
		group_dns: Iterable[str] = None,
		group_membership: Mapping[str, str] = None,
	) -> list[str]:
		roles: dict[str, None] = {}
		known: dict[str, bool] = {}

		def grant(role: str, reason: str) -> None:
			if role in roles:
				return
			if role not in known:
				known[role] = self._role_exists(role)
			if not known[role]:
				return
			logger.debug("Granting role %s to %s (%s)", role, entry.dn, reason)
			roles[role] = None

		for role in self.config.default:
			grant(role, "default")

		for role, attributes in self.config.property_mapping.items():
			if self._matches_properties(entry, attributes):
				grant(role, "property_mapping")

		for role, user_dns in self.config.user_mapping.items():
			if entry.dn in user_dns:
				grant(role, "user_mapping")

		group_dns = set(group_dns or ())
		group_membership = group_membership or {}
		for role, groups in self.config.group_mapping.items():
			if not groups.isdisjoint(group_dns):
				grant(role, "group_mapping")
			elif any(g in group_membership for g in groups):
				grant(role, "group_mapping (membership)")

		return list(roles)

	def _matches_properties(self, entry: DirectoryEntry, attributes: Mapping) -> bool:
		for attr, conditions in attributes.items():
			if not entry.has(attr):
				continue
			for value in entry.get_values(attr):
				for condition in conditions:
					if condition_matches(condition, value):
						return True
		return False

	def _role_exists(self, role: str) -> bool:
		if self.registry is None:
			return True
		try:
			self.registry.get_role(role)
		except RoleNotFound:
			logger.warning("Role %s does not exist and will be skipped.", role)
			return False
		return True
