################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: ldapgate.ldap.types.entry

# ---------------------------------- IMPORTS --------------------------------- #
from dataclasses import dataclass, field
from ldap3.utils.ciDict import CaseInsensitiveDict
from typing import Iterable, Mapping
from ldapgate.ldap.constants import LDAP_RESPONSE_ENTRY
################################################################################


def _to_str(value) -> str:
	if isinstance(value, bytes):
		return value.decode("utf-8", errors="replace")
	return str(value)


def normalize_values(value) -> tuple[str, ...]:
	"""Directory attributes are multi-valued, always return a tuple of str"""
	if value is None:
		return tuple()
	if isinstance(value, (list, tuple, set)):
		return tuple(_to_str(v) for v in value)
	return (_to_str(value),)


@dataclass(frozen=True)
class DirectoryEntry:
	dn: str
	attributes: Mapping[str, tuple[str, ...]] = field(default_factory=CaseInsensitiveDict)

	def __post_init__(self):
		if not self.dn:
			raise ValueError("A DirectoryEntry requires a Distinguished Name.")
		attributes = CaseInsensitiveDict()
		for k, v in self.attributes.items():
			attributes[k] = normalize_values(v)
		object.__setattr__(self, "attributes", attributes)

	@classmethod
	def from_response(cls, response_item: dict) -> "DirectoryEntry":
		"""Build an entry from an ldap3 search response item"""
		return cls(
			dn=response_item["dn"],
			attributes=response_item.get("attributes") or {},
		)

	def has(self, attribute: str) -> bool:
		return attribute in self.attributes

	def get_values(self, attribute: str) -> tuple[str, ...]:
		return self.attributes.get(attribute, tuple())

	def get_first(self, attribute: str, default=None):
		values = self.get_values(attribute)
		return values[0] if values else default


def entries_from_response(response: Iterable[dict] | None) -> list[DirectoryEntry]:
	"""Drop referrals and other non-entry items from an ldap3 response"""
	if not response:
		return []
	return [
		DirectoryEntry.from_response(item)
		for item in response
		if item.get("type", LDAP_RESPONSE_ENTRY) == LDAP_RESPONSE_ENTRY
		and item.get("dn")
	]
