from datetime import datetime
from typing import Any, Protocol
from ldapgate.ldap.types.entry import DirectoryEntry


class AccountProtocol(Protocol):
	account_identifier: str
	authentication_provider_name: str
	dn: str | None
	roles: list[str]
	failed_authentication_count: int
	last_successful_authentication_date: datetime | None

	def set_roles(self, roles: list[str]) -> None: ...
	def role_identifiers(self) -> list[str]: ...
	def set_credentials_verifier(self, raw_password: str) -> None: ...
	def check_credentials_verifier(self, raw_password: str) -> bool: ...
	def authentication_attempted(self, status) -> None: ...


class AccountStore(Protocol):
	def find_active_account(
		self, identifier: str, provider_name: str
	) -> AccountProtocol | None: ...

	def create_account(
		self, identifier: str, provider_name: str
	) -> AccountProtocol | None: ...

	def update_account(self, account: AccountProtocol) -> None: ...


class RoleRegistry(Protocol):
	def get_role(self, identifier: str) -> Any: ...


class ProfileStore(Protocol):
	def create_profile(self, account: AccountProtocol, entry: DirectoryEntry) -> None: ...
	def update_profile(self, account: AccountProtocol, entry: DirectoryEntry) -> None: ...
