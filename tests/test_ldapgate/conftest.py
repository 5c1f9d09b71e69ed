import pytest
from pytest_mock import MockType, MockerFixture
from ldap3 import Connection
from typing import Protocol
from ldapgate.config.settings import merge_settings
from ldapgate.config.options import ConnectionOptions
from ldapgate.ldap import defaults as ldap_defaults
from ldapgate.ldap.constants import LDAP_RESPONSE_ENTRY
from ldapgate.ldap.types.entry import DirectoryEntry

TEST_BASE_DN = "ou=People,dc=example,dc=com"
TEST_GROUP_BASE_DN = "ou=Groups,dc=example,dc=com"


@pytest.fixture
def f_base_dn() -> str:
	return TEST_BASE_DN


@pytest.fixture
def f_user_dn() -> str:
	return f"uid=alice,{TEST_BASE_DN}"


class ProviderSettingsFactory(Protocol):
	def __call__(self, **overrides) -> dict: ...


@pytest.fixture
def g_provider_settings() -> ProviderSettingsFactory:
	def maker(**overrides):
		base = merge_settings(
			ldap_defaults.PROVIDER_DEFAULTS,
			{
				"host": "ldap.example.com",
				"bind": {"dn": f"uid=?,{TEST_BASE_DN}"},
				"base_dn": TEST_BASE_DN,
				"filter": {
					"account": "(uid=?)",
					"member_of": "(&(objectClass=groupOfNames)(member=?))",
				},
				"group": {"base_dn": TEST_GROUP_BASE_DN},
			},
		)
		return merge_settings(base, overrides)

	return maker


@pytest.fixture
def f_provider_settings(g_provider_settings: ProviderSettingsFactory) -> dict:
	return g_provider_settings()


class ConnectionOptionsFactory(Protocol):
	def __call__(self, **overrides) -> ConnectionOptions: ...


@pytest.fixture
def g_connection_options(g_provider_settings: ProviderSettingsFactory) -> ConnectionOptionsFactory:
	def maker(**overrides):
		return ConnectionOptions.from_settings(g_provider_settings(**overrides))

	return maker


@pytest.fixture
def f_connection_options(g_connection_options: ConnectionOptionsFactory) -> ConnectionOptions:
	return g_connection_options()


@pytest.fixture
def f_ldap_connection(mocker: MockerFixture) -> MockType:
	m_connection = mocker.MagicMock(spec=Connection)
	# ldap3 sets open on the instance, not the class
	m_connection.open = mocker.Mock(name="open")
	m_connection.rebind.return_value = True
	m_connection.search.return_value = True
	m_connection.response = []
	return m_connection


class SearchResponseFactory(Protocol):
	def __call__(self, *entries: tuple[str, dict]) -> list[dict]: ...


@pytest.fixture
def g_search_response() -> SearchResponseFactory:
	def maker(*entries: tuple[str, dict]):
		return [
			{"type": LDAP_RESPONSE_ENTRY, "dn": dn, "attributes": attributes}
			for dn, attributes in entries
		]

	return maker


@pytest.fixture
def f_user_entry(f_user_dn: str) -> DirectoryEntry:
	return DirectoryEntry(
		dn=f_user_dn,
		attributes={
			"uid": ["alice"],
			"givenName": ["Alice"],
			"sn": ["Liddell"],
			"mail": ["alice@example.com"],
			"title": ["Senior Engineer"],
		},
	)
