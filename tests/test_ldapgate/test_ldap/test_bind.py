########################### Standard Pytest Imports ############################
import pytest
from pytest_mock import MockType
################################################################################
import ldap3
from ldap3.core.exceptions import (
	LDAPSocketOpenError,
	LDAPInvalidCredentialsResult,
	LDAPBindError,
	LDAPOperationResult,
)
from ldapgate.ldap.bind import (
	BindStrategy,
	PlainBind,
	ActiveDirectoryBind,
	get_bind_strategy_class,
)
from ldapgate.ldap.constants import ConnectionType
from ldapgate.exceptions import ldap as exc_ldap
from tests.test_ldapgate.conftest import TEST_BASE_DN


@pytest.mark.parametrize(
	"connection_type, expected",
	(
		(ConnectionType.PLAIN, PlainBind),
		(ConnectionType.ACTIVE_DIRECTORY, ActiveDirectoryBind),
	),
)
def test_get_bind_strategy_class(connection_type, expected):
	assert get_bind_strategy_class(connection_type) is expected


def test_bind_strategy_is_abstract(f_ldap_connection: MockType, f_connection_options):
	with pytest.raises(TypeError):
		BindStrategy(f_ldap_connection, f_connection_options)

def test_get_bind_strategy_class_unknown():
	with pytest.raises(exc_ldap.UnknownBindStrategy):
		get_bind_strategy_class("novell")


class TestPlainBind:
	@staticmethod
	def test_bind_with_credentials(f_ldap_connection: MockType, f_connection_options):
		PlainBind(f_ldap_connection, f_connection_options).bind("alice", "pw")
		f_ldap_connection.rebind.assert_called_once_with(
			read_server_info=False,
			user=f"uid=alice,{TEST_BASE_DN}",
			password="pw",
			authentication=ldap3.SIMPLE,
		)

	@staticmethod
	def test_bind_escapes_username(f_ldap_connection: MockType, f_connection_options):
		PlainBind(f_ldap_connection, f_connection_options).bind("doe,john", "pw")
		assert f_ldap_connection.rebind.call_args.kwargs["user"] == f"uid=doe\\,john,{TEST_BASE_DN}"

	@staticmethod
	def test_bind_service_account(f_ldap_connection: MockType, g_connection_options):
		options = g_connection_options(
			bind={"dn": "cn=admin,dc=example,dc=com", "password": "secret"}
		)
		PlainBind(f_ldap_connection, options).bind()
		f_ldap_connection.rebind.assert_called_once_with(
			read_server_info=False,
			user="cn=admin,dc=example,dc=com",
			password="secret",
			authentication=ldap3.SIMPLE,
		)

	@staticmethod
	def test_bind_anonymously(f_ldap_connection: MockType, g_connection_options):
		options = g_connection_options(bind={"anonymous": True, "dn": None})
		PlainBind(f_ldap_connection, options).bind()
		f_ldap_connection.rebind.assert_called_once_with(
			read_server_info=False,
			authentication=ldap3.ANONYMOUS,
		)

	@staticmethod
	@pytest.mark.parametrize(
		"username, password",
		(
			(None, None),
			("alice", ""),
			("", "pw"),
		),
	)
	def test_no_strategy_applicable(
		f_ldap_connection: MockType, f_connection_options, username, password
	):
		with pytest.raises(exc_ldap.NoBindStrategyApplicable):
			PlainBind(f_ldap_connection, f_connection_options).bind(username, password)
		f_ldap_connection.rebind.assert_not_called()

	@staticmethod
	def test_filter_username_is_identity(f_ldap_connection, f_connection_options):
		assert PlainBind(f_ldap_connection, f_connection_options).filter_username("A\\b") == "A\\b"


class TestBindErrors:
	@staticmethod
	@pytest.mark.parametrize(
		"side_effect, rebind_result, expected",
		(
			(LDAPSocketOpenError("refused"), None, exc_ldap.ConnectError),
			(LDAPInvalidCredentialsResult("bad"), None, exc_ldap.InvalidCredentials),
			(LDAPBindError("bad"), None, exc_ldap.InvalidCredentials),
			(LDAPOperationResult("protocol"), None, exc_ldap.BindError),
			(None, False, exc_ldap.InvalidCredentials),
		),
	)
	def test_rebind_errors(
		f_ldap_connection: MockType,
		f_connection_options,
		side_effect,
		rebind_result,
		expected,
	):
		f_ldap_connection.rebind.side_effect = side_effect
		f_ldap_connection.rebind.return_value = rebind_result
		with pytest.raises(expected):
			PlainBind(f_ldap_connection, f_connection_options).bind("alice", "pw")

	@staticmethod
	def test_verify_credentials(f_ldap_connection: MockType, f_connection_options):
		PlainBind(f_ldap_connection, f_connection_options).verify_credentials("cn=x", "pw")
		f_ldap_connection.rebind.assert_called_once_with(
			read_server_info=False,
			user="cn=x",
			password="pw",
			authentication=ldap3.SIMPLE,
		)

	@staticmethod
	def test_verify_credentials_rejected(f_ldap_connection: MockType, f_connection_options):
		f_ldap_connection.rebind.return_value = False
		with pytest.raises(exc_ldap.InvalidCredentials) as e:
			PlainBind(f_ldap_connection, f_connection_options).verify_credentials("cn=x", "pw")
		assert e.value.message == 'Could not verify credentials for dn: "cn=x"'

	@staticmethod
	def test_verify_credentials_keeps_cause(f_ldap_connection: MockType, f_connection_options):
		f_ldap_connection.rebind.side_effect = LDAPInvalidCredentialsResult("bad")
		with pytest.raises(exc_ldap.InvalidCredentials) as e:
			PlainBind(f_ldap_connection, f_connection_options).verify_credentials("cn=x", "pw")
		assert isinstance(e.value.__cause__, exc_ldap.InvalidCredentials)
		assert isinstance(e.value.__cause__.__cause__, LDAPInvalidCredentialsResult)

	@staticmethod
	@pytest.mark.parametrize("dn, password", (("cn=x", ""), ("", "pw"), ("cn=x", None)))
	def test_verify_credentials_empty_values(
		f_ldap_connection: MockType, f_connection_options, dn, password
	):
		with pytest.raises(exc_ldap.InvalidCredentials):
			PlainBind(f_ldap_connection, f_connection_options).verify_credentials(dn, password)
		f_ldap_connection.rebind.assert_not_called()


@pytest.fixture
def f_ad_options(g_connection_options):
	return g_connection_options(
		type="active-directory",
		domain="EXAMPLE",
		bind={"dn": None},
		filter={"account": "(sAMAccountName=?)"},
	)


class TestActiveDirectoryBind:
	@staticmethod
	@pytest.mark.parametrize(
		"username, expected",
		(
			("alice", "EXAMPLE\\alice"),
			("EXAMPLE\\alice", "EXAMPLE\\alice"),
			("OTHER\\alice", "OTHER\\alice"),
		),
	)
	def test_bind_normalizes_domain(f_ldap_connection: MockType, f_ad_options, username, expected):
		ActiveDirectoryBind(f_ldap_connection, f_ad_options).bind(username, "pw")
		f_ldap_connection.rebind.assert_called_once_with(
			read_server_info=False,
			user=expected,
			password="pw",
			authentication=ldap3.SIMPLE,
		)

	@staticmethod
	@pytest.mark.parametrize(
		"username, expected",
		(
			("alice", "alice@example.com"),
			("alice@corp.example.com", "alice@corp.example.com"),
		),
	)
	def test_normalize_username_suffix(
		f_ldap_connection: MockType, g_connection_options, username, expected
	):
		options = g_connection_options(
			type="active-directory", bind={"dn": None}, username_suffix="example.com"
		)
		assert ActiveDirectoryBind(f_ldap_connection, options).normalize_username(username) == expected

	@staticmethod
	def test_normalize_username_without_domain(f_ldap_connection: MockType, g_connection_options):
		options = g_connection_options(type="active-directory", bind={"dn": None})
		assert ActiveDirectoryBind(f_ldap_connection, options).normalize_username("alice") == "alice"

	@staticmethod
	@pytest.mark.parametrize(
		"username, ignore_domain, expected",
		(
			("EXAMPLE\\alice", True, "alice"),
			("alice", True, "alice"),
			("EXAMPLE\\alice", False, "EXAMPLE\\alice"),
		),
	)
	def test_filter_username(
		f_ldap_connection: MockType, g_connection_options, username, ignore_domain, expected
	):
		options = g_connection_options(
			type="active-directory",
			domain="EXAMPLE",
			bind={"dn": None},
			filter={"ignore_domain": ignore_domain},
		)
		assert ActiveDirectoryBind(f_ldap_connection, options).filter_username(username) == expected
