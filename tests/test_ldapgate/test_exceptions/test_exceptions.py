########################### Standard Pytest Imports ############################
import pytest
################################################################################
from ldapgate.exceptions.base import CoreException
from ldapgate.exceptions.settings import ConfigurationError
from ldapgate.exceptions import ldap as exc_ldap


def test_init_without_data():
	exception = CoreException()
	assert exception.detail == {
		"code": exception.default_code,
		"detail": exception.default_detail,
	}

def test_init_with_partial_data():
	exception = exc_ldap.BindError(data={"message": "Bind refused"})
	assert exception.detail == {
		"message": "Bind refused",
		"code": "ldap_bind_err",
		"detail": exc_ldap.BindError.default_detail,
	}

def test_set_detail_with_non_dict():
	exception = CoreException()
	exception.set_detail("non_dict_data")
	assert exception.detail == "non_dict_data"
	assert exception.message == "non_dict_data"

@pytest.mark.parametrize(
	"data, expected",
	(
		(None, exc_ldap.SearchError.default_detail),
		({"message": "Search failed on base"}, "Search failed on base"),
	),
)
def test_message(data, expected):
	assert exc_ldap.SearchError(data=data).message == expected

@pytest.mark.parametrize(
	"exception, parents",
	(
		(exc_ldap.UnknownBindStrategy, (exc_ldap.ConnectError, ConfigurationError)),
		(exc_ldap.NoBindStrategyApplicable, (exc_ldap.BindError,)),
		(exc_ldap.InvalidCredentials, (exc_ldap.BindError,)),
		(exc_ldap.UserNotFound, (exc_ldap.SearchError,)),
		(exc_ldap.DirectoryNotBound, (exc_ldap.SearchError,)),
	),
)
def test_taxonomy(exception, parents):
	for parent in parents:
		assert issubclass(exception, parent)
	assert issubclass(exception, CoreException)
