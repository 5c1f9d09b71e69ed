from ldapgate.exceptions.base import CoreException
from ldapgate.exceptions.settings import ConfigurationError
from rest_framework import status

# LDAP Custom Exceptions


class ConnectError(CoreException):
	status_code = status.HTTP_503_SERVICE_UNAVAILABLE
	default_detail = "Could not connect to LDAP Server"
	default_code = "ldap_connect_err"


class UnknownBindStrategy(ConnectError, ConfigurationError):
	status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
	default_detail = "No Bind Strategy exists for the configured connection type"
	default_code = "ldap_unknown_bind_strategy"


class BindError(CoreException):
	status_code = status.HTTP_502_BAD_GATEWAY
	default_detail = "Could not bind to LDAP Server"
	default_code = "ldap_bind_err"


class NoBindStrategyApplicable(BindError):
	default_detail = "No credentials, service account or anonymous bind available"
	default_code = "ldap_bind_not_applicable"


class InvalidCredentials(BindError):
	status_code = status.HTTP_401_UNAUTHORIZED
	default_detail = "Invalid credentials for LDAP bind"
	default_code = "ldap_invalid_credentials"


class SearchError(CoreException):
	status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
	default_detail = "LDAP Search failed"
	default_code = "ldap_search_err"


class DirectoryNotBound(SearchError):
	default_detail = "No LDAP Bind was performed prior to this operation"
	default_code = "ldap_connection_not_bound"


class UserNotFound(SearchError):
	status_code = status.HTTP_401_UNAUTHORIZED
	default_detail = "Exactly one LDAP user entry was expected"
	default_code = "ldap_user_not_found"
