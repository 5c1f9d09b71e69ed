from ldapgate.exceptions.base import CoreException
from rest_framework import status


class ConfigurationError(CoreException):
	status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
	default_detail = "LDAP Provider Configuration is invalid"
	default_code = "ldap_configuration_error"
