from ldapgate.exceptions.base import CoreException
from rest_framework import status


class UnsupportedTokenError(CoreException):
	status_code = status.HTTP_400_BAD_REQUEST
	default_detail = "This provider cannot authenticate the given token"
	default_code = "unsupported_token"


class RoleNotFound(CoreException):
	status_code = status.HTTP_404_NOT_FOUND
	default_detail = "Role does not exist"
	default_code = "role_not_found"
