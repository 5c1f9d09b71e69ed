################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: ldapgate.ldap.constants
# Contains LDAP Provider constants shared by the option parser and the
# Directory Client.

# ---------------------------------- IMPORTS --------------------------------- #
from enum import Enum
################################################################################


class ConnectionType(Enum):
	PLAIN = "plain"
	ACTIVE_DIRECTORY = "active-directory"


# Accepted spellings for the `type` option
CONNECTION_TYPE_ALIASES = {
	"plain": ConnectionType.PLAIN,
	"ldap": ConnectionType.PLAIN,
	"active-directory": ConnectionType.ACTIVE_DIRECTORY,
	"activedirectory": ConnectionType.ACTIVE_DIRECTORY,
	"ad": ConnectionType.ACTIVE_DIRECTORY,
}


class BindMode(Enum):
	ANONYMOUS = "anonymous"
	SERVICE_ACCOUNT = "service-account"
	DIRECT = "direct"


# Template placeholders, in order of preference
PLACEHOLDER_SPRINTF = "%s"
PLACEHOLDER_QUESTION_MARK = "?"
PLACEHOLDERS = (PLACEHOLDER_SPRINTF, PLACEHOLDER_QUESTION_MARK)

# ldap_options key -> ldap3.Connection keyword argument
LDAP_CONNECTION_OPTIONS = {
	"protocol_version": "version",
	"referrals": "auto_referrals",
	"auto_range": "auto_range",
	"check_names": "check_names",
}
# ldap_options key -> ldap3.Connection.search keyword argument
LDAP_SEARCH_OPTIONS = {
	"time_limit": "time_limit",
	"timelimit": "time_limit",
	"size_limit": "size_limit",
	"sizelimit": "size_limit",
}
# ldap_options key -> ldap3.Server keyword argument
LDAP_SERVER_OPTIONS = {
	"network_timeout": "connect_timeout",
}
LDAP_OPTIONS = {
	*LDAP_CONNECTION_OPTIONS.keys(),
	*LDAP_SEARCH_OPTIONS.keys(),
	*LDAP_SERVER_OPTIONS.keys(),
}

LDAP_ATTR_FIRST_NAME = "givenName"
LDAP_ATTR_LAST_NAME = "sn"
LDAP_ATTR_EMAIL = "mail"

LDAP_RESPONSE_ENTRY = "searchResEntry"

# An exact match search asks for one more entry than it accepts
USER_SEARCH_SIZE_LIMIT = 2
