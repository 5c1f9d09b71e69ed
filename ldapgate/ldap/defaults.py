################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: ldapgate.ldap.defaults
from ldapgate.ldap.constants import (
	LDAP_ATTR_FIRST_NAME,
	LDAP_ATTR_LAST_NAME,
	LDAP_ATTR_EMAIL,
)

### LDAP PROVIDER SETTINGS
# Every provider in settings.LDAPGATE_PROVIDERS is merged over this
# dictionary, nested dictionaries included.

PROVIDER_DEFAULTS = {
	# Directory Server address
	"host": None,
	"port": 389,
	# plain | active-directory
	"type": "plain",
	# Use SSL on connection.
	"use_ssl": False,
	# Initiate TLS on connection.
	"use_tls": False,
	# Set connection/receive timeouts (in seconds) on the underlying `ldap3` library.
	"connect_timeout": 5,
	"receive_timeout": 10,
	# Timeout for the reachability probe done before each authentication
	"probe_timeout": 5,
	"ldap_options": {
		"protocol_version": 3,
	},
	# Settings example for anonymous binding (dn and password will be ignored):
	#   "bind": {"anonymous": True}
	# Settings example for binding with a service account and its password:
	#   "bind": {"dn": "uid=admin,dc=example,dc=com", "password": "secret"}
	# Settings example for binding with user ID and password (? is replaced):
	#   "bind": {"dn": "uid=?,ou=Users,dc=example,dc=com"}
	"bind": {
		"anonymous": False,
		"dn": None,
		"password": None,
	},
	# Preferred over bind.dn for direct user binds
	"user": {
		"dn": None,
	},
	# The LDAP search base for looking up users, may contain a placeholder.
	"base_dn": None,
	"filter": {
		"account": None,
		# Group search filter, the placeholder is replaced with the user DN
		"member_of": None,
		# Active Directory only, strip DOMAIN\ from usernames in filters
		"ignore_domain": True,
	},
	# Legacy group membership lookup, placeholder is replaced with the username
	"group": {
		# Search base for group lookups, defaults to base_dn
		"base_dn": None,
		"membership_filter": None,
		"dn": "dn",
		"cn": "cn",
	},
	# Attribute allow-list for user searches, None fetches all attributes
	"attributes": None,
	# Active Directory login domain (DOMAIN\username) and UPN suffix
	"domain": None,
	"username_suffix": None,
	"roles": {
		"default": [],
		"user_mapping": {},
		"group_mapping": {},
		"property_mapping": {},
	},
	# Allow login with a cached password verifier when the server is offline
	"allow_standin_authentication": False,
	# Create local accounts for directory users on first login
	"create_accounts": True,
	# Django user field -> LDAP attribute
	"profile_mapping": {
		"first_name": LDAP_ATTR_FIRST_NAME,
		"last_name": LDAP_ATTR_LAST_NAME,
		"email": LDAP_ATTR_EMAIL,
	},
	# Collaborators, callables or dotted paths
	"account_store": "ldapgate.stores.account.DjangoAccountStore",
	"role_registry": "ldapgate.roles.registry.DjangoRoleRegistry",
	"profile_store": "ldapgate.stores.profile.DjangoProfileStore",
}
