from .settings import *

DATABASES = {
	"default": {
		"ENGINE": "django.db.backends.sqlite3",
		"NAME": ":memory:",
	}
}
PASSWORD_HASHERS = [
	"django.contrib.auth.hashers.MD5PasswordHasher",
]
LDAPGATE_PROVIDERS = {
	"test": {
		"host": "ldap.test.local",
		"port": 389,
		"type": "plain",
		"bind": {
			"dn": "uid=?,ou=People,dc=test,dc=local",
		},
		"base_dn": "ou=People,dc=test,dc=local",
		"filter": {
			"account": "(uid=?)",
			"member_of": "(&(objectClass=groupOfNames)(member=?))",
		},
		"probe_timeout": 1,
	},
}
LDAPGATE_DEFAULT_PROVIDER = "test"
