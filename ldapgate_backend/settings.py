################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: ldapgate_backend.settings
# Django settings for running the ldapgate app.
# Any option below can be overridden in ldapgate_backend/local_django_settings.py

# ---------------------------------- IMPORTS --------------------------------- #
from pathlib import Path
from ldapgate_backend.utils import load_override
import os
################################################################################

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("LDAPGATE_SECRET_KEY", "change-me")
load_override(globals(), "SECRET_KEY")
DEBUG = False
load_override(globals(), "DEBUG")
ALLOWED_HOSTS = ["localhost", "127.0.0.1"]
load_override(globals(), "ALLOWED_HOSTS")

INSTALLED_APPS = [
	"django.contrib.contenttypes",
	"django.contrib.auth",
	"rest_framework",
	"ldapgate",
]

DATABASES = {
	"default": {
		"ENGINE": "django.db.backends.sqlite3",
		"NAME": BASE_DIR / "ldapgate.sqlite3",
	}
}
load_override(globals(), "DATABASES")

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
USE_TZ = True
TIME_ZONE = "UTC"

AUTHENTICATION_BACKENDS = [
	"ldapgate.auth.ldap.LDAPBackend",
	"django.contrib.auth.backends.ModelBackend",
]

LOG_LEVEL = "INFO"
load_override(globals(), "LOG_LEVEL")
LOGGING = {
	"version": 1,
	"disable_existing_loggers": False,
	"formatters": {
		"verbose": {
			"format": "[{levelname}] {asctime} {name} | {message}",
			"style": "{",
		},
	},
	"handlers": {
		"console": {
			"class": "logging.StreamHandler",
			"formatter": "verbose",
		},
	},
	"loggers": {
		"ldapgate": {
			"handlers": ["console"],
			"level": LOG_LEVEL,
			"propagate": False,
		},
		"ldap3": {
			"handlers": ["console"],
			"level": "WARNING",
		},
	},
}
load_override(globals(), "LOGGING")

### LDAP PROVIDERS
# Each provider is merged over ldapgate.ldap.defaults.PROVIDER_DEFAULTS
LDAPGATE_PROVIDERS = {
	"default": {
		"host": "ldap.example.com",
		"port": 389,
		"type": "plain",
		"bind": {
			"dn": "uid=?,ou=People,dc=example,dc=com",
		},
		"base_dn": "ou=People,dc=example,dc=com",
		"filter": {
			"account": "(uid=?)",
			"member_of": "(&(objectClass=groupOfNames)(member=?))",
		},
		"group": {
			"base_dn": "ou=Groups,dc=example,dc=com",
		},
		"roles": {
			"default": [],
			"user_mapping": {},
			"group_mapping": {},
			"property_mapping": {},
		},
	},
}
load_override(globals(), "LDAPGATE_PROVIDERS")
LDAPGATE_DEFAULT_PROVIDER = "default"
load_override(globals(), "LDAPGATE_DEFAULT_PROVIDER")
