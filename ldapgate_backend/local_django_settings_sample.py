# pragma: no cover
# File: ldapgate_backend/local_django_settings_sample.py
# Any option in ldapgate_backend.settings can be overridden here.

# If you want to debug
# DEBUG = True or False
# LOG_LEVEL = "DEBUG"

SECRET_KEY = "SomeLongRandomSecret"

DATABASES = {
	"default": {
		"ENGINE": "django.db.backends.postgresql",
		"NAME": "SomeDatabase",
		"USER": "SomeUser",
		"PASSWORD": "SomePassword",  # Change this password
		"HOST": "127.0.0.1",  # Or an IP Address that your DB is hosted on
		"PORT": "5432",
	}
}

# Active Directory with a service account and stand-in authentication
# LDAPGATE_PROVIDERS = {
# 	"corp": {
# 		"host": "dc01.corp.example.com",
# 		"type": "active-directory",
# 		"use_tls": True,
# 		"domain": "CORP",
# 		"bind": {
# 			"dn": "CN=svc-ldapgate,OU=Service,DC=corp,DC=example,DC=com",
# 			"password": "SomePassword",
# 		},
# 		"base_dn": "DC=corp,DC=example,DC=com",
# 		"filter": {
# 			"account": "(&(objectClass=user)(sAMAccountName=?))",
# 			"member_of": "(&(objectClass=group)(member=?))",
# 		},
# 		"roles": {
# 			"default": ["Employees"],
# 			"group_mapping": {
# 				"Administrators": ["CN=Domain Admins,CN=Users,DC=corp,DC=example,DC=com"],
# 			},
# 			"property_mapping": {
# 				"Managers": {"title": ["/^senior/i"]},
# 			},
# 		},
# 		"allow_standin_authentication": True,
# 	},
# }
# LDAPGATE_DEFAULT_PROVIDER = "corp"
