################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: ldapgate.apps
# Contains the LDAP Gate App configuration class

# ---------------------------------- IMPORTS --------------------------------- #
from django.apps import AppConfig
################################################################################


class LdapGateConfig(AppConfig):
	name = "ldapgate"
	verbose_name = "LDAP Gate"
	default_auto_field = "django.db.models.BigAutoField"
