################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: ldapgate.auth.ldap

# ---------------------------------- IMPORTS --------------------------------- #
from django.contrib.auth.backends import ModelBackend
from ldapgate.auth.provider import get_provider
from ldapgate.auth.types import UsernamePasswordToken
import logging
################################################################################
"""
Django authentication backend.
"""

logger = logging.getLogger(__name__)


class LDAPBackend(ModelBackend):
	"""
	An authentication backend that delegates to an LDAP
	server.

	Accounts authenticated with LDAP are created on the
	fly, their roles are synced to the user's groups.
	"""

	supports_inactive_user = False
	provider_name = None

	def authenticate(self, request, username=None, password=None, **kwargs):
		if not username or not password:
			return None

		outcome = get_provider(self.provider_name).authenticate(
			UsernamePasswordToken(username=username, password=password)
		)
		if not outcome.is_successful:
			return None

		user = getattr(outcome.account, "user", None)
		if user is None or not self.user_can_authenticate(user):
			logger.warning("LDAP account %s has no active user.", outcome.account_identifier)
			return None
		return user
