################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: ldapgate.stores.profile
# Contains the Django Profile Store, syncing directory attributes to users

# ---------------------------------- IMPORTS --------------------------------- #
from typing import Mapping
from ldapgate.ldap.types.entry import DirectoryEntry
from ldapgate.models.account import Account
import logging
################################################################################

logger = logging.getLogger(__name__)


class DjangoProfileStore:
	def __init__(self, provider_name: str = None, provider_settings: Mapping = None):
		self.provider_name = provider_name
		provider_settings = provider_settings or {}
		self.profile_mapping: Mapping[str, str] = provider_settings.get("profile_mapping") or {}

	def create_profile(self, account: Account, entry: DirectoryEntry) -> None:
		self.update_profile(account, entry)

	def update_profile(self, account: Account, entry: DirectoryEntry) -> None:
		if account.dn != entry.dn:
			account.dn = entry.dn
			account.save(update_fields=["dn", "modified_at"])

		user = account.user
		if user is None:
			return
		changed = []
		for field_name, attribute in self.profile_mapping.items():
			if not entry.has(attribute):
				continue
			if not hasattr(user, field_name):
				logger.warning("User model has no field %s, skipping profile mapping.", field_name)
				continue
			value = entry.get_first(attribute, "")
			if getattr(user, field_name, None) != value:
				setattr(user, field_name, value)
				changed.append(field_name)
		if changed:
			user.save(update_fields=changed)
			logger.debug("Updated profile fields %s for %s", changed, user)
