################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: ldapgate.roles.registry
# Resolves role identifiers to Django Groups

# ---------------------------------- IMPORTS --------------------------------- #
from django.contrib.auth.models import Group
from ldapgate.exceptions.auth import RoleNotFound
################################################################################


class DjangoRoleRegistry:
	"""Roles are Django Groups, identified by their name"""

	def __init__(self, provider_name: str = None, provider_settings=None):
		self.provider_name = provider_name

	def get_role(self, identifier: str) -> Group:
		try:
			return Group.objects.get(name=identifier)
		except Group.DoesNotExist:
			raise RoleNotFound(data={"message": f"Role {identifier} does not exist."})
