################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: ldapgate_backend.utils
# Contains the local settings override helper

# ---------------------------------- IMPORTS --------------------------------- #
from typing import overload, Any

_local_django_settings = None
try:
	from ldapgate_backend import (
		local_django_settings as _local_django_settings,
	)
except ImportError:  # pragma: no cover
	# Deployments without local overrides
	_local_django_settings = None
################################################################################

_MISSING = object()


@overload
def load_override(target_globals, key: str) -> None: ...
@overload
def load_override(target_globals, key: str, default: Any) -> None: ...
def load_override(target_globals, key: str, default: Any = _MISSING) -> None:
	"""Replace a settings global with its value in local_django_settings.

	Args:
		key: Name of the setting
		default: Value used when local_django_settings does not define it
	"""
	if _local_django_settings is not None and hasattr(_local_django_settings, key):
		target_globals[key] = getattr(_local_django_settings, key)
	elif default is not _MISSING:
		target_globals[key] = default
