################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: ldapgate.config.settings
# Description:	Loads LDAP Provider options from Django settings and merges
# them over the package defaults.

# ---------------------------------- IMPORTS --------------------------------- #
from django.conf import settings as django_settings
from ldapgate.ldap import defaults
from ldapgate.exceptions.settings import ConfigurationError
from typing import TypedDict, Mapping
from typing_extensions import NotRequired
import logging
################################################################################

logger = logging.getLogger(__name__)

SETTING_PROVIDERS = "LDAPGATE_PROVIDERS"
SETTING_DEFAULT_PROVIDER = "LDAPGATE_DEFAULT_PROVIDER"


class BindSettingsDict(TypedDict):
	anonymous: NotRequired[bool]
	dn: NotRequired[str | None]
	password: NotRequired[str | None]


class RolesSettingsDict(TypedDict):
	default: NotRequired[list[str]]
	user_mapping: NotRequired[dict[str, list[str]]]
	group_mapping: NotRequired[dict[str, list[str]]]
	property_mapping: NotRequired[dict[str, dict[str, str | list[str]]]]


class ProviderSettingsDict(TypedDict):
	host: str
	port: NotRequired[int]
	type: NotRequired[str]
	use_ssl: NotRequired[bool]
	use_tls: NotRequired[bool]
	connect_timeout: NotRequired[int]
	receive_timeout: NotRequired[int]
	probe_timeout: NotRequired[int]
	ldap_options: NotRequired[dict]
	bind: NotRequired[BindSettingsDict]
	user: NotRequired[dict]
	base_dn: str
	filter: NotRequired[dict]
	group: NotRequired[dict]
	attributes: NotRequired[list[str] | None]
	domain: NotRequired[str | None]
	username_suffix: NotRequired[str | None]
	roles: NotRequired[RolesSettingsDict]
	allow_standin_authentication: NotRequired[bool]
	create_accounts: NotRequired[bool]
	profile_mapping: NotRequired[dict[str, str]]
	account_store: NotRequired[str]
	role_registry: NotRequired[str]
	profile_store: NotRequired[str]


def _copy_setting(value):
	# Callables and instances are kept as given
	if isinstance(value, Mapping):
		return {k: _copy_setting(v) for k, v in value.items()}
	if isinstance(value, (list, tuple, set)):
		return type(value)(_copy_setting(v) for v in value)
	return value


def merge_settings(base: Mapping, overrides: Mapping) -> dict:
	"""Recursively merge overrides over base, nested mappings included."""
	r = _copy_setting(base)
	for k, v in overrides.items():
		if isinstance(v, Mapping) and isinstance(r.get(k), Mapping):
			r[k] = merge_settings(r[k], v)
		else:
			r[k] = _copy_setting(v)
	return r


def get_provider_names() -> list[str]:
	providers = getattr(django_settings, SETTING_PROVIDERS, None)
	if not providers:
		return []
	return list(providers.keys())


def get_default_provider_name() -> str:
	name = getattr(django_settings, SETTING_DEFAULT_PROVIDER, None)
	if name:
		return name
	names = get_provider_names()
	if not names:
		raise ConfigurationError(
			data={"message": f"No LDAP Providers configured in {SETTING_PROVIDERS}."}
		)
	return names[0]


def get_provider_settings(name: str = None) -> ProviderSettingsDict:
	"""Returns the merged options for a configured provider"""
	if name is None:
		name = get_default_provider_name()
	providers = getattr(django_settings, SETTING_PROVIDERS, None) or {}
	if name not in providers:
		raise ConfigurationError(
			data={"message": f"LDAP Provider {name} is not configured."}
		)
	provider_settings = providers[name]
	if not isinstance(provider_settings, Mapping):
		raise ConfigurationError(
			data={"message": f"LDAP Provider {name} settings must be a dictionary."}
		)
	logger.debug("Loading settings for LDAP Provider %s", name)
	return merge_settings(defaults.PROVIDER_DEFAULTS, provider_settings)
