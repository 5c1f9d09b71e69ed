from ldap3.utils.conv import escape_filter_chars
from ldap3.utils.dn import escape_rdn
from ldapgate.ldap.constants import PLACEHOLDERS


def has_placeholder(template: str) -> bool:
	"""Check if a template contains a substitutable placeholder."""
	if not isinstance(template, str):
		return False
	return any(p in template for p in PLACEHOLDERS)


def substitute(template: str, value: str) -> str:
	"""Replace the template placeholder with an already escaped value"""
	if not isinstance(template, str):
		raise TypeError("template must be of type str.")
	for placeholder in PLACEHOLDERS:
		if placeholder in template:
			return template.replace(placeholder, value)
	return template


def format_filter(template: str, value: str) -> str:
	"""Substitute a value into an LDAP search filter template"""
	return substitute(template, escape_filter_chars(value))


def format_dn(template: str, value: str) -> str:
	"""Substitute a value into a Distinguished Name template"""
	return substitute(template, escape_rdn(value))
