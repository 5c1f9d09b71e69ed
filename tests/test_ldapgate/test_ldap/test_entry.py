########################### Standard Pytest Imports ############################
import pytest
################################################################################
from ldapgate.ldap.types.entry import (
	DirectoryEntry,
	entries_from_response,
	normalize_values,
)

@pytest.mark.parametrize(
	"value, expected",
	(
		(None, ()),
		("alice", ("alice",)),
		(b"alice", ("alice",)),
		(["a", b"b"], ("a", "b")),
		(5, ("5",)),
	),
)
def test_normalize_values(value, expected):
	assert normalize_values(value) == expected


class TestDirectoryEntry:
	@staticmethod
	def test_requires_dn():
		with pytest.raises(ValueError):
			DirectoryEntry(dn="")

	@staticmethod
	def test_attributes_are_case_insensitive(f_user_entry: DirectoryEntry):
		assert f_user_entry.has("GIVENNAME")
		assert f_user_entry.get_values("givenname") == ("Alice",)
		assert f_user_entry.get_first("MAIL") == "alice@example.com"

	@staticmethod
	def test_missing_attribute(f_user_entry: DirectoryEntry):
		assert not f_user_entry.has("telephoneNumber")
		assert f_user_entry.get_values("telephoneNumber") == ()
		assert f_user_entry.get_first("telephoneNumber", "none") == "none"

	@staticmethod
	def test_single_values_become_sequences():
		entry = DirectoryEntry(dn="cn=a", attributes={"cn": "a"})
		assert entry.get_values("cn") == ("a",)



def test_entries_from_response_skips_references(g_search_response):
	response = g_search_response(("cn=a,dc=x", {"cn": ["a"]}))
	response.append({"type": "searchResRef", "uri": ["ldap://other/"]})
	response.append({"type": "searchResEntry", "dn": "", "attributes": {}})
	entries = entries_from_response(response)
	assert len(entries) == 1
	assert entries[0].dn == "cn=a,dc=x"

@pytest.mark.parametrize("response", (None, []))
def test_entries_from_empty_response(response):
	assert entries_from_response(response) == []
