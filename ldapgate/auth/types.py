################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: ldapgate.auth.types
# Contains the credential token and authentication outcome types

# ---------------------------------- IMPORTS --------------------------------- #
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from ldapgate.ldap.types.entry import DirectoryEntry
################################################################################


class AuthStatus(Enum):
	NO_CREDENTIALS_GIVEN = "no_credentials_given"
	WRONG_CREDENTIALS = "wrong_credentials"
	AUTHENTICATION_SUCCESSFUL = "authentication_successful"


@dataclass(frozen=True)
class UsernamePasswordToken:
	username: str | None = None
	password: str | None = field(default=None, repr=False)

	@property
	def has_credentials(self) -> bool:
		return bool(self.username) and bool(self.password)


@dataclass(frozen=True)
class AuthOutcome:
	status: AuthStatus
	account_identifier: str | None = None
	roles: tuple[str, ...] = ()
	entry: DirectoryEntry | None = None
	account: Any = None
	# Authenticated against a cached verifier while the directory was offline
	standin: bool = False

	@property
	def is_successful(self) -> bool:
		return self.status == AuthStatus.AUTHENTICATION_SUCCESSFUL
