################################################################################
#################### INTERLOCK IS LICENSED UNDER GNU AGPLv3 ####################
################## ORIGINAL PROJECT CREATED BY DYLAN BLANQUÉ ###################
########################## AND BR CONSULTING S.R.L. ############################
################################################################################
# Module: ldapgate.models.base
# Contains the Base Model
#
#---------------------------------- IMPORTS -----------------------------------#
from django.db import models
from django.utils.translation import gettext_lazy as _
################################################################################

class BaseModel(models.Model):

	created_at = models.DateTimeField(_("created at"), auto_now_add=True)
	modified_at = models.DateTimeField(_("modified at"), auto_now=True)

	class Meta:
		abstract = True
