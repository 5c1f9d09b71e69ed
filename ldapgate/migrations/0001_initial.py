from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

	initial = True

	dependencies = [
		migrations.swappable_dependency(settings.AUTH_USER_MODEL),
	]

	operations = [
		migrations.CreateModel(
			name="Account",
			fields=[
				("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
				("modified_at", models.DateTimeField(auto_now=True, verbose_name="modified at")),
				("id", models.BigAutoField(primary_key=True, serialize=False)),
				("account_identifier", models.CharField(max_length=255, verbose_name="Account identifier")),
				("authentication_provider_name", models.CharField(max_length=128, verbose_name="Authentication provider")),
				("dn", models.CharField(blank=True, max_length=512, null=True, verbose_name="distinguishedName")),
				("roles", models.JSONField(blank=True, default=list, verbose_name="Roles")),
				("credentials_source", models.CharField(blank=True, max_length=256, null=True, verbose_name="Credentials verifier")),
				("is_active", models.BooleanField(default=True, verbose_name="Active")),
				("expiration_date", models.DateTimeField(blank=True, null=True, verbose_name="Expiration date")),
				("failed_authentication_count", models.PositiveIntegerField(default=0)),
				("last_successful_authentication_date", models.DateTimeField(blank=True, null=True)),
				(
					"user",
					models.OneToOneField(
						blank=True,
						null=True,
						on_delete=django.db.models.deletion.CASCADE,
						related_name="ldap_account",
						to=settings.AUTH_USER_MODEL,
					),
				),
			],
			options={
				"verbose_name": "Account",
				"verbose_name_plural": "Accounts",
			},
		),
		migrations.AddConstraint(
			model_name="account",
			constraint=models.UniqueConstraint(
				fields=("account_identifier", "authentication_provider_name"),
				name="account_identifier_provider_unique",
			),
		),
	]
