from django.apps import AppConfig
from django.db.models.signals import post_migrate


class AccountsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'accounts'
    verbose_name = 'Accounts'

    def ready(self):
        """Create the default admin once the schema exists."""
        from accounts.services import bootstrap_admin_after_migrate

        post_migrate.connect(bootstrap_admin_after_migrate, sender=self)
