from django.apps import AppConfig


class AdminPanelAppConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'admin_panel_app'
