from django.contrib import admin

from .models import Store

# Register your models here.


@admin.register(Store)
class StoreAdmin(admin.ModelAdmin):
    list_display = ('name', 'email', 'owner', 'created_at')
    search_fields = ('name', 'email', 'address')
    raw_id_fields = ('owner',)
