from django.contrib import admin

from .models import Rating

# Register your models here.


@admin.register(Rating)
class RatingAdmin(admin.ModelAdmin):
    list_display = ('store', 'user', 'rating', 'updated_at')
    list_filter = ('rating',)
    raw_id_fields = ('user', 'store')
