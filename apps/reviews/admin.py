"""Admin registration for reviews."""

from django.contrib import admin

from .models import Review


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'facility', 'coach', 'rating', 'created_at')
    list_filter = ('rating',)
    search_fields = ('user__email', 'facility__name', 'comment')
    readonly_fields = ('provider_response_at', 'created_at', 'updated_at')
