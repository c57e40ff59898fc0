from django.contrib import admin

from campus_events.models import Event, Registration


class RegistrationInline(admin.TabularInline):
    model = Registration
    extra = 0
    fields = ["name", "roll_number", "email", "status", "created_at"]
    readonly_fields = fields
    can_delete = False


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["title", "category", "venue", "date", "max_participants", "is_active"]
    list_filter = ["category", "is_active"]
    search_fields = ["title", "venue"]
    inlines = [RegistrationInline]


@admin.register(Registration)
class RegistrationAdmin(admin.ModelAdmin):
    list_display = ["name", "roll_number", "event", "status", "created_at"]
    list_filter = ["status", "event"]
    search_fields = ["name", "email", "roll_number"]
