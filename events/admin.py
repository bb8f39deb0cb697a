from django.contrib import admin

from events.models import Attendance, Event


class AttendanceInline(admin.TabularInline):
    model = Attendance
    extra = 0
    readonly_fields = ["user", "created_at"]
    can_delete = True

    def has_add_permission(self, request, obj=None) -> bool:
        # admissions go through the capacity-checked store
        return False


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["title", "location", "date", "capacity", "creator", "created_at"]
    search_fields = ["title", "location"]
    readonly_fields = ["creator", "capacity", "created_at", "updated_at"]
    inlines = [AttendanceInline]

    def has_add_permission(self, request) -> bool:
        return False


@admin.register(Attendance)
class AttendanceAdmin(admin.ModelAdmin):
    list_display = ["event", "user", "created_at"]
    list_filter = ["event"]

    def has_add_permission(self, request) -> bool:
        return False
