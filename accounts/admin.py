from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User
from .forms import CustomUserCreationForm, CustomUserChangeForm


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    model = User
    add_form = CustomUserCreationForm
    form = CustomUserChangeForm

    list_display = ('phone', 'name', 'role', 'has_barber_profile', 'is_active', 'date_joined')
    list_filter = ('role', 'is_active', 'is_staff')
    search_fields = ('phone', 'name', 'email')
    ordering = ('-date_joined',)
    readonly_fields = ('date_joined', 'last_login')

    fieldsets = (
        (None, {'fields': ('phone', 'password')}),
        ('Perfil', {'fields': ('name', 'email', 'role')}),
        ('Acesso', {'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        ('Datas', {'fields': ('last_login', 'date_joined')}),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('phone', 'name', 'role', 'password1', 'password2')}
        ),
    )

    @admin.display(boolean=True, description='Perfil de barbeiro')
    def has_barber_profile(self, obj):
        # role alone does not guarantee the Barber row exists
        return obj.is_barber and hasattr(obj, 'barber')
