from django.db import models
from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.utils.translation import gettext_lazy as _
from .managers import CustomUserManager


class User(AbstractBaseUser, PermissionsMixin):
    email = models.EmailField(unique=True)
    name = models.CharField(_("Name"), max_length=150)
    designation = models.CharField(_("Designation"), max_length=150, blank=True)
    bio = models.TextField(_("Biography"), blank=True)
    skills = models.JSONField(_("Skills"), default=list, blank=True)

    # URL in the external media store
    avatar = models.URLField(_("Avatar"), max_length=500, blank=True)

    is_staff = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)
    date_joined = models.DateTimeField(auto_now_add=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['name']

    objects = CustomUserManager()

    def __str__(self):
        return f"{self.name} <{self.email}>"

    @property
    def display_name(self):
        return self.name or self.email
