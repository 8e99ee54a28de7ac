# users/models.py
from django.contrib.auth.base_user import BaseUserManager
from django.contrib.auth.models import AbstractUser
from django.db import models

from core.constants import DEFAULT_ROLE, ROLE_CHOICES, ROLE_MANAGEMENT


class UserManager(BaseUserManager):
    """
    Email is the login field; there is no username.
    """
    use_in_migrations = True

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError("The email must be set")
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", ROLE_MANAGEMENT)
        return self._create_user(email, password, **extra_fields)


class User(AbstractUser):
    username = None
    first_name = None
    last_name = None

    # Compared verbatim: no case folding
    email = models.EmailField(unique=True)
    name = models.CharField(max_length=150)

    # Blank only for accounts imported from the legacy store
    role = models.CharField(
        max_length=30,
        choices=ROLE_CHOICES,
        default=DEFAULT_ROLE,
        blank=True,
    )

    phone = models.CharField(max_length=20, blank=True, default="")

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["name"]

    objects = UserManager()

    class Meta:
        ordering = ["-date_joined"]

    @property
    def effective_role(self):
        return self.role or DEFAULT_ROLE

    def get_full_name(self):
        return self.name

    def get_short_name(self):
        return self.name

    def __str__(self):
        return f"{self.name} <{self.email}>"
