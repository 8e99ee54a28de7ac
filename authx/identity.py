# authx/identity.py
from django.utils.functional import cached_property
from rest_framework_simplejwt.models import TokenUser


class SessionIdentity(TokenUser):
    """
    Request identity rebuilt from a verified session token:
    {id, email, role, name}. No database access.
    """

    @cached_property
    def email(self):
        return self.token.get("email", "")

    @cached_property
    def role(self):
        return self.token.get("role", "")

    @cached_property
    def name(self):
        return self.token.get("name", "")
