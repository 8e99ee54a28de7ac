# authx/tokens.py
"""
Session credential issuance.

Sessions are signed SimpleJWT access tokens; their lifetime comes from
SIMPLE_JWT["ACCESS_TOKEN_LIFETIME"] (7 days). The identity claims are copied
into the token so requests can be authorized without a user lookup.
"""
from rest_framework_simplejwt.tokens import AccessToken


def issue_session_token(user) -> str:
    token = AccessToken.for_user(user)
    token["email"] = user.email
    token["role"] = user.effective_role
    token["name"] = user.name
    return str(token)
