# users/services.py
"""
Identity Store: account creation, credential checks and self-service
profile changes. Views stay thin and call into IdentityService.
"""
from collections import namedtuple
import logging

from django.contrib.auth.hashers import (
    BCryptPasswordHasher,
    identify_hasher,
    is_password_usable,
)
from django.contrib.auth.models import update_last_login
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email
from django.db import IntegrityError, transaction
from django.utils.crypto import constant_time_compare

from authx.tokens import issue_session_token
from core.constants import (
    ALLOWED_ROLES,
    DEFAULT_ROLE,
    MIN_PASSWORD_LENGTH,
    ROLE_MANAGEMENT,
)
from core.exceptions import (
    AuthError,
    ConflictError,
    NotFoundError,
    ValidationError,
    storage_errors,
)
from .models import User
from .serializers import UserSerializer

logger = logging.getLogger("devflow.users")


# ---- Profile patch table ----------------------------------------------

ProfileField = namedtuple("ProfileField", ["clean", "required_role"])


def _clean_name(value):
    if isinstance(value, str) and value.strip():
        return value.strip()[:150]
    return None


def _clean_phone(value):
    if isinstance(value, str) and len(value.strip()) <= 20:
        return value.strip()
    return None


def _clean_role(value):
    if isinstance(value, str) and value in ALLOWED_ROLES:
        return value
    return None


# field -> (cleaner returning None for "ignore", role the caller must hold)
PROFILE_FIELDS = {
    "name": ProfileField(_clean_name, None),
    "phone": ProfileField(_clean_phone, None),
    "role": ProfileField(_clean_role, ROLE_MANAGEMENT),
}


def apply_profile_patch(user, patch) -> list:
    """
    Apply recognized, valid fields of `patch` to `user` in place.

    Unknown fields, invalid values and fields the user's role may not touch
    are skipped silently. Returns the names of the fields that changed.
    """
    changed = []
    for field, rule in PROFILE_FIELDS.items():
        if field not in patch:
            continue
        if rule.required_role and user.effective_role != rule.required_role:
            continue
        value = rule.clean(patch[field])
        if value is None:
            continue
        setattr(user, field, value)
        changed.append(field)
    return changed


# ---- Password helpers -------------------------------------------------


# Raw bcrypt hashes written by the old store
BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")

LEGACY_BCRYPT = "bcrypt"
LEGACY_PLAIN = "plain"


def _legacy_scheme(stored):
    """
    Accounts imported from the old store kept either a raw bcrypt hash or,
    for the oldest rows, the password in plain text.

    Returns LEGACY_BCRYPT, LEGACY_PLAIN, or None for passwords Django
    already manages.
    """
    if not stored or not is_password_usable(stored):
        return None
    if stored.startswith(BCRYPT_PREFIXES):
        return LEGACY_BCRYPT
    try:
        identify_hasher(stored)
    except ValueError:
        return LEGACY_PLAIN
    return None


def _verify_legacy_bcrypt(stored: str, raw_password: str) -> bool:
    hasher = BCryptPasswordHasher()
    try:
        return hasher.verify(raw_password, f"{hasher.algorithm}${stored}")
    except ValueError:
        # Malformed salt in the stored value
        return False


def _verify_password(user, raw_password) -> bool:
    if not isinstance(raw_password, str) or not raw_password:
        return False
    scheme = _legacy_scheme(user.password)
    if scheme == LEGACY_BCRYPT:
        return _verify_legacy_bcrypt(user.password, raw_password)
    if scheme == LEGACY_PLAIN:
        return constant_time_compare(user.password, raw_password)
    return user.check_password(raw_password)


def _require(value) -> str:
    return value if isinstance(value, str) and value.strip() else ""


def _get_user(user_id) -> User:
    try:
        return User.objects.get(pk=user_id)
    except (User.DoesNotExist, ValueError, TypeError):
        raise NotFoundError("User not found")


class IdentityService:

    @staticmethod
    def profile(user) -> dict:
        return UserSerializer(user).data

    @staticmethod
    def register(name, email, password, role, phone=None) -> dict:
        name = _require(name).strip()
        email = _require(email)
        password = password if isinstance(password, str) else ""
        role = _require(role)

        if not name or not email or not password or not role:
            raise ValidationError("Name, email, password and role are required")

        if role not in ALLOWED_ROLES:
            raise ValidationError("Invalid role selected")

        try:
            validate_email(email)
        except DjangoValidationError:
            raise ValidationError("Enter a valid email address")

        phone = phone.strip() if isinstance(phone, str) else ""
        if len(phone) > 20:
            raise ValidationError("Phone number is too long")

        if User.objects.filter(email=email).exists():
            raise ConflictError("Email already registered")

        try:
            with storage_errors("register"), transaction.atomic():
                user = User.objects.create_user(
                    email=email,
                    password=password,
                    name=name[:150],
                    role=role,
                    phone=phone,
                )
        except IntegrityError:
            raise ConflictError("Email already registered")

        logger.info(f"User registered: id={user.pk}, role={role}")
        return IdentityService.profile(user)

    @staticmethod
    def authenticate(email, password, role):
        """
        Verify credentials and issue a session token.

        Returns (profile, token).
        """
        user = User.objects.filter(email=email).first() if isinstance(email, str) else None

        if user is None:
            raise AuthError("Invalid email or password")

        if not isinstance(role, str) or role not in ALLOWED_ROLES:
            raise ValidationError("Please select a valid role")

        if user.effective_role != role:
            logger.warning(f"Login role mismatch: user={user.pk}, requested={role}")
            raise AuthError("Role does not match this account")

        legacy = _legacy_scheme(user.password) is not None
        if not _verify_password(user, password):
            logger.info(f"Failed login: user={user.pk}")
            raise AuthError("Invalid email or password")

        if legacy:
            # Rehash legacy bcrypt or plain-text secrets with the default hasher
            user.set_password(password)
            if not user.role:
                user.role = DEFAULT_ROLE
            with storage_errors("legacy password migration"):
                user.save(update_fields=["password", "role"])
            logger.info(f"Migrated legacy password for user={user.pk}")

        with storage_errors("login"):
            update_last_login(None, user)

        token = issue_session_token(user)
        return IdentityService.profile(user), token

    @staticmethod
    def get_self(user_id) -> dict:
        return IdentityService.profile(_get_user(user_id))

    @staticmethod
    def update_self(user_id, patch) -> dict:
        user = _get_user(user_id)
        changed = apply_profile_patch(user, patch if isinstance(patch, dict) else {})
        if changed:
            with storage_errors("profile update"):
                user.save(update_fields=changed)
            logger.info(f"Profile updated: user={user.pk}, fields={changed}")
        return IdentityService.profile(user)

    @staticmethod
    def change_password(user_id, current_password, new_password) -> None:
        if (
            not isinstance(current_password, str)
            or not current_password
            or not isinstance(new_password, str)
            or len(new_password) < MIN_PASSWORD_LENGTH
        ):
            raise ValidationError(
                f"Current password and new password (min {MIN_PASSWORD_LENGTH} chars) are required"
            )

        user = _get_user(user_id)
        if not _verify_password(user, current_password):
            raise AuthError("Current password is incorrect")

        user.set_password(new_password)
        with storage_errors("password change"):
            user.save(update_fields=["password"])
        logger.info(f"Password changed: user={user.pk}")

    @staticmethod
    def list_users() -> list:
        return UserSerializer(User.objects.order_by("-date_joined"), many=True).data

    @staticmethod
    def delete_user(user_id) -> None:
        user = _get_user(user_id)
        with storage_errors("user deletion"):
            user.delete()
        logger.info(f"User deleted: id={user_id}")
