from django.core.management.base import BaseCommand
from django.contrib.auth import get_user_model

from core.constants import ROLE_MANAGEMENT, ROLE_TEAM_MEMBER

User = get_user_model()

SAMPLE_USERS = [
    {"name": "Prashant", "email": "prashantpanwar@gmail.com", "password": "12345678", "role": ROLE_MANAGEMENT},
    {"name": "Aman", "email": "aman@gmail.com", "password": "87654321", "role": ROLE_TEAM_MEMBER},
]


class Command(BaseCommand):
    help = "Seeds the database with one management and one team member account"

    def handle(self, *args, **options):
        self.stdout.write("🌱 Seeding users...")

        emails = [u["email"] for u in SAMPLE_USERS]
        deleted, _ = User.objects.filter(email__in=emails).delete()
        if deleted:
            self.stdout.write(f"Removed {deleted} existing sample rows")

        for data in SAMPLE_USERS:
            user = User.objects.create_user(
                email=data["email"],
                password=data["password"],
                name=data["name"],
                role=data["role"],
            )
            self.stdout.write(f"Created {user.email} ({user.role})")

        self.stdout.write(self.style.SUCCESS("Sample users added"))
