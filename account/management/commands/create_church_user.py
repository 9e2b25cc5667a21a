from django.contrib.auth.models import User
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from account.models import UserProfile
from account.roles import Role, parse_role
from jemaat.models import Rayon


class Command(BaseCommand):
    help = "Buat / update user aplikasi gereja beserta role-nya"

    def add_arguments(self, parser):
        parser.add_argument("username")
        parser.add_argument("--password", required=True)
        parser.add_argument("--email", default="")
        parser.add_argument("--role", default=Role.JEMAAT, help=", ".join(Role.values))
        parser.add_argument("--rayon", default=None, help="Nama rayon (untuk MAJELIS)")

    @transaction.atomic
    def handle(self, *args, **options):
        role = parse_role(options["role"])
        if role is None:
            raise CommandError(f"Role tidak dikenal: {options['role']}")

        rayon = None
        if options["rayon"]:
            rayon = Rayon.objects.filter(nama_rayon__iexact=options["rayon"]).first()
            if rayon is None:
                raise CommandError(f"Rayon '{options['rayon']}' tidak ditemukan")

        user, created = User.objects.get_or_create(
            username=options["username"],
            defaults={"email": options["email"]},
        )
        user.set_password(options["password"])
        if options["email"]:
            user.email = options["email"]
        # ADMIN / PENDETA juga boleh masuk Django admin
        user.is_staff = role in (Role.ADMIN, Role.PENDETA)
        user.save()

        UserProfile.objects.update_or_create(
            user=user,
            defaults={"role": role, "rayon": rayon},
        )

        verb = "Created" if created else "Updated"
        self.stdout.write(self.style.SUCCESS(f"{verb} {user.username} ({role.label})"))
