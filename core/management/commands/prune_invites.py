"""
Management command to clean up invite codes nobody can redeem anymore.

Usage:
    python manage.py prune_invites                  # Expired, never-used invites
    python manage.py prune_invites --include-used   # ...plus every used invite
    python manage.py prune_invites --dry-run        # Preview without deleting
"""

from django.core.management.base import BaseCommand
from django.db.models import Q
from django.utils import timezone
from core.models import Invite


class Command(BaseCommand):
    help = 'Delete expired (and optionally used) invite codes'

    def add_arguments(self, parser):
        parser.add_argument(
            '--include-used',
            action='store_true',
            help='Also delete invites that were already redeemed',
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Preview changes without deleting',
        )

    def handle(self, *args, **options):
        stale = Q(used_at__isnull=True, expires_at__lte=timezone.now())
        if options['include_used']:
            stale |= Q(used_at__isnull=False)

        queryset = Invite.objects.filter(stale)
        total = queryset.count()
        self.stdout.write(f"Found {total} invites to prune")

        if options['dry_run']:
            self.stdout.write(self.style.WARNING('DRY RUN - no changes will be saved'))
            for invite in queryset.select_related('issuer'):
                state = 'used' if invite.is_used else 'expired'
                self.stdout.write(f"  {invite.code} [{invite.issuer.username}] {state}")
            return

        deleted = queryset.delete()[0]
        self.stdout.write(self.style.SUCCESS(f'Done! Deleted {deleted} invites.'))
