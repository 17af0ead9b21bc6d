from datetime import timedelta
from io import StringIO

import pytest
from django.core.management import call_command
from django.utils import timezone

from core.models import Invite

pytestmark = pytest.mark.django_db


@pytest.fixture
def invites(make_user):
    issuer = make_user('sam')
    now = timezone.now()
    return {
        'live': Invite.objects.create(issuer=issuer),
        'expired': Invite.objects.create(issuer=issuer, expires_at=now - timedelta(hours=1)),
        'used': Invite.objects.create(issuer=issuer, used_at=now, used_by=make_user('alex')),
    }


def run(*args):
    out = StringIO()
    call_command('prune_invites', *args, stdout=out)
    return out.getvalue()


def remaining():
    return set(Invite.objects.values_list('code', flat=True))


def test_prunes_expired_unused_invites(invites):
    output = run()

    assert 'Found 1 invites to prune' in output
    assert 'Deleted 1 invites' in output
    assert remaining() == {invites['live'].code, invites['used'].code}


def test_include_used_also_prunes_redeemed_invites(invites):
    output = run('--include-used')

    assert 'Deleted 2 invites' in output
    assert remaining() == {invites['live'].code}


def test_dry_run_changes_nothing(invites):
    output = run('--dry-run', '--include-used')

    assert 'Found 2 invites to prune' in output
    assert 'DRY RUN' in output
    assert invites['expired'].code in output
    assert len(remaining()) == 3
