import pytest
from django.test import Client

from core.models import Couple

PASSWORD = 'correct-horse-battery'


@pytest.fixture
def make_user(db, django_user_model):
    def make(username):
        return django_user_model.objects.create_user(username=username, password=PASSWORD)
    return make


@pytest.fixture
def alice(make_user):
    return make_user('alice')


@pytest.fixture
def bob(make_user):
    return make_user('bob')


@pytest.fixture
def couple(alice, bob):
    return Couple.objects.create(partner1=alice, partner2=bob)


@pytest.fixture
def other_couple(make_user):
    return Couple.objects.create(partner1=make_user('carol'), partner2=make_user('dave'))


@pytest.fixture
def loner(make_user):
    return make_user('loner')


def _client_for(user):
    client = Client()
    client.force_login(user)
    return client


@pytest.fixture
def alice_client(alice, couple):
    return _client_for(alice)


@pytest.fixture
def bob_client(bob, couple):
    return _client_for(bob)


@pytest.fixture
def loner_client(loner):
    return _client_for(loner)
