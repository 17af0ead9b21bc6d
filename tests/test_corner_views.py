import pytest
from django.urls import reverse

from core.canvas import CornerCanvas
from core.models import CanvasItem

pytestmark = pytest.mark.django_db

HTMX = {'HX-Request': 'true'}
BROWSER = {'Accept': 'text/html,application/xhtml+xml'}


def post_json(client, url, payload=None, **kwargs):
    return client.post(url, payload or {}, content_type='application/json', **kwargs)


@pytest.fixture
def lamp(couple):
    return CornerCanvas(couple).place('lamp')


def item_url(name, item):
    return reverse(f'corner_item_{name}', args=[item.pk])


def test_create_item_returns_json(alice_client, couple):
    response = post_json(alice_client, reverse('corner_item_create'), {'item_key': 'lamp'})

    assert response.status_code == 201
    body = response.json()
    assert body['success'] is True
    assert body['item']['item_key'] == 'lamp'
    assert body['item']['x'] == 50
    assert body['item']['layer'] == 0
    assert CanvasItem.objects.get(pk=body['item']['id']).couple == couple


def test_create_item_via_htmx_returns_fragment(alice_client):
    response = alice_client.post(
        reverse('corner_item_create'), {'item_key': 'plant', 'x': '20', 'y': '80'}, headers=HTMX
    )

    assert response.status_code == 201
    html = response.content.decode()
    assert 'data-item-key="plant"' in html
    assert 'left: 20.0%' in html


def test_create_item_from_browser_form_redirects(alice_client):
    response = alice_client.post(reverse('corner_item_create'), {'item_key': 'rug'}, headers=BROWSER)

    assert response.status_code == 302
    assert response.url == reverse('corner')
    assert CanvasItem.objects.filter(item_key='rug').exists()


def test_create_item_without_key_is_a_validation_error(alice_client):
    response = post_json(alice_client, reverse('corner_item_create'), {'x': 10})

    assert response.status_code == 400
    assert response.json()['error'] == 'validation'
    assert not CanvasItem.objects.exists()


@pytest.mark.parametrize('item_key', [{'a': 1}, 'x' * 65])
def test_create_item_with_malformed_key_is_a_validation_error(alice_client, item_key):
    response = post_json(alice_client, reverse('corner_item_create'), {'item_key': item_key})

    assert response.status_code == 400
    assert response.json()['error'] == 'validation'
    assert not CanvasItem.objects.exists()


def test_unpaired_user_gets_not_paired(loner_client):
    response = post_json(loner_client, reverse('corner_item_create'), {'item_key': 'lamp'})

    assert response.status_code == 400
    assert response.json()['error'] == 'not_paired'


def test_anonymous_user_is_sent_to_login(client):
    response = post_json(client, reverse('corner_item_create'), {'item_key': 'lamp'})

    assert response.status_code == 302
    assert reverse('login') in response.url


def test_mutations_are_post_only(alice_client, lamp):
    assert alice_client.get(item_url('nudge', lamp)).status_code == 405


def test_malformed_json_is_rejected(alice_client, lamp):
    response = alice_client.post(item_url('nudge', lamp), '{not json', content_type='application/json')

    assert response.status_code == 400
    assert response.json()['error'] == 'validation'


@pytest.mark.parametrize('name, payload', [
    ('position', {'x': 10 ** 400, 'y': 5}),
    ('nudge', {'dx': 10 ** 400, 'dy': -(10 ** 400), 'drot': 10 ** 400}),
    ('height', {'dz': 10 ** 400}),
    ('scale', {'scale': 10 ** 400}),
    ('layer', {'layer': -(10 ** 400)}),
    ('tilt', {'tilt_x': 10 ** 400, 'tilt_y': 10 ** 400}),
    ('stack', {'dir': 10 ** 400}),
])
def test_huge_integers_in_json_are_not_fatal(alice_client, lamp, name, payload):
    response = post_json(alice_client, item_url(name, lamp), payload)

    assert response.status_code == 200
    item = response.json()['item']
    assert 0 <= item['x'] <= 100
    assert 0 <= item['y'] <= 100
    assert 0.25 <= item['scale'] <= 2.0
    assert 0 <= item['rotation'] < 360


def test_huge_integer_position_stays_on_canvas(alice_client, lamp):
    item = post_json(alice_client, item_url('position', lamp), {'x': 10 ** 400, 'y': 5}).json()['item']
    assert (item['x'], item['y']) == (0, 5)


def test_create_with_huge_integers(alice_client):
    response = post_json(alice_client, reverse('corner_item_create'), {'item_key': 'lamp', 'x': 10 ** 400})

    assert response.status_code == 201
    assert response.json()['item']['x'] == 50


def test_nudge_height_and_tilt_scenario(alice_client, lamp):
    item = post_json(alice_client, item_url('nudge', lamp), {'dx': 10, 'dy': -5, 'drot': 370}).json()['item']
    assert (item['x'], item['y'], item['rotation']) == (60, 45, 10)

    item = post_json(alice_client, item_url('height', lamp), {'dz': 25}).json()['item']
    assert item['z'] == 20

    item = post_json(alice_client, item_url('tilt', lamp), {'tilt_x': 90, 'tilt_y': -90}).json()['item']
    assert (item['tilt_x'], item['tilt_y']) == (60, -60)


def test_form_encoded_bodies_are_accepted(alice_client, lamp):
    response = alice_client.post(item_url('position', lamp), {'x': '120', 'y': '12.5'})

    assert response.status_code == 200
    item = response.json()['item']
    assert (item['x'], item['y']) == (100, 12.5)


@pytest.mark.parametrize('name, payload, field, expected', [
    ('scale', {'scale': 'huge'}, 'scale', 1.0),
    ('scale', {'scale': 0.01}, 'scale', 0.25),
    ('layer', {'layer': 99999}, 'layer', 1000),
    ('stack', {'dir': 3}, 'layer', 1),
    ('stack', {'dir': -3}, 'layer', -1),
    ('color', {'color': '#FF00AA'}, 'color', 16711850),
    ('color', {'color': 16711850}, 'color', 16711850),
    ('color', {'color': 'mauve'}, 'color', None),
])
def test_absolute_setters(alice_client, lamp, name, payload, field, expected):
    response = post_json(alice_client, item_url(name, lamp), payload)

    assert response.status_code == 200
    assert response.json()['item'][field] == expected


def test_flip_endpoint(alice_client, lamp):
    item = post_json(alice_client, item_url('flip', lamp), {'flip_x': 1, 'flip_y': 0}).json()['item']
    assert (item['flip_x'], item['flip_y']) == (True, False)


def test_partner_sees_and_edits_the_same_item(alice_client, bob_client, lamp):
    post_json(bob_client, item_url('position', lamp), {'x': 5, 'y': 5})

    items = alice_client.get(reverse('corner_items')).json()['items']
    assert [(i['id'], i['x'], i['y']) for i in items] == [(lamp.pk, 5, 5)]


def test_delete_via_htmx_signals_removal(alice_client, lamp):
    response = alice_client.post(item_url('delete', lamp), headers=HTMX)

    assert response.status_code == 200
    assert response['HX-Trigger'] == 'itemRemoved'
    assert response.content == b''
    assert not CanvasItem.objects.filter(pk=lamp.pk).exists()


def test_delete_returns_json(alice_client, lamp):
    response = post_json(alice_client, item_url('delete', lamp))

    assert response.json() == {'success': True, 'deleted': lamp.pk, 'event': 'itemRemoved'}


def test_other_couples_item_is_not_found(alice_client, other_couple):
    theirs = CornerCanvas(other_couple).place('plant', x=10)

    response = post_json(alice_client, item_url('delete', theirs))
    assert response.status_code == 404
    assert response.json()['error'] == 'not_found'

    response = alice_client.post(item_url('nudge', theirs), {'dx': 5}, headers=HTMX)
    assert response.status_code == 404
    assert 'data-error="not_found"' in response.content.decode()

    theirs.refresh_from_db()
    assert theirs.x == 10


def test_couple_colors_are_coalesced(alice_client, bob_client, couple):
    post_json(alice_client, reverse('corner_colors'), {'canvas': '#112233'})
    response = post_json(bob_client, reverse('corner_colors'), {'floor': '#445566'})

    assert response.json()['colors'] == {'canvas': 0x112233, 'floor': 0x445566, 'wall': None}
    couple.refresh_from_db()
    assert couple.corner_canvas_color == 0x112233


def test_couple_colors_via_htmx_render_hex(alice_client):
    response = alice_client.post(reverse('corner_colors'), {'wall': '#ABCDEF'}, headers=HTMX)

    assert response.status_code == 200
    assert '#ABCDEF' in response.content.decode()


def test_corner_page_lists_items_in_render_order(alice_client, couple):
    canvas = CornerCanvas(couple)
    back = canvas.place('back')
    front = canvas.place('front')
    canvas.set_layer(back.pk, layer=-5)
    canvas.set_layer(front.pk, layer=5)

    response = alice_client.get(reverse('corner'))

    assert response.status_code == 200
    assert [i.pk for i in response.context['items']] == [back.pk, front.pk]
    html = response.content.decode()
    assert html.index('item-%d' % back.pk) < html.index('item-%d' % front.pk)


def test_corner_page_sends_unpaired_users_to_invite(loner_client):
    response = loner_client.get(reverse('corner'))

    assert response.status_code == 302
    assert response.url == reverse('invite')


def test_items_listing_requires_a_couple(loner_client):
    response = loner_client.get(reverse('corner_items'))

    assert response.status_code == 400
    assert response.json()['error'] == 'not_paired'
