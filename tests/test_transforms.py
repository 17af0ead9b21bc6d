import pytest

from core import transforms


@pytest.mark.parametrize('raw, expected', [
    (None, 7.0),
    ('', 7.0),
    ('   ', 7.0),
    ('abc', 7.0),
    ('nan', 7.0),
    ('inf', 7.0),
    ('-Infinity', 7.0),
    (float('nan'), 7.0),
    (float('inf'), 7.0),
    (True, 7.0),
    ([1], 7.0),
    (10 ** 400, 7.0),
    (-(10 ** 400), 7.0),
    ('1' * 400, 7.0),
    ('12.5', 12.5),
    (' -3 ', -3.0),
    (0, 0.0),
    (42, 42.0),
])
def test_coerce_number_falls_back_on_anything_non_finite(raw, expected):
    assert transforms.coerce_number(raw, 7.0) == expected


@pytest.mark.parametrize('value', [-1e9, -0.001, 0, 12.75, 50, 99.999, 100, 100.5, 1e9])
def test_clamp_position_stays_on_canvas(value):
    result = transforms.clamp_position(value)
    assert 0 <= result <= 100
    if 0 <= value <= 100:
        assert result == value


def test_normalize_rotation_is_non_negative_and_congruent():
    for previous in range(0, 360, 7):
        for delta in (-12345, -1000, -361, -360, -1, 0, 1, 359, 360, 370, 12345):
            result = transforms.normalize_rotation(previous + delta)
            assert 0 <= result < 360
            assert (result - (previous + delta)) % 360 == 0


@pytest.mark.parametrize('degrees, expected', [
    (370, 10),
    (-10, 350),
    (720, 0),
    (359.6, 0),
    (44.5, 45),
    (-0.4, 0),
])
def test_normalize_rotation_rounds_to_whole_degrees(degrees, expected):
    assert transforms.normalize_rotation(degrees) == expected


@pytest.mark.parametrize('raw', ['abc', None, '', float('nan'), float('inf'), '-inf'])
def test_non_finite_scale_is_exactly_one_before_clamping(raw):
    assert transforms.coerce_number(raw, 1.0) == 1.0
    assert transforms.clamp_scale(transforms.coerce_number(raw, 1.0)) == 1.0


@pytest.mark.parametrize('value, expected', [(0.1, 0.25), (0.25, 0.25), (1.3, 1.3), (2.0, 2.0), (9, 2.0), (-4, 0.25)])
def test_clamp_scale(value, expected):
    assert transforms.clamp_scale(value) == expected


@pytest.mark.parametrize('value, expected', [(5000, 1000), (-5000, -1000), (2.6, 3), (-2.5, -2), (0, 0)])
def test_clamp_layer(value, expected):
    assert transforms.clamp_layer(value) == expected


@pytest.mark.parametrize('value, expected', [(25, 20), (-3, 0), (7.4, 7), (20, 20)])
def test_clamp_height(value, expected):
    assert transforms.clamp_height(value) == expected


@pytest.mark.parametrize('value, expected', [(90, 60), (-90, -60), (12.5, 12.5)])
def test_clamp_tilt(value, expected):
    assert transforms.clamp_tilt(value) == expected


@pytest.mark.parametrize('raw, expected', [
    (5, 1), ('1', 1), (0.2, 1),
    (-3, -1), ('-0.2', -1),
    (0, 0), ('abc', 0), (None, 0), (float('nan'), 0),
])
def test_direction_of(raw, expected):
    assert transforms.direction_of(raw) == expected


@pytest.mark.parametrize('raw, expected', [
    (1, True), (2.5, True), ('1', True), ('on', True), ('TRUE', True), ('yes', True), (True, True),
    (0, False), ('0', False), ('', False), (None, False), ('nope', False), (False, False),
    (float('nan'), False),
])
def test_coerce_flag(raw, expected):
    assert transforms.coerce_flag(raw) is expected


def test_hex_and_integer_colors_are_the_same_color():
    assert transforms.parse_color('#FF00AA') == 16711850
    assert transforms.parse_color(16711850) == 0xFF00AA
    assert transforms.parse_color('FF00AA') == 16711850
    assert transforms.parse_color('#ff00aa') == 16711850
    assert transforms.parse_color('0xFF00AA') == 16711850
    assert transforms.parse_color('16711850') == 16711850
    assert transforms.parse_color(16711850.0) == 16711850


@pytest.mark.parametrize('raw', [
    None, '', 'red', '#FFF', '#GG0000', '#FF00AA00',
    float('nan'), float('inf'), -float('inf'), 12.5,
    -1, 0x1000000, True, [0xFF00AA],
])
def test_invalid_colors_are_absent(raw):
    assert transforms.parse_color(raw) is None


def test_black_is_a_color():
    assert transforms.parse_color('#000000') == 0
    assert transforms.parse_color(0) == 0


def test_color_to_hex():
    assert transforms.color_to_hex(16711850) == '#FF00AA'
    assert transforms.color_to_hex(0x112233) == '#112233'
    assert transforms.color_to_hex(0) == '#000000'
    assert transforms.color_to_hex(None) is None


def test_round_half_up():
    assert transforms.round_half_up(2.5) == 3
    assert transforms.round_half_up(-2.5) == -2
    assert transforms.round_half_up(-2.6) == -3
