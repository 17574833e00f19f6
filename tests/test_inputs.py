import math

import pytest

from engines.inputs import InputError, parse_initiative, parse_weight, parse_weight_update


def test_parse_initiative_coerces_strings():
    raw = parse_initiative({'name': 'Login revamp', 'uvTri': '7', 'tcEd': '3',
                            'rrOe': '2', 'crSla': '9', 'jobSize': '13'})
    assert raw == {'name': 'Login revamp', 'uvTri': 7, 'tcEd': 3, 'rrOe': 2,
                   'crSla': 9, 'jobSize': 13}


@pytest.mark.parametrize('name', ['', '   ', None])
def test_blank_name_rejected(name):
    with pytest.raises(InputError, match='cannot be empty'):
        parse_initiative({'name': name, 'jobSize': 3})


def test_missing_scores_use_form_default():
    raw = parse_initiative({'name': 'x'})
    assert raw['uvTri'] == 5 and raw['jobSize'] == 5


def test_scores_clamped_to_slider_range():
    raw = parse_initiative({'name': 'x', 'uvTri': 42, 'tcEd': 0, 'rrOe': -3,
                            'crSla': 10, 'jobSize': 99})
    assert (raw['uvTri'], raw['tcEd'], raw['rrOe'], raw['crSla']) == (10, 1, 1, 10)
    assert raw['jobSize'] == 20


def test_non_numeric_score_rejected():
    with pytest.raises(InputError, match='uvTri'):
        parse_initiative({'name': 'x', 'uvTri': 'lots'})


@pytest.mark.parametrize('value,expected', [
    ('2.5', 2.5), (4, 4.0), ('', 0.0), ('abc', 0.0), (None, 0.0),
    ('-1', 0.0), ('nan', 0.0), ('inf', 0.0), (10**400, 0.0),
])
def test_parse_weight(value, expected):
    w = parse_weight(value)
    assert not math.isnan(w)
    assert w == expected


def test_weight_update_single_key():
    assert parse_weight_update({'key': 'wCrSla', 'value': '10'}) == {'wCrSla': 10.0}


def test_weight_update_many():
    assert parse_weight_update({'weights': {'wUvTri': 1, 'wTcEd': 'x'}}) == {'wUvTri': 1.0, 'wTcEd': 0.0}


def test_weight_update_unknown_key():
    with pytest.raises(InputError, match='wBogus'):
        parse_weight_update({'key': 'wBogus', 'value': 1})


def test_weight_update_requires_key():
    with pytest.raises(InputError):
        parse_weight_update({})


def test_weight_update_weights_must_be_object():
    with pytest.raises(InputError, match='object'):
        parse_weight_update({'weights': [1, 2]})
