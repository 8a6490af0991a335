from decimal import Decimal
import pytest
from quota_report.reporting.quantity import parse_quantity, cpu_milli, memory_bytes


@pytest.mark.parametrize('raw,expected', [
    ('250m', 250),
    ('1', 1000),
    ('1.5', 1500),
    ('0.1', 100),
    ('100u', 1),  # rounds up to the next milli-unit
    ('2k', 2000000),
    ('1e3m', 1000),
])
def test_cpu_milli(raw, expected):
    assert cpu_milli(raw) == expected


@pytest.mark.parametrize('raw,expected', [
    ('128974848', 128974848),
    ('129e6', 129000000),
    ('129M', 129000000),
    ('123Mi', 123 * 1024 ** 2),
    ('1Gi', 1024 ** 3),
    ('1G', 10 ** 9),
    ('2Ti', 2 * 1024 ** 4),
    ('500m', 1),  # fractional bytes round up
])
def test_memory_bytes(raw, expected):
    assert memory_bytes(raw) == expected


def test_absent_values_are_zero():
    assert cpu_milli(None) == 0
    assert cpu_milli('') == 0
    assert memory_bytes(None) == 0


def test_malformed_values_are_zero_and_logged(capsys):
    assert cpu_milli('lots', field='c0.requests.cpu') == 0
    assert memory_bytes('12Qi') == 0
    err = capsys.readouterr().err
    assert 'ignoring malformed quantity' in err
    assert 'c0.requests.cpu' in err


def test_negative_values_clamp_to_zero():
    assert cpu_milli('-1') == 0


def test_parse_quantity_exact():
    assert parse_quantity('1.5Gi') == Decimal('1.5') * 1024 ** 3
    assert parse_quantity(2) == Decimal(2)
    with pytest.raises(ValueError):
        parse_quantity('NaN')
    with pytest.raises(ValueError):
        parse_quantity(['1'])
