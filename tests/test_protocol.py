from serial_fan.protocol import PARK_DUTY, encode, is_valid_duty


def test_encode_frames_integer():
    for value in (0, 5, 50, 100):
        assert encode(value) == f"N,2#{value};"


def test_encode_accepts_string_value():
    assert encode("42") == "N,2#42;"


def test_encode_does_not_validate():
    assert encode(150) == "N,2#150;"


def test_park_frame():
    assert encode(PARK_DUTY) == "N,2#50;"


def test_duty_range():
    assert is_valid_duty(0)
    assert is_valid_duty(100)
    assert not is_valid_duty(-1)
    assert not is_valid_duty(101)
