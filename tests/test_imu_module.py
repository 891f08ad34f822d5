import json
import struct
from unittest.mock import MagicMock

import pytest

from gyrodrive import imu_module
from gyrodrive.errors import CalibrationError, ImuError
from gyrodrive.imu_module import (BNO055_CHIP_ID, MODE_CONFIG, MODE_IMU, OFFSET_FIELDS,
                                  OPR_MODE_REGISTER, ImuModule, normalize_angle,
                                  wait_for_calibration)


@pytest.fixture(autouse=True)
def no_mode_delay(monkeypatch):
    monkeypatch.setattr(imu_module.time, 'sleep', lambda seconds: None)


def euler_bytes(heading, roll=0.0, pitch=0.0):
    return list(struct.pack('<hhh', int(heading * 16), int(roll * 16), int(pitch * 16)))


def make_imu(calibration_file=None):
    bus = MagicMock()
    bus.read_byte_data.return_value = BNO055_CHIP_ID
    return ImuModule(bus=bus, address=0x28, calibration_file=calibration_file), bus


@pytest.mark.parametrize('angle, expected', [
    (0, 0), (180, 180), (-180, 180), (190, -170), (-190, 170), (725, 5),
])
def test_normalize_angle(angle, expected):
    assert normalize_angle(angle) == expected


@pytest.mark.parametrize('raw_heading, first_angle', [
    (0.0, 0.0),
    (90.0, -90.0),     # clockwise on the sensor is negative
    (270.0, 90.0),
    (180.0, 180.0),
    (359.5, 0.5),
])
def test_read_orientation_converts_heading(raw_heading, first_angle):
    imu, bus = make_imu()
    bus.read_i2c_block_data.return_value = euler_bytes(raw_heading, roll=2.5, pitch=-1.0)
    reading = imu.read_orientation()
    assert reading.first_angle == pytest.approx(first_angle)
    assert reading.second_angle == 2.5
    assert reading.third_angle == -1.0


def test_read_failure_raises_imu_error():
    imu, bus = make_imu()
    bus.read_i2c_block_data.side_effect = OSError(121, "Remote I/O error")
    with pytest.raises(ImuError):
        imu.read_orientation()


def test_initialize_switches_to_imu_mode():
    imu, bus = make_imu()
    imu.initialize()
    mode_writes = [c.args[2] for c in bus.write_byte_data.call_args_list
                   if c.args[1] == OPR_MODE_REGISTER]
    assert mode_writes == [MODE_CONFIG, MODE_IMU]


def test_initialize_rejects_wrong_chip():
    imu, bus = make_imu()
    bus.read_byte_data.return_value = 0x68
    with pytest.raises(ImuError):
        imu.initialize()


def test_initialize_without_device():
    imu, bus = make_imu()
    bus.read_byte_data.side_effect = OSError(121, "Remote I/O error")
    with pytest.raises(ImuError):
        imu.initialize()


def test_initialize_with_missing_calibration_file(tmp_path):
    imu, bus = make_imu(calibration_file=str(tmp_path / 'missing.json'))
    imu.initialize()
    bus.write_i2c_block_data.assert_not_called()


def test_calibration_status_fields():
    imu, bus = make_imu()
    bus.read_byte_data.return_value = 0b00110110
    assert imu.calibration_status() == {'system': 0, 'gyro': 3, 'accel': 1, 'mag': 2}
    assert imu.is_gyro_calibrated()


def test_saved_offsets_are_loaded_back(tmp_path):
    path = str(tmp_path / 'calibration.json')
    offsets = list(range(-5, 6))
    imu, bus = make_imu()
    bus.read_i2c_block_data.return_value = list(struct.pack('<11h', *offsets))
    imu.save_calibration(path)
    with open(path) as f:
        assert json.load(f) == dict(zip(OFFSET_FIELDS, offsets))

    imu.load_calibration(path)
    written = bus.write_i2c_block_data.call_args.args[2]
    assert list(struct.unpack('<11h', bytes(written))) == offsets


def test_incomplete_calibration_file(tmp_path):
    path = tmp_path / 'calibration.json'
    path.write_text(json.dumps({'accel_offset_x': 1}))
    imu, bus = make_imu()
    with pytest.raises(ImuError):
        imu.load_calibration(str(path))


def test_corrupt_calibration_file(tmp_path):
    path = tmp_path / 'calibration.json'
    path.write_text('{"accel_offset_x": 1,')
    imu, bus = make_imu()
    with pytest.raises(ImuError):
        imu.load_calibration(str(path))


def test_initialize_write_failure_raises_imu_error():
    imu, bus = make_imu()
    bus.write_byte_data.side_effect = OSError(121, "Remote I/O error")
    with pytest.raises(ImuError):
        imu.initialize()


def test_calibration_status_read_failure_raises_imu_error():
    imu, bus = make_imu()
    bus.read_byte_data.side_effect = OSError(121, "Remote I/O error")
    with pytest.raises(ImuError):
        imu.calibration_status()


def test_save_calibration_read_failure_returns_to_imu_mode(tmp_path):
    path = tmp_path / 'calibration.json'
    imu, bus = make_imu()
    bus.read_i2c_block_data.side_effect = OSError(121, "Remote I/O error")
    with pytest.raises(ImuError):
        imu.save_calibration(str(path))
    assert bus.write_byte_data.call_args.args[1:] == (OPR_MODE_REGISTER, MODE_IMU)
    assert not path.exists()


def test_load_calibration_write_failure_raises_imu_error(tmp_path):
    path = tmp_path / 'calibration.json'
    path.write_text(json.dumps(dict.fromkeys(OFFSET_FIELDS, 0)))
    imu, bus = make_imu()
    bus.write_i2c_block_data.side_effect = OSError(121, "Remote I/O error")
    with pytest.raises(ImuError):
        imu.load_calibration(str(path))


def test_wait_for_calibration_returns_once_calibrated():
    imu = MagicMock()
    imu.is_gyro_calibrated.side_effect = [False, False, True]
    sleep = MagicMock()
    wait_for_calibration(imu, lambda: True, timeout=10, poll_interval=0.05, sleep=sleep)
    assert sleep.call_count == 2


def test_wait_for_calibration_times_out():
    imu = MagicMock()
    imu.is_gyro_calibrated.return_value = False
    with pytest.raises(CalibrationError):
        wait_for_calibration(imu, lambda: True, timeout=0, sleep=MagicMock())


def test_wait_for_calibration_cancelled():
    imu = MagicMock()
    imu.is_gyro_calibrated.return_value = False
    with pytest.raises(CalibrationError):
        wait_for_calibration(imu, lambda: False, timeout=10, sleep=MagicMock())
