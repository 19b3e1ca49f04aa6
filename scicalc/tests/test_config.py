"""Tests for environment-driven settings."""

from scicalc.config import Settings
from scicalc.models import AngleMode


def test_defaults():
    s = Settings.from_env({})
    assert s.angle_mode is AngleMode.RADIANS
    assert s.log_level == "WARNING"
    assert s.sample_steps == 20


def test_angle_mode_from_env():
    s = Settings.from_env({"SCICALC_ANGLE_MODE": " Degrees "})
    assert s.angle_mode is AngleMode.DEGREES


def test_invalid_angle_mode_keeps_default():
    s = Settings.from_env({"SCICALC_ANGLE_MODE": "grads"})
    assert s.angle_mode is AngleMode.RADIANS


def test_log_level_normalized():
    assert Settings.from_env({"SCICALC_LOG_LEVEL": "debug"}).log_level == "DEBUG"
    assert Settings.from_env({"SCICALC_LOG_LEVEL": "loud"}).log_level == "WARNING"


def test_sample_steps():
    assert Settings.from_env({"SCICALC_SAMPLE_STEPS": "50"}).sample_steps == 50
    assert Settings.from_env({"SCICALC_SAMPLE_STEPS": "0"}).sample_steps == 20
    assert Settings.from_env({"SCICALC_SAMPLE_STEPS": "many"}).sample_steps == 20
