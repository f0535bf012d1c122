"""Unit tests for runtime utilities

Test coverage includes:
    - running_locally() defaults to True and follows APP_ENV.
    - test_mode_enabled() only accepts TEST_MODE=1.
"""

import pytest

from ephemeralpaste.utils import runtime


def test_running_locally_by_default():
    assert runtime.running_locally() is True


@pytest.mark.parametrize('app_env, expected', [('local', True), ('LOCAL', True), ('dev', False), ('prod', False)])
def test_running_locally(monkeypatch, app_env, expected):
    monkeypatch.setenv('APP_ENV', app_env)
    assert runtime.running_locally() is expected


@pytest.mark.parametrize('value, expected', [('1', True), ('0', False), ('true', False), ('', False)])
def test_test_mode_enabled(monkeypatch, value, expected):
    monkeypatch.setenv('TEST_MODE', value)
    assert runtime.test_mode_enabled() is expected


def test_test_mode_disabled_by_default():
    assert runtime.test_mode_enabled() is False
