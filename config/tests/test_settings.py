import logging

import pytest
import structlog

from config import setup
from config.exceptions import ImproperlyConfigured
from config.logging_conf import build_logging_config
from config.settings import RentalSettings, load_settings
from config.settings.base import get_bool, get_env, get_float


class TestEnvHelpers:
    def test_get_env_default(self, monkeypatch):
        monkeypatch.delenv('RENTAL_TEST_VALUE', raising=False)
        assert get_env('RENTAL_TEST_VALUE', 'fallback') == 'fallback'

    def test_get_env_required(self, monkeypatch):
        monkeypatch.setenv('RENTAL_TEST_VALUE', '')
        with pytest.raises(ImproperlyConfigured):
            get_env('RENTAL_TEST_VALUE', required=True)

    @pytest.mark.parametrize('raw, expected', [('1', True), ('Yes', True), ('on', True), ('0', False), ('off', False)])
    def test_get_bool(self, monkeypatch, raw, expected):
        monkeypatch.setenv('RENTAL_TEST_FLAG', raw)
        assert get_bool('RENTAL_TEST_FLAG') is expected

    def test_get_float(self, monkeypatch):
        monkeypatch.setenv('RENTAL_TEST_HOURS', '7.5')
        assert get_float('RENTAL_TEST_HOURS', 6) == 7.5

        monkeypatch.setenv('RENTAL_TEST_HOURS', 'seven')
        with pytest.raises(ImproperlyConfigured):
            get_float('RENTAL_TEST_HOURS', 6)


class TestLoadSettings:
    def test_dev_environment(self):
        settings = load_settings('dev')

        assert settings.environment == 'dev'
        assert settings.debug is True

    def test_prod_environment(self):
        settings = load_settings('prod')

        assert settings.debug is False
        assert settings.seed_demo_data is False

    def test_environment_from_env_var(self, monkeypatch):
        monkeypatch.setenv('RENTAL_ENV', 'prod')
        assert load_settings().environment == 'prod'

    def test_unknown_environment(self):
        with pytest.raises(ImproperlyConfigured):
            load_settings('staging')

    def test_overrides_win(self):
        settings = load_settings('dev', booking_conflict_policy='quantity', default_margin_hours=8)

        assert settings.booking_conflict_policy == 'quantity'
        assert settings.default_margin_hours == 8


class TestValidation:
    def test_defaults(self):
        settings = RentalSettings()

        assert settings.default_margin_hours == 6
        assert settings.booking_conflict_policy == 'line'
        assert settings.equipment_status_policy == 'toggle'

    @pytest.mark.parametrize('overrides', [
        {'booking_conflict_policy': 'strict'},
        {'equipment_status_policy': 'counted'},
        {'log_level': 'LOUD'},
        {'default_margin_hours': -1},
        {'min_margin_hours': 9, 'max_margin_hours': 8},
    ])
    def test_invalid_values(self, overrides):
        with pytest.raises(ImproperlyConfigured):
            RentalSettings(**overrides)

    def test_settings_are_frozen(self):
        with pytest.raises(AttributeError):
            RentalSettings().debug = True


class TestLoggingConfig:
    def test_console_renderer_by_default(self):
        config = build_logging_config(RentalSettings(log_level='DEBUG'))

        formatter = config['formatters']['structured']
        assert isinstance(formatter['processor'], structlog.dev.ConsoleRenderer)
        assert config['loggers']['apps']['level'] == 'DEBUG'

    def test_json_renderer(self):
        config = build_logging_config(RentalSettings(log_json=True))

        assert isinstance(config['formatters']['structured']['processor'], structlog.processors.JSONRenderer)
        assert set(config['loggers']) == {'apps', 'shared', 'config'}


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    for name in ('apps', 'shared', 'config'):
        logging.getLogger(name).setLevel(logging.NOTSET)
    structlog.reset_defaults()


def test_setup_configures_logging(restore_logging):
    settings = setup('prod', log_level='ERROR')

    assert settings.environment == 'prod'
    assert structlog.is_configured()
    assert logging.getLogger('apps').level == logging.ERROR
