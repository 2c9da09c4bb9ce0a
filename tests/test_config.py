"""
Tests for environment-driven settings.
"""

import logging

from flow_editor_core.config import DEFAULT_PORT, EditorSettings


class TestEditorSettings:
    """Test cases for EditorSettings.from_env."""

    def test_defaults(self):
        settings = EditorSettings.from_env({})

        assert settings == EditorSettings()
        assert settings.port == DEFAULT_PORT
        assert settings.icon_base_url == '/icons/'

    def test_overrides(self):
        settings = EditorSettings.from_env({
            'FLOWHUB_LOCALE': 'VI',
            'FLOWHUB_ICON_BASE_URL': '/static/icons/',
            'FLOWHUB_LOG_LEVEL': 'debug',
            'FLOWHUB_HOST': '127.0.0.1',
            'FLOWHUB_PORT': '8080',
            'FLOWHUB_DEBUG': '1',
        })

        assert settings.locale == 'vi'
        assert settings.icon_base_url == '/static/icons/'
        assert settings.log_level == 'DEBUG'
        assert settings.host == '127.0.0.1'
        assert settings.port == 8080
        assert settings.debug is True

    def test_invalid_values_fall_back(self, caplog):
        with caplog.at_level(logging.WARNING, logger='flow_editor_core.config'):
            settings = EditorSettings.from_env({'FLOWHUB_LOCALE': 'fr', 'FLOWHUB_PORT': 'abc'})

        assert settings.locale == 'en'
        assert settings.port == DEFAULT_PORT
        assert len(caplog.records) == 2
