"""
Runtime settings for the flow editor.

All settings come from ``FLOWHUB_*`` environment variables so the web
interface can be configured without code changes.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional


logger = logging.getLogger(__name__)

SUPPORTED_LOCALES = ('en', 'vi')
DEFAULT_PORT = 5004


@dataclass(frozen=True)
class EditorSettings:
    """Settings shared by the modeler and the web interface."""
    locale: str = 'en'
    icon_base_url: str = '/icons/'
    log_level: str = 'INFO'
    host: str = '0.0.0.0'
    port: int = DEFAULT_PORT
    debug: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'EditorSettings':
        """Build settings from environment variables, falling back to defaults."""
        env = os.environ if environ is None else environ

        locale = env.get('FLOWHUB_LOCALE', 'en').strip().lower()
        if locale not in SUPPORTED_LOCALES:
            logger.warning("Unsupported FLOWHUB_LOCALE %r, using 'en'", locale)
            locale = 'en'

        port_raw = env.get('FLOWHUB_PORT', str(DEFAULT_PORT))
        try:
            port = int(port_raw)
        except ValueError:
            logger.warning("Invalid FLOWHUB_PORT %r, using %d", port_raw, DEFAULT_PORT)
            port = DEFAULT_PORT

        return cls(
            locale=locale,
            icon_base_url=env.get('FLOWHUB_ICON_BASE_URL', '/icons/'),
            log_level=env.get('FLOWHUB_LOG_LEVEL', 'INFO').upper(),
            host=env.get('FLOWHUB_HOST', '0.0.0.0'),
            port=port,
            debug=env.get('FLOWHUB_DEBUG', '0') == '1',
        )

    def configure_logging(self):
        """Apply the configured log level to the root logger."""
        logging.basicConfig(
            level=getattr(logging, self.log_level, logging.INFO),
            format='%(asctime)s %(levelname)s %(name)s: %(message)s',
        )
