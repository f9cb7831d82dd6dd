"""
Centralized Configuration System for the Bechdel music service

Every setting can come from:
1. Environment variables (e.g. WEB_UI_PORT=8000)
2. A web_config.py module on the import path (e.g. WEB_UI_PORT = 8000)
3. A .env file in the working directory
4. The defaults on BechdelConfig

Sources are listed from highest to lowest priority. All of them use the
same setting names, listed in SETTINGS.
"""

import importlib
import os
import sys
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple
from dataclasses import dataclass, asdict


LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass
class BechdelConfig:
    """Service configuration"""

    # Web UI Configuration
    web_ui_host: str = "0.0.0.0"
    web_ui_port: int = 5000
    debug_mode: bool = False

    # Database Configuration
    database_path: str = "bechdel_songs.db"

    # External providers
    itunes_search_url: str = "https://itunes.apple.com/search"
    lyrics_ovh_url: str = "https://api.lyrics.ovh/v1"
    request_timeout: float = 10.0
    search_result_limit: int = 20

    # Logging Configuration
    log_level: str = "INFO"
    log_file: str = "bechdel_music.log"


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).lower() in ('true', '1', 'yes', 'on')


def _parse_log_level(value) -> str:
    return str(value).upper()


# config field -> (setting name, parser)
SETTINGS: Dict[str, Tuple[str, Callable[[Any], Any]]] = {
    'web_ui_host': ('WEB_UI_HOST', str),
    'web_ui_port': ('WEB_UI_PORT', int),
    'debug_mode': ('DEBUG_MODE', _parse_bool),
    'database_path': ('DATABASE_PATH', str),
    'itunes_search_url': ('ITUNES_SEARCH_URL', str),
    'lyrics_ovh_url': ('LYRICS_OVH_URL', str),
    'request_timeout': ('REQUEST_TIMEOUT', float),
    'search_result_limit': ('SEARCH_RESULT_LIMIT', int),
    'log_level': ('LOG_LEVEL', _parse_log_level),
    'log_file': ('LOG_FILE', str),
}


def _read_settings(lookup: Callable[[str], Any]) -> dict:
    config = {}
    for field_name, (setting, parse) in SETTINGS.items():
        value = lookup(setting)
        if value is None or value == '':
            continue
        try:
            config[field_name] = parse(value)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid value for {setting}: {value!r}") from e
    return config


def load_from_env(environ: Optional[Mapping[str, str]] = None) -> dict:
    """Load configuration from environment variables"""
    environ = os.environ if environ is None else environ
    return _read_settings(environ.get)


def load_from_config_file(module_name: str = 'web_config') -> dict:
    """Load configuration from a web_config.py module, if there is one"""
    try:
        module = importlib.import_module(module_name)
    except ImportError:
        return {}
    return _read_settings(lambda setting: getattr(module, setting, None))


def load_from_dotenv(env_file_path: str = '.env') -> dict:
    """
    Load configuration from a .env file.

    Values are also exported to os.environ unless the variable is already
    set, so real environment variables keep priority.
    """
    if not os.path.exists(env_file_path):
        return {}

    values = {}
    try:
        with open(env_file_path, 'r') as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith('#') and '=' in line:
                    key, value = line.split('=', 1)
                    values[key.strip()] = value.strip().strip('"').strip("'")
    except OSError as e:
        print(f"Warning: Error reading .env file: {e}")
        return {}

    for key, value in values.items():
        os.environ.setdefault(key, value)

    return _read_settings(values.get)


def merge_configs(*configs) -> dict:
    """Merge multiple configuration dictionaries"""
    merged = {}
    for config in configs:
        merged.update(config)
    return merged


def validate_config(config: BechdelConfig) -> List[str]:
    """Validate configuration and return list of errors"""
    errors = []

    if config.web_ui_port < 1 or config.web_ui_port > 65535:
        errors.append("Web UI port must be between 1 and 65535")

    if not config.database_path:
        errors.append("Database path is required")

    if config.request_timeout <= 0:
        errors.append("Request timeout must be positive")

    if config.search_result_limit < 1:
        errors.append("Search result limit must be at least 1")

    if config.log_level not in LOG_LEVELS:
        errors.append(f"Log level must be one of {', '.join(LOG_LEVELS)}")

    return errors


def load_config() -> BechdelConfig:
    """Load configuration from all sources with proper priority"""
    try:
        sources = [load_from_dotenv(), load_from_config_file(), load_from_env()]
        errors = []
    except ValueError as e:
        sources = []
        errors = [str(e)]

    config = BechdelConfig(**merge_configs(asdict(BechdelConfig()), *sources))
    errors = errors or validate_config(config)

    if errors:
        print("Configuration errors:")
        for error in errors:
            print(f"  - {error}")
        sys.exit(1)

    return config


def get_config() -> BechdelConfig:
    """Get the current configuration (main entry point)"""
    return load_config()


if __name__ == "__main__":
    config = load_config()

    print("Current configuration:")
    for field_name, (setting, _) in SETTINGS.items():
        print(f"  {setting}: {getattr(config, field_name)}")
