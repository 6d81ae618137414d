"""Configuration file loading."""

import json
import logging
import os

from core.config import CONFIG_FILE, DATA_DIR, DEFAULT_MAX_NEW_WORDS, REVIEW_PAUSE_SECONDS

logger = logging.getLogger(__name__)

DEFAULTS = {
    'data_dir': DATA_DIR,
    'ecdict_path': None,
    'wordnik_api_key': None,
    'azure_translator_key': None,
    'azure_translator_region': 'eastus',
    'azure_translator_endpoint': 'https://api.cognitive.microsofttranslator.com',
    'max_new_words': DEFAULT_MAX_NEW_WORDS,
    'review_pause_seconds': REVIEW_PAUSE_SECONDS
}

ENV_OVERRIDES = {
    'WORDLEARNER_DATA_DIR': 'data_dir',
    'ECDICT_PATH': 'ecdict_path',
    'WORDNIK_API_KEY': 'wordnik_api_key',
    'AZURE_TRANSLATOR_KEY': 'azure_translator_key',
    'AZURE_TRANSLATOR_REGION': 'azure_translator_region',
    'AZURE_TRANSLATOR_ENDPOINT': 'azure_translator_endpoint'
}

NUMERIC_SETTINGS = {
    'max_new_words': int,
    'review_pause_seconds': float
}


def load_config(config_file: str = None, environ=None) -> dict:
    """Load settings: defaults, then the JSON config file, then environment variables.

    A missing config file is fine; an unreadable one is logged and ignored.
    """
    config_file = config_file or CONFIG_FILE
    environ = os.environ if environ is None else environ
    config = dict(DEFAULTS)

    if os.path.exists(config_file):
        try:
            with open(config_file, 'r') as f:
                data = json.load(f)
            if isinstance(data, dict):
                config.update({k: v for k, v in data.items() if k in DEFAULTS})
            else:
                logger.warning(f"Config file {config_file} is not a JSON object, ignoring")
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read config file {config_file}: {e}")

    for env_name, key in ENV_OVERRIDES.items():
        if environ.get(env_name):
            config[key] = environ[env_name]

    config['data_dir'] = os.path.expanduser(config['data_dir'])
    if config['ecdict_path']:
        config['ecdict_path'] = os.path.expanduser(config['ecdict_path'])
    for key, cast in NUMERIC_SETTINGS.items():
        try:
            config[key] = cast(config[key])
        except (TypeError, ValueError):
            logger.warning(f"Invalid {key} {config[key]!r} in config, using {DEFAULTS[key]}")
            config[key] = DEFAULTS[key]
    return config
