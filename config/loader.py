# config/loader.py
"""
Loads the application configuration from a YAML file.

The path comes from the ``COMMANDS_CONFIG_FILE`` environment variable and
defaults to ``config.yaml`` in the working directory. A missing file means
the built-in defaults apply; a file that cannot be parsed raises
``ConfigError``. The module exposes the loaded ``CONFIG`` dictionary and the
absolute ``LOG_DIR``.
"""

import copy
import logging
import math
import os
import sys
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = 'COMMANDS_CONFIG_FILE'

DEFAULT_CONFIG: Dict[str, Any] = {
    'logging': {
        'level': 'INFO',
        'log_dir': 'logs',
        'log_file': 'commands.log',
        'log_max_size_mb': 25,
        'log_backup_count': 5,
    },
    'loop': {
        'period_s': 0.02,
        'overrun_warn_s': 0.005,
    },
}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be loaded or is invalid."""
    pass


def _deep_merge_dicts(d1, d2):
    """
    Recursively merges dictionary d2 into dictionary d1.
    Modifies d1 in place.
    """
    for k, v in d2.items():
        if k in d1 and isinstance(d1[k], dict) and isinstance(v, dict):
            _deep_merge_dicts(d1[k], v)
        else:
            d1[k] = v
    return d1


def _validate(config: Dict[str, Any]):
    for section in DEFAULT_CONFIG:
        if not isinstance(config.get(section), dict):
            raise ConfigError(
                f"Config section '{section}' must be a mapping "
                f"(got {type(config.get(section)).__name__}).")

    loop_cfg = config['loop']
    log_cfg = config['logging']
    try:
        period = float(loop_cfg['period_s'])
        overrun = float(loop_cfg['overrun_warn_s'])
        max_size_mb = int(log_cfg['log_max_size_mb'])
        backup_count = int(log_cfg['log_backup_count'])
    except (TypeError, ValueError, OverflowError) as e:
        raise ConfigError(f"Invalid numeric value in config: {e}") from e
    if not math.isfinite(period) or period <= 0:
        raise ConfigError(f"'loop.period_s' must be a positive number (got {period}).")
    if not math.isfinite(overrun) or overrun < 0:
        raise ConfigError(f"'loop.overrun_warn_s' must be a number >= 0 (got {overrun}).")
    if max_size_mb < 0 or backup_count < 0:
        raise ConfigError("'logging.log_max_size_mb' and 'logging.log_backup_count' must be >= 0.")
    loop_cfg['period_s'] = period
    loop_cfg['overrun_warn_s'] = overrun
    log_cfg['log_max_size_mb'] = max_size_mb
    log_cfg['log_backup_count'] = backup_count

    level = str(log_cfg.get('level', 'INFO')).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"Unknown logging level '{level}'.")
    log_cfg['level'] = level

    for key in ('log_dir', 'log_file'):
        if not isinstance(log_cfg.get(key), str) or not log_cfg[key]:
            raise ConfigError(f"'logging.{key}' must be a non-empty string.")


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load and validate a configuration file, layered over DEFAULT_CONFIG.

    Args:
        path: YAML file to read. Defaults to $COMMANDS_CONFIG_FILE or 'config.yaml'.

    Returns:
        The merged configuration; 'logging.log_dir' is made absolute relative
        to the config file's directory.
    """
    config_file = path or os.environ.get(CONFIG_ENV_VAR, 'config.yaml')
    config = copy.deepcopy(DEFAULT_CONFIG)

    if os.path.exists(config_file):
        try:
            with open(config_file, 'r') as f:
                user_cfg = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Could not read config file '{config_file}': {e}") from e
        if not isinstance(user_cfg, dict):
            raise ConfigError(f"Config file '{config_file}' must contain a mapping at top level.")
        _deep_merge_dicts(config, user_cfg)
    else:
        logger.debug(f"Config file '{config_file}' not found; using defaults.")

    _validate(config)

    log_dir_rel = config['logging']['log_dir']
    config['logging']['log_dir'] = os.path.abspath(
        os.path.join(os.path.dirname(os.path.abspath(config_file)), log_dir_rel))
    return config


# --- Load Configuration ---
try:
    CONFIG: Dict[str, Any] = load_config()
    LOG_DIR: str = CONFIG['logging']['log_dir']
except ConfigError as e:
    logging.critical(f"FATAL: {e}")
    sys.exit(1)
