from ephemeralpaste.utils.config import AppConfig, app_env, app_name, app_prefix, load_config
from ephemeralpaste.utils.helpers import base_url, get_share_url, current_time, guarantee_500_response
from ephemeralpaste.utils.identifiers import generate_paste_id, is_valid_paste_id, normalize_paste_id
from ephemeralpaste.utils.validation import validate_paste_input
from ephemeralpaste.utils.logging import initialize_logging


__all__ = [
    'AppConfig',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'base_url',
    'get_share_url',
    'current_time',
    'guarantee_500_response',
    'generate_paste_id',
    'is_valid_paste_id',
    'normalize_paste_id',
    'validate_paste_input',
    'initialize_logging',
]
