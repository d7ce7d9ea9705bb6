from shortlinks.utils.config import app_env, app_name, app_prefix, load_config
from shortlinks.utils.helpers import base_url, get_short_url, json_response, require_environment, guarantee_500_response
from shortlinks.utils.shortener import generate_shortcode, default_random_source
from shortlinks.utils.logging import initialize_logging, EventLogger
from shortlinks.utils.clock import utc_now


__all__ = [
    'generate_shortcode',
    'default_random_source',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'base_url',
    'get_short_url',
    'json_response',
    'require_environment',
    'guarantee_500_response',
    'initialize_logging',
    'EventLogger',
    'utc_now',
]
