from os import environ
from pathlib import Path

TOP_LEVEL = Path(__file__).resolve(strict=True).parent

_CONF_DIR = TOP_LEVEL / "config"
CONFIG_YML = _CONF_DIR / "defaults.yml"

SETTINGS_VAR = "dotvalue_settings"

# Section of the feature toggle, as seen by a `ConfigurationHost`
DOT_VALUE_SECTION = "features.auto_insert.dot_value"

DEBUG = "DOTVALUE_DEBUG" in environ
