from typing import Any, Mapping, Sequence

from std2.configparser import hydrate
from std2.graphlib import merge
from std2.pickle.decoder import new_decoder
from yaml import safe_load

from ..consts import CONFIG_YML
from ..shared.settings import Settings
from .rt_types import ValidationError

_DECODER = new_decoder[Settings](Settings)


def _defaults() -> Mapping[str, Any]:
    return safe_load(CONFIG_YML.read_text("UTF-8"))


def merged(user_config: Any) -> Mapping[str, Any]:
    return merge(_defaults(), hydrate(user_config or {}), replace=True)


def load(user_config: Any) -> Settings:
    config = _DECODER(merged(user_config))

    if not config.languages:
        raise ValidationError("languages = []")
    if config.limits.tree_cache_size <= 0:
        raise ValidationError("limits.tree_cache_size <= 0")

    return config


def lookup(config: Mapping[str, Any], section: str) -> Any:
    """
    features.auto_insert.dot_value -> config["features"]["auto_insert"]["dot_value"]
    """

    path: Sequence[str] = section.split(".")
    acc: Any = config
    for key in path:
        if isinstance(acc, Mapping) and key in acc:
            acc = acc[key]
        else:
            return None
    return acc
