from typing import Any, Mapping

from pynvim_pp.nvim import Nvim
from pynvim_pp.types import NoneType
from std2.configparser import hydrate

from ..checker.infer import InferenceChecker
from ..consts import SETTINGS_VAR
from ..syntax.provider import TreeSitterProvider
from .engine import Engine
from .rt_types import Stack
from .settings import load, lookup, merged


class NvimConfiguration:
    """
    `g:dotvalue_settings` is read on every request, so toggles apply live
    """

    def __init__(self, defaults: Mapping[str, Any]) -> None:
        self._defaults = defaults

    async def get_configuration(self, section: str) -> Any:
        user_config = await Nvim.vars.get(NoneType, SETTINGS_VAR)
        value = lookup(hydrate(user_config or {}), section=section)
        return lookup(self._defaults, section=section) if value is None else value


async def stack() -> Stack:
    user_config = await Nvim.vars.get(NoneType, SETTINGS_VAR)
    settings = load(user_config)

    trees = TreeSitterProvider(
        settings.languages, cache_size=settings.limits.tree_cache_size
    )
    checker = InferenceChecker(trees, options=settings.inference)
    engine = Engine(
        settings.languages,
        unifying_chars=settings.match.unifying_chars,
        allow_access_dot_value=settings.features.auto_insert.allow_access_dot_value,
        config=NvimConfiguration(merged(None)),
        trees=trees,
        checker=checker,
    )
    return Stack(settings=settings, engine=engine)
