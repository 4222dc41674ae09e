from dataclasses import dataclass

from ..shared.settings import Settings
from .engine import Engine


class ValidationError(Exception): ...


@dataclass(frozen=True)
class Stack:
    settings: Settings
    engine: Engine
