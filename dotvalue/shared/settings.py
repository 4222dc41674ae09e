from dataclasses import dataclass
from typing import AbstractSet


@dataclass(frozen=True)
class AutoInsert:
    dot_value: bool
    allow_access_dot_value: bool


@dataclass(frozen=True)
class Features:
    auto_insert: AutoInsert


@dataclass(frozen=True)
class MatchOptions:
    unifying_chars: AbstractSet[str]


@dataclass(frozen=True)
class Limits:
    tree_cache_size: int


@dataclass(frozen=True)
class Inference:
    ref_factories: AbstractSet[str]
    ref_types: AbstractSet[str]
    reactive_factories: AbstractSet[str]


@dataclass(frozen=True)
class Settings:
    features: Features
    match: MatchOptions
    limits: Limits
    inference: Inference
    languages: AbstractSet[str]
