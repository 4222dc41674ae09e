from typing import Mapping, Optional

_LANGUAGE_ALIASES: Mapping[str, str] = {
    "javascript": "javascript",
    "js": "javascript",
    "javascriptreact": "javascriptreact",
    "jsx": "javascriptreact",
    "typescript": "typescript",
    "ts": "typescript",
    "typescriptreact": "typescriptreact",
    "tsx": "typescriptreact",
}

# javascript grammar speaks JSX already
_GRAMMARS: Mapping[str, str] = {
    "javascript": "javascript",
    "javascriptreact": "javascript",
    "typescript": "typescript",
    "typescriptreact": "tsx",
}


def normalize_language(language_id: str) -> Optional[str]:
    normalized = language_id.strip().lower()
    return _LANGUAGE_ALIASES.get(normalized)


def grammar_for(language_id: str) -> Optional[str]:
    if language := normalize_language(language_id):
        return _GRAMMARS[language]
    else:
        return None
