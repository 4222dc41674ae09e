#
# https://github.com/microsoft/language-server-protocol/blob/master/snippetSyntax.md
#
# placeholder ::= '${' int ':' any '}'
#

_ESC_CHARS = {"\\", "$", "}"}


def escape(text: str) -> str:
    return "".join(f"\\{char}" if char in _ESC_CHARS else char for char in text)


def placeholder(idx: int, text: str) -> str:
    return f"${{{idx}:{escape(text)}}}"
