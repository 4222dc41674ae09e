from typing import Optional, Union

from pynvim_pp.logging import log

from ..shared.document import Document
from ..shared.timeit import timeit
from ..shared.types import CancellationSignal
from ..syntax.types import SyntaxNode
from .types import TypeChecker

_DOT_VALUE = "value"


class Cancelled:
    def __repr__(self) -> str:
        return "CANCELLED"


CANCELLED = Cancelled()


async def has_value_property(
    checker: TypeChecker,
    document: Document,
    node: SyntaxNode,
    token: Optional[CancellationSignal],
) -> Union[bool, Cancelled]:
    # checked once, the type computation itself is not interruptible
    if token and token.is_cancellation_requested():
        return CANCELLED

    with timeit("TYPE"):
        ty = await checker.type_at(document, node=node)

    if ty is None:
        log.debug("%s", f"UNKNOWN TYPE -- {node.text}")
        return False
    else:
        return _DOT_VALUE in ty.properties
