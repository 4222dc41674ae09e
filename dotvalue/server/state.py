from dataclasses import dataclass
from typing import Optional, Union
from uuid import UUID, uuid4

from std2.cell import RefCell
from std2.types import Void, VoidType


@dataclass(frozen=True)
class State:
    change_id: UUID
    # `v:char` from the last `InsertCharPre`, consumed by `TextChangedI`
    typed: Optional[str]


_CELL = RefCell(State(change_id=uuid4(), typed=None))

# Published separately so cancellation tokens can watch it
CHANGE_ID = RefCell(_CELL.val.change_id)


def state(
    change_id: Optional[UUID] = None,
    typed: Union[VoidType, Optional[str]] = Void,
) -> State:
    old_state = _CELL.val

    new_state = State(
        change_id=change_id or old_state.change_id,
        typed=typed if not isinstance(typed, VoidType) else old_state.typed,
    )
    _CELL.val = new_state
    CHANGE_ID.val = new_state.change_id

    return new_state
