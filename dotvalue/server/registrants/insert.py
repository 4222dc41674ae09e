from asyncio import Task, create_task
from typing import Optional
from uuid import uuid4

from pynvim_pp.buffer import Buffer
from pynvim_pp.lib import decode, encode
from pynvim_pp.logging import suppress_and_log
from pynvim_pp.nvim import Nvim
from pynvim_pp.types import NoneType
from pynvim_pp.window import Window
from std2.asyncio import cancel
from std2.cell import RefCell

from ...registry import NAMESPACE, autocmd, rpc
from ...shared.cancel import ChangeToken
from ...shared.document import Document
from ...shared.timeit import timeit
from ...shared.types import Position, Range, TextChange
from ..rt_types import Stack
from ..state import CHANGE_ID, state

_CELL = RefCell[Optional[Task]](None)


def change_for(position: Position, typed: Optional[str]) -> TextChange:
    """
    Insert mode typing, `typed` has just landed right before the cursor
    """

    if typed and "\n" not in typed and position.character >= len(typed):
        start = Position(
            line=position.line, character=position.character - len(typed)
        )
        return TextChange(range=Range(start=start, end=start), text=typed)
    else:
        return TextChange(range=Range(start=position, end=position), text="")


@rpc()
async def _char_pre(stack: Stack, char: str) -> None:
    state(typed=char)


_ = autocmd("InsertCharPre") << f"lua {NAMESPACE}.{_char_pre.method}(vim.v.char)"


@rpc()
async def _text_changed(stack: Stack) -> None:
    typed = state().typed
    s = state(change_id=uuid4(), typed=None)

    if task := _CELL.val:
        _CELL.val = None
        await cancel(task)

    async def cont() -> None:
        with suppress_and_log(), timeit("TEXT CHANGED"):
            buf = await Buffer.get_current()
            filetype = await buf.filetype()
            if filetype not in stack.settings.languages:
                return

            win = await Window.get_current()
            row, col = await win.get_cursor()
            name = await buf.get_name() or f"buffer://{buf.number}"
            tick = await Nvim.api.buf_get_changedtick(int, buf)
            lines = await buf.get_lines(lo=0, hi=-1)

            line = lines[row] if row < len(lines) else ""
            position = Position(line=row, character=len(decode(encode(line)[:col])))
            document = Document(
                uri=name, language_id=filetype, version=tick, text="\n".join(lines)
            )
            token = ChangeToken(CHANGE_ID, change_id=s.change_id)

            edit = await stack.engine.provide_auto_insertion_edit(
                document,
                position=position,
                change=change_for(position, typed=typed),
                token=token,
            )
            if edit and not token.is_cancellation_requested():
                await Nvim.api.exec_lua(
                    NoneType, "vim.snippet.expand(...)", (edit.new_text,)
                )

    _CELL.val = create_task(cont())


_ = autocmd("TextChangedI") << f"lua {NAMESPACE}.{_text_changed.method}()"
