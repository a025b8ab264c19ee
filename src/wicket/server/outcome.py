"""Handler outcomes as explicit values.

Running a handler never raises past ``run_handler``. The result is
either ``Completed`` or ``Failed``, and the finalizer pattern-matches on
it to pick the reply branch.
"""

from dataclasses import dataclass
from typing import Any

from wicket._internal.invoke import invoke
from wicket._internal.types import Handler
from wicket.http.request import Request
from wicket.http.response import Response


@dataclass(frozen=True, slots=True)
class Completed:
    """The handler returned normally; the response holds its outcome."""

    value: Any = None


@dataclass(frozen=True, slots=True)
class Failed:
    """The handler raised."""

    error: Exception


type Outcome = Completed | Failed


async def run_handler(handler: Handler, request: Request, response: Response) -> Outcome:
    """Invoke *handler* and capture how it ended."""
    try:
        value = await invoke(handler, request, response)
    except Exception as exc:
        return Failed(exc)
    return Completed(value)
