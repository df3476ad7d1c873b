"""Call/continuation loop and status-to-exit-code mapping."""

from __future__ import annotations

import enum
import logging
import sys
from typing import Callable, Protocol, TextIO

from ses_identity.models import CallResult
from ses_identity.params import Operation, build_params, with_next_token
from ses_identity.render import render_response

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_BAD_INPUT = 1
EXIT_USAGE = 2
EXIT_SERVICE_ERROR = 30
EXIT_SERVICE_ACCESS_ERROR = 31
EXIT_SERVICE_EXECUTION_ERROR = 32
EXIT_INTERNAL_ERROR = 70
EXIT_THROTTLED = 75
EXIT_UNKNOWN_STATUS = -1

_STATUS_EXIT_CODES = {
    400: EXIT_BAD_INPUT,
    403: EXIT_SERVICE_ACCESS_ERROR,
    500: EXIT_SERVICE_EXECUTION_ERROR,
    503: EXIT_SERVICE_ERROR,
}


class DispatchState(enum.Enum):
    CALLING = "calling"
    SUCCESS_DONE = "success_done"
    SUCCESS_MORE = "success_more"
    THROTTLED = "throttled"
    FAILED = "failed"


class RemoteCaller(Protocol):
    def call(self, params: dict[str, str]) -> CallResult: ...


Renderer = Callable[[Operation, str, TextIO], None]


def classify(result: CallResult) -> tuple[DispatchState, int]:
    """Map one call result onto the next state and the exit code it implies.

    The throttling flag wins over the status code, so a throttled 200 is
    never reported as success.
    """
    if result.throttled:
        return DispatchState.THROTTLED, EXIT_THROTTLED
    if result.status_code == 200:
        if result.next_token:
            return DispatchState.SUCCESS_MORE, EXIT_SUCCESS
        return DispatchState.SUCCESS_DONE, EXIT_SUCCESS
    return DispatchState.FAILED, _STATUS_EXIT_CODES.get(result.status_code, EXIT_UNKNOWN_STATUS)


class Dispatcher:
    def __init__(
        self,
        caller: RemoteCaller,
        *,
        renderer: Renderer = render_response,
        stdout: TextIO | None = None,
    ) -> None:
        self._caller = caller
        self._renderer = renderer
        self._stdout = stdout if stdout is not None else sys.stdout

    def run(self, operation: Operation) -> int:
        params = build_params(operation)
        state = DispatchState.CALLING
        page = 0
        while state is DispatchState.CALLING:
            page += 1
            result = self._caller.call(params)
            state, exit_code = classify(result)
            logger.debug(
                "%s page %d: status=%s flag=%r -> %s",
                params["Action"],
                page,
                result.status_code,
                result.flag,
                state.value,
            )
            if state in (DispatchState.SUCCESS_DONE, DispatchState.SUCCESS_MORE):
                # RenderError propagates: a bad body is not a remote failure.
                self._renderer(operation, result.body, self._stdout)
            if state is DispatchState.SUCCESS_MORE:
                params = with_next_token(params, result.next_token or "")
                state = DispatchState.CALLING
        return exit_code
