"""Structured logging shared by the chamber services.

Every service logs through one structlog logger bound to its class name and
a chamber component: session, initiative, ledger, tally or audit. Each
call that mutates chamber state binds an operation logger carrying the
request correlation id and the ids it touches (session_id, initiative_id,
voter_id, actor_id), then emits `<operation>_started` and
`<operation>_completed`, or `<operation>_rejected` at warning level when a
guard refuses the call.
"""

import structlog

from legisvote.infrastructure.observability.correlation import get_correlation_id


class LoggingMixin:
    """Binds `self._log` to the service and its chamber component.

    Attributes:
        _log: Logger bound with `service` and `component`.
    """

    _log: structlog.BoundLogger

    def _init_logger(self, component: str) -> None:
        self._log = structlog.get_logger().bind(
            service=self.__class__.__name__,
            component=component,
        )

    def _log_operation(
        self,
        operation: str,
        **ids: object,
    ) -> structlog.BoundLogger:
        """Logger for one chamber operation.

        Args:
            operation: Operation name, e.g. "cast" or "close".
            **ids: Stringified ids of the records the operation touches.

        Returns:
            Logger bound with operation, correlation_id and the given ids.
        """
        return self._log.bind(
            operation=operation,
            correlation_id=get_correlation_id(),
            **ids,
        )
