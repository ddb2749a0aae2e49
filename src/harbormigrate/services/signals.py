"""Operator interrupt handling for harbor-migrate."""

import os
import signal

from harbormigrate.models import RunContext

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def setup_signal_context(signal_module=signal) -> RunContext:
    """Return a root context cancelled by the first SIGINT/SIGTERM.

    The first signal cancels the context and raises ``KeyboardInterrupt`` in the
    main thread, which aborts the blocking HTTP read or child-process wait in
    progress. A second signal exits immediately.
    """
    context = RunContext()

    def handle(signum, _frame):
        if context.cancelled:
            os._exit(1)
        context.cancel(f"Received {signal_module.Signals(signum).name}.")
        raise KeyboardInterrupt

    for signum in SHUTDOWN_SIGNALS:
        signal_module.signal(signum, handle)

    return context
