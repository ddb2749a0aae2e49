import signal

import pytest

from harbormigrate.services.signals import setup_signal_context


class FakeSignalModule:
    Signals = signal.Signals

    def __init__(self):
        self.handlers = {}

    def signal(self, signum, handler):
        self.handlers[signum] = handler


def test_signal_cancels_context_and_interrupts_main_thread():
    fake_signal = FakeSignalModule()
    context = setup_signal_context(signal_module=fake_signal)

    assert set(fake_signal.handlers) == {signal.SIGINT, signal.SIGTERM}
    assert context.cancelled is False

    with pytest.raises(KeyboardInterrupt):
        fake_signal.handlers[signal.SIGTERM](signal.SIGTERM, None)

    assert context.cancelled is True
    assert context.reason == "Received SIGTERM."
