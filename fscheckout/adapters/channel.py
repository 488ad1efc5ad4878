"""
Message channel between the checkout content and the host.

The channel is one-way (content -> host) and carries raw payloads.
It cannot carry structured errors; decoding happens on the host side.
"""
from abc import ABC, abstractmethod
from collections import deque
from typing import Any, Callable, Deque, Optional

from fscheckout.utils.logger import ComponentLogger


MessageHandler = Callable[[Any], None]


class MessageChannel(ABC):
    """
    Contract for a named content -> host channel.

    Exactly one handler is registered at a time; registering a new one
    replaces the previous one.
    """

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def send(self, payload: Any) -> None:
        """Hand a payload from the content context to the host."""
        ...

    @abstractmethod
    def on_message(self, handler: Optional[MessageHandler]) -> None:
        """Register (or with None, remove) the host-side handler."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Drop the handler and refuse further payloads."""
        ...


class LocalMessageChannel(MessageChannel):
    """
    In-process channel dispatching payloads in FIFO order.

    Dispatch is serialized: a payload sent while a handler is still
    running (e.g. from within the handler) is queued and delivered
    after the current one returns.
    """

    def __init__(self, name: str):
        super().__init__(name)
        self.logger = ComponentLogger("message_channel")
        self._handler: Optional[MessageHandler] = None
        self._queue: Deque[Any] = deque()
        self._dispatching = False
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def on_message(self, handler: Optional[MessageHandler]) -> None:
        self._handler = handler

    def send(self, payload: Any) -> None:
        self.logger.log_message(self.name, payload)

        if self._closed:
            self.logger.log_decision(
                decision="payload_dropped",
                reason="channel_closed",
                channel=self.name
            )
            return

        self._queue.append(payload)
        if self._dispatching:
            return

        self._dispatching = True
        try:
            while self._queue:
                next_payload = self._queue.popleft()
                if self._handler is None:
                    self.logger.log_decision(
                        decision="payload_dropped",
                        reason="no_handler_registered",
                        channel=self.name
                    )
                    continue
                self._handler(next_payload)
        finally:
            self._dispatching = False

    def close(self) -> None:
        self._closed = True
        self._handler = None
        self._queue.clear()
