"""Fake do canal de email que apenas registra as mensagens."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SentMessage:
    subject: str
    body: str
    ics_document: str | None
    ics_filename: str


class FakeNotifier:
    def __init__(self, *, enabled: bool = True, error: Exception | None = None) -> None:
        self._enabled = enabled
        self._error = error
        self.sent: list[SentMessage] = []

    @property
    def enabled(self) -> bool:
        return self._enabled

    async def send(
        self,
        *,
        subject: str,
        body: str,
        ics_document: str | None = None,
        ics_filename: str = "event.ics",
    ) -> None:
        if self._error is not None:
            raise self._error
        self.sent.append(SentMessage(subject, body, ics_document, ics_filename))
