"""HTTP transport for uploading a job payload to Coveralls."""

from __future__ import annotations

import contextlib
from dataclasses import dataclass
from typing import TYPE_CHECKING

import requests

from covsubmit import __version__, logger
from covsubmit.config import COVERALLS_URL, DEFAULT_TIMEOUT
from covsubmit.errors import UploadError
from covsubmit.payload import encode_report, get_schema

if TYPE_CHECKING:
    from types import TracebackType

    from covsubmit.model import Report

HTTP_OK = 200


@dataclass(frozen=True, slots=True)
class UploadResult:
    status_code: int
    body: str

    @property
    def ok(self) -> bool:
        return self.status_code == HTTP_OK


class CoverallsTransport:
    """Payload codec plus HTTP session, opened and closed as one unit.

    Use as a context manager; sub-resources are torn down in reverse order
    even when an upload fails.
    """

    def __init__(self, *, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.timeout = timeout
        self._stack: contextlib.ExitStack | None = None
        self._session: requests.Session | None = None

    @property
    def is_open(self) -> bool:
        return self._stack is not None

    def open(self) -> CoverallsTransport:
        if self._stack is not None:
            return self
        stack = contextlib.ExitStack()
        try:
            # warm the schema cache so a broken install fails before any request
            get_schema()
            session = stack.enter_context(requests.Session())
            session.headers["User-Agent"] = f"covsubmit/{__version__}"
        except BaseException:
            stack.close()
            raise
        self._stack, self._session = stack, session
        logger.debug("transport opened")
        return self

    def close(self) -> None:
        stack, self._stack, self._session = self._stack, None, None
        if stack is not None:
            stack.close()
            logger.debug("transport closed")

    def __enter__(self) -> CoverallsTransport:
        return self.open()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def post(self, payload: str, url: str = COVERALLS_URL) -> UploadResult:
        """POST *payload* as the multipart ``json`` field of a new job."""
        if self._session is None:
            msg = "transport is not open"
            raise UploadError(msg)
        try:
            response = self._session.post(url, files={"json": (None, payload)}, timeout=self.timeout)
        except requests.RequestException as exc:
            msg = f"upload to {url} failed: {exc}"
            raise UploadError(msg) from exc

        result = UploadResult(status_code=response.status_code, body=response.text)
        if result.ok:
            logger.info("uploaded coverage to %s", url)
        else:
            logger.warning("%s answered HTTP %d: %s", url, result.status_code, result.body)
        return result

    def upload(self, report: Report, url: str = COVERALLS_URL) -> UploadResult:
        return self.post(encode_report(report), url)


__all__ = ["HTTP_OK", "CoverallsTransport", "UploadResult"]
