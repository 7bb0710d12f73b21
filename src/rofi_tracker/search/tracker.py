"""Tracker 3 index service client over the D-Bus session bus."""

from __future__ import annotations

import logging
import os
import select
import time
from typing import Protocol
from urllib.parse import unquote, urlsplit

from rofi_tracker.config import DEFAULT_MAX_RESULTS
from rofi_tracker.core.errors import IndexQueryError, IndexUnavailableError
from rofi_tracker.core.models import Candidate, EntityKind
from rofi_tracker.search.cursor import parse_cursor
from rofi_tracker.search.sparql import RESULT_VARIABLES, build_search_query

logger = logging.getLogger(__name__)

ENDPOINT_INTERFACE = "org.freedesktop.Tracker3.Endpoint"
READ_CHUNK_SIZE = 65536

# D-Bus error names that mean nobody is answering, as opposed to a bad query
_UNAVAILABLE_ERRORS = {
    "org.freedesktop.DBus.Error.ServiceUnknown",
    "org.freedesktop.DBus.Error.NameHasNoOwner",
    "org.freedesktop.DBus.Error.NoReply",
    "org.freedesktop.DBus.Error.Timeout",
    "org.freedesktop.DBus.Error.TimedOut",
    "org.freedesktop.DBus.Error.NoServer",
    "org.freedesktop.DBus.Error.Disconnected",
    "org.freedesktop.DBus.Error.Spawn.ChildExited",
}

_KINDS = {kind.value: kind for kind in EntityKind}


class IndexService(Protocol):
    """Black-box query endpoint the translator talks to."""

    def search(
        self,
        query_text: str,
        container: str | None = None,
        limit: int = DEFAULT_MAX_RESULTS,
    ) -> list[Candidate]:
        ...


def describe_entity(url: str, title: str = "") -> str:
    """Human label for an entity: ``name: title [parent dir]``."""
    parts = urlsplit(url)
    segments = [unquote(s) for s in parts.path.rstrip("/").split("/")]
    name = segments[-1] if segments else ""
    parent = "/".join(segments[:-1])

    if not name:
        return f"{title} [{url}]" if title else url

    label = name
    if title:
        label += f": {title}"
    if parent:
        label += f" [{parent}]"
    return label


def row_to_candidate(row: tuple[str | None, ...]) -> Candidate | None:
    """Convert one cursor row to a Candidate, or None if it is unusable."""
    _, url, title, kind = row
    if not url or not urlsplit(url).scheme:
        logger.debug("Skipping row without a usable URL: %r", row)
        return None
    title = title or ""
    return Candidate(
        label=describe_entity(url, title),
        kind=_KINDS.get(kind or "", EntityKind.OTHER),
        identifier=url,
        title=title,
    )


class TrackerIndex:
    """Queries the Tracker file miner's SPARQL endpoint.

    Results are streamed by Tracker into a pipe we hand over with the
    method call, then parsed from its binary cursor format.
    """

    def __init__(
        self,
        bus_name: str = "org.freedesktop.Tracker3.Miner.Files",
        object_path: str = "/org/freedesktop/Tracker3/Endpoint",
        timeout: float = 2.0,
    ):
        self.bus_name = bus_name
        self.object_path = object_path
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings) -> TrackerIndex:
        return cls(
            bus_name=settings.bus_name,
            object_path=settings.object_path,
            timeout=settings.dbus_timeout,
        )

    def search(
        self,
        query_text: str,
        container: str | None = None,
        limit: int = DEFAULT_MAX_RESULTS,
    ) -> list[Candidate]:
        """Run a lookup and return candidates in Tracker's order."""
        sparql = build_search_query(query_text, container=container, limit=limit)
        logger.debug("SPARQL query:\n%s", sparql)

        read_fd, write_fd = os.pipe()
        try:
            try:
                variables = self._call_endpoint(sparql, write_fd)
            finally:
                os.close(write_fd)
            if tuple(str(v) for v in variables) != RESULT_VARIABLES:
                raise IndexQueryError(f"unexpected result variables: {list(variables)}")
            buf = self._read_pipe(read_fd)
        finally:
            os.close(read_fd)

        rows = parse_cursor(buf, len(RESULT_VARIABLES))
        candidates = [c for c in (row_to_candidate(r) for r in rows) if c is not None]
        logger.debug("Tracker returned %d rows, %d usable", len(rows), len(candidates))
        return candidates

    def _call_endpoint(self, sparql: str, write_fd: int) -> list[str]:
        """Invoke Endpoint.Query, returning the reply's variable names.

        The caller keeps ownership of ``write_fd``; the duplicate passed on
        the bus is closed here so the pipe reaches EOF once Tracker is done.
        """
        try:
            import dbus
        except ImportError as e:
            raise IndexUnavailableError(
                "dbus-python is not installed (pip install 'rofi-tracker[tracker]')"
            ) from e

        try:
            bus = dbus.SessionBus()
            proxy = bus.get_object(self.bus_name, self.object_path, introspect=False)
            endpoint = dbus.Interface(proxy, ENDPOINT_INTERFACE)
            fd_arg = dbus.types.UnixFd(write_fd)
            try:
                return endpoint.Query(
                    sparql,
                    fd_arg,
                    dbus.Dictionary({}, signature="sv"),
                    timeout=self.timeout,
                )
            finally:
                os.close(fd_arg.take())
        except dbus.exceptions.DBusException as e:
            name = e.get_dbus_name()
            if name is None or name in _UNAVAILABLE_ERRORS:
                raise IndexUnavailableError(f"{self.bus_name}: {e}") from e
            raise IndexQueryError(f"{self.bus_name}: {e}") from e

    def _read_pipe(self, read_fd: int) -> bytes:
        deadline = time.monotonic() + self.timeout
        chunks: list[bytes] = []
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise IndexUnavailableError(
                    f"timed out after {self.timeout:.1f}s reading results"
                )
            ready, _, _ = select.select([read_fd], [], [], remaining)
            if not ready:
                continue
            chunk = os.read(read_fd, READ_CHUNK_SIZE)
            if not chunk:
                return b"".join(chunks)
            chunks.append(chunk)
