"""Hand a selected entity to the desktop's default handler."""

from __future__ import annotations

import logging
import shlex
import subprocess
from shutil import which

logger = logging.getLogger(__name__)

DEFAULT_OPENERS: list[list[str]] = [
    ["xdg-open"],
    ["gio", "open"],
    ["handlr", "open"],
]


def find_opener(configured: str = "") -> list[str] | None:
    """Return the opener command line, without the target.

    A configured command wins; otherwise the first installed default.
    """
    candidates = DEFAULT_OPENERS
    if configured.strip():
        try:
            candidates = [shlex.split(configured)]
        except ValueError as e:
            logger.warning("Ignoring unparseable opener %r: %s", configured, e)
    for cmd in candidates:
        found = which(cmd[0])
        if found:
            return [found, *cmd[1:]]
        logger.debug("Opener not found: %s", cmd[0])
    return None


class Opener:
    """Fire-and-forget launcher for entity URLs."""

    def __init__(self, command: str = ""):
        self.command = command

    def open(self, identifier: str) -> bool:
        """Spawn the opener detached from this process.

        Returns whether a process was started. The opener's own exit
        status is never observed.
        """
        cmd = find_opener(self.command)
        if cmd is None:
            logger.warning("No opener available for %s", identifier)
            return False
        try:
            subprocess.Popen(
                [*cmd, identifier],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                stdin=subprocess.DEVNULL,
                start_new_session=True,
            )
        except (OSError, subprocess.SubprocessError) as e:
            logger.warning("Failed to spawn %s: %s", cmd, e)
            return False
        logger.debug("Spawned %s for %s", cmd, identifier)
        return True
