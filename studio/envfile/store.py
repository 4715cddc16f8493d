"""Env-file backed key/value store for integration credentials.

The file is line oriented (``KEY=value``) and shared with whatever else the
deployment keeps in it, so updates rewrite only the lines they own and leave
comments, blank lines and unrelated keys untouched.
"""

import logging
import os
import re
import tempfile
import threading
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol

from dotenv import dotenv_values

from studio.core.errors import StoreUnavailableError

logger = logging.getLogger(__name__)

STORE_NAME = "env_file"

_NEEDS_QUOTES = re.compile(r"[\s#'\"\\]")


class EnvStore(Protocol):
    """Flat string key/value store persisted outside the process."""

    def read(self) -> dict[str, str]: ...

    def update(self, updates: Mapping[str, str]) -> None: ...


def _key_pattern(key: str) -> re.Pattern[str]:
    return re.compile(rf"^(\s*(?:export\s+)?){re.escape(key)}\s*(?:=|$)")


def _format_value(value: str) -> str:
    if not _NEEDS_QUOTES.search(value):
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def render_updates(content: str, updates: Mapping[str, str]) -> str:
    """Return ``content`` with ``updates`` applied line by line.

    Existing ``KEY=...`` (or bare ``KEY``) lines are replaced in place, keeping
    any ``export`` prefix; keys that do not appear yet are appended in the
    order given.
    """
    patterns = {key: _key_pattern(key) for key in updates}
    seen: set[str] = set()
    lines = content.splitlines()
    out: list[str] = []

    for line in lines:
        for key, pattern in patterns.items():
            match = pattern.match(line)
            if match:
                seen.add(key)
                out.append(f"{match.group(1)}{key}={_format_value(updates[key])}")
                break
        else:
            out.append(line)

    for key, value in updates.items():
        if key not in seen:
            out.append(f"{key}={_format_value(value)}")

    return "\n".join(out) + "\n"


class EnvFileStore:
    """EnvStore over a dotenv file on local disk."""

    def __init__(self, path: str | Path, *, sync_process_env: bool = False) -> None:
        self.path = Path(path)
        self.sync_process_env = sync_process_env
        self._lock = threading.Lock()

    def read(self) -> dict[str, str]:
        """Parse the file; a missing file reads as empty."""
        if not self.path.exists():
            return {}
        try:
            values = dotenv_values(self.path, interpolate=False)
        except (OSError, UnicodeDecodeError) as exc:
            raise StoreUnavailableError(STORE_NAME, f"cannot read {self.path}") from exc
        return {key: value or "" for key, value in values.items()}

    def update(self, updates: Mapping[str, str]) -> None:
        """Set every key in ``updates`` with one atomic rewrite of the file."""
        if not updates:
            return
        with self._lock:
            try:
                content = self.path.read_text(encoding="utf-8")
            except FileNotFoundError:
                content = ""
            except (OSError, UnicodeDecodeError) as exc:
                raise StoreUnavailableError(
                    STORE_NAME, f"cannot read {self.path}"
                ) from exc

            self._replace(render_updates(content, updates))

        if self.sync_process_env:
            for key, value in updates.items():
                os.environ[key] = value
        logger.info("Updated %d key(s) in %s", len(updates), self.path)

    def _replace(self, content: str) -> None:
        # Write through symlinks so a linked env file stays linked.
        target = self.path.resolve()
        directory = target.parent
        tmp_name: str | None = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=directory,
                prefix=f".{target.name}.",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(content)
                tmp.flush()
                os.fsync(tmp.fileno())
            if target.exists():
                os.chmod(tmp_name, target.stat().st_mode & 0o777)
            os.replace(tmp_name, target)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StoreUnavailableError(
                STORE_NAME, f"cannot write {self.path}"
            ) from exc


class InMemoryEnvStore:
    """EnvStore kept in a dict, for tests and local tooling."""

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        self.values: dict[str, str] = dict(initial or {})
        self.fail_writes = False

    def read(self) -> dict[str, str]:
        return dict(self.values)

    def update(self, updates: Mapping[str, str]) -> None:
        if self.fail_writes:
            raise StoreUnavailableError("memory", "writes disabled")
        self.values.update(updates)
