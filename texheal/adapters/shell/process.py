"""
Process runner — the SINGLE PLACE where child processes are launched.

Compiles, installer runs and everything else that forks goes through
``ProcessRunner``.  Two modes share one engine:

    run()     captured: output is buffered, the user sees a heartbeat
    stream()  user-visible: every line is echoed live and also captured

Both child pipes are drained by dedicated reader threads while the
child runs.  A large compiler log would otherwise fill the OS pipe
buffer and block the child forever.  The readers are always joined
before a result is returned.
"""

from __future__ import annotations

import logging
import signal
import subprocess
import threading
import time
from collections.abc import Callable, Sequence
from typing import IO

import click

from texheal.core.models.process import RunResult

logger = logging.getLogger(__name__)

READER_THREAD_PREFIX = "texheal-reader"

# Seconds a child gets to exit after a forwarded interrupt
_INTERRUPT_GRACE = 5.0

LineHandler = Callable[[str, str], None]   # (stream name, line without newline)


def _write_terminal(text: str) -> None:
    click.echo(text, nl=False)


class Heartbeat:
    """Progress dots for one child run.

    Prints a dot every ``every`` scanned lines and a line break every
    ``wrap`` lines.  Owned by a single invocation; both reader threads
    tick the same instance.
    """

    def __init__(
        self,
        every: int = 10,
        wrap: int = 500,
        write: Callable[[str], None] | None = None,
    ):
        self._every = every
        self._wrap = wrap
        self._write = write or _write_terminal
        self._count = 0
        self._open_line = False
        self._lock = threading.Lock()

    @property
    def lines(self) -> int:
        """Number of lines scanned so far."""
        return self._count

    def tick(self) -> None:
        with self._lock:
            if self._count % self._every == 0:
                self._write(".")
                self._open_line = True
            self._count += 1
            if self._count % self._wrap == 0:
                self._write("\n")
                self._open_line = False

    def finish(self) -> None:
        """Terminate a partially filled line of dots."""
        with self._lock:
            if self._open_line:
                self._write("\n")
                self._open_line = False


class ProcessRunner:
    """Launch a program with a fixed argument list and collect its output.

    The child inherits the caller's working directory and environment
    unchanged.  Launch failures (missing or non-executable binary) are
    returned as a ``RunResult`` with ``launch_error`` set; nothing here
    raises except ``KeyboardInterrupt``, which is forwarded to the child
    and then re-raised.
    """

    def __init__(
        self,
        heartbeat_every: int = 10,
        heartbeat_wrap: int = 500,
        write: Callable[[str], None] | None = None,
        interrupt_grace: float = _INTERRUPT_GRACE,
    ):
        self._heartbeat_every = heartbeat_every
        self._heartbeat_wrap = heartbeat_wrap
        self._write = write or _write_terminal
        self._interrupt_grace = interrupt_grace

    def run(self, command: str, args: Sequence[str]) -> RunResult:
        """Run with output captured; show only the heartbeat."""
        heartbeat = Heartbeat(
            every=self._heartbeat_every,
            wrap=self._heartbeat_wrap,
            write=self._write,
        )
        try:
            return self._execute([command, *args], lambda _stream, _line: heartbeat.tick())
        finally:
            heartbeat.finish()

    def stream(self, command: str, args: Sequence[str]) -> RunResult:
        """Run with every output line echoed to the user as it arrives."""
        return self._execute(
            [command, *args],
            lambda _stream, line: self._write(line + "\n"),
        )

    # ── Engine ──────────────────────────────────────────────────

    def _execute(self, argv: list[str], on_line: LineHandler) -> RunResult:
        logger.debug("Executing: %s", " ".join(argv))
        start = time.monotonic()

        try:
            proc = subprocess.Popen(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
                bufsize=1,
            )
        except OSError as e:
            logger.warning("Cannot launch %s: %s", argv[0], e)
            return RunResult.not_launched(argv, str(e))

        lines: list[str] = []
        lock = threading.Lock()
        readers = [
            threading.Thread(
                target=_drain,
                args=(pipe, name, lines, lock, on_line),
                name=f"{READER_THREAD_PREFIX}-{name}-{proc.pid}",
                daemon=True,
            )
            for name, pipe in (("stdout", proc.stdout), ("stderr", proc.stderr))
        ]
        for reader in readers:
            reader.start()

        try:
            returncode = proc.wait()
        except KeyboardInterrupt:
            self._interrupt(proc, argv)
            raise
        finally:
            for reader in readers:
                reader.join()

        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.debug("%s finished with return code %d in %dms", argv[0], returncode, elapsed_ms)

        return RunResult.from_returncode(
            argv,
            returncode,
            output="".join(lines),
            duration_ms=elapsed_ms,
        )

    def _interrupt(self, proc: subprocess.Popen, argv: list[str]) -> None:
        """Pass an interrupt on to the child, escalating if it lingers."""
        if proc.poll() is not None:
            return
        logger.info("Interrupted: stopping %s (pid %d)", argv[0], proc.pid)
        proc.send_signal(signal.SIGINT)
        try:
            proc.wait(timeout=self._interrupt_grace)
            return
        except subprocess.TimeoutExpired:
            proc.terminate()
        try:
            proc.wait(timeout=self._interrupt_grace)
        except subprocess.TimeoutExpired:
            proc.kill()
            proc.wait()


def _drain(
    pipe: IO[str] | None,
    name: str,
    lines: list[str],
    lock: threading.Lock,
    on_line: LineHandler,
) -> None:
    """Reader thread body: copy one pipe into the shared buffer until EOF."""
    if pipe is None:
        return
    try:
        for raw in pipe:
            line = raw.rstrip("\n")
            with lock:
                lines.append(line + "\n")
            on_line(name, line)
    finally:
        pipe.close()
