import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Protocol

from presign_gateway.core.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SigningSuccess:
    output: str


@dataclass(frozen=True)
class SigningToolError:
    output: str
    exit_status: int | None
    message: str


@dataclass(frozen=True)
class SigningTimeout:
    timeout_seconds: float


SigningOutcome = SigningSuccess | SigningToolError | SigningTimeout


class Signer(Protocol):
    async def sign(self, target: str, expire: str) -> SigningOutcome: ...


async def _reap(proc: asyncio.subprocess.Process) -> None:
    if proc.returncode is None:
        try:
            proc.kill()
        except ProcessLookupError:
            pass
    await proc.wait()


async def run_command(args: list[str], timeout_seconds: float) -> SigningOutcome:
    """Run ``args`` with stdout and stderr merged, bounded by ``timeout_seconds``.

    The process is killed and reaped on timeout and when the awaiting task is
    cancelled, so an abandoned request never leaves ``mc`` running.
    """
    try:
        proc = await asyncio.create_subprocess_exec(
            *args,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT,
        )
    except OSError as exc:
        logger.error("Could not start %s: %s", args[0], exc)
        return SigningToolError(output="", exit_status=None, message=str(exc))

    try:
        stdout_bytes, _ = await asyncio.wait_for(proc.communicate(), timeout=timeout_seconds)
    except asyncio.TimeoutError:
        await _reap(proc)
        return SigningTimeout(timeout_seconds=timeout_seconds)
    except asyncio.CancelledError:
        await asyncio.shield(_reap(proc))
        raise

    output = stdout_bytes.decode("utf-8", errors="replace")
    if proc.returncode != 0:
        message = output.strip() or f"exit status {proc.returncode}"
        return SigningToolError(output=output, exit_status=proc.returncode, message=message)
    return SigningSuccess(output=output)


class McShareSigner:
    """Generates download links with ``mc share download``."""

    def __init__(self, settings: Settings) -> None:
        self.binary = settings.mc_binary
        self.timeout_seconds = settings.mc_timeout_seconds

    def build_command(self, target: str, expire: str) -> list[str]:
        return [self.binary, "share", "download", "--expire", expire, target]

    async def sign(self, target: str, expire: str) -> SigningOutcome:
        started = time.perf_counter()
        try:
            outcome = await run_command(self.build_command(target, expire), self.timeout_seconds)
        except asyncio.CancelledError:
            logger.info("mc share for %s cancelled; process killed", target)
            raise
        elapsed_ms = int((time.perf_counter() - started) * 1000)

        if isinstance(outcome, SigningTimeout):
            logger.warning(
                "mc share for %s timed out after %ss", target, outcome.timeout_seconds
            )
        elif isinstance(outcome, SigningToolError):
            logger.warning(
                "mc share for %s failed (exit status %s) in %dms: %s",
                target,
                outcome.exit_status,
                elapsed_ms,
                outcome.message,
            )
        else:
            logger.info("mc share for %s completed in %dms", target, elapsed_ms)
            logger.debug("mc output for %s: %s", target, outcome.output)
        return outcome
