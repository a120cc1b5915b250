import logging

from presign_gateway.core.config import Settings
from presign_gateway.services.signer import SigningTimeout, SigningToolError, run_command

logger = logging.getLogger(__name__)


class AliasSetupError(RuntimeError):
    """Raised when ``mc alias set`` fails during startup."""


async def ensure_alias(settings: Settings) -> bool:
    """Register the ``mc`` alias from MINIO_ENDPOINT / MINIO_ACCESS_KEY / MINIO_SECRET_KEY.

    Returns False without touching ``mc`` when the credentials are not all
    set; the alias is then expected to exist already.
    """
    if not settings.alias_bootstrap_enabled:
        logger.warning(
            "MINIO_ENDPOINT / MINIO_ACCESS_KEY / MINIO_SECRET_KEY not fully set. "
            "Assuming mc alias %s already exists.",
            settings.minio_alias,
        )
        return False

    logger.info("Configuring mc alias: %s -> %s", settings.minio_alias, settings.minio_endpoint)
    outcome = await run_command(
        [
            settings.mc_binary,
            "alias",
            "set",
            settings.minio_alias,
            settings.minio_endpoint,
            settings.minio_access_key,
            settings.minio_secret_key,
            "--api",
            "S3v4",
        ],
        settings.mc_timeout_seconds,
    )
    if isinstance(outcome, SigningTimeout):
        raise AliasSetupError(f"mc alias set timed out after {outcome.timeout_seconds}s")
    if isinstance(outcome, SigningToolError):
        raise AliasSetupError(f"mc alias set failed: {outcome.message}")
    return True
