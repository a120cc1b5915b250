import logging

from presign_gateway.core.config import Settings
from presign_gateway.core.errors import (
    InvalidExpirationError,
    MissingBucketError,
    MissingKeyError,
    OutputParseError,
    SigningTimeoutError,
    ToolExecutionError,
)
from presign_gateway.schemas import PresignRequest, PresignResponse
from presign_gateway.services.share_output import ShareOutputParser, get_share_output_parser
from presign_gateway.services.signer import Signer, SigningTimeout, SigningToolError
from presign_gateway.services.url_rewrite import rewrite_public_base

logger = logging.getLogger(__name__)

DEFAULT_EXPIRE = "15m"


def validate_request(payload: PresignRequest) -> PresignRequest:
    bucket = payload.bucket.strip()
    key = payload.key.strip()
    if not bucket:
        raise MissingBucketError()
    if not key:
        raise MissingKeyError()
    return payload.model_copy(update={"bucket": bucket, "folder": payload.folder.strip(), "key": key})


def _clean_segment(segment: str) -> str:
    return segment.strip().removeprefix("/").removesuffix("/")


def join_object_path(folder: str, key: str) -> str:
    folder = _clean_segment(folder)
    key = _clean_segment(key)
    if not folder:
        return key
    return f"{folder}/{key}"


def build_expire(days: int, hours: int, minutes: int) -> str:
    """Format a duration the way ``mc --expire`` takes it, e.g. ``2d3h15m``.

    Returns an empty string when no explicit duration can be produced, that
    is when every component is zero or any is negative.
    """
    if days < 0 or hours < 0 or minutes < 0:
        return ""
    parts = []
    if days > 0:
        parts.append(f"{days}d")
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    return "".join(parts)


def resolve_expire(days: int, hours: int, minutes: int) -> str:
    if days < 0 or hours < 0 or minutes < 0:
        raise InvalidExpirationError()
    return build_expire(days, hours, minutes) or DEFAULT_EXPIRE


class PresignService:
    def __init__(
        self,
        settings: Settings,
        signer: Signer,
        parser: ShareOutputParser | None = None,
    ) -> None:
        self.alias = settings.minio_alias
        self.public_base_url = settings.public_base_url
        self.signer = signer
        self.parser = parser or get_share_output_parser(settings.share_output_mode)

    def signing_target(self, bucket: str, object_path: str) -> str:
        return f"{self.alias}/{bucket}/{object_path}"

    async def presign(self, payload: PresignRequest) -> PresignResponse:
        req = validate_request(payload)
        object_path = join_object_path(req.folder, req.key)
        expire = resolve_expire(req.days, req.hours, req.minutes)
        target = self.signing_target(req.bucket, object_path)

        outcome = await self.signer.sign(target, expire)
        if isinstance(outcome, SigningTimeout):
            raise SigningTimeoutError()
        if isinstance(outcome, SigningToolError):
            raise ToolExecutionError(outcome.message, exit_status=outcome.exit_status)

        try:
            url = self.parser.extract(outcome.output)
        except OutputParseError as exc:
            logger.warning("Unparseable mc output for %s: %s", target, exc.message)
            raise OutputParseError(
                "could not parse Share URL. mc output: " + outcome.output.strip()
            ) from exc

        return PresignResponse(
            url=rewrite_public_base(url, self.public_base_url),
            object=object_path,
            bucket=req.bucket,
            expires_in=expire,
        )
