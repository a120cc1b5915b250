from presign_gateway.schemas.presign import ErrorResponse, PresignRequest, PresignResponse

__all__ = [
    "PresignRequest",
    "PresignResponse",
    "ErrorResponse",
]
