from schemas.media import (
    ErrorEnvelope,
    HealthResponse,
    StatusResponse,
    VideoInfo,
    VideoInfoResponse,
)
