"""Health check endpoints for monitoring service readiness."""

import logging
from datetime import UTC, datetime
from typing import Annotated

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends

from tubeaudio.system.tool_probe import ToolProbe
from tubeaudio.web.core.container import Container
from tubeaudio.web.models.health import LivenessProbeResponse, ReadinessResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health")


@router.get("", response_model=ReadinessResponse)
@inject
async def readiness(
    tool_probe: Annotated[ToolProbe, Depends(Provide[Container.tool_probe])],
) -> ReadinessResponse:
    """Report whether the extractor and transcoder needed for conversion are installed.

    Always answers 200; the body says whether conversions can run.
    """
    tools = tool_probe.status()
    if tools.ready:
        message = "Service ready"
    else:
        missing = []
        if not tools.extractor_present:
            missing.append(" or ".join(tool_probe.extractor_candidates))
        if not tools.transcoder_present:
            missing.append(" or ".join(tool_probe.transcoder_candidates))
        message = f"Missing required tools: {', '.join(missing)}"
        logger.debug(message)

    return ReadinessResponse(
        status="ready" if tools.ready else "not_ready",
        extractor=tools.extractor,
        extractor_present=tools.extractor_present,
        transcoder_present=tools.transcoder_present,
        message=message,
        timestamp=datetime.now(UTC).isoformat().replace("+00:00", "Z"),
    )


@router.get("/live", response_model=LivenessProbeResponse)
async def liveness_probe() -> LivenessProbeResponse:
    """Liveness probe.

    Returns:
        Simple status indicating the service is alive.
    """
    return LivenessProbeResponse(status="alive")
