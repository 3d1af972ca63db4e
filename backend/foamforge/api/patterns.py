"""POST /api/patterns/* — cut path generation and SVG download."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from foamforge.dependencies import get_generator
from foamforge.engine.orchestrator import PatternGenerator
from foamforge.errors import ConfigurationError, GenerationError
from foamforge.models.requests import GenerateRequest, SvgExportRequest
from foamforge.models.responses import GenerateResponse
from foamforge.svg.serializer import download_filename, pattern_to_svg, points_to_path_d

router = APIRouter(prefix="/patterns")
logger = logging.getLogger(__name__)


@router.post("/generate", response_model=GenerateResponse)
async def generate(
    req: GenerateRequest,
    generator: PatternGenerator = Depends(get_generator),
) -> GenerateResponse:
    if not req.prompt.strip():
        raise HTTPException(status_code=422, detail="Prompt is empty")

    try:
        result = await generator.run(req.prompt)
    except ConfigurationError as e:
        logger.error("Generation not configured: %s", e)
        raise HTTPException(status_code=503, detail=str(e)) from e
    except GenerationError as e:
        raise HTTPException(status_code=502, detail=str(e)) from e

    return GenerateResponse(
        pattern=result.pattern,
        svg_path=points_to_path_d(result.pattern.as_array(), flip_y=True),
        source=result.source,
    )


@router.post("/svg")
async def export_svg(req: SvgExportRequest) -> Response:
    filename = download_filename(req.pattern.name)
    return Response(
        content=pattern_to_svg(req.pattern),
        media_type="image/svg+xml",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
