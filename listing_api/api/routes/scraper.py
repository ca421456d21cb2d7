"""Scraper job-control routes."""
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from listing_scraper.config import CrawlOptions
from listing_scraper.crawl_controller import (
    CrawlController,
    REASON_ALREADY_RUNNING,
    REASON_INVALID_MODE,
    REASON_INVALID_URL,
)
from listing_scraper.exporter import export_filename

from listing_api.core.auth import require_admin
from listing_api.core.config import settings
from listing_api.core.controller import get_controller
from listing_api.schemas import CrawlRequest, MessageResponse

router = APIRouter(prefix="/scraper", tags=["scraper"], dependencies=[Depends(require_admin)])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

REJECTION_MESSAGES = {
    REASON_ALREADY_RUNNING: "Scraping already in progress",
    REASON_INVALID_URL: "Invalid URL format",
    REASON_INVALID_MODE: "Invalid mode",
}


@router.get("/status")
async def get_status(controller: CrawlController = Depends(get_controller)):
    """Get current job state, progress, results and failures."""
    return controller.get_status()


@router.post("/scrape", response_model=MessageResponse)
async def start_scrape(
    request: CrawlRequest,
    controller: CrawlController = Depends(get_controller),
):
    """Start a crawl in the background."""
    options = CrawlOptions(
        root_url=request.baseUrl or settings.default_root_url,
        mode=request.mode,
        delay_ms=request.delay if request.delay is not None else settings.default_delay_ms,
        max_depth=request.maxDepth,
    )
    result = controller.start(options)
    if not result.accepted:
        raise HTTPException(
            status_code=400,
            detail=REJECTION_MESSAGES.get(result.reason, result.reason),
        )
    return {"message": "Scraping started"}


@router.post("/stop", response_model=MessageResponse)
async def stop_scrape(controller: CrawlController = Depends(get_controller)):
    """Request a cooperative stop; results so far are kept."""
    return controller.stop()


@router.get("/download")
async def download(controller: CrawlController = Depends(get_controller)):
    """Download results and failures as an .xlsx workbook."""
    data = controller.export_to_table()
    if data is None:
        raise HTTPException(status_code=400, detail="No data to download")

    filename = export_filename(controller.tracker.mode)
    return Response(
        content=data,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
