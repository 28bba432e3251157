# brand_engine/main.py
from fastapi import FastAPI, File, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from .analyzers import classify_theme, extract_palette, infer_industry
from .branding import BrandingExtractor
from .config import get_settings
from .logging import get_logger
from .models import WarningLog
from .schemas import ExtractBrandingRequest, InferIndustryRequest

logger = get_logger(__name__)

app = FastAPI(title="Brand Engine Service")

extractor = BrandingExtractor()


@app.post("/api/extract-branding")
async def extract_branding(payload: ExtractBrandingRequest):
    """
    Logo, palette, font, theme and industry for a page URL.
    Degradations are listed in report.warnings rather than failing the request.
    """
    try:
        download_dir = get_settings().LOGO_OUTPUT_DIR if payload.download_logo else None
        report = await extractor.extract_page_brand(payload.url, download_dir=download_dir)
        return JSONResponse(content={"status": "ok", "report": report.to_dict()})
    except Exception as e:
        logger.exception("Branding extraction failed")
        return JSONResponse(content={"status": "error", "message": str(e)}, status_code=500)


@app.post("/api/extract-palette")
async def extract_screenshot_palette(file: UploadFile = File(...)):
    try:
        content = await file.read()
        warnings = WarningLog()
        colors = await run_in_threadpool(extract_palette, content, warnings)
        return JSONResponse(content={
            "status": "ok",
            "colors": colors.to_dict(),
            "theme": classify_theme(colors).value,
            "warnings": warnings.as_list(),
        })
    except Exception as e:
        logger.exception("Palette extraction failed")
        return JSONResponse(content={"status": "error", "message": str(e)}, status_code=500)


@app.post("/api/infer-industry")
async def infer_page_industry(payload: InferIndustryRequest):
    industry = infer_industry(payload.title, payload.description)
    return JSONResponse(content={"status": "ok", "industry": industry.value})


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("brand_engine.main:app", host="0.0.0.0", port=8000, reload=True)
