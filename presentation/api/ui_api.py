from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"

router = APIRouter(tags=["ui"])


@router.get("/app", response_class=HTMLResponse)
async def catalog_page():
    """Serve the single-page catalog UI"""
    return HTMLResponse((STATIC_DIR / "index.html").read_text(encoding="utf-8"))
