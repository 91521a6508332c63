# journal/api.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from agents.recipe_digitizer.agent import digitize_recipe
from utils.supabase_utils import get_supabase_client

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="Recipe Journal API")


class DigitizeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    images: Optional[List[str]] = None
    user_id: Optional[str] = Field(default=None, alias="userId")


def get_supabase():
    """Zero-arg Supabase client factory, called inside the request."""
    return get_supabase_client


@app.get("/health")
def root_health():
    return {"ok": True, "service": "recipe-journal-api", "time": datetime.utcnow().isoformat() + "Z"}


@app.post("/api/digitize")
def digitize(req: DigitizeRequest, supabase_factory=Depends(get_supabase)):
    if not req.images:
        return JSONResponse({"error": "No images provided"}, status_code=400)

    try:
        supabase = supabase_factory()
        result = digitize_recipe(req.images, req.user_id, supabase=supabase)
    except Exception as e:
        logger.exception("Digitize failed")
        return JSONResponse({"error": str(e) or "Request failed"}, status_code=500)

    return {"success": True, "recipe": result["recipe"]}
