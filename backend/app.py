"""
Halal recipe converter FastAPI application.

Endpoints:
    GET  /          Health check
    POST /convert   Detect haram ingredients, substitute alternatives, score the result
"""
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import Dict, List, Optional
import logging
from dotenv import load_dotenv
from pathlib import Path

# Load env vars
load_dotenv(Path(__file__).parent / ".env")

# Logger
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

from core.config import log_config
from core.evaluation.halal_engine import get_default_engine

# Initialize App
app = FastAPI(title="Halal Recipe Converter API")

log_config()

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Request/Response Models ---
class ConvertRequest(BaseModel):
    recipe: Optional[str] = None
    userPreferences: Optional[Dict] = None


class ConvertResponse(BaseModel):
    originalText: str
    convertedText: str
    issues: List[Dict]
    confidenceScore: int


@app.get("/")
def health_check():
    return {"status": "ok", "knowledge_entries": len(get_default_engine().knowledge_base)}


@app.post("/convert", response_model=ConvertResponse)
def convert_recipe(request: ConvertRequest):
    """Convert a recipe; userPreferences may carry strictnessLevel and schoolOfThought."""
    if not request.recipe or not request.recipe.strip():
        raise HTTPException(status_code=400, detail="Please provide a recipe to convert.")
    logger.info("Convert request chars=%d prefs=%s", len(request.recipe), request.userPreferences)
    try:
        result = get_default_engine().convert_recipe(request.recipe, request.userPreferences)
        return result.to_dict()
    except Exception as e:
        logger.error("Convert failed: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Conversion failed. Please try again later.")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app:app", host="0.0.0.0", port=8000, reload=True)
