"""SEO text analysis routes."""

from fastapi import APIRouter, Depends

from api.dependencies import enforce_rate_limit
from api.schemas import KeywordDensityRequest
from services.text_analysis import analyze_density

router = APIRouter(
    prefix="/api/seo",
    tags=["SEO"],
    dependencies=[Depends(enforce_rate_limit)],
)


@router.post(
    "/keyword-density",
    summary="Keyword density",
    description="Ranks the non-stopword keywords of a text by frequency and density.",
)
async def keyword_density(body: KeywordDensityRequest) -> dict:
    """Keyword density endpoint."""
    return analyze_density(body.text, body.stopwords).to_dict()
