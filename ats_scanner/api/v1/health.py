from fastapi import APIRouter

from ats_scanner.enrichment import enrichment_configured

router = APIRouter()


@router.get("/health", summary="Health Check", description="Check the health status of the application.")
async def health_check():
    return {"status": "healthy", "enrichment": "configured" if enrichment_configured() else "heuristic"}
