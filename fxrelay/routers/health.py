from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health", summary="Liveness check; does not probe upstream")
async def health():
    return {"ok": True}
