"""
Bakery Pre-Order Service — Health endpoint
"""
import asyncio
from fastapi import APIRouter
from fastapi.responses import JSONResponse
from bakery.core.config import get_settings
from bakery.core.redis_client import get_redis

settings = get_settings()
router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    deps: dict[str, str] = {}
    healthy = True

    try:
        redis = get_redis()
        await asyncio.wait_for(redis.ping(), timeout=settings.HEALTH_CHECK_TIMEOUT)
        deps["redis"] = "ok"
    except Exception as e:
        deps["redis"] = f"error: {str(e)[:100]}"
        healthy = False

    # Collaborator credentials are informational; they are checked per request.
    deps["email"] = "configured" if settings.EMAILJS_SERVICE_ID and settings.EMAILJS_PUBLIC_KEY else "unconfigured"
    deps["sms"] = "configured" if settings.TWILIO_ACCOUNT_SID and settings.TWILIO_AUTH_TOKEN else "unconfigured"

    return JSONResponse(
        content={
            "status": "healthy" if healthy else "degraded",
            "service": settings.SERVICE_NAME,
            "version": settings.SERVICE_VERSION,
            "dependencies": deps,
        },
        status_code=200 if healthy else 503,
    )
