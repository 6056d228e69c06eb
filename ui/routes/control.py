"""Generator administration routes."""

from fastapi import APIRouter, Depends

from internal.logging import get_logger
from ui.auth import verify_basic_auth

router = APIRouter(prefix="/api/v1/control", tags=["control"])

# These will be set by app.py
_generator = None


def init(generator):
    """Initialize with the generator reference."""
    global _generator
    _generator = generator


@router.post("/reseed")
def reseed(username=Depends(verify_basic_auth)):
    """Rekey the generator from the secure seed source (requires basic auth)."""
    _generator.reseed()
    get_logger().info("reseed requested", user=username)
    return {"ok": True}
