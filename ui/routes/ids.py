"""ID generation and inspection routes."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from core.errors import DecodeError
from idgen.generator import MAX_VALUE, MIN_VALUE, created_at
from utils.timestamp import format_timestamp
from ui.auth import verify_basic_auth

router = APIRouter(prefix="/api/v1", tags=["ids"])

# These will be set by app.py
_generator = None
_max_batch = 1000


def init(generator, max_batch):
    """Initialize with the generator reference and batch limit."""
    global _generator, _max_batch
    _generator = generator
    _max_batch = max_batch


@router.get("/ids")
def generate(count: int = Query(1)):
    """Generate one or more IDs."""
    if not 1 <= count <= _max_batch:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                            detail=f"count must be between 1 and {_max_batch}")
    return {"ids": [_generator.generate() for _ in range(count)]}


@router.get("/ids/bounds")
async def bounds():
    """Inclusive range bounds for sorted stores."""
    return {"min": MIN_VALUE, "max": MAX_VALUE}


@router.get("/ids/{id}/created_at")
async def id_created_at(id: str):
    """Decode the creation time embedded in an ID."""
    try:
        when = created_at(id)
    except DecodeError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return {"id": id, "created_at": when.isoformat().replace("+00:00", "Z")}


@router.get("/stats")
async def stats(username=Depends(verify_basic_auth)):
    """Return generator statistics (requires basic auth)."""
    return {
        "timestamp": format_timestamp(),
        "generator": _generator.get_stats(),
    }
