"""Ashid generation and inspection routes."""

from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel

from ashid import create, create4, is_valid, normalize, parse, randoms, timestamp
from core.errors import DomainError
from internal.logging import get_logger
from utils.timestamp import format_timestamp

router = APIRouter(prefix="/api/v1/ids", tags=["ids"])

# These will be set by app.py
_generator_config = None
_stats = {"issued": 0, "parsed": 0}


def init(generator_config):
    """Initialize with generator config."""
    global _generator_config
    _generator_config = generator_config


def get_stats():
    return dict(_stats)


class CreateRequest(BaseModel):
    prefix: Optional[str] = None
    count: int = 1
    time: Optional[int] = None
    random: Optional[int] = None
    four_random: bool = False


@router.post("")
async def create_ids(request: CreateRequest):
    """Issue one or more ashids."""
    max_batch = _generator_config.max_batch
    if not 1 <= request.count <= max_batch:
        raise DomainError(f"count must be between 1 and {max_batch} (got {request.count})",
                          field="count", value=request.count)
    if request.random is not None and request.count > 1:
        raise DomainError("an explicit random value can only be used with count 1", field="random")
    if request.four_random and request.time is not None:
        raise DomainError("four-random ids carry no timestamp", field="time")

    prefix = request.prefix if request.prefix is not None else _generator_config.default_prefix
    if request.four_random:
        ids = [create4(prefix, request.random) for _ in range(request.count)]
    else:
        ids = [create(prefix, request.time, request.random) for _ in range(request.count)]

    _stats["issued"] += len(ids)
    get_logger().debug("Issued ids", count=len(ids), prefix=prefix, four_random=request.four_random)
    return {"ids": ids}


@router.get("/{value}")
async def describe(value: str):
    """Parse an ashid and return its decoded fields."""
    canonical = normalize(value)
    parsed = parse(value)
    _stats["parsed"] += 1

    result = {"id": value, "normalized": canonical, **parsed.to_dict(), "randoms": list(randoms(value))}
    if not parsed.four_random:
        result["timestamp"] = timestamp(value)
        result["created_at"] = format_timestamp(result["timestamp"])
    return result


@router.get("/{value}/valid")
async def validate(value: str):
    return {"id": value, "valid": is_valid(value)}


@router.get("/{value}/normalized")
async def normalized(value: str):
    return {"id": value, "normalized": normalize(value)}
