"""
Birdhouse Backend - Bird Route Handlers
========================================

What:  HTTP surface of the Bird resource.
How:   Extracts path/body parameters, delegates to BirdService, returns JSON.

Route Table:
    GET        /birds              list
    POST       /birds              create (201)
    GET        /birds/{id}         show
    PATCH|PUT  /birds/{id}         update (partial)
    PATCH      /birds/{id}/like    increment likes

There is no DELETE route.

Not-found lookups raise NotFoundError inside the service; the global handler
in main.py turns it into 404 {"error": "Bird not found"}.
"""

from typing import List

from fastapi import APIRouter, Body, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.bird import BirdCreate, BirdResponse, BirdUpdate, ErrorResponse
from app.services.bird_service import bird_service

router = APIRouter(prefix="/birds", tags=["Birds"])

NOT_FOUND_RESPONSE = {404: {"description": "Bird not found", "model": ErrorResponse}}


@router.get(
    "",
    response_model=List[BirdResponse],
    summary="List all birds",
)
async def list_birds(
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> List[BirdResponse]:
    """Returns every bird as a JSON array (empty when there are none)."""
    birds = await bird_service.list_birds(db=db)
    response.headers["X-Total-Count"] = str(len(birds))
    return birds


@router.post(
    "",
    status_code=201,
    response_model=BirdResponse,
    summary="Create a bird",
    description=(
        "Accepts name, species and likes. Any other key is ignored, including id. "
        "likes defaults to 0. A request without a body creates an empty bird."
    ),
)
async def create_bird(
    payload: BirdCreate = Body(default_factory=BirdCreate),
    db: AsyncSession = Depends(get_db_session),
) -> BirdResponse:
    return await bird_service.create_bird(db=db, payload=payload)


@router.get(
    "/{bird_id}",
    response_model=BirdResponse,
    responses=NOT_FOUND_RESPONSE,
    summary="Get a single bird by id",
)
async def get_bird(
    bird_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> BirdResponse:
    return await bird_service.get_bird(db=db, bird_id=bird_id)


@router.patch(
    "/{bird_id}",
    response_model=BirdResponse,
    responses=NOT_FOUND_RESPONSE,
    summary="Update a bird",
)
@router.put(
    "/{bird_id}",
    response_model=BirdResponse,
    responses=NOT_FOUND_RESPONSE,
    summary="Update a bird",
)
async def update_bird(
    bird_id: int,
    payload: BirdUpdate = Body(default_factory=BirdUpdate),
    db: AsyncSession = Depends(get_db_session),
) -> BirdResponse:
    """
    Partial update for both verbs: fields missing from the body keep their
    stored values. A request without a body changes nothing.
    """
    return await bird_service.update_bird(db=db, bird_id=bird_id, payload=payload)


@router.patch(
    "/{bird_id}/like",
    response_model=BirdResponse,
    responses=NOT_FOUND_RESPONSE,
    summary="Add one like to a bird",
    description="The request body, if any, is ignored.",
)
async def increment_likes(
    bird_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> BirdResponse:
    return await bird_service.increment_likes(db=db, bird_id=bird_id)
