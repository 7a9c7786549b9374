"""
Birdhouse Backend - Bird Service
=================================

What:  Business logic for the Bird resource: list, create, show, update, like.
How:   Each operation performs at most one lookup and at most one write against
       the session it is handed, then returns a BirdResponse.
Who:   Called by the birds route handlers.

Design:
    BirdService is stateless. It receives the request's AsyncSession on every
    call, so each request works in its own transaction and tests can pass in a
    mocked session.

    Lookups convert a missing row into NotFoundError. SQLAlchemy failures are
    wrapped in DatabaseError so the driver's message never reaches the client.
"""

import logging
from typing import List

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError
from app.models.bird import MAX_BIRD_ID, Bird
from app.schemas.bird import BirdCreate, BirdResponse, BirdUpdate

logger = logging.getLogger(__name__)


class BirdService:
    """
    Business logic layer for bird operations.

    Responsibilities:
        - list_birds(): every record, ordered by id
        - create_bird(): insert a whitelisted payload
        - get_bird(): single lookup with not-found handling
        - update_bird(): partial overwrite of the supplied fields
        - increment_likes(): atomic likes + 1
    """

    async def list_birds(self, db: AsyncSession) -> List[BirdResponse]:
        """
        Return every bird.

        No pagination. Ordered by id so repeated calls list records in
        creation order.
        """
        try:
            result = await db.execute(select(Bird).order_by(Bird.id))
            birds = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing birds: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve birds. Please try again.",
                context={"error_type": type(e).__name__},
            )

        return [BirdResponse.model_validate(bird) for bird in birds]

    async def create_bird(self, db: AsyncSession, payload: BirdCreate) -> BirdResponse:
        """
        Insert a new bird from a whitelisted payload.

        The store assigns the id during flush; likes is 0 unless the payload
        supplied a value. The transaction itself is committed by
        get_db_session once the response is built.

        Raises:
            DatabaseError: Insert failed (constraint violation, lost connection)
        """
        bird = Bird(**payload.model_dump())
        try:
            db.add(bird)
            await db.flush()  # Assigns the id without committing
        except SQLAlchemyError as e:
            logger.error("Database error creating bird: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the bird. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Bird created: %s (species=%s)", bird.id, bird.species)
        return BirdResponse.model_validate(bird)

    async def get_bird(self, db: AsyncSession, bird_id: int) -> BirdResponse:
        """
        Retrieve a single bird by id.

        Raises:
            NotFoundError: No bird with this id (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        bird = await self._find(db, bird_id)
        return BirdResponse.model_validate(bird)

    async def update_bird(
        self,
        db: AsyncSession,
        bird_id: int,
        payload: BirdUpdate,
    ) -> BirdResponse:
        """
        Overwrite the fields present in the payload; leave the rest untouched.

        An empty payload is a successful no-op that returns the current record.

        Raises:
            NotFoundError: No bird with this id; nothing is written
            DatabaseError: Query or flush failed
        """
        bird = await self._find(db, bird_id)
        changes = payload.model_dump(exclude_unset=True)

        for field, value in changes.items():
            setattr(bird, field, value)

        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating bird %s: %s", bird_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the bird. Please try again.",
                context={"bird_id": bird_id, "error_type": type(e).__name__},
            )

        if changes:
            logger.info("Bird %s updated: %s", bird_id, ", ".join(sorted(changes)))
        return BirdResponse.model_validate(bird)

    async def increment_likes(self, db: AsyncSession, bird_id: int) -> BirdResponse:
        """
        Add exactly one like to an existing bird.

        Issued as a single statement:
            UPDATE birds SET likes = likes + 1 WHERE id = :id RETURNING ...
        The database applies concurrent increments one after another, so none
        is lost. Zero returned rows means the bird does not exist and nothing
        was written.

        Raises:
            NotFoundError: No bird with this id
            DatabaseError: Statement failed
        """
        if not self._is_storable_id(bird_id):
            raise NotFoundError(resource="Bird", resource_id=bird_id)

        stmt = (
            update(Bird)
            .where(Bird.id == bird_id)
            .values(likes=Bird.likes + 1)
            .returning(Bird)
        )
        try:
            result = await db.execute(stmt)
            bird = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error liking bird %s: %s", bird_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the bird. Please try again.",
                context={"bird_id": bird_id, "error_type": type(e).__name__},
            )

        if bird is None:
            logger.info("Like for missing bird %s", bird_id)
            raise NotFoundError(resource="Bird", resource_id=bird_id)

        logger.info("Bird %s liked (likes=%d)", bird_id, bird.likes)
        return BirdResponse.model_validate(bird)

    async def _find(self, db: AsyncSession, bird_id: int) -> Bird:
        """Primary-key lookup that raises NotFoundError instead of returning None."""
        if not self._is_storable_id(bird_id):
            raise NotFoundError(resource="Bird", resource_id=bird_id)

        try:
            result = await db.execute(select(Bird).where(Bird.id == bird_id))
            bird = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching bird %s: %s", bird_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the bird. Please try again.",
                context={"bird_id": bird_id},
            )

        if bird is None:
            logger.info("Bird %s not found", bird_id)
            raise NotFoundError(resource="Bird", resource_id=bird_id)
        return bird

    @staticmethod
    def _is_storable_id(bird_id: int) -> bool:
        # Ids outside the column range can never match; skip the round trip
        return 0 < bird_id <= MAX_BIRD_ID


# ── Singleton Instance ────────────────────────────────────────────────────
bird_service = BirdService()
