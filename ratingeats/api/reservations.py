"""Reservation API endpoints"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from ratingeats.database import get_db
from ratingeats.models.reservation import (
    Reservation,
    ReservationState,
    RESERVATION_TRANSITIONS,
    can_transition,
)
from ratingeats.models.user import User
from ratingeats.schemas.reservation import (
    ReservationCreate,
    ReservationResponse,
    ReservationTransitionResponse,
)
from ratingeats.services.notifications import notify_reservation
from ratingeats.api.auth import get_current_active_user
from ratingeats.api.roles import (
    ResourceKind,
    RoleContext,
    get_active_restaurant,
    is_staff,
    require_restaurant_role,
    require_staff,
)

router = APIRouter()
logger = structlog.get_logger()

require_reservation_staff = require_restaurant_role(kind=ResourceKind.RESERVATION, param="reservation_id")


async def transition(
    db: AsyncSession,
    reservation: Reservation,
    target: ReservationState,
    verb: str,
) -> Reservation:
    """
    Move a reservation to target with a guarded update.

    The update only matches rows still in an allowed source state, so zero
    matched rows means the reservation is gone or in the wrong state.
    """
    sources = RESERVATION_TRANSITIONS[target]
    result = await db.execute(
        update(Reservation)
        .where(Reservation.id == reservation.id, Reservation.state.in_(sources))
        .values(state=target)
    )
    if result.rowcount == 0:
        await db.rollback()
        expected = " or ".join(s.value for s in sources)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Reservation not found or cannot be {verb} (must be {expected}).",
        )
    await db.commit()
    await db.refresh(reservation)

    logger.info(
        "Reservation state changed",
        reservation_id=str(reservation.id),
        restaurant_id=str(reservation.restaurant_id),
        state=target.value,
    )
    return reservation


async def respond(
    db: AsyncSession,
    reservation: Reservation,
    message: str,
) -> ReservationTransitionResponse:
    """Build the response, then emit the customer notification"""
    response = ReservationTransitionResponse(
        message=message,
        reservation=ReservationResponse.model_validate(reservation),
    )
    await notify_reservation(db, reservation, reservation.restaurant.name)
    return response


@router.post("", response_model=ReservationResponse, status_code=status.HTTP_201_CREATED)
async def create_reservation(
    reservation_data: ReservationCreate,
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Create a reservation, confirmed right away when made by the restaurant's staff"""
    restaurant = await get_active_restaurant(db, reservation_data.restaurant_id)

    state = ReservationState.PENDING
    if await is_staff(db, current_user.id, restaurant.id):
        state = ReservationState.CONFIRMED

    reservation = Reservation(
        user_id=current_user.id,
        restaurant=restaurant,
        state=state,
        **reservation_data.model_dump(),
    )
    db.add(reservation)
    await db.commit()
    await db.refresh(reservation)

    logger.info(
        "Reservation created",
        reservation_id=str(reservation.id),
        restaurant_id=str(restaurant.id),
        state=state.value,
    )
    return reservation


@router.get("/user", response_model=List[ReservationResponse])
async def list_user_reservations(
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Reservations made by the current user, latest date first"""
    result = await db.execute(
        select(Reservation)
        .where(Reservation.user_id == current_user.id)
        .order_by(Reservation.date_reservation.desc(), Reservation.time.desc())
    )
    return result.scalars().all()


@router.get("/restaurant/{restaurant_id}", response_model=List[ReservationResponse])
async def list_restaurant_reservations(
    restaurant_id: UUID,
    state: Optional[ReservationState] = None,
    ctx: RoleContext = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
):
    """Reservations of a restaurant in agenda order (staff only)"""
    query = select(Reservation).where(Reservation.restaurant_id == ctx.restaurant_id)
    if state:
        query = query.where(Reservation.state == state)

    result = await db.execute(
        query.order_by(Reservation.date_reservation, Reservation.time)
    )
    return result.scalars().all()


@router.patch("/{reservation_id}/confirm", response_model=ReservationTransitionResponse)
async def confirm_reservation(
    reservation_id: UUID,
    ctx: RoleContext = Depends(require_reservation_staff),
    db: AsyncSession = Depends(get_db),
):
    """Confirm a pending reservation"""
    reservation = await transition(db, ctx.resource, ReservationState.CONFIRMED, "confirmed")
    return await respond(db, reservation, "Reservation successfully confirmed.")


@router.patch("/{reservation_id}/reject", response_model=ReservationTransitionResponse)
async def reject_reservation(
    reservation_id: UUID,
    ctx: RoleContext = Depends(require_reservation_staff),
    db: AsyncSession = Depends(get_db),
):
    """Reject a pending reservation"""
    reservation = await transition(db, ctx.resource, ReservationState.REJECTED, "rejected")
    return await respond(db, reservation, "Reservation rejected successfully.")


@router.patch("/{reservation_id}/complete", response_model=ReservationTransitionResponse)
async def complete_reservation(
    reservation_id: UUID,
    ctx: RoleContext = Depends(require_reservation_staff),
    db: AsyncSession = Depends(get_db),
):
    """Mark a confirmed reservation as completed"""
    reservation = await transition(db, ctx.resource, ReservationState.COMPLETED, "completed")
    return await respond(db, reservation, "Reservation successfully completed.")


@router.patch("/{reservation_id}/cancel", response_model=ReservationTransitionResponse)
async def cancel_reservation(
    reservation_id: UUID,
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Cancel a reservation, allowed to its customer and to the restaurant's staff"""
    reservation = await db.get(Reservation, reservation_id)
    if not reservation:
        raise HTTPException(status_code=404, detail="Reservation not found")

    is_customer = reservation.user_id == current_user.id
    if not is_customer and not await is_staff(db, current_user.id, reservation.restaurant_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have permission to cancel this reservation.",
        )

    if not can_transition(reservation.state, ReservationState.CANCELLED):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Reservation is already {reservation.state.value}.",
        )

    reservation = await transition(db, reservation, ReservationState.CANCELLED, "cancelled")
    return await respond(db, reservation, "Reservation cancelled successfully.")
