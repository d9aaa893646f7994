"""Parking facilities and their spots."""

import logging
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from podevim.config import settings
from podevim.db.models import Address, Parking, ParkingSpot
from podevim.db.models.enums import ParkingStatus, ParkingType, SpotStatus, UserType
from podevim.db.session import atomic
from podevim.exceptions import ForbiddenError, NotFoundError
from podevim.repositories import (
    AddressRepository,
    ParkingRepository,
    SpotRepository,
    UserRepository,
)
from podevim.schemas.parking import ParkingCreate, ParkingUpdate, SpotCreate
from podevim.services.geo import distance_meters

logger = logging.getLogger(__name__)

PARKING_OWNER_TYPES = (UserType.PARKING_PROVIDER, UserType.ADMIN)


class ParkingDirectory:
    """Registers parkings and spots and finds parkings near a point."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.parkings = ParkingRepository(session)
        self.spots = SpotRepository(session)
        self.users = UserRepository(session)
        self.addresses = AddressRepository(session)

    async def create_parking(self, owner_id: UUID, data: ParkingCreate) -> Parking:
        """Register a parking; it starts pending approval."""
        async with atomic(self.session):
            owner = await self.users.get_with_type(owner_id, PARKING_OWNER_TYPES)
            if owner is None:
                raise ForbiddenError("Only parking providers can register parkings")

            address = None
            if data.address is not None:
                address = Address(
                    **data.address.model_dump(),
                    latitude=data.coordinates.latitude,
                    longitude=data.coordinates.longitude,
                )
            parking = await self.parkings.add(
                Parking(
                    owner_id=owner_id,
                    name=data.name,
                    type=data.type,
                    latitude=data.coordinates.latitude,
                    longitude=data.coordinates.longitude,
                    description=data.description,
                    rules=data.rules,
                    status=ParkingStatus.PENDING_APPROVAL,
                ),
                address,
            )

        logger.info(f"Parking {parking.id} registered by {owner_id}")
        return parking

    async def update_parking(
        self,
        caller_id: UUID,
        parking_id: UUID,
        data: ParkingUpdate,
    ) -> Parking:
        """
        Apply the fields sent in ``data`` to a parking.

        Only the owner or an ADMIN may update. New coordinates move the
        parking and its address; an address replaces the stored one or is
        created if the parking has none.
        """
        async with atomic(self.session):
            parking = await self.parkings.get(parking_id)
            if parking is None:
                raise NotFoundError("Parking not found")

            caller = await self.users.get(caller_id)
            if caller is None or (
                caller.id != parking.owner_id and caller.user_type != UserType.ADMIN
            ):
                raise ForbiddenError("Only the owner or an admin can update this parking")

            values = data.changes("coordinates", "address")
            if data.coordinates is not None:
                values.update(
                    latitude=data.coordinates.latitude,
                    longitude=data.coordinates.longitude,
                )
            if values:
                parking = await self.parkings.update(parking_id, values)

            if data.address is not None:
                await self.addresses.upsert(
                    "parking_id",
                    parking_id,
                    {
                        **data.address.model_dump(),
                        "latitude": parking.latitude,
                        "longitude": parking.longitude,
                    },
                )
            elif data.coordinates is not None:
                await self.addresses.move("parking_id", parking_id, parking.latitude, parking.longitude)

        logger.info(f"Parking {parking_id} updated by {caller_id}: {sorted(values)}")
        return parking

    async def get_parking(self, parking_id: UUID) -> Parking:
        parking = await self.parkings.get(parking_id)
        if parking is None:
            raise NotFoundError("Parking not found")
        return parking

    async def create_spot(self, parking_id: UUID, data: SpotCreate) -> ParkingSpot:
        async with atomic(self.session):
            if await self.parkings.get(parking_id) is None:
                raise NotFoundError("Parking not found")

            spot = await self.spots.add(
                ParkingSpot(
                    parking_id=parking_id,
                    status=SpotStatus.AVAILABLE,
                    **data.model_dump(),
                )
            )

        logger.info(f"Spot {spot.id} added to parking {parking_id}")
        return spot

    async def find_nearby(
        self,
        latitude: float,
        longitude: float,
        radius: Optional[float] = None,
        parking_type: Optional[ParkingType] = None,
    ) -> List[Tuple[Parking, float]]:
        """Active parkings within ``radius`` meters, nearest first."""
        radius = radius if radius is not None else settings.NEARBY_DEFAULT_RADIUS_METERS
        parkings = await self.parkings.list_by_status(ParkingStatus.ACTIVE, parking_type)

        nearby = []
        for parking in parkings:
            distance = distance_meters(latitude, longitude, parking.latitude, parking.longitude)
            if distance <= radius:
                nearby.append((parking, distance))

        nearby.sort(key=lambda item: item[1])
        return nearby
