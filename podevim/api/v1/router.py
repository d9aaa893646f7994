"""API v1 router."""

from fastapi import APIRouter

from podevim.api.v1.endpoints import parkings, pickups, reservations, schools, students
from podevim.schemas.common import ErrorResponse

api_router = APIRouter(
    responses={
        status_code: {"model": ErrorResponse}
        for status_code in (400, 401, 403, 404, 409)
    },
)

api_router.include_router(pickups.router, prefix="/pickups", tags=["pickups"])
api_router.include_router(schools.router, prefix="/schools", tags=["schools"])
api_router.include_router(students.router, prefix="/students", tags=["students"])
api_router.include_router(parkings.router, prefix="/parkings", tags=["parkings"])
api_router.include_router(reservations.router, prefix="/reservations", tags=["reservations"])
