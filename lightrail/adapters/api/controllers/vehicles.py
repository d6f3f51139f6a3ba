from __future__ import annotations

from fastapi import APIRouter, Depends

from lightrail.adapters.api.dependencies import get_vehicle_service
from lightrail.adapters.api.schemas.feed import VehicleSchema
from lightrail.app.services.vehicle_service import VehicleService

router = APIRouter(prefix="/api", tags=["vehicles"])


@router.get("/vehicles", response_model=list[VehicleSchema])
async def list_vehicles(
    service: VehicleService = Depends(get_vehicle_service),
) -> list[VehicleSchema]:
    return [
        VehicleSchema(
            id=v.vehicle_id,
            trip_id=v.trip_id,
            direction_id=v.direction_id,
            lat=v.lat,
            lon=v.lon,
            bearing=v.bearing,
            stop_id=v.stop_id,
        )
        for v in await service.list_vehicles()
    ]
