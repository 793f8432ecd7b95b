from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.actions.mechanics import create_mechanic_action, delete_mechanic_action, update_mechanic_action
from app.database import get_db
from app.queries import mechanics as mechanic_queries
from app.queries import services as service_queries
from app.schemas.mechanic import MechanicResponse
from app.schemas.service import MechanicWithServices
from app.utils.cache import cached_view
from app.utils.exceptions import AppException
from app.utils.forms import read_form
from app.utils.response import redirect_response, success_response

router = APIRouter(prefix="/mechanics", tags=["mechanics"])


@router.get("")
async def get_mechanics(request: Request, q: str | None = None, db: AsyncSession = Depends(get_db)):
    async def build():
        if q:
            mechanics = await mechanic_queries.search_mechanics(db, q)
        else:
            mechanics = await mechanic_queries.list_mechanics(db)
        return [MechanicResponse.model_validate(m).model_dump(mode="json") for m in mechanics]

    return success_response(data=await cached_view(request, build))


@router.post("", status_code=201)
async def create_mechanic(request: Request, db: AsyncSession = Depends(get_db)):
    result = await create_mechanic_action(db, await read_form(request))
    return redirect_response(result.redirect, mechanic=result.data.model_dump(mode="json"))


@router.get("/{mechanic_id}")
async def get_mechanic(mechanic_id: int, request: Request, db: AsyncSession = Depends(get_db)):
    async def build():
        mechanic = await mechanic_queries.get_mechanic(db, mechanic_id)
        if mechanic is None:
            raise AppException("Mechanic not found", status_code=404)
        services = await service_queries.list_services_by_mechanic(db, mechanic_id)
        return MechanicWithServices(
            **MechanicResponse.model_validate(mechanic).model_dump(),
            services=services,
        ).model_dump(mode="json")

    return success_response(data=await cached_view(request, build))


@router.put("/{mechanic_id}")
async def update_mechanic(mechanic_id: int, request: Request, db: AsyncSession = Depends(get_db)):
    result = await update_mechanic_action(db, mechanic_id, await read_form(request))
    return redirect_response(result.redirect, mechanic=result.data.model_dump(mode="json"))


@router.delete("/{mechanic_id}")
async def delete_mechanic(mechanic_id: int, db: AsyncSession = Depends(get_db)):
    result = await delete_mechanic_action(db, mechanic_id)
    return redirect_response(result.redirect, message="Mechanic deleted")
