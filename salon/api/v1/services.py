from fastapi import APIRouter, Depends

from salon.api.deps import require_admin
from salon.api.v1.converters import service_schema
from salon.api.v1.schemas import ServiceCreateSchema, ServiceSchema, ServiceUpdateSchema
from salon.application.use_cases.catalog import CatalogUseCase
from salon.wiring.dependencies import get_catalog_use_case

router = APIRouter()


@router.get("", response_model=list[ServiceSchema])
def list_services(uc: CatalogUseCase = Depends(get_catalog_use_case)):
    return [service_schema(s) for s in uc.list_services()]


@router.get("/{service_id}", response_model=ServiceSchema)
def get_service(service_id: str, uc: CatalogUseCase = Depends(get_catalog_use_case)):
    return service_schema(uc.get_service(service_id))


@router.post("", response_model=ServiceSchema, status_code=201, dependencies=[Depends(require_admin)])
def create_service(req: ServiceCreateSchema, uc: CatalogUseCase = Depends(get_catalog_use_case)):
    return service_schema(uc.create_service(req.name, req.description, req.price, req.duration))


@router.patch("/{service_id}", response_model=ServiceSchema, dependencies=[Depends(require_admin)])
def update_service(service_id: str, req: ServiceUpdateSchema, uc: CatalogUseCase = Depends(get_catalog_use_case)):
    return service_schema(uc.update_service(service_id, **req.model_dump(exclude_none=True)))


@router.delete("/{service_id}", status_code=204, dependencies=[Depends(require_admin)])
def delete_service(service_id: str, uc: CatalogUseCase = Depends(get_catalog_use_case)):
    uc.delete_service(service_id)
