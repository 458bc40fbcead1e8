from fastapi import APIRouter, Depends

from salon.api.deps import ensure_owner_or_admin, get_current_principal, require_admin
from salon.api.v1.converters import customer_schema
from salon.api.v1.schemas import CustomerCreateSchema, CustomerSchema, CustomerUpdateSchema
from salon.application.use_cases.catalog import CatalogUseCase
from salon.domain.entities.principal import Principal
from salon.wiring.dependencies import get_catalog_use_case

router = APIRouter()


@router.get("", response_model=list[CustomerSchema], dependencies=[Depends(require_admin)])
def list_customers(uc: CatalogUseCase = Depends(get_catalog_use_case)):
    return [customer_schema(c) for c in uc.list_customers()]


@router.post("", response_model=CustomerSchema, status_code=201, dependencies=[Depends(require_admin)])
def create_customer(req: CustomerCreateSchema, uc: CatalogUseCase = Depends(get_catalog_use_case)):
    return customer_schema(uc.create_customer(req.first_name, req.last_name, req.email, req.phone))


@router.post("/lookup", response_model=CustomerSchema, dependencies=[Depends(require_admin)])
def get_or_create_customer(req: CustomerCreateSchema, uc: CatalogUseCase = Depends(get_catalog_use_case)):
    return customer_schema(uc.get_or_create_customer(req.email, req.first_name, req.last_name, req.phone))


@router.get("/{customer_id}", response_model=CustomerSchema)
def get_customer(
    customer_id: str,
    principal: Principal = Depends(get_current_principal),
    uc: CatalogUseCase = Depends(get_catalog_use_case),
):
    ensure_owner_or_admin(principal, customer_id)
    return customer_schema(uc.get_customer(customer_id))


@router.patch("/{customer_id}", response_model=CustomerSchema)
def update_customer(
    customer_id: str,
    req: CustomerUpdateSchema,
    principal: Principal = Depends(get_current_principal),
    uc: CatalogUseCase = Depends(get_catalog_use_case),
):
    ensure_owner_or_admin(principal, customer_id)
    return customer_schema(uc.update_customer(customer_id, **req.model_dump(exclude_none=True)))


@router.delete("/{customer_id}", status_code=204, dependencies=[Depends(require_admin)])
def delete_customer(customer_id: str, uc: CatalogUseCase = Depends(get_catalog_use_case)):
    uc.delete_customer(customer_id)
