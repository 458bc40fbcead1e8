from fastapi import APIRouter, Depends

from salon.api.deps import require_admin
from salon.api.v1.converters import gallery_schema
from salon.api.v1.schemas import GalleryImageCreateSchema, GalleryImageSchema, GalleryImageUpdateSchema
from salon.application.use_cases.catalog import CatalogUseCase
from salon.wiring.dependencies import get_catalog_use_case

router = APIRouter()


@router.get("", response_model=list[GalleryImageSchema])
def list_gallery(uc: CatalogUseCase = Depends(get_catalog_use_case)):
    return [gallery_schema(i) for i in uc.list_gallery()]


@router.post("", response_model=GalleryImageSchema, status_code=201, dependencies=[Depends(require_admin)])
def create_image(req: GalleryImageCreateSchema, uc: CatalogUseCase = Depends(get_catalog_use_case)):
    return gallery_schema(uc.create_gallery_image(req.src, req.alt, req.hint))


@router.patch("/{image_id}", response_model=GalleryImageSchema, dependencies=[Depends(require_admin)])
def update_image(image_id: str, req: GalleryImageUpdateSchema, uc: CatalogUseCase = Depends(get_catalog_use_case)):
    return gallery_schema(uc.update_gallery_image(image_id, **req.model_dump(exclude_none=True)))


@router.delete("/{image_id}", status_code=204, dependencies=[Depends(require_admin)])
def delete_image(image_id: str, uc: CatalogUseCase = Depends(get_catalog_use_case)):
    uc.delete_gallery_image(image_id)
