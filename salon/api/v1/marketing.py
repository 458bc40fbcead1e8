from fastapi import APIRouter, Depends, HTTPException

from salon.api.deps import require_admin
from salon.api.v1.schemas import MarketingRequestSchema, MarketingResponseSchema
from salon.application.exceptions import LLMContractError, LLMUpstreamError
from salon.application.use_cases.generate_marketing_post import GenerateMarketingPostUseCase
from salon.wiring.dependencies import get_marketing_use_case

router = APIRouter(dependencies=[Depends(require_admin)])


@router.post("/posts", response_model=MarketingResponseSchema)
def generate_post(
    req: MarketingRequestSchema,
    uc: GenerateMarketingPostUseCase = Depends(get_marketing_use_case),
):
    try:
        post = uc.execute(service_name=req.service_name, offer=req.offer, tone=req.tone.value)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except (LLMUpstreamError, LLMContractError) as e:
        raise HTTPException(status_code=502, detail=str(e))
    return MarketingResponseSchema(post_content=post.post_content)
