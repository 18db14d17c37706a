import logging
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from partner_app.core.app_state import PartnerAppState
from partner_app.core.dependencies import get_app_state

logger = logging.getLogger(__name__)
router = APIRouter()

class TokenRequest(BaseModel):
    access_token: str = Field(..., min_length=1)

@router.put("/token", status_code=status.HTTP_204_NO_CONTENT)
async def store_token(request: TokenRequest, app_state: PartnerAppState = Depends(get_app_state)):
    if not await app_state.tokens.set_access_token(request.access_token):
        raise HTTPException(status_code=503, detail="Token storage not available")
    logger.info("Access token stored.")

@router.delete("/token", status_code=status.HTTP_204_NO_CONTENT)
async def sign_out(app_state: PartnerAppState = Depends(get_app_state)):
    await app_state.sign_out()
    logger.info("Signed out, partner stores reset.")
