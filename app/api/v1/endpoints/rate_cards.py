"""Rate Card API endpoints (one rate card per company)."""
from fastapi import APIRouter

from app.api.deps import DB
from app.core.exceptions import operation_failed
from app.schemas.base import APIResponse, APIListResponse, success_response
from app.schemas.rate_card import RateCardUpsert, RateCardResponse
from app.services.rate_card_service import RateCardService


router = APIRouter()


@router.get("", response_model=APIListResponse[RateCardResponse])
async def list_rate_cards(db: DB):
    """Rate cards with company name, in company name order."""
    with operation_failed("Failed to fetch rate cards"):
        cards = await RateCardService(db).get_rate_cards()
    return success_response(cards, count=len(cards))


@router.put("", response_model=APIResponse[RateCardResponse])
async def save_rate_card(data: RateCardUpsert, db: DB):
    """
    Create or replace a company's rate card.

    The company is identified by company_id or company_name.
    """
    with operation_failed("Failed to save rate card"):
        card = await RateCardService(db).upsert_rate_card(data)
    return success_response(card)
