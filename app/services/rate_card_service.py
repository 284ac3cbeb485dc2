"""Service for per-company rate cards (one card per company, saved by upsert)."""
import logging
from datetime import date
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import selectinload
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.models.company import Company
from app.models.rate_card import RateCard
from app.schemas.rate_card import RateCardUpsert, RateCardResponse
from app.services.company_service import CompanyService

logger = logging.getLogger(__name__)


def to_response(card: RateCard) -> RateCardResponse:
    return RateCardResponse.model_validate(card).model_copy(
        update={"company_name": card.company.name if card.company else None}
    )


class RateCardService:
    """Service for rate card listing and upsert."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_rate_cards(self) -> List[RateCardResponse]:
        stmt = (
            select(RateCard)
            .join(Company, RateCard.company_id == Company.id)
            .options(selectinload(RateCard.company))
            .order_by(Company.name)
        )
        cards = (await self.db.execute(stmt)).scalars().all()
        return [to_response(card) for card in cards]

    async def _resolve_company(self, data: RateCardUpsert) -> Company:
        companies = CompanyService(self.db)
        if data.company_id is not None:
            return await companies.get_company(data.company_id)
        company = await companies.get_company_by_name(data.company_name)
        if not company:
            raise NotFoundError(f"Company {data.company_name} not found")
        return company

    async def upsert_rate_card(self, data: RateCardUpsert) -> RateCardResponse:
        """Create the company's rate card or replace the existing one."""
        company = await self._resolve_company(data)

        stmt = select(RateCard).where(RateCard.company_id == company.id)
        card = (await self.db.execute(stmt)).scalar_one_or_none()
        created = card is None
        if created:
            card = RateCard(company_id=company.id)
            self.db.add(card)

        card.base_rate = data.base_rate
        card.per_article_rate = data.per_article_rate
        card.parcel_type_surcharges = dict(data.parcel_type_surcharges)
        card.zone_rate = data.zone_rate
        card.effective_from = data.effective_from or date.today()

        await self.db.commit()
        logger.info(f"Rate card {'created' if created else 'updated'} for {company.name}")

        stmt = (
            select(RateCard)
            .options(selectinload(RateCard.company))
            .where(RateCard.id == card.id)
            .execution_options(populate_existing=True)
        )
        return to_response((await self.db.execute(stmt)).scalar_one())
