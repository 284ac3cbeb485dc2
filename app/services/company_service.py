"""Service for shipper companies."""
import logging
import uuid
from typing import List, Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError, ConflictError
from app.models.company import Company
from app.schemas.company import CompanyCreate

logger = logging.getLogger(__name__)


class CompanyService:
    """Service for company management."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_company(self, company_id: uuid.UUID) -> Company:
        company = await self.db.get(Company, company_id)
        if not company:
            raise NotFoundError("Company not found")
        return company

    async def get_company_by_name(self, name: str) -> Optional[Company]:
        """Case-insensitive lookup by name."""
        stmt = select(Company).where(func.lower(Company.name) == name.strip().lower())
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_companies(self) -> List[Company]:
        result = await self.db.execute(select(Company).order_by(Company.name))
        return list(result.scalars().all())

    async def create_company(self, data: CompanyCreate) -> Company:
        """Create new company; names are unique ignoring case."""
        name = data.name.strip()
        if await self.get_company_by_name(name):
            raise ConflictError(f"Company {name} already exists")

        company = Company(**data.model_dump(exclude={"name", "status"}))
        company.name = name
        company.status = data.status.value
        self.db.add(company)
        await self.db.commit()
        await self.db.refresh(company)
        logger.info(f"Company {name} created")
        return company
