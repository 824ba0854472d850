"""SQLAlchemy repository for photographer profiles."""

from snapdi.infrastructure.persistence.sqlalchemy.models import (
    PhotographerProfileModel,
)
from snapdi.infrastructure.persistence.sqlalchemy.repositories.base_repository import (
    SQLAlchemyRepository,
)


class PhotographerProfileRepositorySQLAlchemy(
    SQLAlchemyRepository[PhotographerProfileModel],
):
    model = PhotographerProfileModel

    async def find_by_user_id(self, user_id: int) -> PhotographerProfileModel | None:
        return await self.get_by_id(user_id)

    async def list_available(self) -> list[PhotographerProfileModel]:
        return await self.find(PhotographerProfileModel.is_available.is_(True))
