"""List categories use case."""

from pydantic import BaseModel

from whisper.domain.value.types import Category


class CategoryInfo(BaseModel):
    """Category with its description."""

    name: Category
    description: str


class ListCategoriesResponse(BaseModel):
    """List categories response."""

    categories: list[CategoryInfo]


class ListCategoriesUseCase:
    """Use case for the fixed category list."""

    async def execute(self) -> ListCategoriesResponse:
        return ListCategoriesResponse(
            categories=[
                CategoryInfo(name=category, description=category.description)
                for category in Category
            ]
        )
