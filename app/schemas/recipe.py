"""Recipe API schemas. JSON field names follow the public contract (publishedAt, recipeID)."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.application.dtos.recipe import RecipeData, RecipeResult


class RecipeRequest(BaseModel):
    """Request body for POST /recipes and PUT /recipes/{id}.

    id and publishedAt are server-owned; if a client sends them they are ignored.
    """

    name: str = Field(..., min_length=1, description="Recipe name")
    tags: list[str] = Field(default_factory=list)
    ingredients: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)

    @field_validator("tags", "ingredients", "instructions", mode="before")
    @classmethod
    def none_as_empty(cls, v: object) -> object:
        return [] if v is None else v

    def to_data(self) -> RecipeData:
        return RecipeData(
            name=self.name,
            tags=list(self.tags),
            ingredients=list(self.ingredients),
            instructions=list(self.instructions),
        )


class RecipeResponse(BaseModel):
    """A stored recipe."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    tags: list[str] = Field(default_factory=list)
    ingredients: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    published_at: datetime = Field(..., alias="publishedAt")

    @classmethod
    def from_result(cls, r: RecipeResult) -> "RecipeResponse":
        return cls(
            id=r.id,
            name=r.name,
            tags=r.tags,
            ingredients=r.ingredients,
            instructions=r.instructions,
            published_at=r.published_at,
        )


class RecipeCreatedResponse(BaseModel):
    """Response for POST /recipes."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    recipe_id: str = Field(..., alias="recipeID")
