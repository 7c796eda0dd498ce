"""Recipe ORM models: the recipe row and its ordered tags.

Tags live in their own table so tag search can use an index on the
lower-cased value. Ingredients and instructions are ordered string lists
stored as JSON.
"""

from datetime import datetime

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import TimestampMixin


class Recipe(TimestampMixin, Base):
    """Recipe model. Table: recipe. id is assigned by the service, not the database."""

    __tablename__ = "recipe"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    ingredients: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    instructions: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    published_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )

    tags_rel: Mapped[list["RecipeTag"]] = relationship(
        "RecipeTag",
        back_populates="recipe",
        order_by="RecipeTag.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def tags(self) -> list[str]:
        return [t.value for t in self.tags_rel]


class RecipeTag(Base):
    """One tag of a recipe, keeping its position and a lower-cased copy for search."""

    __tablename__ = "recipe_tag"

    recipe_id: Mapped[str] = mapped_column(
        String, ForeignKey("recipe.id", ondelete="CASCADE"), primary_key=True
    )
    position: Mapped[int] = mapped_column(Integer, primary_key=True)
    value: Mapped[str] = mapped_column(String, nullable=False)
    value_normalized: Mapped[str] = mapped_column(String, nullable=False, index=True)

    recipe: Mapped[Recipe] = relationship("Recipe", back_populates="tags_rel")
