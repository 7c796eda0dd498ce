"""Recipes API: list, search, get (public); create, update, delete (authenticated).

/recipes/search is declared before /recipes/{recipe_id} so "search" is never
taken for an id. Write bodies are read by a dependency that authenticates
first, so an anonymous caller gets the auth error even for a malformed body.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from app.api.v1.dependencies import CurrentPrincipal, get_recipe_service
from app.application.services.recipe_service import RecipeService
from app.core.exception_handlers import INVALID_JSON_MESSAGE
from app.core.limiter import limit_writes
from app.domain.exceptions import ValidationException
from app.schemas.common import ErrorResponse, MessageResponse
from app.schemas.recipe import RecipeCreatedResponse, RecipeRequest, RecipeResponse

router = APIRouter()

_NOT_FOUND = {404: {"model": ErrorResponse}}
_AUTH_ERRORS = {
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    400: {"model": ErrorResponse},
}
# Body is parsed in recipe_body, so document it by hand
_RECIPE_BODY_DOC = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": RecipeRequest.model_json_schema()}},
    }
}


async def recipe_body(request: Request, principal: CurrentPrincipal) -> RecipeRequest:
    """Authenticated caller's recipe body; 400 when it is not valid JSON or invalid."""
    try:
        payload = await request.json()
    except ValueError:
        raise ValidationException(INVALID_JSON_MESSAGE) from None
    try:
        return RecipeRequest.model_validate(payload)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False), body=payload) from e


RecipeBody = Annotated[RecipeRequest, Depends(recipe_body)]


@router.get("", response_model=list[RecipeResponse])
async def list_recipes(
    recipe_service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Return every recipe (served from the cached snapshot when present)."""
    recipes = await recipe_service.list_recipes()
    return [RecipeResponse.from_result(r) for r in recipes]


@router.get("/search", response_model=list[RecipeResponse])
async def search_recipes(
    recipe_service: Annotated[RecipeService, Depends(get_recipe_service)],
    tag: Annotated[str, Query(description="Tag to match, case-insensitive")] = "",
):
    """Recipes carrying the tag. Empty list when nothing matches."""
    recipes = await recipe_service.search_by_tag(tag)
    return [RecipeResponse.from_result(r) for r in recipes]


@router.get("/{recipe_id}", response_model=RecipeResponse, responses=_NOT_FOUND)
async def get_recipe(
    recipe_id: str,
    recipe_service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Return one recipe or 404."""
    recipe = await recipe_service.get_recipe(recipe_id)
    return RecipeResponse.from_result(recipe)


@router.post(
    "",
    response_model=RecipeCreatedResponse,
    responses=_AUTH_ERRORS,
    openapi_extra=_RECIPE_BODY_DOC,
)
@limit_writes
async def create_recipe(
    request: Request,
    body: RecipeBody,
    principal: CurrentPrincipal,
    recipe_service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Add a recipe; id and publishedAt are assigned by the server."""
    recipe_id = await recipe_service.create_recipe(body.to_data())
    return RecipeCreatedResponse(
        message=f"New recipe added with id {recipe_id}", recipe_id=recipe_id
    )


@router.put(
    "/{recipe_id}",
    response_model=MessageResponse,
    responses={**_AUTH_ERRORS, **_NOT_FOUND},
    openapi_extra=_RECIPE_BODY_DOC,
)
@limit_writes
async def update_recipe(
    request: Request,
    recipe_id: str,
    body: RecipeBody,
    principal: CurrentPrincipal,
    recipe_service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Replace name, tags, ingredients and instructions of an existing recipe."""
    await recipe_service.update_recipe(recipe_id, body.to_data())
    return MessageResponse(message="Recipe has been updated")


@router.delete(
    "/{recipe_id}",
    response_model=MessageResponse,
    responses={**_AUTH_ERRORS, **_NOT_FOUND},
)
@limit_writes
async def delete_recipe(
    request: Request,
    recipe_id: str,
    principal: CurrentPrincipal,
    recipe_service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Delete a recipe or 404."""
    await recipe_service.delete_recipe(recipe_id)
    return MessageResponse(message="Recipe has been deleted")
