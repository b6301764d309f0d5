from .recipe_service import RecipeService, RecipeFilter
from .catalog import CategoryService, IngredientService

__all__ = ["RecipeService", "RecipeFilter", "CategoryService", "IngredientService"]
