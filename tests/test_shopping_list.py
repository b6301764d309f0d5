import pytest

from recipebook.exceptions import NotFoundError, ValidationError
from recipebook.models import Ingredient, Recipe


def _line(name, quantity, unit):
    return {"name": name, "quantity": quantity, "unit": unit}


def test_same_ingredient_and_unit_is_summed(make_recipe, service):
    a = make_recipe(title="A", ingredients=[_line("Flour", 1, "g")])
    b = make_recipe(title="B", ingredients=[_line("Flour", 2, "g")])

    items = service.generate_shopping_list([a.id, b.id])

    assert len(items) == 1
    assert items[0].name == "Flour"
    assert items[0].unit == "g"
    assert items[0].quantity == 3.0


def test_different_units_stay_separate(make_recipe, service):
    a = make_recipe(title="A", ingredients=[_line("Flour", 1, "g")])
    b = make_recipe(title="B", ingredients=[_line("Flour", 2, "g")])
    c = make_recipe(title="C", ingredients=[_line("flour", 1, "kg")])

    items = service.generate_shopping_list([a.id, b.id, c.id])

    by_unit = {item.unit: item for item in items}
    assert set(by_unit) == {"g", "kg"}
    assert by_unit["g"].quantity == 3.0
    assert by_unit["kg"].quantity == 1.0
    assert by_unit["g"].ingredient_id == by_unit["kg"].ingredient_id


def test_sorted_by_name_code_point_order(make_recipe, service):
    recipe = make_recipe(
        ingredients=[_line("carrot", 1, "pc"), _line("apple", 2, "pc"), _line("Banana", 3, "pc")]
    )

    items = service.generate_shopping_list([recipe.id])

    assert [i.name for i in items] == ["Banana", "apple", "carrot"]


def test_sum_is_rounded(make_recipe, service):
    a = make_recipe(title="A", ingredients=[_line("Salt", 0.1, "tsp")])
    b = make_recipe(title="B", ingredients=[_line("Salt", 0.2, "tsp")])

    items = service.generate_shopping_list([a.id, b.id])

    assert items[0].quantity == 0.3


def test_same_recipe_twice_counts_twice(make_recipe, service):
    recipe = make_recipe(ingredients=[_line("Egg", 2, "pc")])

    items = service.generate_shopping_list([recipe.id, recipe.id])

    assert items[0].quantity == 4.0


@pytest.mark.parametrize("recipe_ids", [[], None])
def test_empty_input_rejected(service, recipe_ids):
    with pytest.raises(ValidationError, match="recipe_ids must be a non-empty list"):
        service.generate_shopping_list(recipe_ids)


def test_all_missing_ids_reported_together(make_recipe, service, db_session):
    recipe = make_recipe()
    recipes_before = db_session.query(Recipe).count()
    ingredients_before = db_session.query(Ingredient).count()

    with pytest.raises(NotFoundError) as exc_info:
        service.generate_shopping_list(["x1", recipe.id, "x2"])

    assert str(exc_info.value) == "recipe not found: x1, x2"
    assert exc_info.value.details["missing_ids"] == ["x1", "x2"]
    assert db_session.query(Recipe).count() == recipes_before
    assert db_session.query(Ingredient).count() == ingredients_before
