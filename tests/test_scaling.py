import pytest

from recipebook.exceptions import NotFoundError, ValidationError
from recipebook.services.scaling import round_quantity


@pytest.fixture
def cups_recipe(make_recipe):
    return make_recipe(ingredients=[{"name": "Rice", "quantity": 2, "unit": "cup"}], servings=4)


def test_scale_up_and_down(service, cups_recipe):
    assert service.scale(cups_recipe.id, 8).ingredients[0].quantity == 4.0
    assert service.scale(cups_recipe.id, 2).ingredients[0].quantity == 1.0


def test_scaled_copy_keeps_identity(service, cups_recipe):
    scaled = service.scale(cups_recipe.id, 6)

    assert scaled.id == cups_recipe.id
    assert scaled.status == cups_recipe.status
    assert scaled.created_at == cups_recipe.created_at
    assert scaled.servings == 6
    assert scaled.ingredients[0].unit == "cup"
    assert scaled.ingredients[0].quantity == 3.0


def test_scale_never_touches_stored_recipe(service, cups_recipe, db_session):
    service.scale(cups_recipe.id, 10)
    db_session.commit()
    db_session.expire_all()

    stored = service.get(cups_recipe.id)
    assert stored.servings == 4
    assert stored.ingredients[0].quantity == 2


def test_scale_rounds_to_two_places(service, make_recipe):
    recipe = make_recipe(ingredients=[{"name": "Oil", "quantity": 1, "unit": "tbsp"}], servings=3)

    assert service.scale(recipe.id, 1).ingredients[0].quantity == 0.33
    assert service.scale(recipe.id, 2).ingredients[0].quantity == 0.67


@pytest.mark.parametrize("servings", [0, -2])
def test_scale_rejects_non_positive_servings(service, cups_recipe, servings):
    with pytest.raises(ValidationError, match="servings must be greater than 0"):
        service.scale(cups_recipe.id, servings)


def test_scale_missing_recipe(service):
    with pytest.raises(NotFoundError):
        service.scale("nope", 2)


def test_round_quantity():
    assert round_quantity(1.005 * 100) == 100.5
    assert round_quantity(2 / 3) == 0.67
    assert str(round_quantity(-0.001)) == "0.0"


def test_scale_with_fractional_servings(service, make_recipe):
    recipe = make_recipe(ingredients=[{"name": "Flour", "quantity": 3, "unit": "cup"}], servings=1.5)

    scaled = service.scale(recipe.id, 2.5)

    assert scaled.servings == 2.5
    assert scaled.ingredients[0].quantity == 5.0


@pytest.mark.parametrize("servings", [float("inf"), float("nan")])
def test_scale_rejects_non_finite_servings(service, cups_recipe, servings):
    with pytest.raises(ValidationError, match="servings must be greater than 0"):
        service.scale(cups_recipe.id, servings)
