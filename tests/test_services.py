"""
Service layer tests with real database operations.

Covers:
- FoodService: filtered listing, create/update with serving unit replacement,
  reference checks, delete with serving units
- MealService: ownership scoping, day windows, line item replacement,
  empty-meal rejection, nutrition totals
- CategoryService / ServingUnitService: duplicates, delete semantics
- AuthService: sign-up, sign-in, token round trip
"""

from datetime import date, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import (
    ConflictError,
    NotFoundError,
    ServiceValidationError,
    UnauthorizedError,
)
from domain.enums import Role
from domain.models import Food, FoodServingUnit, MealFood
from domain.schemas.auth_schemas import SignInRequest, SignUpRequest
from domain.schemas.catalog_schemas import CategoryCreate, FoodSave, ServingUnitCreate
from domain.schemas.meal_schemas import MealSave
from repositories import CategoryRepository
from services.auth_service import AuthService, create_access_token, hash_password
from services.catalog_service import CategoryService, ServingUnitService
from services.food_service import FoodService
from services.meal_service import MealService, day_bounds, to_naive_utc

from test_fixtures import (
    DEFAULT_PASSWORD,
    create_account,
    db_session,
    seed_catalog,
    unique_email,
)


# =============================================================================
# FOOD SERVICE
# =============================================================================


def test_get_foods_returns_page_metadata(db_session: Session):
    seed_catalog(db_session)

    page = FoodService.get_foods(db_session, {"pageSize": 4, "page": 2})

    assert page.total == 6
    assert page.page == 2
    assert page.page_size == 4
    assert page.total_pages == 2
    assert [f.name for f in page.data] == ["Milk", "Pineapple"]


def test_get_foods_with_no_matches(db_session: Session):
    seed_catalog(db_session)
    page = FoodService.get_foods(db_session, {"searchTerm": "Quinoa"})
    assert page.total == 0
    assert page.total_pages == 0
    assert page.data == []


def test_get_foods_rejects_invalid_filters(db_session: Session):
    with pytest.raises(ServiceValidationError) as exc_info:
        FoodService.get_foods(db_session, {"pageSize": 1000, "sortBy": "color"})
    assert set(exc_info.value.fields) == {"pageSize", "sortBy"}


def test_get_food_not_found(db_session: Session):
    with pytest.raises(NotFoundError):
        FoodService.get_food(db_session, 4242)


def test_create_food_with_serving_units(db_session: Session):
    seed = seed_catalog(db_session)
    data = FoodSave(
        name="  Cheddar ",
        calories=403,
        protein=25,
        carbohydrates=1.3,
        fat=33,
        category_id=seed.dairy.id,
        food_serving_units=[
            {"serving_unit_id": seed.gram.id, "grams": 1},
            {"serving_unit_id": seed.piece.id, "grams": 28},
        ],
    )

    food = FoodService.save_food(db_session, data)

    assert food.id is not None
    assert food.name == "Cheddar"
    assert food.fiber is None
    assert food.category_id == seed.dairy.id
    assert sorted(u.grams for u in food.food_serving_units) == [1, 28]


def test_update_food_replaces_serving_units(db_session: Session):
    seed = seed_catalog(db_session)
    apple_id = seed.foods["Apple"].id

    updated = FoodService.save_food(
        db_session,
        FoodSave(
            name="Apple",
            calories=52,
            protein=0.3,
            food_serving_units=[{"serving_unit_id": seed.cup.id, "grams": 125}],
        ),
        food_id=apple_id,
    )

    assert updated.id == apple_id
    assert updated.category_id is None
    assert [(u.serving_unit_id, u.grams) for u in updated.food_serving_units] == [
        (seed.cup.id, 125)
    ]
    rows = db_session.query(FoodServingUnit).filter(FoodServingUnit.food_id == apple_id).all()
    assert len(rows) == 1


def test_update_food_with_empty_units_clears_them(db_session: Session):
    seed = seed_catalog(db_session)
    milk_id = seed.foods["Milk"].id

    updated = FoodService.save_food(db_session, FoodSave(name="Milk"), food_id=milk_id)

    assert updated.food_serving_units == []


def test_update_missing_food_raises_not_found(db_session: Session):
    seed_catalog(db_session)
    with pytest.raises(NotFoundError):
        FoodService.save_food(db_session, FoodSave(name="Ghost"), food_id=999)


def test_save_food_reports_unknown_references(db_session: Session):
    seed_catalog(db_session)
    data = FoodSave(
        name="Mystery",
        category_id=77,
        food_serving_units=[{"serving_unit_id": 88, "grams": 10}],
    )

    with pytest.raises(ServiceValidationError) as exc_info:
        FoodService.save_food(db_session, data)

    assert exc_info.value.fields == [
        "category_id",
        "food_serving_units.0.serving_unit_id",
    ]
    assert db_session.query(Food).filter(Food.name == "Mystery").count() == 0


def test_food_payload_rejects_duplicate_units_and_negative_values():
    with pytest.raises(ValidationError):
        FoodSave(
            name="Bad",
            food_serving_units=[
                {"serving_unit_id": 1, "grams": 1},
                {"serving_unit_id": 1, "grams": 2},
            ],
        )
    with pytest.raises(ValidationError):
        FoodSave(name="Bad", calories=-1)
    with pytest.raises(ValidationError):
        FoodSave(name="Bad", protein=10000)


def test_food_payload_rejects_blank_name_and_extra_decimals():
    with pytest.raises(ValidationError):
        FoodSave(name="   ")
    with pytest.raises(ValidationError):
        FoodSave(name="Oats", fat=1.234)
    with pytest.raises(ValidationError):
        FoodSave(name="Oats", food_serving_units=[{"serving_unit_id": 1, "grams": 28.125}])

    food = FoodSave(name="  Oats ", calories=389.5, protein=16.89)
    assert food.name == "Oats"
    assert food.protein == 16.89


def test_delete_food_removes_serving_units(db_session: Session):
    seed = seed_catalog(db_session)
    apple_id = seed.foods["Apple"].id

    FoodService.delete_food(db_session, apple_id)

    db_session.expire_all()
    assert db_session.get(Food, apple_id) is None
    assert (
        db_session.query(FoodServingUnit).filter(FoodServingUnit.food_id == apple_id).count()
        == 0
    )


def test_delete_food_used_in_meal_is_rejected(db_session: Session):
    seed = seed_catalog(db_session)
    user = create_account(db_session)
    banana = seed.foods["Banana"]
    MealService.save_meal(
        db_session,
        user,
        MealSave(
            date_time=datetime(2025, 3, 14, 10),
            meal_foods=[{"food_id": banana.id, "serving_unit_id": seed.piece.id, "amount": 1}],
        ),
    )

    with pytest.raises(IntegrityError):
        FoodService.delete_food(db_session, banana.id)

    assert FoodService.get_food(db_session, banana.id).name == "Banana"


# =============================================================================
# MEAL SERVICE
# =============================================================================


def _meal_payload(seed, when=None, items=None):
    return MealSave(
        date_time=when or datetime(2025, 3, 14, 12, 30),
        meal_foods=items
        if items is not None
        else [
            {"food_id": seed.foods["Apple"].id, "serving_unit_id": seed.piece.id, "amount": 2},
            {"food_id": seed.foods["Milk"].id, "serving_unit_id": seed.cup.id, "amount": 1},
        ],
    )


def test_create_meal_for_user(db_session: Session):
    seed = seed_catalog(db_session)
    user = create_account(db_session)

    meal = MealService.save_meal(db_session, user, _meal_payload(seed))

    assert meal.user_id == user.id
    assert [mf.food.name for mf in meal.meal_foods] == ["Apple", "Milk"]
    assert [mf.amount for mf in meal.meal_foods] == [2, 1]


def test_create_meal_requires_at_least_one_item(db_session: Session):
    seed = seed_catalog(db_session)
    user = create_account(db_session)

    with pytest.raises(ServiceValidationError) as exc_info:
        MealService.save_meal(db_session, user, _meal_payload(seed, items=[]))

    assert exc_info.value.details[0]["message"] == "Add at least one item"
    assert MealService.get_meals(db_session, user) == []


def test_meal_item_amount_allows_two_decimals_only():
    with pytest.raises(ValidationError):
        MealSave(
            date_time=datetime(2025, 3, 14, 8, 0),
            meal_foods=[{"food_id": 1, "serving_unit_id": 1, "amount": 1.234}],
        )

    meal = MealSave(
        date_time=datetime(2025, 3, 14, 8, 0),
        meal_foods=[{"food_id": 1, "serving_unit_id": 1, "amount": 1.25}],
    )
    assert meal.meal_foods[0].amount == 1.25


def test_create_meal_reports_unknown_food_and_unit(db_session: Session):
    seed = seed_catalog(db_session)
    user = create_account(db_session)

    with pytest.raises(ServiceValidationError) as exc_info:
        MealService.save_meal(
            db_session,
            user,
            _meal_payload(seed, items=[{"food_id": 999, "serving_unit_id": 998, "amount": 1}]),
        )

    assert exc_info.value.fields == ["meal_foods.0.food_id", "meal_foods.0.serving_unit_id"]


def test_update_meal_replaces_all_line_items(db_session: Session):
    seed = seed_catalog(db_session)
    user = create_account(db_session)
    meal = MealService.save_meal(db_session, user, _meal_payload(seed))
    old_line_ids = {mf.id for mf in meal.meal_foods}

    updated = MealService.save_meal(
        db_session,
        user,
        _meal_payload(
            seed,
            when=datetime(2025, 3, 14, 13, 0),
            items=[{"food_id": seed.foods["Banana"].id, "serving_unit_id": seed.piece.id, "amount": 1.5}],
        ),
        meal_id=meal.id,
    )

    assert updated.id == meal.id
    assert updated.date_time == datetime(2025, 3, 14, 13, 0)
    assert [(mf.food.name, mf.amount) for mf in updated.meal_foods] == [("Banana", 1.5)]
    stored = db_session.query(MealFood).filter(MealFood.meal_id == meal.id).all()
    assert len(stored) == 1
    assert len(old_line_ids) == 2


def test_update_meal_may_clear_items(db_session: Session):
    seed = seed_catalog(db_session)
    user = create_account(db_session)
    meal = MealService.save_meal(db_session, user, _meal_payload(seed))

    updated = MealService.save_meal(
        db_session, user, _meal_payload(seed, items=[]), meal_id=meal.id
    )

    assert updated.meal_foods == []


def test_other_users_meal_is_not_found(db_session: Session):
    seed = seed_catalog(db_session)
    owner = create_account(db_session)
    stranger = create_account(db_session)
    meal = MealService.save_meal(db_session, owner, _meal_payload(seed))

    with pytest.raises(NotFoundError):
        MealService.get_meal(db_session, stranger, meal.id)
    with pytest.raises(NotFoundError):
        MealService.save_meal(db_session, stranger, _meal_payload(seed), meal_id=meal.id)
    with pytest.raises(NotFoundError):
        MealService.delete_meal(db_session, stranger, meal.id)

    assert MealService.get_meal(db_session, owner, meal.id).id == meal.id


def test_get_meals_for_a_day(db_session: Session):
    seed = seed_catalog(db_session)
    user = create_account(db_session)
    day = date(2025, 3, 14)
    for when in (
        datetime(2025, 3, 13, 23, 0),
        datetime(2025, 3, 14, 0, 0),
        datetime(2025, 3, 14, 23, 59, 59),
        datetime(2025, 3, 15, 0, 0),
    ):
        MealService.save_meal(db_session, user, _meal_payload(seed, when=when))

    meals = MealService.get_meals(db_session, user, day)

    assert [m.date_time for m in meals] == [
        datetime(2025, 3, 14, 23, 59, 59),
        datetime(2025, 3, 14, 0, 0),
    ]
    assert len(MealService.get_meals(db_session, user)) == 4


def test_aware_datetimes_are_stored_as_utc(db_session: Session):
    seed = seed_catalog(db_session)
    user = create_account(db_session)
    plus_two = timezone(timedelta(hours=2))

    meal = MealService.save_meal(
        db_session, user, _meal_payload(seed, when=datetime(2025, 3, 14, 9, 0, tzinfo=plus_two))
    )

    assert meal.date_time == datetime(2025, 3, 14, 7, 0)


def test_delete_meal_removes_line_items(db_session: Session):
    seed = seed_catalog(db_session)
    user = create_account(db_session)
    meal = MealService.save_meal(db_session, user, _meal_payload(seed))

    MealService.delete_meal(db_session, user, meal.id)

    assert MealService.get_meals(db_session, user) == []
    assert db_session.query(MealFood).filter(MealFood.meal_id == meal.id).count() == 0


def test_nutrition_totals_for_a_day(db_session: Session):
    seed = seed_catalog(db_session)
    user = create_account(db_session)
    # Apple x2 + Milk x1 at lunch, Banana with a zero amount (counts once) at dinner
    MealService.save_meal(db_session, user, _meal_payload(seed))
    MealService.save_meal(
        db_session,
        user,
        _meal_payload(
            seed,
            when=datetime(2025, 3, 14, 19, 0),
            items=[{"food_id": seed.foods["Banana"].id, "serving_unit_id": seed.piece.id, "amount": 0}],
        ),
    )
    MealService.save_meal(db_session, user, _meal_payload(seed, when=datetime(2025, 3, 15, 8)))

    summary = MealService.get_nutrition_totals(db_session, user, date(2025, 3, 14))

    assert summary.meal_count == 2
    assert summary.day == date(2025, 3, 14)
    assert summary.totals.calories == pytest.approx(52 * 2 + 42 + 89)
    assert summary.totals.protein == pytest.approx(0.3 * 2 + 3.4 + 1.1)
    assert summary.totals.carbs == pytest.approx(14 * 2 + 5 + 23)


def test_day_bounds_and_utc_helpers():
    start, end = day_bounds(date(2025, 1, 31))
    assert start == datetime(2025, 1, 31, 0, 0)
    assert end == datetime(2025, 1, 31, 23, 59, 59, 999999)

    naive = datetime(2025, 1, 31, 12)
    assert to_naive_utc(naive) is naive


# =============================================================================
# CATALOG SERVICES
# =============================================================================


def test_category_crud_and_duplicates(db_session: Session):
    category = CategoryService.create_category(db_session, CategoryCreate(name=" Grains "))
    assert category.name == "Grains"

    with pytest.raises(ConflictError):
        CategoryService.create_category(db_session, CategoryCreate(name="Grains"))

    renamed = CategoryService.update_category(
        db_session, category.id, CategoryCreate(name="Whole Grains")
    )
    assert renamed.name == "Whole Grains"
    assert [c.name for c in CategoryService.get_categories(db_session)] == ["Whole Grains"]

    with pytest.raises(NotFoundError):
        CategoryService.get_category(db_session, 999)


def test_rename_category_to_existing_name_conflicts(db_session: Session):
    seed = seed_catalog(db_session)
    with pytest.raises(ConflictError):
        CategoryService.update_category(db_session, seed.dairy.id, CategoryCreate(name="Fruits"))


def test_delete_category_keeps_its_foods(db_session: Session):
    seed = seed_catalog(db_session)
    milk_id = seed.foods["Milk"].id

    CategoryService.delete_category(db_session, seed.dairy.id)

    db_session.expire_all()
    assert db_session.get(Food, milk_id).category_id is None


def test_failed_category_delete_rolls_back(db_session: Session, monkeypatch):
    seed = seed_catalog(db_session)
    rollbacks = []

    def failing_delete(self, category_id):
        raise IntegrityError("DELETE", {}, Exception("FOREIGN KEY constraint failed"))

    monkeypatch.setattr(CategoryRepository, "delete", failing_delete)
    monkeypatch.setattr(db_session, "rollback", lambda: rollbacks.append(True))

    with pytest.raises(IntegrityError):
        CategoryService.delete_category(db_session, seed.dairy.id)

    assert rollbacks == [True]


def test_serving_unit_crud(db_session: Session):
    unit = ServingUnitService.create_serving_unit(db_session, ServingUnitCreate(name="slice"))
    with pytest.raises(ConflictError):
        ServingUnitService.create_serving_unit(db_session, ServingUnitCreate(name="slice"))

    ServingUnitService.update_serving_unit(db_session, unit.id, ServingUnitCreate(name="thin slice"))
    assert ServingUnitService.get_serving_unit(db_session, unit.id).name == "thin slice"

    ServingUnitService.delete_serving_unit(db_session, unit.id)
    with pytest.raises(NotFoundError):
        ServingUnitService.get_serving_unit(db_session, unit.id)


def test_delete_serving_unit_in_use_is_rejected(db_session: Session):
    seed = seed_catalog(db_session)

    with pytest.raises(IntegrityError):
        ServingUnitService.delete_serving_unit(db_session, seed.piece.id)

    assert ServingUnitService.get_serving_unit(db_session, seed.piece.id).name == "piece"


# =============================================================================
# AUTH SERVICE
# =============================================================================


def test_sign_up_and_sign_in(db_session: Session):
    email = unique_email("emma.johnson")
    user = create_account(db_session, email=email.upper(), name="Emma Johnson")

    assert user.email == email
    assert user.role == Role.USER
    assert user.password_hash != DEFAULT_PASSWORD

    signed_in, token, expires_at = AuthService.sign_in(
        db_session, SignInRequest(email=email, password=DEFAULT_PASSWORD)
    )
    assert signed_in.id == user.id
    assert expires_at > datetime.now(timezone.utc)
    assert AuthService.get_user_from_token(db_session, token).id == user.id


def test_sign_up_duplicate_email_conflicts(db_session: Session):
    email = unique_email()
    create_account(db_session, email=email)
    with pytest.raises(ConflictError):
        create_account(db_session, email=email)


@pytest.mark.parametrize("password", ["wrong-Pass1!", ""])
def test_sign_in_with_wrong_password(db_session: Session, password):
    email = unique_email()
    create_account(db_session, email=email)

    with pytest.raises(UnauthorizedError):
        AuthService.sign_in(db_session, SignInRequest.model_construct(email=email, password=password))


def test_sign_in_unknown_email(db_session: Session):
    with pytest.raises(UnauthorizedError):
        AuthService.sign_in(
            db_session, SignInRequest(email="nobody@nutritrack.io", password=DEFAULT_PASSWORD)
        )


def test_invalid_or_orphaned_tokens_are_rejected(db_session: Session):
    with pytest.raises(UnauthorizedError):
        AuthService.get_user_from_token(db_session, "not-a-token")

    user = create_account(db_session)
    token, _ = create_access_token(user)
    db_session.delete(user)
    db_session.commit()

    with pytest.raises(UnauthorizedError):
        AuthService.get_user_from_token(db_session, token)


@pytest.mark.parametrize(
    "password",
    ["short1!", "alllowercase1!", "ALLUPPERCASE1!", "NoDigitsHere!", "NoSpecial123"],
)
def test_weak_passwords_are_rejected(password):
    with pytest.raises(ValidationError):
        SignUpRequest(
            name="Raj Patel",
            email="raj@nutritrack.io",
            password=password,
            confirm_password=password,
        )


def test_password_confirmation_must_match():
    with pytest.raises(ValidationError):
        SignUpRequest(
            name="Raj Patel",
            email="raj@nutritrack.io",
            password=DEFAULT_PASSWORD,
            confirm_password=DEFAULT_PASSWORD + "x",
        )


def test_admin_role_can_be_assigned(db_session: Session):
    admin = create_account(db_session, role=Role.ADMIN)
    assert admin.is_admin
    assert hash_password("x") != hash_password("x")
