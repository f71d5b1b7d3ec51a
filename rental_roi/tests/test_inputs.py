import math

from rental_roi.core.inputs import DEFAULTS, InputSet, has_errors, read_inputs, read_value, validate_inputs


def test_documented_defaults():
    assert DEFAULTS == InputSet(
        price=260_000,
        renovation_cost=17_000,
        management_fee=2_639,
        property_tax=3_022,
        monthly_rent=1_700,
        discount_rate_percent=2,
        horizon_years=30,
    )


def test_read_value_parses_numbers_and_strings():
    assert read_value(12, 0.0) == 12.0
    assert read_value("1 500", 7.0) == 7.0
    assert read_value(" 42.5 ", 0.0) == 42.5
    assert read_value("-3", 0.0) == -3.0


def test_read_value_falls_back_on_invalid():
    assert read_value("", 5.0) == 5.0
    assert read_value("abc", 5.0) == 5.0
    assert read_value(None, 5.0) == 5.0
    assert read_value(True, 5.0) == 5.0
    assert read_value(float("nan"), 5.0) == 5.0
    assert read_value("inf", 5.0) == 5.0
    assert read_value(math.inf, 5.0) == 5.0


def test_read_inputs_uses_field_defaults():
    inputs = read_inputs({"price": "300000", "monthly_rent": "oops"})
    assert inputs.price == 300_000
    assert inputs.monthly_rent == DEFAULTS.monthly_rent
    assert inputs.renovation_cost == DEFAULTS.renovation_cost
    assert inputs.horizon_years == DEFAULTS.horizon_years


def test_read_inputs_with_custom_defaults():
    custom = InputSet(price=1.0, horizon_years=5)
    inputs = read_inputs({}, custom)
    assert inputs == custom


def test_read_inputs_ignores_unknown_keys():
    inputs = read_inputs({"price": 1, "colour": "blue", "reno": 99})
    assert inputs.price == 1
    assert inputs.renovation_cost == DEFAULTS.renovation_cost


def test_read_inputs_floors_horizon():
    assert read_inputs({"horizon_years": 12.9}).horizon_years == 12
    assert read_inputs({"horizon_years": 0}).horizon_years == 1
    assert read_inputs({"horizon_years": "-3"}).horizon_years == 1
    assert isinstance(read_inputs({"horizon_years": 7.0}).horizon_years, int)


def test_read_inputs_keeps_negative_discount_rate():
    assert read_inputs({"discount_rate_percent": -150}).discount_rate_percent == -150


def test_validate_defaults_have_no_messages():
    messages = validate_inputs(DEFAULTS)
    assert set(messages) == set(DEFAULTS.as_dict())
    assert not has_errors(messages)


def test_validate_messages():
    messages = validate_inputs(
        InputSet(
            price=0,
            renovation_cost=-1,
            management_fee=-1,
            property_tax=-1,
            monthly_rent=-1,
            discount_rate_percent=-100,
            horizon_years=0,
        )
    )
    assert messages == {
        "price": "Price must be positive",
        "renovation_cost": "Renovation must be non-negative",
        "management_fee": "Management fee must be non-negative",
        "property_tax": "Property tax must be non-negative",
        "monthly_rent": "Rent must be non-negative",
        "discount_rate_percent": "Discount rate seems unusual",
        "horizon_years": "Years must be at least 1",
    }


def test_validate_discount_bounds():
    assert validate_inputs(InputSet(discount_rate_percent=-99))["discount_rate_percent"] == ""
    assert validate_inputs(InputSet(discount_rate_percent=1000))["discount_rate_percent"] == ""
    assert validate_inputs(InputSet(discount_rate_percent=1001))["discount_rate_percent"] != ""
