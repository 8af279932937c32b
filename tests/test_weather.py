import pytest

from core_sim.weather import (
    Weather,
    apply_weather_modifier,
    get_weather_description,
    get_weather_effects,
)


def test_parse_accepts_names_and_members():
    assert Weather.parse("rain") is Weather.RAIN
    assert Weather.parse(" SNOW ") is Weather.SNOW
    assert Weather.parse(Weather.WIND) is Weather.WIND


def test_parse_unknown_weather():
    with pytest.raises(ValueError) as exc:
        Weather.parse("fog")
    assert "clear" in str(exc.value)


def test_effect_table():
    snow = get_weather_effects("snow")
    assert snow.passing_accuracy == pytest.approx(0.8)
    assert snow.shot_accuracy == pytest.approx(0.75)
    assert snow.stamina_drain == pytest.approx(1.25)
    clear = get_weather_effects(Weather.CLEAR)
    assert (clear.passing_accuracy, clear.shot_accuracy, clear.stamina_drain, clear.long_ball_bonus) == (1.0, 1.0, 1.0, 0.0)


def test_apply_modifier_multiplies_or_adds():
    assert apply_weather_modifier(0.5, "rain", "shot_accuracy") == pytest.approx(0.425)
    assert apply_weather_modifier(0.5, "wind", "long_ball_bonus") == pytest.approx(0.65)
    with pytest.raises(ValueError):
        apply_weather_modifier(1.0, "rain", "visibility")


def test_slippery_conditions():
    assert Weather.RAIN.is_slippery and Weather.SNOW.is_slippery
    assert not Weather.WIND.is_slippery and not Weather.CLEAR.is_slippery


def test_descriptions_exist_for_every_weather():
    for w in Weather:
        assert get_weather_description(w)
