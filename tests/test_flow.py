import pytest

from core_sim.config import EngineConfig
from core_sim.flow import event_probability, swing_momentum, update_intensity, update_possession
from core_sim.golden import build_test_team
from core_sim.state import MatchContext, SimulationState
from _fakes import ScriptedPrng


def _setup(weather="clear", home=None, away=None):
    ctx = MatchContext.build("flow", home or build_test_team("H", "Home", 100),
                             away or build_test_team("A", "Away", 100), weather, EngineConfig())
    return ctx, SimulationState.kickoff(ctx)


def test_event_probability_phases():
    ctx, state = _setup()
    state.minute = 30
    assert event_probability(state, ctx) == pytest.approx(0.15)
    state.minute = 85
    assert event_probability(state, ctx) == pytest.approx(0.195)
    state.minute = 5
    assert event_probability(state, ctx) == pytest.approx(0.165)


def test_event_probability_momentum_weather_and_cap():
    ctx, state = _setup("wind")
    state.minute = 30
    state.momentum = -40
    assert event_probability(state, ctx) == pytest.approx(0.15 * 1.2 * 1.1)
    state.intensity = 100
    state.momentum = 100
    state.minute = 88
    assert event_probability(state, ctx) == pytest.approx(0.4)


def test_intensity_late_and_close():
    ctx, state = _setup()
    state.minute = 70
    update_intensity(state, ctx, ScriptedPrng(ints=[0]))
    assert state.intensity == 53


def test_intensity_blowout_floor():
    ctx, state = _setup()
    state.minute = 30
    state.home_score = 4
    state.intensity = 30
    update_intensity(state, ctx, ScriptedPrng(ints=[-2]))
    assert state.intensity == 28
    state.intensity = 30
    update_intensity(state, ctx, ScriptedPrng(ints=[0]))
    assert state.intensity == 30


def test_intensity_clamped():
    ctx, state = _setup()
    state.minute = 89
    state.intensity = 100
    update_intensity(state, ctx, ScriptedPrng(ints=[2]))
    assert state.intensity == 100
    state.minute = 10
    state.home_score = 5
    state.intensity = 20
    update_intensity(state, ctx, ScriptedPrng(ints=[-2]))
    assert state.intensity == 28


def test_intensity_boosts_capped_before_jitter():
    ctx, state = _setup()
    state.minute = 70
    state.intensity = 100
    update_intensity(state, ctx, ScriptedPrng(ints=[-2]))
    assert state.intensity == 98
    state.intensity = 99
    update_intensity(state, ctx, ScriptedPrng(ints=[-1]))
    assert state.intensity == 99


def test_momentum_swing_clamped():
    ctx, state = _setup()
    swing_momentum(state, "home", 20, ctx.config)
    assert state.momentum == 20
    swing_momentum(state, "away", 5, ctx.config)
    assert state.momentum == 15
    state.momentum = 95
    swing_momentum(state, "home", 20, ctx.config)
    assert state.momentum == 100


def test_possession_model_uses_tendency_and_momentum():
    ctx, state = _setup()
    update_possession(state, ctx, ScriptedPrng([0.49]))
    assert state.possession == "home"
    update_possession(state, ctx, ScriptedPrng([0.51]))
    assert state.possession == "away"
    state.momentum = 100
    update_possession(state, ctx, ScriptedPrng([0.69]))
    assert state.possession == "home"
