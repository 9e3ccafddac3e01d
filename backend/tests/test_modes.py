"""Tests for the mode controller hooks."""
from explorer.modes import GameMode, ModeController


def make_controller():
    calls = []
    ctl = ModeController()
    for mode in GameMode:
        ctl.on_reset(mode, lambda m=mode: calls.append(("reset", m)))
        ctl.on_leave(mode, lambda m=mode: calls.append(("leave", m)))
    return ctl, calls


class TestModeController:
    def test_starts_in_solar(self):
        ctl = ModeController()
        assert ctl.mode == GameMode.SOLAR
        assert ctl.is_active(GameMode.SOLAR)

    def test_set_mode_touches_nothing(self):
        ctl, calls = make_controller()
        previous = ctl.set_mode(GameMode.ORBIT)
        assert previous == GameMode.SOLAR
        assert ctl.mode == GameMode.ORBIT
        assert calls == []

    def test_enter_resets_then_leaves(self):
        ctl, calls = make_controller()
        ctl.enter_mode(GameMode.ARCADE)
        assert ctl.mode == GameMode.ARCADE
        assert calls == [("reset", GameMode.ARCADE), ("leave", GameMode.SOLAR)]

    def test_reenter_same_mode_only_resets(self):
        ctl, calls = make_controller()
        ctl.enter_mode(GameMode.RAIDEN)
        calls.clear()
        ctl.enter_mode(GameMode.RAIDEN)
        assert calls == [("reset", GameMode.RAIDEN)]

    def test_exit_resumes_solar_without_reset(self):
        ctl, calls = make_controller()
        ctl.enter_mode(GameMode.ARCADE)
        calls.clear()
        ctl.exit_mode()
        assert ctl.mode == GameMode.SOLAR
        assert calls == [("leave", GameMode.ARCADE)]

    def test_exit_from_solar_is_noop(self):
        ctl, calls = make_controller()
        ctl.exit_mode()
        assert calls == []

    def test_reset_shortcuts(self):
        ctl, calls = make_controller()
        ctl.reset_arcade()
        ctl.reset_raiden()
        assert calls == [("reset", GameMode.ARCADE), ("reset", GameMode.RAIDEN)]
        assert ctl.mode == GameMode.SOLAR

    def test_missing_reset_hook_is_fine(self):
        ctl = ModeController()
        ctl.reset(GameMode.ORBIT)
        ctl.enter_mode(GameMode.ORBIT)
        assert ctl.mode == GameMode.ORBIT
