# tests/test_hud_toast.py
from app.core.constants import TOAST_TTL_MS
from app.services.hud_toast_service import HudToast


class FakeClock:
    def __init__(self, now=1000):
        self.now = now

    def __call__(self):
        return self.now


def test_message_visible_until_ttl_elapses():
    clock = FakeClock()
    toast = HudToast(clock=clock)
    toast.show("Preset: Build")

    clock.now += TOAST_TTL_MS - 1
    assert toast.current() == "Preset: Build"
    clock.now += 1
    assert toast.current() == "Preset: Build"
    clock.now += 1
    assert toast.current() is None
    # Once expired it stays cleared
    clock.now -= 10
    assert toast.current() is None


def test_new_message_replaces_and_restarts_timer():
    clock = FakeClock()
    toast = HudToast(clock=clock, ttl_ms=100)
    toast.show("first")
    clock.now += 90
    toast.show("second")
    clock.now += 90
    assert toast.current() == "second"


def test_nothing_shown_initially_and_after_clear():
    toast = HudToast(clock=FakeClock())
    assert toast.current() is None
    toast.show("x")
    toast.clear()
    assert toast.current() is None
