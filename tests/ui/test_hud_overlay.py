from __future__ import annotations

from types import SimpleNamespace

import pytest

from engine.ui.hud import STATE, TIME, HUDConfig

overlay_mod = pytest.importorskip("engine.ui.hud.overlay", reason="pyglet is not importable here")


class _DummyLabel:
    created = 0

    def __init__(self, text="", x=0, y=0, **kwargs) -> None:  # noqa: ANN001
        type(self).created += 1
        self.text, self.x, self.y = text, x, y
        self.color = kwargs.get("color")
        self.draws = 0
        self.deleted = False

    def draw(self) -> None:
        self.draws += 1

    def delete(self) -> None:
        self.deleted = True


@pytest.fixture()
def hud(monkeypatch: pytest.MonkeyPatch):
    # GL コンテキスト無しで動かすため Label を差し替える
    _DummyLabel.created = 0
    monkeypatch.setattr(overlay_mod, "pyglet", SimpleNamespace(text=SimpleNamespace(Label=_DummyLabel)))
    now = {"t": 100.0}
    monkeypatch.setattr(overlay_mod, "time", SimpleNamespace(monotonic=lambda: now["t"]))
    window = SimpleNamespace(height=600)
    sampler = SimpleNamespace(data={TIME: "00:00:00.000", STATE: "Paused"})
    return overlay_mod.OverlayHUD(window, sampler, config=HUDConfig(font_size=10)), now


def test_labels_are_reused_across_ticks(hud) -> None:
    overlay, _ = hud
    overlay.tick(0.1)
    first = dict(overlay._labels)
    overlay.tick(0.1)
    assert overlay._labels == first
    assert [lab.text for lab in first.values()] == ["00:00:00.000", "Paused"]
    assert _DummyLabel.created == 2


def test_messages_create_one_label_each_and_expire(hud) -> None:
    overlay, now = hud
    overlay.show_message("Settings reset", timeout_sec=1.0)
    overlay.show_message("saved", level="warn", timeout_sec=5.0)
    created = _DummyLabel.created
    for _ in range(3):
        overlay.draw()
    assert _DummyLabel.created == created
    (reset_lab, _), (saved_lab, _) = overlay._messages
    assert reset_lab.draws == 3
    assert (reset_lab.y, saved_lab.y) == (10, 10 + overlay.line_height)

    now["t"] += 2.0
    overlay.tick(0.1)
    assert reset_lab.deleted
    assert [lab for lab, _ in overlay._messages] == [saved_lab]
    assert saved_lab.y == 10
