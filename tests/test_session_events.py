from esper import World

from colorflood.components.board import Board
from colorflood.components.color import Color
from colorflood.components.session_state import SessionState, SessionStatus
from colorflood.events.bus import (
    EVENT_BOARD_CHANGED,
    EVENT_CELL_CLICK,
    EVENT_COLOR_REJECTED,
    EVENT_COLOR_SELECTED,
    EVENT_GAME_LOST,
    EVENT_GAME_WON,
    EVENT_LEVEL_LOADED,
    EVENT_MOVE_APPLIED,
    EVENT_MOVE_NO_CHANGE,
    EVENT_MOVE_REJECTED,
    EVENT_SESSION_STATUS_CHANGED,
    EventBus,
)
from colorflood.systems.game_session import GameSession
from tests.helpers import board_to_strings, level_from_strings

G, Y = Color.GREEN, Color.YELLOW


def _capture(bus, *names):
    captured = {name: [] for name in names}
    for name in names:
        bus.subscribe(name, lambda sender, _name=name, **payload: captured[_name].append(payload))
    return captured


def test_session_components_live_on_one_entity():
    bus = EventBus()
    world = World()
    session = GameSession(world, bus, level_from_strings(["RG"], G))
    boards = list(world.get_component(Board))
    states = list(world.get_component(SessionState))
    assert [ent for ent, _ in boards] == [session.session_entity]
    assert [ent for ent, _ in states] == [session.session_entity]
    assert states[0][1].target_color is G


def test_click_without_selected_color_is_ignored():
    bus = EventBus()
    session = GameSession(World(), bus, level_from_strings(["RG"], G))
    captured = _capture(bus, EVENT_MOVE_APPLIED, EVENT_MOVE_REJECTED)
    bus.emit(EVENT_CELL_CLICK, row=0, col=0)
    assert captured[EVENT_MOVE_APPLIED] == []
    assert captured[EVENT_MOVE_REJECTED] == []
    assert session.moves_remaining == 3


def test_select_then_click_applies_move_and_wins():
    bus = EventBus()
    session = GameSession(World(), bus, level_from_strings(["RGY", "RGY", "RGY"], G), move_budget=2)
    captured = _capture(
        bus,
        EVENT_MOVE_APPLIED,
        EVENT_BOARD_CHANGED,
        EVENT_SESSION_STATUS_CHANGED,
        EVENT_GAME_WON,
        EVENT_GAME_LOST,
    )

    bus.emit(EVENT_COLOR_SELECTED, color=G)
    bus.emit(EVENT_CELL_CLICK, row=2, col=0)
    bus.emit(EVENT_CELL_CLICK, row=0, col=2)

    assert board_to_strings(session.board) == ["GGG", "GGG", "GGG"]
    applied = captured[EVENT_MOVE_APPLIED]
    assert [(p["row"], p["col"], p["cells_changed"], p["moves_remaining"]) for p in applied] == [
        (2, 0, 3, 1),
        (0, 2, 3, 0),
    ]
    assert sorted(captured[EVENT_BOARD_CHANGED][0]["positions"]) == [(0, 0), (1, 0), (2, 0)]
    assert captured[EVENT_SESSION_STATUS_CHANGED] == [
        {"previous_status": SessionStatus.IN_PROGRESS, "new_status": SessionStatus.WON}
    ]
    assert captured[EVENT_GAME_WON] == [{"moves_remaining": 0}]
    assert captured[EVENT_GAME_LOST] == []


def test_loss_emits_game_lost():
    bus = EventBus()
    GameSession(World(), bus, level_from_strings(["RGY"], G), move_budget=1)
    captured = _capture(bus, EVENT_GAME_LOST, EVENT_GAME_WON)
    bus.emit(EVENT_COLOR_SELECTED, color="yellow")
    bus.emit(EVENT_CELL_CLICK, row=0, col=0)
    assert captured[EVENT_GAME_LOST] == [{"target_color": G}]
    assert captured[EVENT_GAME_WON] == []


def test_same_color_click_emits_no_change():
    bus = EventBus()
    GameSession(World(), bus, level_from_strings(["RG"], G))
    captured = _capture(bus, EVENT_MOVE_NO_CHANGE, EVENT_MOVE_APPLIED)
    bus.emit(EVENT_COLOR_SELECTED, color=G)
    bus.emit(EVENT_CELL_CLICK, row=0, col=1)
    assert captured[EVENT_MOVE_NO_CHANGE] == [{"row": 0, "col": 1, "color": G}]
    assert captured[EVENT_MOVE_APPLIED] == []


def test_rejected_move_reports_reason():
    bus = EventBus()
    session = GameSession(World(), bus, level_from_strings(["YY"], Y))
    captured = _capture(bus, EVENT_MOVE_REJECTED)
    session.apply_move(0, 0, G)
    assert captured[EVENT_MOVE_REJECTED][0]["reason"] == "game_over"


def test_reset_emits_board_and_status_changes():
    bus = EventBus()
    session = GameSession(World(), bus, level_from_strings(["RG"], G), move_budget=1)
    session.apply_move(0, 0, G)
    assert session.status is SessionStatus.WON
    captured = _capture(bus, EVENT_BOARD_CHANGED, EVENT_SESSION_STATUS_CHANGED)
    session.reset()
    assert captured[EVENT_BOARD_CHANGED][0]["reason"] == "reset"
    assert len(captured[EVENT_BOARD_CHANGED][0]["positions"]) == 2
    assert captured[EVENT_SESSION_STATUS_CHANGED] == [
        {"previous_status": SessionStatus.WON, "new_status": SessionStatus.IN_PROGRESS}
    ]


def test_load_level_emits_level_loaded():
    bus = EventBus()
    session = GameSession(World(), bus, level_from_strings(["RG"], G))
    captured = _capture(bus, EVENT_LEVEL_LOADED)
    session.load_level(level_from_strings(["RY"], Y), source="stored")
    assert captured[EVENT_LEVEL_LOADED] == [{"source": "stored", "target_color": Y}]


def test_unknown_color_from_bus_is_rejected_not_raised():
    bus = EventBus()
    session = GameSession(World(), bus, level_from_strings(["RG"], G))
    captured = _capture(bus, EVENT_COLOR_REJECTED)
    bus.emit(EVENT_COLOR_SELECTED, color=Color.BLUE)
    bus.emit(EVENT_COLOR_SELECTED, color="purple")
    assert captured[EVENT_COLOR_REJECTED] == [
        {"color": Color.BLUE, "reason": "color_not_in_palette"},
        {"color": "purple", "reason": "color_not_in_palette"},
    ]
    assert session.selected_color is None


def test_newer_session_on_same_bus_takes_over_input():
    bus = EventBus()
    old = GameSession(World(), bus, level_from_strings(["RGY"], G))
    new = GameSession(World(), bus, level_from_strings(["RGY"], G))
    assert not old.attached
    assert new.attached

    bus.emit(EVENT_COLOR_SELECTED, color=Y)
    bus.emit(EVENT_CELL_CLICK, row=0, col=0)
    assert old.selected_color is None
    assert old.moves_remaining == 3
    assert new.moves_remaining == 2


def test_closed_session_ignores_bus_but_accepts_direct_moves():
    bus = EventBus()
    session = GameSession(World(), bus, level_from_strings(["RG"], G))
    session.close()
    session.close()
    bus.emit(EVENT_COLOR_SELECTED, color=G)
    bus.emit(EVENT_CELL_CLICK, row=0, col=0)
    assert session.moves_remaining == 3
    assert session.apply_move(0, 0, G).status is SessionStatus.WON
