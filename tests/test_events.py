from invaders import EventKind, FrameEvents


def test_events_keep_order_and_filter():
    events = FrameEvents()
    assert len(events) == 0
    assert not events.has(EventKind.PLAYER_HIT)

    events.emit(EventKind.ENEMY_KILLED, (4, 2))
    events.emit(EventKind.PLAYER_FIRED)
    events.emit(EventKind.ENEMY_KILLED, (3, 1))

    assert len(events) == 3
    assert [e.kind for e in events] == [EventKind.ENEMY_KILLED, EventKind.PLAYER_FIRED, EventKind.ENEMY_KILLED]
    assert [e.value for e in events.of(EventKind.ENEMY_KILLED)] == [(4, 2), (3, 1)]
    assert events.has(EventKind.PLAYER_FIRED)
    assert "PLAYER_FIRED" in repr(events)
