from takeaway.restaurants.events import Subject


def test_emit_reaches_observers_in_order():
    subject: Subject[int] = Subject("numbers")
    seen = []
    subject.subscribe(lambda v: seen.append(("first", v)))
    subject.subscribe(lambda v: seen.append(("second", v)))

    subject.emit(1)

    assert seen == [("first", 1), ("second", 1)]


def test_unsubscribe_stops_delivery():
    subject: Subject[str] = Subject()
    seen = []
    unsubscribe = subject.subscribe(seen.append)

    subject.emit("a")
    unsubscribe()
    subject.emit("b")

    assert seen == ["a"]
    assert subject.observer_count == 0


def test_unsubscribe_twice_is_harmless():
    subject: Subject[str] = Subject()
    unsubscribe = subject.subscribe(lambda v: None)
    unsubscribe()
    unsubscribe()
    assert subject.observer_count == 0


def test_observer_may_unsubscribe_while_notified():
    subject: Subject[int] = Subject()
    seen = []

    def once(value):
        seen.append(value)
        unsubscribe()

    unsubscribe = subject.subscribe(once)
    subject.subscribe(lambda v: seen.append(-v))

    subject.emit(1)
    subject.emit(2)

    assert seen == [1, -1, -2]


def test_late_subscriber_sees_only_later_values():
    subject: Subject[int] = Subject()
    subject.emit(1)
    seen = []
    subject.subscribe(seen.append)
    subject.emit(2)
    assert seen == [2]
