import unittest
from mealcal.events.Event_Bus import EventBus, RECORD_SAVED, STORAGE_ERROR
from mealcal.events.web_observers import EventLog
from mealcal.events.event_helpers import publish_storage_error


class TestEventBus(unittest.TestCase):

    def setUp(self):
        self.bus = EventBus()
        self.received = []

    def _listener(self, name, payload):
        self.received.append((name, payload))

    def test_subscribe_publish(self):
        self.bus.subscribe(RECORD_SAVED, self._listener)
        self.bus.subscribe(RECORD_SAVED, self._listener)  # duplicate ignored
        self.bus.publish(RECORD_SAVED, {"kind": "meal"})
        self.assertEqual(self.received, [(RECORD_SAVED, {"kind": "meal"})])

    def test_unsubscribe(self):
        self.bus.subscribe(RECORD_SAVED, self._listener)
        self.bus.unsubscribe(RECORD_SAVED, self._listener)
        self.bus.unsubscribe(RECORD_SAVED, self._listener)
        self.bus.publish(RECORD_SAVED, {})
        self.assertEqual(self.received, [])

    def test_failing_subscriber_does_not_stop_others(self):
        def broken(name, payload):
            raise RuntimeError("boom")
        self.bus.subscribe(RECORD_SAVED, broken)
        self.bus.subscribe(RECORD_SAVED, self._listener)
        self.bus.publish(RECORD_SAVED, {})
        self.assertEqual(len(self.received), 1)

    def test_storage_error_payload(self):
        self.bus.subscribe(STORAGE_ERROR, self._listener)
        publish_storage_error("workout", "save", IOError("disk full"), bus=self.bus)
        self.assertEqual(self.received[0][1], {"kind": "workout", "operation": "save", "error": "disk full"})


class TestEventLog(unittest.TestCase):

    def test_cursor_and_cap(self):
        bus = EventBus()
        log = EventLog(max_events=3)
        log.start(bus)
        log.start(bus)  # idempotent
        for i in range(5):
            bus.publish(RECORD_SAVED, {"kind": "meal", "n": i})
        data = log.get_events()
        self.assertEqual([e["n"] for e in data["events"]], [2, 3, 4])
        self.assertEqual(data["next_cursor"], 5)
        self.assertEqual([e["id"] for e in log.get_events(since=4)["events"]], [5])
        self.assertEqual(log.get_events(since=5)["events"], [])


if __name__ == '__main__':
    unittest.main()
