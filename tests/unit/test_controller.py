"""
Tests for the timeline/refresh controller
"""

import asyncio
import threading
import unittest
from datetime import datetime
from unittest.mock import Mock

from habitwidget.controller import CycleState, RefreshCycle, Timeline, TimelineController
from habitwidget.platforms.android import AndroidPlatform
from habitwidget.platforms.base import RefreshPolicy
from habitwidget.platforms.ios import IOSPlatform
from habitwidget.snapshot import WidgetSnapshot
from habitwidget.store.memory import MemoryStore


FIXED_NOW = datetime(2024, 1, 15, 8, 30, 0)


def make_controller(values=None, platform=None):
    store = MemoryStore(values=values)
    return TimelineController(store, platform or IOSPlatform(), clock=lambda: FIXED_NOW)


class TestRefreshCycle(unittest.TestCase):
    """Test refresh state machine."""

    def test_initial_state(self):
        cycle = RefreshCycle()
        self.assertEqual(cycle.state, CycleState.PLACEHOLDER)

    def test_full_cycle(self):
        cycle = RefreshCycle()
        self.assertTrue(cycle.advance(CycleState.SNAPSHOT_REQUESTED))
        self.assertTrue(cycle.advance(CycleState.RENDERED))
        self.assertEqual(
            cycle.history,
            (CycleState.PLACEHOLDER, CycleState.SNAPSHOT_REQUESTED, CycleState.RENDERED),
        )

    def test_cannot_skip_snapshot_request(self):
        with self.assertRaises(RuntimeError):
            RefreshCycle().advance(CycleState.RENDERED)

    def test_rendered_is_terminal(self):
        cycle = RefreshCycle()
        cycle.advance(CycleState.SNAPSHOT_REQUESTED)
        cycle.advance(CycleState.RENDERED)
        self.assertFalse(cycle.cancel())
        with self.assertRaises(RuntimeError):
            cycle.advance(CycleState.SNAPSHOT_REQUESTED)

    def test_cancelled_cycle_does_not_advance(self):
        cycle = RefreshCycle()
        self.assertTrue(cycle.cancel())
        self.assertFalse(cycle.advance(CycleState.SNAPSHOT_REQUESTED))
        self.assertTrue(cycle.cancelled)


class TestTimelineController(unittest.TestCase):
    """Test controller orchestration."""

    def test_placeholder_does_not_touch_store(self):
        store = Mock()
        controller = TimelineController(store, IOSPlatform(), clock=lambda: FIXED_NOW)
        entry = controller.placeholder()
        store.get_many.assert_not_called()
        store.get.assert_not_called()
        self.assertEqual(entry.snapshot, WidgetSnapshot.placeholder())
        self.assertEqual(entry.content["redacted"], "placeholder")

    def test_preview_does_not_touch_store(self):
        store = Mock()
        controller = TimelineController(store, IOSPlatform(), clock=lambda: FIXED_NOW)
        entry = controller.preview()
        store.get_many.assert_not_called()
        self.assertEqual(entry.snapshot.content, "Loading...")

    def test_refresh_returns_single_entry(self):
        controller = make_controller({"widget_title": "3 Left", "widget_content": "Water"})
        timeline = controller.refresh()
        self.assertIsInstance(timeline, Timeline)
        self.assertEqual(len(timeline.entries), 1)
        self.assertEqual(timeline.entry.snapshot, WidgetSnapshot("3 Left", "Water"))
        self.assertEqual(timeline.entry.date, FIXED_NOW)

    def test_refresh_policy_comes_from_platform(self):
        self.assertEqual(make_controller().refresh().policy, RefreshPolicy.AT_END)
        android = make_controller(platform=AndroidPlatform())
        self.assertEqual(android.refresh().policy, RefreshPolicy.HOST_SCHEDULED)

    def test_renderer_invoked_once_per_refresh(self):
        platform = IOSPlatform()
        platform.renderer = Mock(wraps=platform.renderer)
        controller = make_controller(platform=platform)
        controller.refresh()
        platform.renderer.render.assert_called_once_with(WidgetSnapshot.default())

    def test_cancelled_cycle_returns_none(self):
        controller = make_controller()
        cycle = RefreshCycle()
        cycle.cancel()
        self.assertIsNone(controller.refresh(cycle=cycle))

    def test_cancel_during_read_discards_result(self):
        cycle = RefreshCycle()
        store = MemoryStore()
        controller = TimelineController(store, IOSPlatform())

        original = controller.reader.read

        def read_then_cancel():
            cycle.cancel()
            return original()

        controller.reader.read = read_then_cancel
        self.assertIsNone(controller.refresh(cycle=cycle))
        self.assertEqual(cycle.history[-1], CycleState.CANCELLED)

    def test_get_timeline_completion(self):
        controller = make_controller({"widget_title": "1 Left"})
        completion = Mock()
        controller.get_timeline(completion)
        timeline = completion.call_args[0][0]
        self.assertEqual(timeline.entry.snapshot.title, "1 Left")

    def test_refresh_async(self):
        controller = make_controller({"widget_content": "Stretch"})
        timeline = asyncio.run(controller.refresh_async())
        self.assertEqual(timeline.entry.snapshot, WidgetSnapshot("Today's Habits", "Stretch"))

    def test_concurrent_refreshes_agree(self):
        """Test parallel refreshes against an unchanged store see the same snapshot"""
        controller = make_controller({"widget_title": "3 Left", "widget_content": "Water, Stretch"})
        results = []
        lock = threading.Lock()

        def worker():
            timeline = controller.refresh()
            with lock:
                results.append(timeline.entry.snapshot)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(len(results), 8)
        self.assertEqual(set(results), {WidgetSnapshot("3 Left", "Water, Stretch")})

    def test_concurrent_async_refreshes_agree(self):
        controller = make_controller({"widget_title": "3 Left"})

        async def refresh_many():
            return await asyncio.gather(*(controller.refresh_async() for _ in range(4)))

        timelines = asyncio.run(refresh_many())
        self.assertEqual(len({t.entry.snapshot for t in timelines}), 1)
