from __future__ import annotations

import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from toutdo import config
from toutdo.notifier import DesktopNotifier


class DesktopNotifierTest(unittest.TestCase):
    def setUp(self) -> None:
        self.sent = []

    def send(self, title: str, body: str) -> None:
        self.sent.append((title, body))

    def test_notify_only_while_enabled(self) -> None:
        notifier = DesktopNotifier(self.send, enabled=True)
        self.assertTrue(notifier.notify("Tout-Do", "started"))
        self.assertFalse(notifier.toggle())
        self.assertFalse(notifier.notify("Tout-Do", "hidden"))
        self.assertEqual(self.sent, [("Tout-Do", "started")])

    def test_enabling_announces_itself(self) -> None:
        notifier = DesktopNotifier(self.send, enabled=False)
        self.assertTrue(notifier.toggle())
        self.assertTrue(notifier.enabled)
        self.assertEqual(self.sent, [(config.APP_NAME, "Notifications enabled")])

    def test_send_failure_is_logged(self) -> None:
        def broken(_title: str, _body: str) -> None:
            raise RuntimeError("no notification daemon")

        notifier = DesktopNotifier(broken)
        with self.assertLogs("toutdo", level="ERROR"):
            self.assertFalse(notifier.notify("Tout-Do", "x"))


if __name__ == "__main__":
    unittest.main()
