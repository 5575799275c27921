import threading
import unittest

from qmkviewer.device.report import Report
from qmkviewer.device.report_poller import ReportPoller
from qmkviewer.device.report_source import ReportSource


class FakeSource(ReportSource):
    def __init__(self, reports=None, error=None):
        self.reports = list(reports or [])
        self.error = error
        self.closed = False
        self.polled = threading.Event()

    def poll(self):
        self.polled.set()
        if self.error:
            raise self.error
        return self.reports.pop(0) if self.reports else None

    def close(self):
        self.closed = True


class TestReportPoller(unittest.TestCase):

    def test_drain_returns_newest(self):
        poller = ReportPoller(FakeSource([Report(1, 0, 1), Report(2, 1, 2), Report(3, 2, 4)]))
        for _ in range(4):
            poller.poll_once()
        self.assertEqual(poller.drain_latest(), Report(3, 2, 4))
        self.assertIsNone(poller.drain_latest())

    def test_nothing_polled(self):
        poller = ReportPoller(FakeSource())
        self.assertIsNone(poller.poll_once())
        self.assertIsNone(poller.drain_latest())

    def test_failing_source_is_logged(self):
        poller = ReportPoller(FakeSource(error=OSError("unplugged")))
        with self.assertLogs('QmkViewer', level='WARNING') as logs:
            self.assertIsNone(poller.poll_once())
        self.assertIn("unplugged", logs.output[0])

    def test_start_and_stop(self):
        source = FakeSource([Report(1, 3, 8)])
        poller = ReportPoller(source, interval_sec=0.001)
        poller.start()
        self.assertTrue(source.polled.wait(2.0))
        self.assertTrue(poller.is_running())

        poller.stop()
        self.assertFalse(poller.is_running())
        self.assertTrue(source.closed)
        self.assertEqual(poller.drain_latest(), Report(1, 3, 8))

    def test_stop_without_start(self):
        poller = ReportPoller(FakeSource())
        poller.stop()
        self.assertFalse(poller.is_running())


if __name__ == '__main__':
    unittest.main()
