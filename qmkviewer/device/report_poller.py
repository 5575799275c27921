import logging
import queue
import threading

DEFAULT_POLL_INTERVAL_SEC = 0.008


class ReportPoller:
    """
    Polls a ReportSource on a background thread and hands the reports over a queue.

    The thread never touches the layout or the keyboard state. The consumer calls
    drain_latest() once per render tick, older reports of the same tick are dropped.
    """

    def __init__(self, source, interval_sec=DEFAULT_POLL_INTERVAL_SEC):
        self.log = logging.getLogger('QmkViewer')
        self.source = source
        self.interval_sec = interval_sec
        self.reports = queue.Queue()
        self.stop_event = threading.Event()
        self.thread = None

    def start(self):
        if self.thread is not None and self.thread.is_alive():
            return
        self.stop_event.clear()
        self.thread = threading.Thread(target=self.run, name="ReportPoller", daemon=True)
        self.thread.start()
        self.log.info("Polling input from %s every %.1f ms", self.source.get_name(), self.interval_sec * 1000)

    def stop(self, timeout=1.0):
        self.stop_event.set()
        if self.thread is not None:
            self.thread.join(timeout)
            self.thread = None

    def is_running(self):
        return self.thread is not None and self.thread.is_alive()

    def poll_once(self):
        try:
            report = self.source.poll()
        except Exception as e:
            self.log.warning("Polling %s failed: %s", self.source.get_name(), e)
            return None
        if report is not None:
            self.reports.put(report)
        return report

    def run(self):
        try:
            while not self.stop_event.is_set():
                self.poll_once()
                self.stop_event.wait(self.interval_sec)
        finally:
            self.source.close()

    def drain_latest(self):
        """ Empty the queue without blocking and return the newest report, or None """
        latest = None
        while True:
            try:
                latest = self.reports.get_nowait()
            except queue.Empty:
                return latest
