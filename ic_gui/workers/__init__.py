"""Background workers for store access."""

from ic_gui.workers.store_worker import StoreCallWorker, StoreCallWorkerSignals

__all__ = ["StoreCallWorker", "StoreCallWorkerSignals"]
