"""Job-control shell, memory block bookkeeping and logging, robust I/O and a threaded counter demo."""

__version__ = "0.1.0"