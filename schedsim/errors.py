from __future__ import annotations


class SchedulerError(ValueError):
    """Base class for every error raised by the simulator."""


class EmptyProcessSetError(SchedulerError):
    pass


class InvalidBurstTimeError(SchedulerError):
    pass


class InvalidArrivalTimeError(SchedulerError):
    pass


class InvalidPidError(SchedulerError):
    pass


class DuplicatePidError(SchedulerError):
    pass


class InvalidQuantumError(SchedulerError):
    pass


class IncompleteScheduleError(SchedulerError):
    """Averages were requested before every process finished."""


class WorkloadFormatError(SchedulerError):
    pass
