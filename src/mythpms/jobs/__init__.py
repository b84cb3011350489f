"""Housekeeping jobs run after processing or on their own."""

from mythpms.jobs.maintenance import LogSweepStats, sweep_old_logs

__all__ = ["LogSweepStats", "sweep_old_logs"]
