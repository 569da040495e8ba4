"""Timeline engine: sampler, clock, frame encoder and spectral summary."""

from .clock import AsyncioTickScheduler, ScheduleClock, TickScheduler
from .encoder import FRAME_END, FRAME_START, encode_frame, frame_length
from .sampler import sample_day, sample_schedule, split_absolute_time
from .spectrum import SpectrumSummary, summarize

__all__ = [
    "FRAME_END",
    "FRAME_START",
    "AsyncioTickScheduler",
    "ScheduleClock",
    "SpectrumSummary",
    "TickScheduler",
    "encode_frame",
    "frame_length",
    "sample_day",
    "sample_schedule",
    "split_absolute_time",
    "summarize",
]
