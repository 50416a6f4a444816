"""Find the cue active at a playback time."""

from __future__ import annotations

from typing import Optional, Sequence

from .cues import Cue

NO_CUE = -1


def binary_search(time: float, cues: Sequence[Cue]) -> int:
    """
    Return the index of a cue whose range contains ``time``, or ``NO_CUE``.

    The probe compares ``time`` against the whole ``[start, end]`` range, so
    with overlapping cues the first containing cue the bisection lands on wins.
    """
    low = 0
    high = len(cues) - 1
    while low <= high:
        mid = (low + high) // 2
        cue = cues[mid]
        if time < cue.start:
            high = mid - 1
        elif time > cue.end:
            low = mid + 1
        else:
            return mid
    return NO_CUE


def locate(time: float, cues: Sequence[Cue], last_index: int = NO_CUE) -> int:
    """
    Resolve the active cue index for ``time``.

    ``last_index`` is the previously resolved cue. Sequential playback mostly
    stays inside it or moves to a neighbour, so those are checked before the
    binary search over the whole sequence.
    """
    if 0 <= last_index < len(cues):
        current = cues[last_index]
        if current.start <= time <= current.end:
            return last_index

        if time > current.end:
            i = last_index + 1
            while i < len(cues) and cues[i].start <= time:
                if cues[i].contains(time):
                    return i
                i += 1
        elif time < current.start:
            i = last_index - 1
            while i >= 0 and cues[i].end >= time:
                if cues[i].contains(time):
                    return i
                i -= 1

    return binary_search(time, cues)


def cue_at(time: float, cues: Sequence[Cue]) -> Optional[Cue]:
    index = binary_search(time, cues)
    return cues[index] if index != NO_CUE else None
