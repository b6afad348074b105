# =============================================================================
# pair_stats.py — Brain-Pair Statistics
# =============================================================================
#
# Devices are shown two at a time: devices [0,1], [2,3], ... form brain
# pairs, and an odd device count leaves the last device paired with None.
# The "brain pair" of the detail view is the first of those pairs.
#
# For each member:
#
#   channel activity = reading in the chosen slice
#                      (or the mean of its NUM_SLICES readings)
#   device average   = mean of channel activity over the device's channels
#
# The pair average is the mean of the two device averages, and the
# synchronization label grades |avg1 - avg2|:
#
#   < 0.1  -> "High"     < 0.3 -> "Medium"     otherwise -> "Low"
#
# With only one device the pair average is that device's average and the
# label is None.  A pair is active when its first device is active and its
# second device is either active or absent.
# =============================================================================

from __future__ import annotations
from typing import NamedTuple, Optional

import numpy as np

from NTE.NMM.constants import (
    NUM_SLICES,
    SYNC_HIGH_MAX_DIFF, SYNC_MEDIUM_MAX_DIFF,
    SYNC_HIGH, SYNC_MEDIUM, SYNC_LOW,
)
from NTE.NPM.telemetry_parser import DeviceSnapshot


class PairStats(NamedTuple):
    first_id:               Optional[int]
    second_id:              Optional[int]
    first_average:          float
    second_average:         Optional[float]
    pair_average:           float
    difference:             Optional[float]
    synchronization:        Optional[str]
    first_active_channels:  int  = 0
    second_active_channels: int  = 0
    is_active:              bool = False

    @property
    def total_active_channels(self) -> int:
        return self.first_active_channels + self.second_active_channels

    def to_dict(self) -> dict:
        return {
            "firstId":              self.first_id,
            "secondId":             self.second_id,
            "firstAverage":         self.first_average,
            "secondAverage":        self.second_average,
            "pairAverage":          self.pair_average,
            "difference":           self.difference,
            "synchronization":      self.synchronization,
            "firstActiveChannels":  self.first_active_channels,
            "secondActiveChannels": self.second_active_channels,
            "totalActiveChannels":  self.total_active_channels,
            "isActive":             self.is_active,
        }


def activity_matrix(device: DeviceSnapshot) -> np.ndarray:
    """
    (channels x NUM_SLICES) activity array, one row per channel record in
    slice-0 order.  Every record line contributes to all slices, so the
    buckets are the same length.
    """
    if not device.slices or not device.slices[0]:
        return np.zeros((0, NUM_SLICES))
    return np.array(
        [[s.activity for s in bucket] for bucket in device.slices],
        dtype=float,
    ).T


def device_average_activity(device: DeviceSnapshot, slice_index: Optional[int] = None) -> float:
    """Mean channel activity of one device; 0.0 for a device with no channels."""
    matrix = activity_matrix(device)
    if matrix.shape[0] == 0:
        return 0.0
    if slice_index is None:
        per_channel = matrix.mean(axis=1)
    else:
        if not 0 <= slice_index < NUM_SLICES:
            raise ValueError(f"slice_index must be 0..{NUM_SLICES - 1}, got {slice_index}")
        per_channel = matrix[:, slice_index]
    return float(per_channel.mean())


def synchronization_label(difference: float) -> str:
    diff = abs(difference)
    if diff < SYNC_HIGH_MAX_DIFF:
        return SYNC_HIGH
    if diff < SYNC_MEDIUM_MAX_DIFF:
        return SYNC_MEDIUM
    return SYNC_LOW


def brain_pairs(devices: list[DeviceSnapshot]) -> list[tuple[DeviceSnapshot, Optional[DeviceSnapshot]]]:
    """Consecutive pairs [0,1], [2,3], ...; an odd tail pairs with None."""
    pairs = []
    for i in range(0, len(devices), 2):
        second = devices[i + 1] if i + 1 < len(devices) else None
        pairs.append((devices[i], second))
    return pairs


def select_brain_pair(devices: list[DeviceSnapshot]):
    pairs = brain_pairs(devices)
    if not pairs:
        return None, None
    return pairs[0]


def pair_statistics(
    first: DeviceSnapshot,
    second: Optional[DeviceSnapshot],
    slice_index: Optional[int] = None,
) -> PairStats:
    first_avg = device_average_activity(first, slice_index)
    if second is None:
        return PairStats(
            first_id=first.id,
            second_id=None,
            first_average=first_avg,
            second_average=None,
            pair_average=first_avg,
            difference=None,
            synchronization=None,
            first_active_channels=first.active_channels,
            second_active_channels=0,
            is_active=first.is_active,
        )

    second_avg = device_average_activity(second, slice_index)
    difference = abs(first_avg - second_avg)
    return PairStats(
        first_id=first.id,
        second_id=second.id,
        first_average=first_avg,
        second_average=second_avg,
        pair_average=float(np.mean([first_avg, second_avg])),
        difference=difference,
        synchronization=synchronization_label(difference),
        first_active_channels=first.active_channels,
        second_active_channels=second.active_channels,
        is_active=first.is_active and second.is_active,
    )


def all_pair_statistics(devices: list[DeviceSnapshot],
                        slice_index: Optional[int] = None) -> list[PairStats]:
    return [pair_statistics(a, b, slice_index) for a, b in brain_pairs(devices)]


def device_statistics(device: DeviceSnapshot) -> dict:
    """Per-brain panel numbers: active and total channel counts."""
    return {
        "id":             device.id,
        "totalChannels":  len(device.channels),
        "activeChannels": device.active_channels,
        "isActive":       device.is_active,
        "averageActivity": device_average_activity(device),
    }
