import math
import unittest

from NTE.NPM.telemetry_parser import parse_time_sliced, pad_devices
from NTE.NSM.pair_stats import (
    device_average_activity,
    synchronization_label,
    select_brain_pair,
    pair_statistics,
    device_statistics,
    brain_pairs,
    all_pair_statistics,
    activity_matrix,
)


def _devices(*lines):
    return parse_time_sliced("\n".join(lines)).devices


class SynchronizationLabelTests(unittest.TestCase):
    def test_reference_differences(self):
        self.assertEqual(synchronization_label(0.05), "High")
        self.assertEqual(synchronization_label(0.2), "Medium")
        self.assertEqual(synchronization_label(0.5), "Low")

    def test_high_boundary(self):
        self.assertEqual(synchronization_label(0.0999), "High")
        self.assertEqual(synchronization_label(0.1), "Medium")
        self.assertEqual(synchronization_label(0.1001), "Medium")

    def test_medium_boundary(self):
        self.assertEqual(synchronization_label(0.2999), "Medium")
        self.assertEqual(synchronization_label(0.3), "Low")
        self.assertEqual(synchronization_label(0.3001), "Low")

    def test_sign_ignored(self):
        self.assertEqual(synchronization_label(-0.05), "High")
        self.assertEqual(synchronization_label(-0.5), "Low")


class DeviceAverageTests(unittest.TestCase):
    def test_mean_over_slices_then_channels(self):
        device = _devices(
            "0,1,0.0,0.0,0.0,0.0,1.0,8.0,0.5",
            "0,2,0.2,0.2,0.2,0.2,0.2,8.0,0.5",
        )[0]
        self.assertTrue(math.isclose(device_average_activity(device), 0.2))

    def test_single_slice(self):
        device = _devices(
            "0,1,0.4,0.0,0.0,0.0,1.0,8.0,0.5",
            "0,2,0.2,0.2,0.2,0.2,0.2,8.0,0.5",
        )[0]
        self.assertTrue(math.isclose(device_average_activity(device, slice_index=0), 0.3))
        self.assertTrue(math.isclose(device_average_activity(device, slice_index=4), 0.6))

    def test_empty_device(self):
        empty = pad_devices([])[0]
        self.assertEqual(device_average_activity(empty), 0.0)

    def test_bad_slice_index(self):
        device = _devices("0,1,0.4,0,0,0,0,8.0,0.5")[0]
        with self.assertRaises(ValueError):
            device_average_activity(device, slice_index=5)


class PairTests(unittest.TestCase):
    def test_select_pair(self):
        devices = _devices(
            "3,1,0,0,0,0,0,8.0,0.5",
            "1,1,0,0,0,0,0,8.0,0.5",
            "7,1,0,0,0,0,0,8.0,0.5",
        )
        first, second = select_brain_pair(devices)
        self.assertEqual((first.id, second.id), (3, 1))

    def test_select_pair_single_and_empty(self):
        devices = _devices("3,1,0,0,0,0,0,8.0,0.5")
        first, second = select_brain_pair(devices)
        self.assertEqual(first.id, 3)
        self.assertIsNone(second)
        self.assertEqual(select_brain_pair([]), (None, None))

    def test_pair_statistics(self):
        first, second = _devices(
            "0,1,0.6,0.6,0.6,0.6,0.6,8.0,0.5",
            "1,1,0.4,0.4,0.4,0.4,0.4,8.0,0.5",
        )
        stats = pair_statistics(first, second)
        self.assertTrue(math.isclose(stats.first_average, 0.6))
        self.assertTrue(math.isclose(stats.second_average, 0.4))
        self.assertTrue(math.isclose(stats.pair_average, 0.5))
        self.assertTrue(math.isclose(stats.difference, 0.2))
        self.assertEqual(stats.synchronization, "Medium")

    def test_pair_statistics_without_partner(self):
        (first,) = _devices("0,1,0.6,0.6,0.6,0.6,0.6,8.0,0.5")
        stats = pair_statistics(first, None)
        self.assertTrue(math.isclose(stats.pair_average, 0.6))
        self.assertIsNone(stats.synchronization)
        self.assertIsNone(stats.to_dict()["secondId"])

    def test_device_statistics(self):
        (device,) = _devices(
            "0,1,0.6,0,0,0,0,8.0,0.5",
            "0,2,0,0,0,0,0,8.0,0.5",
        )
        stats = device_statistics(device)
        self.assertEqual(stats["totalChannels"], 2)
        self.assertEqual(stats["activeChannels"], 1)
        self.assertTrue(stats["isActive"])


class AllPairsTests(unittest.TestCase):
    def test_consecutive_pairs_with_odd_tail(self):
        devices = _devices(
            "0,1,0.6,0.6,0.6,0.6,0.6,8.0,0.5",
            "1,1,0.4,0.4,0.4,0.4,0.4,8.0,0.5",
            "2,1,0.5,0.5,0.5,0.5,0.5,8.0,0.5",
            "3,1,0,0,0,0,0,8.0,0.5",
            "4,1,0.3,0.3,0.3,0.3,0.3,8.0,0.5",
        )
        pairs = brain_pairs(devices)
        self.assertEqual(
            [(a.id, None if b is None else b.id) for a, b in pairs],
            [(0, 1), (2, 3), (4, None)],
        )

    def test_every_pair_gets_statistics(self):
        devices = _devices(
            "0,1,0.6,0.6,0.6,0.6,0.6,8.0,0.5",
            "0,2,0.6,0.6,0.6,0.6,0.6,8.0,0.5",
            "1,1,0.4,0.4,0.4,0.4,0.4,8.0,0.5",
            "2,1,0.5,0.5,0.5,0.5,0.5,8.0,0.5",
            "3,1,0,0,0,0,0,8.0,0.5",
            "4,1,0.3,0.3,0.3,0.3,0.3,8.0,0.5",
        )
        stats = all_pair_statistics(devices)
        self.assertEqual([s.first_id for s in stats], [0, 2, 4])
        self.assertEqual([s.second_id for s in stats], [1, 3, None])

        self.assertEqual(stats[0].first_active_channels, 2)
        self.assertEqual(stats[0].second_active_channels, 1)
        self.assertEqual(stats[0].total_active_channels, 3)
        self.assertTrue(stats[0].is_active)
        self.assertEqual(stats[0].synchronization, "Medium")

        self.assertTrue(math.isclose(stats[1].difference, 0.5))
        self.assertEqual(stats[1].synchronization, "Low")
        self.assertFalse(stats[1].is_active)

        self.assertIsNone(stats[2].synchronization)
        self.assertTrue(stats[2].is_active)
        self.assertEqual(stats[2].to_dict()["totalActiveChannels"], 1)

    def test_no_devices_no_pairs(self):
        self.assertEqual(brain_pairs([]), [])
        self.assertEqual(all_pair_statistics([]), [])

    def test_activity_matrix_shape(self):
        (device,) = _devices(
            "0,1,0.1,0.2,0.3,0.4,0.5,8.0,0.5",
            "0,2,0,0,0,0,0,8.0,0.5",
        )
        matrix = activity_matrix(device)
        self.assertEqual(matrix.shape, (2, 5))
        self.assertTrue(math.isclose(matrix[0, 4], 0.5))
        self.assertEqual(activity_matrix(pad_devices([])[0]).shape, (0, 5))


if __name__ == "__main__":
    unittest.main()
