import unittest

from skycast.grouping import (
    DayGroup,
    date_label,
    group_by_local_day,
    hour_label,
    pick_representative,
)
from skycast.providers.base import RawForecastSample

# 2024-07-22T00:00:00Z, a Monday.
BASE = 1721606400
HOUR = 3600


def _sample(epoch, temp=20.0, temp_min=None, temp_max=None, description="clear sky", icon="01d"):
    return RawForecastSample(
        epoch_seconds=epoch,
        temperature=temp,
        temp_min=temp if temp_min is None else temp_min,
        temp_max=temp if temp_max is None else temp_max,
        feels_like=temp,
        humidity=50,
        wind_speed=1.0,
        condition_code=800,
        icon_code=icon,
        description=description,
    )


class TestGroupByLocalDay(unittest.TestCase):
    def test_empty_input(self):
        self.assertEqual(group_by_local_day([], 0), [])

    def test_positive_offset_moves_late_sample_to_next_day(self):
        samples = [_sample(BASE + 12 * HOUR), _sample(BASE + 23 * HOUR)]
        groups = group_by_local_day(samples, 2 * HOUR)
        self.assertEqual([g.date_key for g in groups], ["2024-07-22", "2024-07-23"])

    def test_negative_offset_keeps_early_utc_sample_on_previous_day(self):
        samples = [_sample(BASE + 20 * HOUR), _sample(BASE + 26 * HOUR)]
        groups = group_by_local_day(samples, -5 * HOUR)
        self.assertEqual(len(groups), 1)
        self.assertEqual(groups[0].date_key, "2024-07-22")
        self.assertEqual(len(groups[0].samples), 2)

    def test_at_most_five_days_in_first_appearance_order(self):
        samples = [_sample(BASE + i * 3 * HOUR) for i in range(48)]
        groups = group_by_local_day(samples, 0)

        self.assertEqual(len(groups), 5)
        self.assertEqual(groups[0].date_key, "2024-07-22")
        self.assertEqual(groups[-1].date_key, "2024-07-26")
        self.assertEqual(sum(len(g.samples) for g in groups), 40)

    def test_max_days_can_be_lowered(self):
        samples = [_sample(BASE + i * 3 * HOUR) for i in range(24)]
        self.assertEqual(len(group_by_local_day(samples, 0, max_days=2)), 2)

    def test_extrema_span_all_samples(self):
        group = DayGroup(
            date_key="2024-07-22",
            samples=[_sample(BASE, temp_min=12.0, temp_max=15.0), _sample(BASE + 3 * HOUR, temp_min=14.0, temp_max=24.5)],
        )
        self.assertEqual(group.temp_low, 12.0)
        self.assertEqual(group.temp_high, 24.5)


class TestPickRepresentative(unittest.TestCase):
    def test_prefers_first_afternoon_sample(self):
        samples = [_sample(BASE + h * HOUR, description=str(h)) for h in (6, 9, 12, 15, 18)]
        group = DayGroup(date_key="2024-07-22", samples=samples)
        self.assertEqual(pick_representative(group, 0).description, "12")

    def test_afternoon_is_judged_in_local_time(self):
        # 10:00 UTC is 15:00 at UTC+05:00.
        samples = [_sample(BASE + h * HOUR, description=str(h)) for h in (2, 5, 10)]
        group = DayGroup(date_key="2024-07-22", samples=samples)
        self.assertEqual(pick_representative(group, 5 * HOUR).description, "10")

    def test_falls_back_to_middle_sample(self):
        samples = [_sample(BASE + h * HOUR, description=str(h)) for h in (0, 3, 6)]
        group = DayGroup(date_key="2024-07-22", samples=samples)
        self.assertEqual(pick_representative(group, 0).description, "3")

    def test_two_morning_samples_pick_the_second(self):
        samples = [_sample(BASE + h * HOUR, description=str(h)) for h in (3, 6)]
        group = DayGroup(date_key="2024-07-22", samples=samples)
        self.assertEqual(pick_representative(group, 0).description, "6")

    def test_single_sample(self):
        group = DayGroup(date_key="2024-07-22", samples=[_sample(BASE + 21 * HOUR, description="night")])
        self.assertEqual(pick_representative(group, 0).description, "night")

    def test_empty_group_is_a_defect(self):
        with self.assertRaises(ValueError):
            pick_representative(DayGroup(date_key="2024-07-22"), 0)


class TestLabels(unittest.TestCase):
    def test_hour_labels(self):
        self.assertEqual(hour_label(BASE, 0), "12 AM")
        self.assertEqual(hour_label(BASE + 12 * HOUR, 0), "12 PM")
        self.assertEqual(hour_label(BASE + 15 * HOUR, 0), "3 PM")
        self.assertEqual(hour_label(BASE, 19800), "5:30 AM")

    def test_date_label(self):
        self.assertEqual(date_label("2024-07-22"), "Mon, Jul 22")
        self.assertEqual(date_label("2024-08-01"), "Thu, Aug 1")


if __name__ == "__main__":
    unittest.main()
