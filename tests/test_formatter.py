import unittest
from datetime import datetime, timedelta, timezone

from cFish.exceptions import TimeParseError
from cFish.formatter import format_relative_time, parse_docker_time

NOW = datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


class TestFormatRelativeTime(unittest.TestCase):

    def ago(self, **kwargs):
        return format_relative_time(NOW - timedelta(**kwargs), NOW)

    def test_just_now(self):
        self.assertEqual(self.ago(seconds=0), "just now")
        self.assertEqual(self.ago(seconds=59), "just now")

    def test_future_timestamp_is_just_now(self):
        self.assertEqual(self.ago(seconds=-30), "just now")

    def test_minutes(self):
        self.assertEqual(self.ago(minutes=1), "1 minute ago")
        self.assertEqual(self.ago(minutes=1, seconds=59), "1 minute ago")
        self.assertEqual(self.ago(minutes=2), "2 minutes ago")
        self.assertEqual(self.ago(minutes=59, seconds=59), "59 minutes ago")

    def test_hours(self):
        self.assertEqual(self.ago(hours=1), "1 hour ago")
        self.assertEqual(self.ago(hours=2, minutes=5), "2 hours ago")
        self.assertEqual(self.ago(hours=23, minutes=59), "23 hours ago")

    def test_days(self):
        self.assertEqual(self.ago(days=1), "1 day ago")
        self.assertEqual(self.ago(days=29, hours=23), "29 days ago")

    def test_months(self):
        self.assertEqual(self.ago(days=30), "1 month ago")
        self.assertEqual(self.ago(days=59), "1 month ago")
        self.assertEqual(self.ago(days=60), "2 months ago")
        self.assertEqual(self.ago(days=400), "13 months ago")

    def test_coarser_as_age_grows(self):
        units = ["just now", "minute", "hour", "day", "month"]
        ages = [timedelta(seconds=10), timedelta(minutes=5), timedelta(hours=5), timedelta(days=5),
                timedelta(days=90)]
        ranks = []
        for age in ages:
            text = format_relative_time(NOW - age, NOW)
            ranks.append(next(i for i, unit in enumerate(units) if unit in text))
        self.assertEqual(ranks, sorted(ranks))
        self.assertEqual(len(set(ranks)), len(ranks))

    def test_naive_datetimes_are_utc(self):
        self.assertEqual(format_relative_time(datetime(2024, 3, 1, 10, 0), NOW), "2 hours ago")


class TestParseDockerTime(unittest.TestCase):

    def test_docker_layout(self):
        parsed = parse_docker_time("2024-01-01 10:00:00 +0000 UTC")
        self.assertEqual(parsed, datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc))

    def test_docker_layout_with_offset(self):
        parsed = parse_docker_time("2024-01-01 12:00:00 +0200 CEST")
        self.assertEqual(parsed, datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc))

    def test_docker_layout_with_fraction(self):
        parsed = parse_docker_time("2024-01-01 10:00:00.123456789 +0000 UTC")
        self.assertEqual(parsed.microsecond, 123456)

    def test_rfc3339_nano(self):
        parsed = parse_docker_time("2024-01-01T10:00:00.123456789Z")
        self.assertEqual(parsed, datetime(2024, 1, 1, 10, 0, 0, 123456, tzinfo=timezone.utc))

    def test_rfc3339_with_offset(self):
        parsed = parse_docker_time("2024-01-01T11:00:00+01:00")
        self.assertEqual(parsed, datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc))

    def test_unparseable(self):
        for value in ["", "yesterday", "2024-01-01", "2024-13-01 10:00:00 +0000 UTC", "2024-01-01T10:00:00"]:
            with self.subTest(value=value):
                with self.assertRaises(TimeParseError) as ctx:
                    parse_docker_time(value)
                self.assertEqual(ctx.exception.value, value)


if __name__ == "__main__":
    unittest.main()
