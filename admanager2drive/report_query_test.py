# Copyright 2022 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
import dataclasses
import unittest
from datetime import date, datetime

import pytz

from admanager2drive import report_query

NEW_YORK = pytz.timezone('America/New_York')


class ReportSpecificationTest(unittest.TestCase):
  def _specification(self, now: datetime):
    return report_query.ReportSpecification.delivery_report(
      start_date='2020-01-01T00:00:00', timezone='America/New_York', now=now)

  def test_delivery_report_shape(self):
    spec = self._specification(datetime(2024, 6, 1, 12, tzinfo=pytz.utc))
    self.assertEqual(('DATE', 'ADVERTISER_NAME', 'ORDER_NAME',
                      'LINE_ITEM_NAME', 'AD_UNIT_NAME'), spec.dimensions)
    self.assertEqual(('LINE_ITEM_GOAL_QUANTITY',
                      'LINE_ITEM_DELIVERY_INDICATOR'),
                     spec.dimension_attributes)
    self.assertEqual(('TOTAL_LINE_ITEM_LEVEL_IMPRESSIONS',
                      'TOTAL_LINE_ITEM_LEVEL_CLICKS',
                      'TOTAL_ACTIVE_VIEW_VIEWABLE_IMPRESSIONS',
                      'TOTAL_ACTIVE_VIEW_MEASURABLE_IMPRESSIONS'),
                     spec.columns)
    self.assertEqual('CUSTOM_DATE', spec.date_range_type)

  def test_start_is_fixed(self):
    for now in [datetime(2021, 1, 1, tzinfo=pytz.utc),
                datetime(2030, 12, 31, 23, tzinfo=pytz.utc)]:
      spec = self._specification(now)
      self.assertEqual(NEW_YORK.localize(datetime(2020, 1, 1)), spec.start)
      self.assertEqual('America/New_York', spec.start.tzinfo.zone)

  def test_end_is_now(self):
    now = datetime(2024, 6, 1, 12, 30, tzinfo=pytz.utc)
    spec = self._specification(now)
    self.assertEqual(now, spec.end)
    self.assertEqual('America/New_York', spec.end.tzinfo.zone)

  def test_naive_now_is_utc(self):
    spec = self._specification(datetime(2024, 3, 1, 3, 0))
    self.assertEqual(date(2024, 2, 29), spec.end.date())

  def test_to_report_job(self):
    spec = self._specification(datetime(2024, 6, 1, 12, tzinfo=pytz.utc))
    self.assertEqual({
      'reportQuery': {
        'dimensions': ['DATE', 'ADVERTISER_NAME', 'ORDER_NAME',
                       'LINE_ITEM_NAME', 'AD_UNIT_NAME'],
        'dimensionAttributes': ['LINE_ITEM_GOAL_QUANTITY',
                                'LINE_ITEM_DELIVERY_INDICATOR'],
        'columns': ['TOTAL_LINE_ITEM_LEVEL_IMPRESSIONS',
                    'TOTAL_LINE_ITEM_LEVEL_CLICKS',
                    'TOTAL_ACTIVE_VIEW_VIEWABLE_IMPRESSIONS',
                    'TOTAL_ACTIVE_VIEW_MEASURABLE_IMPRESSIONS'],
        'dateRangeType': 'CUSTOM_DATE',
        'startDate': {'year': 2020, 'month': 1, 'day': 1},
        'endDate': {'year': 2024, 'month': 6, 'day': 1},
      }
    }, spec.to_report_job())

  def test_immutable(self):
    spec = self._specification(datetime(2024, 6, 1, tzinfo=pytz.utc))
    with self.assertRaises(dataclasses.FrozenInstanceError):
      spec.columns = ()


if __name__ == '__main__':
  unittest.main()
