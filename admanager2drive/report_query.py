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
from __future__ import annotations

import dataclasses
from datetime import date, datetime
from typing import Any, Dict, Tuple

import pytz
from dateutil.parser import parse

DELIVERY_DIMENSIONS = (
  'DATE',
  'ADVERTISER_NAME',
  'ORDER_NAME',
  'LINE_ITEM_NAME',
  'AD_UNIT_NAME',
)
DELIVERY_DIMENSION_ATTRIBUTES = (
  'LINE_ITEM_GOAL_QUANTITY',
  'LINE_ITEM_DELIVERY_INDICATOR',
)
DELIVERY_COLUMNS = (
  'TOTAL_LINE_ITEM_LEVEL_IMPRESSIONS',
  'TOTAL_LINE_ITEM_LEVEL_CLICKS',
  'TOTAL_ACTIVE_VIEW_VIEWABLE_IMPRESSIONS',
  'TOTAL_ACTIVE_VIEW_MEASURABLE_IMPRESSIONS',
)


def to_ad_manager_date(value: date) -> Dict[str, int]:
  return {'year': value.year, 'month': value.month, 'day': value.day}


@dataclasses.dataclass(frozen=True)
class ReportSpecification(object):
  """What the reporting backend should aggregate.

  `start` and `end` are timezone aware; the report covers the calendar dates
  they fall on in their own time zone.
  """
  dimensions: Tuple[str, ...]
  dimension_attributes: Tuple[str, ...]
  columns: Tuple[str, ...]
  start: datetime
  end: datetime
  date_range_type: str = 'CUSTOM_DATE'

  @classmethod
  def delivery_report(cls, start_date: str, timezone: str,
                      now: datetime) -> ReportSpecification:
    """The line item delivery report.

    Args:
        start_date (str): the fixed lower bound, as a local date time string.
        timezone (str): the named time zone both bounds are read in.
        now (datetime): the current time, the upper bound. Naive values are
          taken as UTC.

    Returns:
        ReportSpecification: the specification
    """
    tz = pytz.timezone(timezone)
    if now.tzinfo is None or now.tzinfo.utcoffset(now) is None:
      now = pytz.UTC.localize(now)

    return cls(dimensions=DELIVERY_DIMENSIONS,
               dimension_attributes=DELIVERY_DIMENSION_ATTRIBUTES,
               columns=DELIVERY_COLUMNS,
               start=tz.localize(parse(start_date)),
               end=now.astimezone(tz))

  def to_report_job(self) -> Dict[str, Any]:
    """The specification in the Ad Manager ReportJob shape.

    Returns:
        Dict[str, Any]: a ReportJob for ReportService.runReportJob
    """
    return {
      'reportQuery': {
        'dimensions': list(self.dimensions),
        'dimensionAttributes': list(self.dimension_attributes),
        'columns': list(self.columns),
        'dateRangeType': self.date_range_type,
        'startDate': to_ad_manager_date(self.start.date()),
        'endDate': to_ad_manager_date(self.end.date()),
      }
    }
