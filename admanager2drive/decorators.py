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

import logging
import time

from functools import wraps


def timeit(method):
  @wraps(method)
  def timed(*args, **kw):
    ts = time.time()
    try:
      return method(*args, **kw)
    finally:
      te = time.time()
      logging.info(f'{method.__name__} {(te - ts) * 1000:0.3f}ms')
  return timed


def lazy_property(f):
  """Decorator that makes a property lazy-evaluated.

  The first access computes the value and stores it on the instance as
  `_lazy_<name>`; later accesses return the stored value. Tests can preload
  the attribute to inject a fake.
  """
  attribute = '_lazy_' + f.__name__

  @property
  @wraps(f)
  def _lazy_property(self):
    if not hasattr(self, attribute):
      setattr(self, attribute, f(self))
    return getattr(self, attribute)
  return _lazy_property
