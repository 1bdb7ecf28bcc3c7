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
import signal
import sys
import threading

from absl import app
from absl import flags

from admanager2drive.config import RefreshConfig
from admanager2drive.context import RefreshContext
from admanager2drive.report2drive import Report2Drive
from admanager2drive.scheduler import Scheduler

FLAGS = flags.FLAGS

flags.DEFINE_string('config', None, 'JSON file of settings.')

# Unset flags fall back to the config file, then the environment
# (ADMANAGER2DRIVE_<NAME>), then the defaults.
flags.DEFINE_string('googleads_yaml', None,
                    'googleads configuration for the Ad Manager client.')
flags.DEFINE_string('api_version', None, 'Ad Manager API version.')
flags.DEFINE_string('client_secrets', None, 'Drive OAuth client secrets.')
flags.DEFINE_string('token_file', None, 'Cached Drive OAuth token.')
flags.DEFINE_integer('oauth_port', None,
                     'Local port for the Drive consent flow.')
flags.DEFINE_string('drive_file_id', None,
                    'Id of the Drive file to overwrite.')
flags.DEFINE_string('drive_file_name', None,
                    'Name to keep on the Drive file.')
flags.DEFINE_float('interval', None, 'Seconds between refreshes.')
flags.DEFINE_float('poll_interval', None,
                   'Seconds before the first report status check.')
flags.DEFINE_float('poll_backoff', None,
                   'Multiplier applied to the delay between status checks.')
flags.DEFINE_float('max_poll_interval', None,
                   'Longest delay between status checks.')
flags.DEFINE_float('report_timeout', None,
                   ('Seconds to wait for a report before abandoning the '
                    'cycle. Unset waits indefinitely.'))
flags.DEFINE_string('start_date', None, 'First date covered by the report.')
flags.DEFINE_string('timezone', None, 'Time zone of the report dates.')

flags.DEFINE_boolean('once', False, 'Run a single refresh and exit.')
flags.DEFINE_enum('log_level', 'INFO',
                  ['DEBUG', 'INFO', 'WARNING', 'ERROR'], 'Logging level.')


def main(unused_argv):
  logging.basicConfig(
    stream=sys.stdout,
    format='%(asctime)s %(message)s',
    datefmt='%Y-%m-%d %I:%M:%S %p',
    level=FLAGS.log_level,
    force=True
  )

  overrides = {k: v for k, v in FLAGS.flag_values_dict().items()
               if v is not None}
  config = RefreshConfig.load(config_file=FLAGS.config, overrides=overrides)
  context = RefreshContext.create(config)

  stopping = threading.Event()
  report2drive = Report2Drive.from_context(context, stopping=stopping)
  scheduler = Scheduler(job=report2drive.run,
                        interval=config.interval,
                        stopping=stopping)
  signal.signal(signal.SIGTERM, scheduler.stop)
  signal.signal(signal.SIGINT, scheduler.stop)

  scheduler.run(max_ticks=1 if FLAGS.once else None)


if __name__ == '__main__':
  app.run(main)
