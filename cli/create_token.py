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

"""Creates the cached Drive token.

Run this once, on a machine with a browser, before starting the refresh
process so that it never has to ask for consent itself.
"""

import logging
import sys

from absl import app
from absl import flags

from admanager2drive.credentials import Credentials

FLAGS = flags.FLAGS

flags.DEFINE_string('client_secrets', 'client_secrets.json',
                    'Drive OAuth client secrets.')
flags.DEFINE_string('token_file', 'tokens/drive_token.json',
                    'Where to store the token.')
flags.DEFINE_integer('oauth_port', 8888, 'Local port for the consent flow.')


def main(unused_argv):
  logging.basicConfig(stream=sys.stdout, format='%(asctime)s %(message)s',
                      level=logging.INFO, force=True)
  Credentials(client_secrets=FLAGS.client_secrets,
              token_file=FLAGS.token_file,
              port=FLAGS.oauth_port).authorize()
  print(f'Your token has been stored in {FLAGS.token_file}.')


if __name__ == '__main__':
  app.run(main)
