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

"""Discovery.

Authenticate and fetch a discoverable API service.
"""

from googleapiclient import discovery

from admanager2drive.credentials import Credentials
from admanager2drive.services import Service


def get_service(service: Service,
                credentials: Credentials) -> discovery.Resource:
  """Fetch a discoverable API service.

  Create an endpoint to one of the Google services listed in services.py.
  Only services with a discovery name can be built this way; the definition
  is decomposed to a dict of keyword arguments and passed on to the Google
  Discovery API.

  Args:
    service (Service): the service to build.
    credentials (Credentials): the user's credentials.

  Returns:
      discovery.Resource: a service for REST calls

  Raises:
      NotImplementedError: if an invalid service is requested.
  """
  if (definition := service.definition) and service is not Service.AD_MANAGER:
    return discovery.build(credentials=credentials.credentials,
                           cache_discovery=False,
                           **definition.to_args)

  else:
    raise NotImplementedError(f'Unknown service {service}')
