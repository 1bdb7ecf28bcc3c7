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
import enum
from typing import Any, Mapping, Optional, Tuple

import immutabledict

from admanager2drive import decorators


@dataclasses.dataclass
class ServiceDefinition(object):
  name: Optional[str] = None
  version: Optional[str] = None
  uri: Optional[str] = None
  scopes: Tuple[str, ...] = ()

  @decorators.lazy_property
  def to_args(self) -> Mapping[str, Any]:
    """Return the service definition as keyword args.

    This is defined as lazy so it can be referred to as a
    property instead of a function which makes the code read
    cleaner. Scopes are not part of the discovery arguments.

    Returns:
        Mapping[str, Any]: the definition as kwargs
    """
    args = {}
    if self.name: args['serviceName'] = self.name
    if self.version: args['version'] = self.version
    if self.uri: args['discoveryServiceUrl'] = self.uri
    return args


@enum.unique
class Service(enum.Enum):
  """Service definitions.

  Defines the access points for the Google services used. Ad Manager is a
  SOAP service reached through `googleads`, so only its service name and
  default API version are used.
  """
  AD_MANAGER = enum.auto()
  DRIVE = enum.auto()

  @decorators.lazy_property
  def definition(self) -> ServiceDefinition:
    """Fetch the ServiceDefinition.

    Lazily returns the dataclass containing the service definition
    details. It has to be lazy, as it can't be defined at
    initialization time.

    Returns:
        ServiceDefinition: the service definition
    """
    return SERVICE_DEFINITIONS.get(self)


SERVICE_DEFINITIONS = \
  immutabledict.immutabledict({
    Service.AD_MANAGER:
      ServiceDefinition(
        name='ReportService', version='v202505'),
    Service.DRIVE:
      ServiceDefinition(
        name='drive', version='v3',
        scopes=('https://www.googleapis.com/auth/drive',)),
  })
