# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Batch range update requests."""

from __future__ import annotations

import functools
import json
import logging
import os
from typing import Any

from attr import attrib, attrs
import jsonschema
import yaml

from . import range_update

logger = logging.getLogger(__name__)

YAML_EXTENSIONS = ('.yaml', '.yml')
JSON_EXTENSIONS = ('.json',)


class StringScalarSafeLoader(yaml.SafeLoader):
  """
  Safe YAML loader that keeps numbers and dates as strings.

  PyYAML would otherwise read `newVersion: 1.10` as the float 1.1, which is a
  different version, and fail the schema check for dates.
  """

  @classmethod
  def remove_implicit_resolver(cls, tag_to_remove: str) -> None:
    """
    Remove implicit resolvers for a particular tag

    Takes care not to modify resolvers in super classes.
    """
    if 'yaml_implicit_resolvers' not in cls.__dict__:
      cls.yaml_implicit_resolvers = cls.yaml_implicit_resolvers.copy()

    for first_letter, mappings in list(cls.yaml_implicit_resolvers.items()):
      cls.yaml_implicit_resolvers[first_letter] = [
          (tag, regexp) for tag, regexp in mappings if tag != tag_to_remove
      ]


for _tag in ('timestamp', 'float', 'int'):
  StringScalarSafeLoader.remove_implicit_resolver(f'tag:yaml.org,2002:{_tag}')


@attrs(frozen=True, slots=True)
class UpdateRequest:
  """A request to move current_value so that it accepts new_version."""
  current_value: str = attrib()
  range_strategy: str = attrib()
  new_version: str = attrib()
  current_version: str | None = attrib(default=None)
  package: str | None = attrib(default=None)

  @classmethod
  def from_dict(cls, data: dict[str, Any]) -> UpdateRequest:
    return cls(
        current_value=data['currentValue'],
        range_strategy=data['rangeStrategy'],
        new_version=data['newVersion'],
        current_version=data.get('currentVersion'),
        package=data.get('package'))

  def new_value(self) -> str | None:
    return range_update.get_new_value(self.current_value, self.range_strategy,
                                      self.current_version, self.new_version)


@functools.lru_cache(maxsize=None)
def load_schema() -> dict[str, Any]:
  path = os.path.join(
      os.path.dirname(os.path.abspath(__file__)), 'schema',
      'update_request.json')
  with open(path, 'r') as schema_file:
    return json.load(schema_file)


def _load_data(data_text: str, extension: str) -> Any:
  if extension in YAML_EXTENSIONS:
    return yaml.load(data_text, Loader=StringScalarSafeLoader)

  if extension in JSON_EXTENSIONS:
    return json.loads(data_text)

  raise RuntimeError('Unknown format ' + extension)


def parse_request_from_dict(data: dict[str, Any],
                            strict: bool = False) -> UpdateRequest | None:
  """Parse and validate a single request.

  Returns None for invalid requests unless strict, in which case the
  validation error is raised.
  """
  try:
    jsonschema.validate(data, load_schema())
  except jsonschema.exceptions.ValidationError as e:
    logger.warning('Failed to validate update request: %s (package: %s)',
                   e.message,
                   data.get('package', 'UNKNOWN') if isinstance(
                       data, dict) else 'UNKNOWN')
    if strict:
      raise
    return None

  return UpdateRequest.from_dict(data)


def parse_requests_from_data(data_text: str,
                             extension: str,
                             strict: bool = False) -> list[UpdateRequest]:
  """Parse requests from YAML or JSON text.

  The document is either a single request or a list of requests.
  """
  data = _load_data(data_text, extension)
  if isinstance(data, dict):
    data = [data]

  if not isinstance(data, list):
    message = f'Expected a list of update requests, got {type(data).__name__}'
    if strict:
      raise ValueError(message)
    logger.warning(message)
    return []

  requests = []
  for item in data:
    request = parse_request_from_dict(item, strict)
    if request is not None:
      requests.append(request)

  return requests


def parse_requests(path: str, strict: bool = False) -> list[UpdateRequest]:
  """Parse requests from a YAML or JSON file."""
  extension = os.path.splitext(path)[1]
  try:
    with open(path) as f:
      data_text = f.read()
  except FileNotFoundError:
    logger.error('File not found: %s', path)
    raise

  return parse_requests_from_data(data_text, extension, strict)


def evaluate(requests: list[UpdateRequest]) -> list[dict[str, Any]]:
  """Compute the new value of every request."""
  results = []
  for request in requests:
    results.append({
        'package': request.package,
        'currentValue': request.current_value,
        'newVersion': request.new_version,
        'newValue': request.new_value(),
    })

  return results
