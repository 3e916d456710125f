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
"""Command line interface for PEP 440 range updates."""

import argparse
import json
import logging
import sys

from . import logs
from . import range_update
from . import update_requests


def _new_value(args) -> int:
  result = range_update.get_new_value(args.current_value, args.strategy,
                                      args.current_version, args.new_version)
  if result is None:
    return 1

  print(result)
  return 0


def _less_than_range(args) -> int:
  result = range_update.is_less_than_range(args.version, args.range)
  print('true' if result else 'false')
  return 0


def _batch(args) -> int:
  requests = update_requests.parse_requests(args.path, strict=args.strict)
  results = update_requests.evaluate(requests)
  print(json.dumps(results, indent=2))
  if any(result['newValue'] is None for result in results):
    return 1
  return 0


def _parser() -> argparse.ArgumentParser:
  parser = argparse.ArgumentParser(
      prog='pep440range', description='Update PEP 440 version ranges')
  parser.add_argument(
      '--verbose', action='store_true', help='Enable debug logging')
  parser.add_argument(
      '--gcp-service',
      default=None,
      help='Send logs to Cloud Logging and Error Reporting under this service '
      'name instead of stderr')
  subparsers = parser.add_subparsers(dest='command', required=True)

  new_value = subparsers.add_parser(
      'new-value', help='Compute the range that accepts a new version')
  new_value.add_argument(
      '--current-value', required=True, help='Current range, e.g. >=1.0,<2.0')
  new_value.add_argument(
      '--strategy',
      default='replace',
      help='Range strategy: pin, auto, replace, bump or widen')
  new_value.add_argument(
      '--current-version', default=None, help='Version currently in use')
  new_value.add_argument(
      '--new-version', required=True, help='Version the range must accept')
  new_value.set_defaults(func=_new_value)

  less_than = subparsers.add_parser(
      'less-than-range', help='Check if a version is below a range')
  less_than.add_argument('version')
  less_than.add_argument('range')
  less_than.set_defaults(func=_less_than_range)

  batch = subparsers.add_parser(
      'batch', help='Evaluate a YAML or JSON file of update requests')
  batch.add_argument('path')
  batch.add_argument(
      '--strict',
      action='store_true',
      help='Fail on the first invalid request instead of skipping it')
  batch.set_defaults(func=_batch)

  return parser


def main(argv=None) -> int:
  args = _parser().parse_args(argv)
  level = logging.DEBUG if args.verbose else logging.WARNING
  if args.gcp_service:
    logs.setup_gcp_logging(args.gcp_service)
    if args.verbose:
      logging.getLogger().setLevel(level)
  else:
    logs.setup_local_logging(level)
  return args.func(args)


if __name__ == '__main__':
  sys.exit(main())
