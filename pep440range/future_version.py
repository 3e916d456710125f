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
"""Future version arithmetic for range upper bounds."""

from __future__ import annotations

import enum
from typing import Sequence

from . import versioning


class ReplacePrecision(enum.IntEnum):
  """Release segment at which a `>=x,<y` bracket rolls over."""
  MAJOR = 0
  MINOR = 1
  MICRO = 2
  BUG = 3


def _join(release: Sequence[int]) -> str:
  return '.'.join(str(part) for part in release)


def get_user_replace_precision(
    clauses: Sequence[versioning.Clause]) -> ReplacePrecision | None:
  """Infer the precision of a two clause range.

  For `>=19.12.2,<19.13.0` this is MINOR, for `>=19.12.2,<20.12.9` it is
  MAJOR. Returns None for any other number of clauses, or when the upper bound
  never exceeds the lower bound.
  """
  if len(clauses) != 2:
    return None

  lower = versioning.release(clauses[0].version)
  upper = versioning.release(clauses[1].version)
  for index, (lower_part, upper_part) in enumerate(zip(lower, upper)):
    if upper_part > lower_part:
      try:
        return ReplacePrecision(index)
      except ValueError:
        return None

  return None


def get_future_replace_version(new_version: str,
                               precision: ReplacePrecision) -> str:
  """Upper bound for new_version at the given precision.

  For 20.3.2, MINOR gives 20.4.0 and MAJOR gives 21.0.0.
  """
  release = list(versioning.release(new_version))
  if len(release) <= precision:
    release.extend([0] * (precision + 1 - len(release)))

  future = []
  for index, part in enumerate(release):
    if index < precision:
      future.append(part)
    elif index == precision:
      future.append(part + 1)
    else:
      future.append(0)

  return _join(future)


def get_future_version(base_version: str, new_version: str, step: int) -> str:
  """Smallest version that moves base_version past new_version.

  The release of base_version is walked position by position. The first
  position where new_version is larger becomes new_version's part plus step,
  everything after it is zeroed and everything before it is taken from
  new_version. If new_version never exceeds base_version, step is added to the
  last position instead.

  With a step of 0 this produces the prefix of a wildcard clause, e.g. base
  `1.2` and new version `1.4.0` give `1.4`.
  """
  new_release = versioning.release(new_version)
  base_release = versioning.release(base_version)

  found = False
  future = []
  for index, base_part in enumerate(base_release):
    if found:
      future.append(0)
      continue

    new_part = new_release[index] if index < len(new_release) else 0
    if new_part > base_part:
      found = True
      future.append(new_part + step)
    else:
      future.append(new_part)

  if not found and future:
    future[-1] += step

  return _join(future)
