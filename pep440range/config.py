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
"""Range update settings."""

# Strategies with dedicated rewrite rules. Anything else is retried as
# FALLBACK_STRATEGY.
SUPPORTED_STRATEGIES = ('replace', 'bump', 'widen')
FALLBACK_STRATEGY = 'replace'

# Whether satisfaction checks admit pre-release versions. Intended to be set by
# callers that only ever propose stable releases.
prereleases = True


def set_prereleases(value: bool):
  """Configures whether pre-releases can satisfy a range."""
  global prereleases
  prereleases = value
