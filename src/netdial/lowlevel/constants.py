# Copyright 2021-2025, Francis Clairicia-Rose-Claire-Josephine
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
#
"""netdial's constants module."""

from __future__ import annotations

__all__ = [
    "DEFAULT_LISTEN_BACKLOG",
    "REUSE_ADDRESS_ON_LISTENERS",
]

import os as _os
import sys as _sys
from typing import Final

# Number of unaccepted connections that the system will allow before refusing new connections
DEFAULT_LISTEN_BACKLOG: Final[int] = 100

# SO_REUSEADDR on Windows allows to steal a port already in use
REUSE_ADDRESS_ON_LISTENERS: Final[bool] = _os.name not in ("nt", "cygwin") and _sys.platform != "cygwin"
