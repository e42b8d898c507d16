# Copyright 2026 Firefly Software Solutions Inc.
#
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
"""signable — stamps SQLAlchemy records with the user who created, updated or deleted them."""

from signable.behavior import SignableBehavior
from signable.context.request_context import RequestContext
from signable.core.config import Config
from signable.kernel.exceptions import ColumnNotFoundError, ConfigurationError, SignableException
from signable.security.context import SecurityContext
from signable.sqlalchemy.decorators import configure, set_default_listener, signed
from signable.sqlalchemy.listener import SignableEntityListener
from signable.sqlalchemy.session import acting_as, suppressed

__version__ = "0.1.0"

__all__ = [
    "ColumnNotFoundError",
    "Config",
    "ConfigurationError",
    "RequestContext",
    "SecurityContext",
    "SignableBehavior",
    "SignableEntityListener",
    "SignableException",
    "acting_as",
    "configure",
    "set_default_listener",
    "signed",
    "suppressed",
]
