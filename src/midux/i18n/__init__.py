# Copyright 2026 The MiduX Authors
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
"""MiduX I18n: localized failure and log messages.

Import concrete adapter types from the adapter package::

    from midux.i18n.adapters.resource_bundle import ResourceBundleMessageSource
"""

from midux.i18n.messages import Messages, bundled_message_source
from midux.i18n.ports.outbound import MessageSource

__all__ = [
    "MessageSource",
    "Messages",
    "bundled_message_source",
]
