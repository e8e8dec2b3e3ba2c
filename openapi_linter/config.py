# Copyright 2025 TIER IV, inc.
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

"""Configuration management for the OpenAPI linter."""

import os
import logging
from dataclasses import dataclass, field
from typing import Tuple

from . import SUPPORTED_OPENAPI_VERSION_PREFIX
from .utils.logging_utils import configure_split_stream_logging


@dataclass
class LinterConfig:
    """Configuration class for a lint run."""
    log_level: str = "WARNING"
    print_level: str = "WARNING"
    cache_enabled: bool = False

    # document layout
    supported_version_prefix: str = SUPPORTED_OPENAPI_VERSION_PREFIX
    required_fields: Tuple[str, ...] = ("openapi", "info", "paths")
    schemas_pointer_prefix: str = "#/components/schemas/"
    file_extensions: Tuple[str, ...] = field(default=(".yaml", ".yml", ".json"))

    @classmethod
    def from_env(cls) -> 'LinterConfig':
        """Create configuration from environment variables."""
        return cls(
            log_level=os.getenv('OPENAPI_LINTER_LOG_LEVEL', 'WARNING'),
            print_level=os.getenv('OPENAPI_LINTER_PRINT_LEVEL', 'WARNING'),
            cache_enabled=os.getenv('OPENAPI_LINTER_CACHE_ENABLED', 'false').lower() == 'true',
            supported_version_prefix=os.getenv(
                'OPENAPI_LINTER_SUPPORTED_VERSION_PREFIX', SUPPORTED_OPENAPI_VERSION_PREFIX
            ),
        )

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        level = getattr(logging, self.log_level.upper(), logging.WARNING)
        stderr_level = getattr(logging, self.print_level.upper(), logging.WARNING)

        formatter = logging.Formatter('%(name)s - %(levelname)s - %(message)s')
        configure_split_stream_logging(level=level, stderr_level=stderr_level, formatter=formatter)

        return logging.getLogger('openapi_linter')


# Global configuration instance
linter_config = LinterConfig.from_env()
